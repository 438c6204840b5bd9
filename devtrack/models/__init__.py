"""DevTrack Database Models."""

from devtrack.models.device import Device
from devtrack.models.user import User

__all__ = [
    "Device",
    "User",
]
