"""System status schemas."""

from devtrack.schemas.device import CamelModel


class SystemStatusResponse(CamelModel):
    name: str
    version: str
    device_count: int
    timezone: str
