"""Domain errors raised by the service layer.

The HTTP layer maps each of these to a status code in ``devtrack.api.errors``;
nothing in here knows about HTTP.
"""


class DevTrackError(Exception):
    """Base class for all DevTrack domain errors."""

    message = "Request failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        self.message = message or self.message


class DeviceError(DevTrackError):
    """Base class for device related domain errors."""


class DuplicateDeviceIdError(DeviceError):
    """Raised when a device label is already registered."""

    message = "Device ID already exists"


class DeviceNotFoundError(DeviceError):
    """Raised when the requested device could not be found."""

    message = "Device not found"


class DeviceAlreadyIssuedError(DeviceError):
    """Raised when issuing a device that is currently checked out."""

    message = "Device is already issued"


class InvalidIssueStateError(DeviceError):
    """Raised when an issued device would lack a holder or an issue date."""

    message = "Issued devices require a holder name and an issue date"


class AuthError(DevTrackError):
    """Base class for authentication errors."""


class UsernameTakenError(AuthError):
    message = "Username already exists"


class InvalidCredentialsError(AuthError):
    message = "Invalid username or password"


class InvalidTokenError(AuthError):
    message = "Invalid or expired token"


class ImmutableDeviceFieldError(DeviceError):
    """Raised when an update touches fields fixed at registration."""

    message = "Only the issue state of a device can be updated"
