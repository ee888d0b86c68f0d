"""
Service error taxonomy.

Handlers in main.py translate these to JSON responses; NotificationError is
never returned to a caller and only shows up in logs.
"""
from starlette import status


class ServiceError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal server error"

    def __init__(self, message: str = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class QuoteValidationError(ServiceError):
    """A required quote field is missing or empty."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Missing {field}")


class AuthorizationError(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Unauthorized"


class StorageError(ServiceError):
    """Storage engine unreachable or query failed. Message is safe to show callers."""

    message = "Storage error"


class NotificationError(ServiceError):
    """Mail relay or SMS gateway failure."""

    def __init__(self, channel: str, message: str):
        self.channel = channel
        super().__init__(f"{channel}: {message}")
