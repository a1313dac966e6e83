"""
Error kinds raised by services and routers.

Each carries the HTTP status it renders as; ``pixora.main`` installs the
handler that turns them into ``{"detail": message}`` responses.
"""
from fastapi import status


class PixoraError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(PixoraError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class Unauthorized(PixoraError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Could not validate credentials"


class InvalidCredentials(Unauthorized):
    # Same message for unknown user and wrong password
    default_message = "Invalid username or password"


class Forbidden(PixoraError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Not allowed"


class NotFound(PixoraError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class Conflict(PixoraError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Already exists"


class Internal(PixoraError):
    pass
