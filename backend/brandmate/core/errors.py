# brandmate/core/errors.py
"""
Application error taxonomy.

Services and dependencies raise these; the exception handlers registered in
brandmate.main turn them into `{"success": false, "error", "message"}` JSON
bodies with the matching status code. Nothing below carries driver errors or
stack traces to the client.
"""
from fastapi import status


class AppError(Exception):
    """
    Base class for errors that map to an HTTP response.

    Attributes:
        status_code: HTTP status returned to the client
        error: Short error title (e.g. "Validation error")
        message: Human readable message shown by the client
    """
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "Server error"
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"success": False, "error": self.error, "message": self.message}


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "Validation error"
    default_message = "Invalid request"


class DuplicateIdentity(AppError):
    status_code = status.HTTP_409_CONFLICT
    error = "User exists"
    default_message = "User already exists"


class AuthenticationFailure(AppError):
    # Same message for unknown identifier and wrong password
    status_code = status.HTTP_401_UNAUTHORIZED
    error = "Authentication failed"
    default_message = "Invalid credentials"


class Unauthenticated(AuthenticationFailure):
    error = "Access denied"
    default_message = "Access token required"


class InvalidToken(AuthenticationFailure):
    error = "Invalid token"
    default_message = "Invalid token"


class AccountDeactivated(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error = "Account deactivated"
    default_message = "Your account has been deactivated"


class PermissionDenied(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    error = "Access denied"
    default_message = "Admin access required"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    error = "Not found"
    default_message = "Resource not found"


class ServerError(AppError):
    pass
