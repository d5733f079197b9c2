# app/core/errors.py
from fastapi import HTTPException, status


class AppError(HTTPException):
    """
    Base class for domain errors raised by services.

    Each subclass carries a stable `code` and an HTTP status. FastAPI
    renders them as:

        {"detail": {"code": "<Code>", "message": "<text>"}}
    """

    code: str = "Error"
    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "Request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(
            status_code=self.status_code,
            detail={"code": self.code, "message": self.message},
        )


class DuplicateEmail(AppError):
    code = "DuplicateEmail"
    status_code = status.HTTP_409_CONFLICT
    default_message = "Email is already registered"


class InvalidCredentials(AppError):
    code = "InvalidCredentials"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid email or password"


class AccountDisabled(AppError):
    code = "AccountDisabled"
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Account is disabled"


class InvalidSession(AppError):
    code = "InvalidSession"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid or expired session"

    def __init__(self, message: str | None = None):
        super().__init__(message)
        self.headers = {"WWW-Authenticate": "Bearer"}


class WrongPassword(AppError):
    code = "WrongPassword"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Current password is incorrect"


class NotFound(AppError):
    code = "NotFound"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class UserNotFound(NotFound):
    default_message = "User not found"


class OrderNotFound(NotFound):
    default_message = "Order not found"


class MovieNotFound(NotFound):
    default_message = "Movie not found"


class ValidationError(AppError):
    code = "ValidationError"
    status_code = 422
    default_message = "Invalid request"


class Unauthorized(AppError):
    code = "Unauthorized"
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Admin access required"
