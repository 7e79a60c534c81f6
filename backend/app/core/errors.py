# app/core/errors.py
"""
Error taxonomy shared by services and the HTTP layer.

Services raise these exceptions; app.main translates them into JSON
responses of the form {"detail": {"code": ..., "message": ...}}.
"""

# Error code -> human readable message
MESSAGES = {
    "EMAIL_ALREADY_EXIST": "Email already exists",
    "NICKNAME_ALREADY_EXIST": "Nickname already exists",
    "NICKNAME_UNAVAILABLE": "Could not allocate a free nickname",
    "ALREADY_HAVE_PASSWORD": "You already have a password",
    "IS_NOT_ADMIN": "You are not allow to do this operation",
    "ALREADY_BANNED": "This user is already banned",
    "IS_NOT_BANNED": "This user is not banned",
    "TARGET_IS_ADMIN": "Administrators cannot be moderated",
    "USER_NOT_FOUND": "User not found",
    "INVALID_CREDENTIALS": "Incorrect email or password",
    "AUTH_REQUIRED": "Authentication required",
    "AUTH_INVALID_TOKEN": "Invalid or expired token",
    "AUTH_USER_NOT_FOUND": "Token does not belong to an existing account",
    "INVALID_PAGE": "Page must be a positive integer",
    "INVALID_IMAGE_TYPE": "Image type must look like 'image/<subtype>'",
    "INVALID_IMAGE_PAYLOAD": "Image file is not valid base64",
    "PRODUCT_NOT_FOUND": "Could not find product",
    "PRODUCT_DOES_NOT_BELONG_USER": "This product does not belong to you",
    "VALIDATION_ERROR": "Request validation failed",
}


class AppError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500
    default_code = "INTERNAL_ERROR"

    def __init__(self, code: str | None = None, message: str | None = None):
        self.code = code or self.default_code
        self.message = message or MESSAGES.get(self.code, self.code)
        super().__init__(self.message)

    @property
    def headers(self) -> dict[str, str] | None:
        return None

    def to_detail(self) -> dict:
        return {"code": self.code, "message": self.message}


class BadRequest(AppError):
    status_code = 400
    default_code = "BAD_REQUEST"


class Unauthorized(AppError):
    status_code = 401
    default_code = "AUTH_REQUIRED"

    @property
    def headers(self) -> dict[str, str] | None:
        return {"WWW-Authenticate": "Bearer"}


class Forbidden(AppError):
    status_code = 403
    default_code = "FORBIDDEN"


class NotFound(AppError):
    status_code = 404
    default_code = "NOT_FOUND"
