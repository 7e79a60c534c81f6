# app/schemas/auth.py
"""
Pydantic schemas for registration, login and password reset endpoints.
"""
from pydantic import BaseModel, EmailStr, Field, model_validator

PASSWORD_MIN_LENGTH = 8


class RegisterIn(BaseModel):
    """
    Request model for account registration.
    The nickname is derived from the email, never supplied by the client.
    """
    email: EmailStr
    password: str = Field(min_length=PASSWORD_MIN_LENGTH)
    firstName: str | None = None
    lastName: str | None = None


class LoginIn(BaseModel):
    """Request model for login. Contains credentials for authentication."""
    email: EmailStr
    password: str


class EmailIn(BaseModel):
    """Request model for password reset requests."""
    email: EmailStr


class SetPasswordIn(BaseModel):
    """
    Request model for setting a new password after a reset.
    Both fields must match.
    """
    password: str = Field(min_length=PASSWORD_MIN_LENGTH)
    confirmPassword: str = Field(min_length=PASSWORD_MIN_LENGTH)

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.confirmPassword:
            raise ValueError('"confirmPassword" must be equal to "password"')
        return self


class EmailOut(BaseModel):
    email: str


class TokenOut(BaseModel):
    """Response model for successful login / reset request."""
    email: str
    isAdmin: bool
    jwt: str  # Bearer token for API authentication
