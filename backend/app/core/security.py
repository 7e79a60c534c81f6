# app/core/security.py
"""
Security module for authentication and authorization.
Handles password hashing and bearer token issuing/verification.
"""
import datetime as dt
from dataclasses import dataclass

import jwt  # PyJWT
from passlib.context import CryptContext

from app.core.errors import Unauthorized

# Password hashing context
# Argon2 is a modern, secure password hashing algorithm
pwd_context = CryptContext(
    schemes=["argon2"],  # Use Argon2 for password hashing
    deprecated="auto",   # Automatically handle deprecated schemes
)


def hash_password(plain: str) -> str:
    """
    Hash a plain text password using Argon2.

    Args:
        plain: Plain text password to hash

    Returns:
        Hashed password string (safe to store in database)
    """
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str | None) -> bool:
    """
    Verify a plain text password against a hashed password.

    A missing hash (password reset pending) never matches.

    Args:
        plain: Plain text password to verify
        hashed: Hashed password from database, or None

    Returns:
        True if password matches, False otherwise
    """
    if not hashed:
        return False
    return pwd_context.verify(plain, hashed)


@dataclass(frozen=True)
class TokenClaims:
    """Identity carried by a verified bearer token."""
    subject_id: str
    email: str
    is_admin: bool = False


class TokenIssuer:
    """
    Signs and verifies bearer tokens.

    One instance is built from Settings at process start (see app.main) and
    shared through app.state; nothing in this module reads the secret from
    the environment.

    Token payload:
        - sub: Subject (account id)
        - email: Account email
        - isAdmin: Admin flag at issue time (informational only)
        - iat: Issued at timestamp
        - exp: Expiration timestamp, only when expire_minutes is set
    """

    def __init__(self, secret: str, algorithm: str = "HS256", expire_minutes: int | None = None):
        if not secret:
            raise ValueError("token secret must not be empty")
        self.secret = secret
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def issue(self, subject_id: str, email: str, is_admin: bool = False) -> str:
        now = dt.datetime.now(dt.timezone.utc)
        payload = {
            "sub": str(subject_id),
            "email": email,
            "isAdmin": bool(is_admin),
            "iat": now,
        }
        if self.expire_minutes:
            payload["exp"] = now + dt.timedelta(minutes=self.expire_minutes)
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Decode and validate a bearer token.

        Raises:
            Unauthorized: token is malformed, badly signed, expired, or lacks
                the subject/email claims
        """
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.PyJWTError:
            raise Unauthorized("AUTH_INVALID_TOKEN")

        subject_id = payload.get("sub")
        email = payload.get("email")
        if not subject_id or not email:
            raise Unauthorized("AUTH_INVALID_TOKEN")
        return TokenClaims(subject_id=subject_id, email=email, is_admin=bool(payload.get("isAdmin", False)))
