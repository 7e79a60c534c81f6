# app/api/v1/deps.py
import uuid
from enum import Enum

from fastapi import Depends, Header, Request

from app.core.errors import Forbidden, Unauthorized
from app.core.security import TokenClaims, TokenIssuer
from app.models.user import User

# Identity resolved from a verified bearer token
CallerIdentity = TokenClaims


class Capability(str, Enum):
    """Access level required by a route table entry."""
    PUBLIC = "public"
    BEARER = "bearer"
    ADMIN = "admin"


def get_token_issuer(request: Request) -> TokenIssuer:
    """Return the process-wide TokenIssuer configured in app.main."""
    return request.app.state.token_issuer


async def get_caller(
    request: Request,
    authorization: str | None = Header(default=None),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> CallerIdentity:
    """
    FastAPI dependency resolving the caller of a protected route.

    The token is read from either:
    1. Authorization header (Bearer token) - preferred method
    2. HttpOnly cookie (accessToken) - fallback method

    The token's subject must still be the account holding the token's email,
    so a token issued to a deleted account never resolves to a newer account
    registered with the same email. Operations that depend on the caller's
    admin/ban state re-read the account from the database.

    Raises:
        Unauthorized (AUTH_REQUIRED): no token presented
        Unauthorized (AUTH_INVALID_TOKEN): token fails verification
        Unauthorized (AUTH_USER_NOT_FOUND): token subject no longer owns the email
    """
    token = None
    # 1) Prioritize Authorization: Bearer xxx
    if authorization and authorization.lower().startswith("bearer "):
        token = authorization.split(" ", 1)[1].strip()
    # 2) Secondly HttpOnly Cookie: accessToken
    if not token:
        token = request.cookies.get("accessToken")

    if not token:
        raise Unauthorized("AUTH_REQUIRED")
    claims = issuer.verify(token)

    try:
        subject_id = uuid.UUID(str(claims.subject_id))
    except ValueError:
        raise Unauthorized("AUTH_INVALID_TOKEN")
    owns_email = await User.filter(id=subject_id, email=User.normalize_email(claims.email)).exists()
    if not owns_email:
        raise Unauthorized("AUTH_USER_NOT_FOUND")
    return claims


async def require_admin(caller: CallerIdentity = Depends(get_caller)) -> CallerIdentity:
    """
    FastAPI dependency ensuring the caller is currently an administrator.

    The admin flag is read fresh from the database on every request instead
    of being taken from the token claims.

    Raises:
        Forbidden (IS_NOT_ADMIN): account missing or not an admin
        Unauthorized: from get_caller
    """
    user = await User.get_or_none(email=User.normalize_email(caller.email))
    if not user or not user.is_admin:
        raise Forbidden("IS_NOT_ADMIN")
    return caller


# Capability -> dependencies attached to a route table entry
CAPABILITY_DEPENDENCIES = {
    Capability.PUBLIC: [],
    Capability.BEARER: [Depends(get_caller)],
    Capability.ADMIN: [Depends(require_admin)],
}
