# app/api/v1/routers/users.py
from fastapi import APIRouter, Depends, Query, Response

from app.api.v1.deps import Capability, CallerIdentity, get_caller, get_token_issuer
from app.api.v1.route_table import Route, register_routes
from app.core.security import TokenIssuer
from app.schemas.admin import ModerationPageOut
from app.schemas.auth import EmailIn, EmailOut, LoginIn, RegisterIn, SetPasswordIn, TokenOut
from app.schemas.profile import ProfileOut, ProfilePhotoIn, ProfileUpdateIn, ProfileUpdateOut
from app.services import account_service

router = APIRouter(prefix="/users", tags=["users"])


# ==============================================================================
# Public: registration, login, password reset
# ==============================================================================
async def register(body: RegisterIn) -> EmailOut:
    """
    Register a new account with email and password.

    The nickname is derived from the email's local part. Returns only the
    stored email.

    Error codes:
        - EMAIL_ALREADY_EXIST (400): Email already registered
        - VALIDATION_ERROR (400): Invalid email or password shorter than 8
    """
    return await account_service.register(body.email, body.password, body.firstName, body.lastName)


async def login(
    body: LoginIn,
    response: Response,
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> TokenOut:
    """
    Authenticate and return a bearer token.

    The token is returned in the response body and also set as an HttpOnly
    cookie for browser-based clients.

    Error codes:
        - 403: Unknown email, wrong password, pending reset, or banned account
    """
    result = await account_service.login(issuer, body.email, body.password)
    response.set_cookie("accessToken", result["jwt"], httponly=True, secure=False, samesite="lax")
    return result


async def request_password_reset(
    body: EmailIn,
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> TokenOut:
    """
    Clear the current password and return a token for /update-password.

    Error codes:
        - 403: Unknown email
    """
    return await account_service.request_password_reset(issuer, body.email)


# ==============================================================================
# Bearer: password, profile, photo
# ==============================================================================
async def update_password(body: SetPasswordIn, caller: CallerIdentity = Depends(get_caller)) -> EmailOut:
    """
    Set a new password after a reset.

    Error codes:
        - 403 ALREADY_HAVE_PASSWORD: The account already has a password
    """
    return await account_service.set_password(caller.email, body.password)


async def get_profile(caller: CallerIdentity = Depends(get_caller)) -> ProfileOut:
    return await account_service.get_profile(caller.email)


async def update_profile(body: ProfileUpdateIn, caller: CallerIdentity = Depends(get_caller)) -> ProfileUpdateOut:
    """
    Partially update the caller's profile.

    Error codes:
        - 400 NICKNAME_ALREADY_EXIST: Nickname owned by another account
    """
    return await account_service.update_profile(caller.email, body.to_changes())


async def upload_profile_photo(body: ProfilePhotoIn, caller: CallerIdentity = Depends(get_caller)) -> ProfileOut:
    return await account_service.upload_profile_photo(caller.email, body.name, body.type, body.file)


# ==============================================================================
# Admin: moderation
# ==============================================================================
async def list_users_to_manage(
    page: int | None = Query(default=None, ge=1),
    caller: CallerIdentity = Depends(get_caller),
) -> ModerationPageOut:
    """All accounts except the caller, newest first."""
    return await account_service.list_for_moderation(caller.email, page)


async def list_banned_users(
    page: int | None = Query(default=None, ge=1),
    caller: CallerIdentity = Depends(get_caller),
) -> ModerationPageOut:
    return await account_service.list_banned(caller.email, page)


async def ban_user(userEmail: str, caller: CallerIdentity = Depends(get_caller)) -> EmailOut:
    """
    Ban a non-admin account.

    Error codes:
        - 403 ALREADY_BANNED / TARGET_IS_ADMIN
        - 404 USER_NOT_FOUND
    """
    return await account_service.ban_account(caller.email, userEmail)


async def unban_user(userEmail: str, caller: CallerIdentity = Depends(get_caller)) -> EmailOut:
    return await account_service.unban_account(caller.email, userEmail)


async def delete_user(userEmail: str, caller: CallerIdentity = Depends(get_caller)) -> EmailOut:
    """Physically delete a non-admin account."""
    return await account_service.delete_account(caller.email, userEmail)


ROUTES = [
    Route("POST", "", register, Capability.PUBLIC, status_code=201,
          summary="Creates one user with email and password"),
    Route("POST", "/login", login, Capability.PUBLIC, summary="Returns a bearer token after login"),
    Route("POST", "/reset-password", request_password_reset, Capability.PUBLIC,
          summary="Resets password and returns a token to set a new one"),
    Route("PUT", "/update-password", update_password, Capability.BEARER, summary="Sets new password"),
    Route("GET", "/profile", get_profile, Capability.BEARER, summary="Returns the caller's profile"),
    Route("PUT", "/profile", update_profile, Capability.BEARER, summary="Updates the caller's profile"),
    Route("POST", "/profile-photo", upload_profile_photo, Capability.BEARER,
          summary="Uploads a new profile photo"),
    Route("GET", "/manage", list_users_to_manage, Capability.ADMIN, summary="Lists users to manage"),
    Route("GET", "/manage-banned", list_banned_users, Capability.ADMIN, summary="Lists banned users"),
    Route("PUT", "/manage-ban/{userEmail}", ban_user, Capability.ADMIN, summary="Bans a non-admin user"),
    Route("PUT", "/manage-unban/{userEmail}", unban_user, Capability.ADMIN, summary="Removes a ban"),
    Route("DELETE", "/manage-delete/{userEmail}", delete_user, Capability.ADMIN,
          summary="Deletes a non-admin user"),
]

register_routes(router, ROUTES)
