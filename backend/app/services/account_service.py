# app/services/account_service.py
"""
Account service: registration, login, password reset, profile management and
admin moderation.

Every operation performed on behalf of a caller re-reads the caller's account
from the database, so admin/ban decisions always use fresh state rather than
token claims.
"""
import logging
import math

from tortoise.exceptions import IntegrityError

from app.config import settings
from app.core.errors import BadRequest, Forbidden, NotFound
from app.core.security import TokenIssuer
from app.models.user import User
from app.services import image_store

logger = logging.getLogger("uvicorn.error")

MODULE_NAME = "USERS"
MAX_NICKNAME_ATTEMPTS = 1000

PROFILE_FIELDS = ("first_name", "last_name", "cellphone", "address")


# ------------------------------------------------------------------------------
# Lookups & projections
# ------------------------------------------------------------------------------
async def find_by_email(email: str) -> User | None:
    return await User.get_or_none(email=User.normalize_email(email))


async def find_by_email_or_forbidden(email: str) -> User:
    user = await find_by_email(email)
    if not user:
        raise Forbidden()
    return user


async def find_by_nickname(nickname: str) -> User | None:
    return await User.get_or_none(nickname=nickname)


def profile_to_dict(u: User) -> dict:
    return {
        "email": u.email,
        "nickname": u.nickname,
        "isAdmin": u.is_admin,
        "firstName": u.first_name,
        "lastName": u.last_name,
        "cellphone": u.cellphone,
        "address": u.address,
        "profilePhotoId": u.profile_photo_id,
        "profilePhotoName": u.profile_photo_name,
        "profilePhotoType": u.profile_photo_type,
        "profilePhotoSize": u.profile_photo_size,
        "profilePhotoPath": u.profile_photo_path,
    }


def moderation_to_dict(u: User) -> dict:
    return {
        "id": str(u.id),
        "email": u.email,
        "createdAt": u.created_at.isoformat() if u.created_at else None,
        "updatedAt": u.updated_at.isoformat() if u.updated_at else None,
        "isAdmin": u.is_admin,
        "isBanned": u.is_banned,
    }


def _token_response(issuer: TokenIssuer, user: User) -> dict:
    token = issuer.issue(str(user.id), user.email, user.is_admin)
    return {"email": user.email, "isAdmin": user.is_admin, "jwt": token}


# ------------------------------------------------------------------------------
# Registration & nickname allocation
# ------------------------------------------------------------------------------
async def allocate_nickname(email: str) -> str:
    """
    Derive a free nickname from the local part of an email.

    Tries "name", then "name1", "name2", ... until an unused one is found.

    Raises:
        BadRequest: no free nickname within MAX_NICKNAME_ATTEMPTS
    """
    base = User.normalize_email(email).split("@")[0]
    candidate = base
    for counter in range(1, MAX_NICKNAME_ATTEMPTS + 1):
        if not await User.filter(nickname=candidate).exists():
            return candidate
        candidate = f"{base}{counter}"
    raise BadRequest("NICKNAME_UNAVAILABLE")


async def register(
    email: str,
    password: str,
    first_name: str | None = None,
    last_name: str | None = None,
) -> dict:
    """
    Create a new account.

    Returns:
        {"email": <normalized email>}

    Raises:
        BadRequest: email already registered, or the unique index rejected the
            email/nickname after a concurrent write
    """
    email = User.normalize_email(email)
    if await find_by_email(email):
        raise BadRequest("EMAIL_ALREADY_EXIST")

    user = User(
        email=email,
        nickname=await allocate_nickname(email),
        first_name=first_name or None,
        last_name=last_name or None,
        is_admin=False,
        is_banned=False,
    )
    user.set_password(password)
    try:
        await user.save()
    except IntegrityError:
        # A concurrent write took the email or the nickname after the checks above
        if await User.filter(email=email).exists():
            raise BadRequest("EMAIL_ALREADY_EXIST")
        raise BadRequest("NICKNAME_ALREADY_EXIST")

    logger.info("[accounts] registered email=%s nickname=%s", user.email, user.nickname)
    return {"email": user.email}


# ------------------------------------------------------------------------------
# Authentication & password lifecycle
# ------------------------------------------------------------------------------
async def login(issuer: TokenIssuer, email: str, password: str) -> dict:
    """
    Authenticate by email and password.

    Returns:
        {"email", "isAdmin", "jwt"}

    Raises:
        Forbidden: unknown email, banned account, or wrong password (a pending
            reset never matches)
    """
    user = await find_by_email_or_forbidden(email)
    if user.is_banned:
        logger.info("[accounts] login denied (banned) email=%s", user.email)
        raise Forbidden("ALREADY_BANNED")
    if not user.verify_password(password):
        logger.info("[accounts] login denied (credentials) email=%s", user.email)
        raise Forbidden("INVALID_CREDENTIALS")
    return _token_response(issuer, user)


async def request_password_reset(issuer: TokenIssuer, email: str) -> dict:
    """
    Clear the stored password and hand back a token for the follow-up
    set_password call. The old password stops working immediately.
    """
    user = await find_by_email_or_forbidden(email)
    user.set_password(None)
    await user.save()
    logger.info("[accounts] password reset requested email=%s", user.email)
    return _token_response(issuer, user)


async def set_password(email: str, password: str) -> dict:
    """
    Set a password on an account that has none (reset pending).

    Raises:
        Forbidden: account not found or already has a password
    """
    user = await find_by_email_or_forbidden(email)
    if user.has_password:
        raise Forbidden("ALREADY_HAVE_PASSWORD")
    user.set_password(password)
    await user.save()
    logger.info("[accounts] password set email=%s", user.email)
    return {"email": user.email}


# ------------------------------------------------------------------------------
# Profile
# ------------------------------------------------------------------------------
async def get_profile(email: str) -> dict:
    user = await find_by_email_or_forbidden(email)
    return profile_to_dict(user)


async def validate_nickname(nickname: str | None, user: User) -> str:
    """Empty nickname keeps the current one; a nickname owned by someone else is rejected."""
    if not nickname:
        return user.nickname
    if nickname != user.nickname and await User.filter(nickname=nickname).exclude(id=user.id).exists():
        raise BadRequest("NICKNAME_ALREADY_EXIST")
    return nickname


async def update_profile(email: str, changes: dict) -> dict:
    """
    Partially update profile fields.

    Args:
        email: Caller email
        changes: Any of nickname, first_name, last_name, cellphone, address;
            omitted keys are left untouched

    Returns:
        {"nickname", "firstName", "lastName", "cellphone", "address"}
    """
    user = await find_by_email_or_forbidden(email)
    user.nickname = await validate_nickname(changes.get("nickname"), user)
    for field in PROFILE_FIELDS:
        if field in changes and changes[field] is not None:
            setattr(user, field, changes[field])
    try:
        await user.save()
    except IntegrityError:
        raise BadRequest("NICKNAME_ALREADY_EXIST")

    return {
        "nickname": user.nickname,
        "firstName": user.first_name,
        "lastName": user.last_name,
        "cellphone": user.cellphone,
        "address": user.address,
    }


async def upload_profile_photo(email: str, name: str, mime_type: str, payload: str) -> dict:
    """Store the image under the USERS module and snapshot its metadata on the account."""
    user = await find_by_email_or_forbidden(email)
    image = await image_store.save_image(payload, mime_type, MODULE_NAME, name=name)

    user.profile_photo_id = str(image.id)
    user.profile_photo_name = image.name
    user.profile_photo_type = image.type
    user.profile_photo_size = image.size
    user.profile_photo_path = image.path
    await user.save()
    return profile_to_dict(user)


# ------------------------------------------------------------------------------
# Moderation
# ------------------------------------------------------------------------------
async def verify_is_admin(email: str) -> User:
    user = await find_by_email_or_forbidden(email)
    if not user.is_admin:
        raise Forbidden("IS_NOT_ADMIN")
    return user


def _parse_page(page: int | str | None) -> int:
    if page is None or page == "":
        return 1
    try:
        value = int(page)
    except (TypeError, ValueError):
        raise BadRequest("INVALID_PAGE")
    if value < 1:
        raise BadRequest("INVALID_PAGE")
    return value


async def _paginate(qs, page: int | str | None) -> dict:
    page = _parse_page(page)
    limit = settings.moderation_page_size
    total = await qs.count()
    rows = await qs.order_by("-created_at").offset((page - 1) * limit).limit(limit)
    return {
        "docs": [moderation_to_dict(u) for u in rows],
        "total": total,
        "limit": limit,
        "page": page,
        "pages": math.ceil(total / limit) if total else 1,
    }


async def list_for_moderation(email: str, page: int | str | None = None) -> dict:
    """All accounts except the caller, newest first (admin only)."""
    admin = await verify_is_admin(email)
    return await _paginate(User.exclude(id=admin.id), page)


async def list_banned(email: str, page: int | str | None = None) -> dict:
    """Banned accounts except the caller, newest first (admin only)."""
    admin = await verify_is_admin(email)
    return await _paginate(User.filter(is_banned=True).exclude(id=admin.id), page)


async def find_target_to_manage(admin_email: str, target_email: str) -> User:
    """
    Resolve a moderation target.

    Raises:
        Forbidden: caller is not an admin, or target is an admin
        NotFound: target email does not resolve
    """
    await verify_is_admin(admin_email)
    target = await find_by_email(target_email)
    if not target:
        raise NotFound("USER_NOT_FOUND")
    if target.is_admin:
        raise Forbidden("TARGET_IS_ADMIN")
    return target


async def ban_account(admin_email: str, target_email: str) -> dict:
    target = await find_target_to_manage(admin_email, target_email)
    if target.is_banned:
        raise Forbidden("ALREADY_BANNED")
    target.is_banned = True
    await target.save()
    logger.warning("[moderation] %s banned %s", User.normalize_email(admin_email), target.email)
    return {"email": target.email}


async def unban_account(admin_email: str, target_email: str) -> dict:
    target = await find_target_to_manage(admin_email, target_email)
    if not target.is_banned:
        raise Forbidden("IS_NOT_BANNED")
    target.is_banned = False
    await target.save()
    logger.warning("[moderation] %s unbanned %s", User.normalize_email(admin_email), target.email)
    return {"email": target.email}


async def delete_account(admin_email: str, target_email: str) -> dict:
    target = await find_target_to_manage(admin_email, target_email)
    email = target.email
    await target.delete()
    logger.warning("[moderation] %s deleted %s", User.normalize_email(admin_email), email)
    return {"email": email}
