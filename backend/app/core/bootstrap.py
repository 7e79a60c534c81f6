# app/core/bootstrap.py
"""
Bootstrap module for application initialization.
Handles initial setup tasks such as creating the default admin account on
first startup. This is the only place where is_admin is ever set.
"""
import logging
from app.config import settings
from app.models.user import User
from app.services.account_service import allocate_nickname

logger = logging.getLogger("uvicorn.error")

async def ensure_default_admin(email: str | None = None, password: str | None = None) -> User | None:
    """
    If no admin exists in the database, create a default admin from settings.
    Only takes effect under the following conditions:
      - Currently no user with is_admin=True
      - And ADMIN_PASSWORD is set (to avoid using default weak password)
    Settings used:
      ADMIN_EMAIL    (default: "admin@example.com")
      ADMIN_PASSWORD (required, otherwise won't create)

    Returns:
        The created admin, or None when nothing was created
    """
    if await User.filter(is_admin=True).exists():
        return None  # Skip creation if admin already exists

    admin_password = password or settings.admin_password
    if not admin_password:
        logger.warning("[bootstrap] No admin present, but ADMIN_PASSWORD not set -> skip creating default admin.")
        return None

    admin_email = User.normalize_email(email or settings.admin_email)
    existing = await User.get_or_none(email=admin_email)
    if existing:
        # A regular account already uses the admin email: leave it alone
        logger.warning("[bootstrap] ADMIN_EMAIL=%s belongs to a regular account -> skip.", admin_email)
        return None

    u = User(
        email=admin_email,
        nickname=await allocate_nickname(admin_email),
        is_admin=True,
    )
    u.set_password(admin_password)
    await u.save()
    logger.warning("[bootstrap] Created default admin -> email=%s nickname=%s id=%s",
                   u.email, u.nickname, u.id)
    return u
