# app/models/user.py
"""
Database model for user accounts.
Holds credentials, profile information, moderation flags and a snapshot of
the most recently uploaded profile photo.
"""
import uuid
from tortoise import fields, models

from app.core.security import hash_password, verify_password


class User(models.Model):
    """
    User database model.

    Security:
    - Password is stored as a hash (never store plain text passwords)
    - password_hash is NULL while a password reset is pending; such an
      account cannot log in until a new password is set
    - is_admin is only set by out-of-band provisioning (app.core.bootstrap)

    Uniqueness of email and nickname is enforced by unique indexes.
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)
    email = fields.CharField(max_length=256, unique=True, index=True)  # Stored trimmed + lower-cased
    nickname = fields.CharField(max_length=256, unique=True, index=True)
    password_hash = fields.CharField(max_length=255, null=True)

    is_admin = fields.BooleanField(default=False)
    is_banned = fields.BooleanField(default=False)

    first_name = fields.CharField(max_length=256, null=True)
    last_name = fields.CharField(max_length=256, null=True)
    cellphone = fields.CharField(max_length=64, null=True)
    address = fields.CharField(max_length=512, null=True)

    # Denormalized copy of the last uploaded Image (weak reference by id)
    profile_photo_id = fields.CharField(max_length=64, null=True)
    profile_photo_name = fields.CharField(max_length=256, null=True)
    profile_photo_type = fields.CharField(max_length=64, null=True)
    profile_photo_size = fields.IntField(null=True)
    profile_photo_path = fields.CharField(max_length=512, null=True)

    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        """Tortoise ORM metadata configuration."""
        table = "users"

    @staticmethod
    def normalize_email(email: str) -> str:
        return (email or "").strip().lower()

    async def save(self, *args, **kwargs) -> None:
        self.email = self.normalize_email(self.email)
        await super().save(*args, **kwargs)

    def set_password(self, plain: str | None) -> None:
        """Hash and store a password; None clears it (reset pending)."""
        self.password_hash = hash_password(plain) if plain is not None else None

    def verify_password(self, plain: str) -> bool:
        return verify_password(plain, self.password_hash)

    @property
    def has_password(self) -> bool:
        return bool(self.password_hash)
