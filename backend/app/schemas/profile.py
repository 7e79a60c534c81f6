# app/schemas/profile.py
"""
Pydantic schemas for profile endpoints.
"""
from pydantic import BaseModel, Field


class ProfileUpdateIn(BaseModel):
    """
    Request model for profile updates.
    All fields are optional - only provided fields will be updated.
    An empty nickname keeps the current one.
    """
    nickname: str | None = None
    firstName: str | None = None
    lastName: str | None = None
    cellphone: str | None = None
    address: str | None = None

    def to_changes(self) -> dict:
        """Map to account field names, keeping only fields the client sent."""
        mapping = {
            "nickname": "nickname",
            "firstName": "first_name",
            "lastName": "last_name",
            "cellphone": "cellphone",
            "address": "address",
        }
        sent = self.model_dump(exclude_unset=True)
        return {mapping[k]: v for k, v in sent.items()}


class ProfilePhotoIn(BaseModel):
    """
    Request model for profile photo upload (base64 file content).

    size is accepted for client compatibility only; the stored size is the
    decoded byte count of file.
    """
    name: str = Field(min_length=1)
    type: str = Field(min_length=1)  # MIME type, e.g. image/png
    size: int = Field(ge=0)  # Declared by the client, not trusted
    file: str = Field(min_length=1)  # Base64, optionally as a data URL


class ProfileUpdateOut(BaseModel):
    nickname: str
    firstName: str | None = None
    lastName: str | None = None
    cellphone: str | None = None
    address: str | None = None


class ProfileOut(ProfileUpdateOut):
    """Full profile projection. Never includes the password."""
    email: str
    isAdmin: bool
    profilePhotoId: str | None = None
    profilePhotoName: str | None = None
    profilePhotoType: str | None = None
    profilePhotoSize: int | None = None
    profilePhotoPath: str | None = None
