# app/schemas/admin.py
"""
Pydantic schemas for admin moderation endpoints.
"""
from pydantic import BaseModel
from typing import Optional, List


class ModerationUserOut(BaseModel):
    """
    Account as shown to administrators.
    Safe field subset: never includes password or profile data.
    """
    id: str
    email: str
    createdAt: Optional[str] = None  # ISO format
    updatedAt: Optional[str] = None  # ISO format
    isAdmin: bool
    isBanned: bool


class ModerationPageOut(BaseModel):
    """
    Response model for paginated moderation listings.
    """
    docs: List[ModerationUserOut]
    total: int  # Total number of matching accounts
    limit: int  # Fixed page size
    page: int  # Current page (1-based)
    pages: int  # Number of pages
