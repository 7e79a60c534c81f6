# app/models/__init__.py
"""
Database models module initialization.
Exports all database models for convenient imports throughout the application.

Models exported:
- User: User account and authentication model
- Image: Uploaded image metadata
- Product: Product owned by a user
"""
from .user import User
from .image import Image
from .product import Product
