"""
Service layer.

- account_service: registration, login, password reset, profile, moderation
- image_store: base64 image persistence
- product_service: owner-scoped product CRUD
"""
