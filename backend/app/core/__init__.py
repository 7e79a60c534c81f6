# app/core/__init__.py
"""
Core application modules.
Contains essential infrastructure components:
- bootstrap: Default admin creation on startup
- db: Database configuration and connection management
- errors: Error taxonomy translated to HTTP responses
- security: Password hashing and bearer token issuing/verification
"""
