# gateway/core/__init__.py
"""
Core application modules.
Contains essential infrastructure components:
- bootstrap: Default admin account and model rate seeding
- db: Database configuration and connection management
- errors: HTTP error taxonomy
- security: Password hashing and session tokens
"""
