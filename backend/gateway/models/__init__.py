# gateway/models/__init__.py
"""
Database models module initialization.
Exports all Tortoise ORM models for convenient imports.

Models exported:
- User: Account, credentials, role and credit balance
- Role: Enumeration of user roles
- GenerationModel: Named generation target with its per-100-token rate
"""
from .user import User, Role
from .generation_model import GenerationModel
