# gateway/models/user.py
"""
Database model for users.
Represents an account holder: profile, credentials, role and credit balance.
"""
import uuid
from enum import Enum

from tortoise import fields, models


class Role(str, Enum):
    REGULAR = "regular"
    VIP = "vip"
    ADMIN = "admin"


class User(models.Model):
    """
    User database model.

    Security:
    - Password is stored as a hash and is never serialized to clients
    - Email is the unique business key and is not changed after registration

    Billing:
    - money is the spendable credit balance; it is only decremented through
      gateway.services.ledger.debit, which refuses to go below zero
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)
    first_name = fields.CharField(max_length=128)
    last_name = fields.CharField(max_length=128)
    patronymic = fields.CharField(max_length=128, null=True)
    email = fields.CharField(max_length=256, unique=True, index=True)
    password_hash = fields.CharField(max_length=255)
    role = fields.CharEnumField(Role, max_length=16, default=Role.REGULAR)
    money = fields.IntField(default=1000)
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        """Tortoise ORM metadata configuration."""
        table = "users"

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
