# gateway/schemas/ledger.py
"""
Pydantic schemas for balance endpoints.
"""
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from .auth import UserOut


class BalanceOut(BaseModel):
    balance: int


class SetBalanceIn(BaseModel):
    """
    Request model for the admin balance overwrite.
    userId defaults to the calling admin.
    """
    money: int = Field(ge=0)
    userId: Optional[UUID] = None


class SetBalanceOut(BaseModel):
    updatedUser: UserOut
