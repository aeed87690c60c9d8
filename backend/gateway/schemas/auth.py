# gateway/schemas/auth.py
"""
Pydantic schemas for account endpoints.
Defines request/response models for registration, login and user profile.
"""
from typing import Literal, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator
from pydantic.networks import validate_email
from pydantic_core import PydanticCustomError

from gateway.models.user import User


class RegisterIn(BaseModel):
    """
    Request model for user registration.
    All field errors are reported together as one INVALID_INPUT response.
    """
    firstName: str = Field(min_length=3)
    lastName: str
    email: EmailStr
    password: str = Field(min_length=5)
    patronymic: Optional[str] = None
    isVip: bool = False


class LoginIn(BaseModel):
    # email is not format-checked: an unknown address is a 404, not a 400
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        # Same normalization EmailStr applied when the account was stored
        try:
            return validate_email(v)[1]
        except PydanticCustomError:
            return v


class UserOut(BaseModel):
    """
    User information returned to clients.
    Contains no credential material (password hash is never exposed).
    """
    id: str
    firstName: str
    lastName: str
    patronymic: Optional[str] = None
    email: str
    role: Literal["regular", "vip", "admin"]
    money: int
    createdAt: Optional[str] = None

    @classmethod
    def from_user(cls, u: User) -> "UserOut":
        return cls(
            id=str(u.id),
            firstName=u.first_name,
            lastName=u.last_name,
            patronymic=u.patronymic,
            email=u.email,
            role=u.role.value if hasattr(u.role, "value") else u.role,
            money=u.money,
            createdAt=u.created_at.isoformat() if u.created_at else None,
        )


class AuthOut(UserOut):
    """
    Response model for register/login: the user fields plus a session token.
    """
    token: str
