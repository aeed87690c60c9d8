# gateway/api/routers/auth.py
import logging

from fastapi import APIRouter
from tortoise.exceptions import IntegrityError

from gateway.config import settings
from gateway.core.errors import Conflict, InvalidCredentials, NotFound
from gateway.core.security import create_access_token, hash_password, verify_password
from gateway.models.user import Role, User
from gateway.schemas.auth import AuthOut, LoginIn, RegisterIn, UserOut

logger = logging.getLogger("uvicorn.error")

router = APIRouter(tags=["users"])


def _auth_response(user: User) -> AuthOut:
    token = create_access_token(str(user.id))
    return AuthOut(**UserOut.from_user(user).model_dump(), token=token)


@router.post("/register", response_model=AuthOut)
async def register(body: RegisterIn):
    """
    Register a new user account.

    Creates a user with a starting balance of 1000 credits. The role is
    "vip" when isVip is set, "regular" otherwise. Admins are never created
    through this endpoint.

    Returns:
        AuthOut: The created user (without password) and a session token

    Error codes:
        - INVALID_INPUT (400): email format, password < 5 chars, firstName < 3 chars
        - EMAIL_EXISTS (400): email already registered
    """
    if await User.filter(email=body.email).exists():
        raise Conflict()
    try:
        u = await User.create(
            first_name=body.firstName,
            last_name=body.lastName,
            patronymic=body.patronymic,
            email=body.email,
            password_hash=hash_password(body.password),
            role=Role.VIP if body.isVip else Role.REGULAR,
            money=settings.starting_balance,
        )
    except IntegrityError:
        # Lost a race against a concurrent registration with the same email
        raise Conflict()
    logger.info("[auth] registered user=%s role=%s", u.id, u.role.value)
    return _auth_response(u)


@router.post("/login", response_model=AuthOut)
async def login(body: LoginIn):
    """
    Authenticate with email and password and issue a fresh session token.

    Error codes:
        - USER_NOT_FOUND (404): no user with this email
        - AUTH_INVALID_CREDENTIALS (400): wrong password
    """
    user = await User.get_or_none(email=body.email)
    if not user:
        raise NotFound()
    if not verify_password(body.password, user.password_hash):
        raise InvalidCredentials()
    logger.info("[auth] login user=%s", user.id)
    return _auth_response(user)
