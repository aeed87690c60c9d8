# gateway/api/routers/users.py
from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError

from gateway.api.deps import Identity, get_identity, require_admin
from gateway.core.errors import InvalidInput, NotFound, field_errors
from gateway.models.user import User
from gateway.schemas.auth import UserOut
from gateway.schemas.ledger import BalanceOut, SetBalanceIn, SetBalanceOut
from gateway.services import ledger

router = APIRouter(tags=["users"])


async def _load_user(identity: Identity) -> User:
    user = await User.get_or_none(id=identity.user_id)
    if not user:
        raise NotFound()
    return user


@router.get("/user", response_model=UserOut)
async def get_current_user(identity: Identity = Depends(get_identity)):
    """
    Get the authenticated user's profile.

    Raises:
        Unauthorized (403): missing or invalid token
        NotFound (404): the user behind the token no longer exists
    """
    return UserOut.from_user(await _load_user(identity))


@router.get("/balance", response_model=BalanceOut)
async def get_balance(identity: Identity = Depends(get_identity)):
    """Get the authenticated user's credit balance."""
    user = await _load_user(identity)
    return BalanceOut(balance=user.money)


@router.put(
    "/balance",
    response_model=SetBalanceOut,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": SetBalanceIn.model_json_schema()}},
        }
    },
)
async def put_balance(request: Request, admin: User = Depends(require_admin)):
    """
    Overwrite a balance (admin only).

    The body (SetBalanceIn) is parsed by hand after require_admin, because
    FastAPI decodes a declared body before resolving dependencies.

    Body:
        money (>= 0) and an optional userId; without userId the calling
        admin's own balance is set

    Returns:
        SetBalanceOut: {"updatedUser": <user without password>}

    Raises:
        Forbidden (403): caller is not an admin, whatever the payload
        InvalidInput (400): admin sent a malformed or invalid body
        NotFound (404): target user does not exist
    """
    try:
        body = SetBalanceIn.model_validate_json(await request.body())
    except ValidationError as e:
        raise InvalidInput(errors=field_errors(e.errors()))

    target_id = body.userId or admin.id
    updated = await ledger.set_balance(target_id, body.money)
    return SetBalanceOut(updatedUser=UserOut.from_user(updated))
