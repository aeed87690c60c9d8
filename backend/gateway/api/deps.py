# gateway/api/deps.py
from dataclasses import dataclass
from typing import Optional

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from gateway.core.errors import Forbidden, Unauthorized
from gateway.core.security import decode_access_token
from gateway.models.user import User

# auto_error=False: a missing header is reported through Unauthorized (403)
_bearer = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Identity:
    """The caller resolved from a verified session token."""
    user_id: str


async def get_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
) -> Identity:
    """
    FastAPI dependency implementing the auth gate.

    Extracts the token from "Authorization: Bearer <token>", verifies its
    signature and expiry, and returns the caller's Identity. The user row is
    not loaded here; handlers decide how a vanished user is reported.

    Raises:
        Unauthorized (403): no bearer token (AUTH_REQUIRED)
        Unauthorized (403): malformed, expired or badly signed token (AUTH_INVALID_TOKEN)

    Usage:
        @router.get("/protected")
        async def protected_route(identity: Identity = Depends(get_identity)):
            return {"user_id": identity.user_id}
    """
    if credentials is None or not credentials.credentials:
        raise Unauthorized(code="AUTH_REQUIRED")

    try:
        payload = decode_access_token(credentials.credentials)
    except jwt.InvalidTokenError:
        raise Unauthorized()

    user_id = payload.get("sub")
    if not isinstance(user_id, str) or not user_id:
        raise Unauthorized()
    return Identity(user_id=user_id)


async def require_admin(identity: Identity = Depends(get_identity)) -> User:
    """
    FastAPI dependency to ensure the caller's own role is admin.

    Runs before the request body is validated, so a non-admin caller gets
    403 whatever payload they send.

    Raises:
        Forbidden (403): caller missing or not an admin (FORBIDDEN_ADMIN_ONLY)
        Unauthorized (403): from get_identity
    """
    current = await User.get_or_none(id=identity.user_id)
    if not current or not current.is_admin:
        raise Forbidden()
    return current
