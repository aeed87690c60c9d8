# gateway/core/security.py
"""
Security module for authentication.
Handles password hashing and JWT session token creation/validation.
"""
import logging
import secrets
import datetime as dt
import jwt  # PyJWT
from passlib.context import CryptContext

from gateway.config import settings

logger = logging.getLogger("uvicorn.error")

# Password hashing context
# bcrypt with a fixed cost factor (PASSWORD_HASH_ROUNDS, default 10)
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.password_hash_rounds,
)

def _resolve_secret() -> str:
    if settings.jwt_secret:
        return settings.jwt_secret
    # Tokens will not survive a restart or be shared between workers
    logger.warning("[security] JWT_SECRET not set -> using a random per-process secret")
    return secrets.token_urlsafe(48)

# JWT configuration
JWT_SECRET = _resolve_secret()
ACCESS_TOKEN_EXPIRE_DAYS = settings.access_token_expire_days
JWT_ALG = "HS256"  # JWT signing algorithm (HMAC SHA-256)

def hash_password(plain: str) -> str:
    """
    Hash a plain text password using bcrypt.

    Args:
        plain: Plain text password to hash

    Returns:
        Hashed password string (safe to store in database)
    """
    return pwd_context.hash(plain)

def verify_password(plain: str, hashed: str) -> bool:
    """
    Verify a plain text password against a hashed password.

    Returns:
        True if password matches, False otherwise (including unreadable hashes)
    """
    try:
        return pwd_context.verify(plain, hashed)
    except ValueError:
        return False

def create_access_token(user_id: str) -> str:
    """
    Create a JWT session token for a user.

    Token payload includes:
        - sub: Subject (user ID)
        - iat: Issued at timestamp
        - exp: Expiration timestamp (iat + ACCESS_TOKEN_EXPIRE_DAYS)

    The token is stateless: there is no server-side revocation, so the
    validity window fixed here cannot be shortened later.
    """
    now = dt.datetime.now(dt.timezone.utc)
    payload = {
        "sub": user_id,
        "iat": now,
        "exp": now + dt.timedelta(days=ACCESS_TOKEN_EXPIRE_DAYS),
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALG)

def decode_access_token(token: str) -> dict:
    """
    Decode and validate a JWT session token.

    Raises:
        jwt.ExpiredSignatureError: If token has expired
        jwt.InvalidTokenError: If token is invalid, malformed or lacks "sub"
    """
    return jwt.decode(
        token,
        JWT_SECRET,
        algorithms=[JWT_ALG],
        options={"require": ["sub", "exp"]},
    )
