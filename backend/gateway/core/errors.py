# gateway/core/errors.py
"""
Error taxonomy for the HTTP API.

Every error is an HTTPException with a fixed status and code, so handlers can
simply raise and FastAPI renders {"detail": {"code": ..., "message": ...}}.
"""
from typing import Any

from fastapi import HTTPException, status


class ApiError(HTTPException):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"
    message: str = "Internal server error"

    def __init__(self, message: str | None = None, *, code: str | None = None, **extra: Any):
        if code:
            self.code = code
        detail = {"code": self.code, "message": message or self.message}
        detail.update(extra)
        super().__init__(status_code=type(self).status_code, detail=detail)


class InvalidInput(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "INVALID_INPUT"
    message = "Invalid input"


class Conflict(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "EMAIL_EXISTS"
    message = "A user with this email already exists"


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "USER_NOT_FOUND"
    message = "User not found"


class InvalidCredentials(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "AUTH_INVALID_CREDENTIALS"
    message = "Incorrect email or password"


class Forbidden(ApiError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "FORBIDDEN_ADMIN_ONLY"
    message = "Insufficient permissions"


class Unauthorized(ApiError):
    # Missing and invalid tokens are both answered with 403
    status_code = status.HTTP_403_FORBIDDEN
    code = "AUTH_INVALID_TOKEN"
    message = "User is not authorized"


class ModelNotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "MODEL_NOT_FOUND"
    message = "Model not found"


class InsufficientFunds(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "INSUFFICIENT_FUNDS"
    message = "Insufficient funds"


class UpstreamError(ApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "UPSTREAM_ERROR"
    message = "Text generation failed"


class InternalError(ApiError):
    pass


def _field_name(loc) -> str:
    # ("body", "email") -> "email"; ("body",) or () -> "body"
    parts = [str(p) for p in loc if p != "body"]
    return ".".join(parts) if parts else "body"


def field_errors(errors) -> list[dict]:
    """Flatten pydantic error dicts into [{"field", "message"}]."""
    return [{"field": _field_name(e.get("loc", ())), "message": e.get("msg", "")} for e in errors]
