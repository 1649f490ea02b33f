"""Pydantic request/response schemas."""

from app.schemas.auth import Claims, LoginRequest, TokenResponse
from app.schemas.health import HealthResponse
from app.schemas.user import DeleteResponse, NewUser, UserRead

__all__ = [
    "Claims",
    "DeleteResponse",
    "HealthResponse",
    "LoginRequest",
    "NewUser",
    "TokenResponse",
    "UserRead",
]
