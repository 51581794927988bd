"""Pydantic request/response schemas."""

from biblioteca_auth.schemas.auth import (
    CurrentUser,
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    MeResponse,
    RefreshRequest,
    RefreshResponse,
    RegisterRequest,
    RegisterResponse,
    UserInfo,
    UsersListResponse,
)
from biblioteca_auth.schemas.health import HealthResponse

__all__ = [
    "CurrentUser",
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "MeResponse",
    "RefreshRequest",
    "RefreshResponse",
    "RegisterRequest",
    "RegisterResponse",
    "UserInfo",
    "UsersListResponse",
]
