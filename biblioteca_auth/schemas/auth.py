"""Request/response schemas for auth endpoints."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from biblioteca_auth.core.security import (
    EMAIL_MAX_LEN,
    EMAIL_MIN_LEN,
    NAME_MAX_LEN,
    NAME_MIN_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MAX_BYTES,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)


class RegisterRequest(BaseModel):
    """New account data. The account starts inactive."""

    name: str = Field(..., min_length=NAME_MIN_LEN, max_length=NAME_MAX_LEN, description="Display name")
    username: str = Field(
        ..., min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN, description="Username"
    )
    email: str = Field(
        ...,
        min_length=EMAIL_MIN_LEN,
        max_length=EMAIL_MAX_LEN,
        pattern=r"^[^@\s]+@[^@\s]+$",
        description="Email address",
    )
    password: str = Field(
        ..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN, description="Password"
    )
    role_id: Literal[1, 2, 3] = Field(
        default=1, description="1 = Estudiante, 2 = Bibliotecario, 3 = Admin"
    )

    @field_validator("password")
    @classmethod
    def validate_password_bytes(cls, v: str) -> str:
        if len(v.encode("utf-8")) > PASSWORD_MAX_BYTES:
            raise ValueError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes in UTF-8")
        return v


class RegisterResponse(BaseModel):
    """Id of the created user plus a message for the client."""

    user_id: int
    message: str


class LoginRequest(BaseModel):
    """Credentials for login. Length rules are registration policy; a mismatch here is a failed login."""

    username: str = Field(..., min_length=1, description="Username")
    password: str = Field(..., min_length=1, description="Password")


class UserInfo(BaseModel):
    """Public profile of a user (no password hash)."""

    user_id: int
    name: str
    username: str
    email: str
    role_id: int
    role_name: str


class LoginResponse(BaseModel):
    """Tokens, profile and permissions returned after a successful login."""

    user_id: int
    access_token: str = Field(..., description="JWT access token")
    refresh_token: str = Field(..., description="Opaque refresh token")
    token_type: str = Field(default="bearer", description="Token type")
    message: str
    user_info: UserInfo
    permissions: list[str] = Field(..., description="Permissions in role table order")


class RefreshRequest(BaseModel):
    """Refresh token to exchange for a new access token."""

    refresh_token: str = Field(..., description="Refresh token value issued at login")


class RefreshResponse(BaseModel):
    """New access token; the refresh token is echoed back unchanged."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    message: str


class CurrentUser(BaseModel):
    """Authenticated user resolved from a Bearer token, for dependency injection."""

    id: int
    username: str
    role_id: int


class MeResponse(BaseModel):
    """Response for GET /auth/me."""

    user_info: UserInfo
    permissions: list[str]


class ErrorResponse(BaseModel):
    """Body of auth error responses."""

    detail: str
    code: str


class UsersListResponse(BaseModel):
    """Response for GET /auth/users."""

    users: list[UserInfo]
