"""Register/login/refresh routes and auth dependencies (get_current_user, require_permission)."""

from collections.abc import Callable
from typing import Annotated

import jwt
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from biblioteca_auth.core.database import get_db
from biblioteca_auth.core.security import decode_access_token
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
    UsersListResponse,
)
from biblioteca_auth.services import auth as auth_service
from biblioteca_auth.services.roles import GESTIONAR_USUARIOS, permissions_for
from biblioteca_auth.services.store import CredentialStore, SqlCredentialStore

router = APIRouter()
security = HTTPBearer(auto_error=False)


def get_credential_store(db: Annotated[Session, Depends(get_db)]) -> CredentialStore:
    """Dependency: credential store bound to the request's DB session."""
    return SqlCredentialStore(db)


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
)
def register(
    body: RegisterRequest,
    store: Annotated[CredentialStore, Depends(get_credential_store)],
) -> RegisterResponse:
    """Create an inactive account. No token is issued until the account is activated and logs in."""
    return auth_service.register_user(store, body)


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
)
def login(
    body: LoginRequest,
    store: Annotated[CredentialStore, Depends(get_credential_store)],
) -> LoginResponse:
    """
    Authenticate with username and password; returns access and refresh tokens.
    Include the access token in the Authorization header as: Bearer <access_token>
    """
    return auth_service.login(store, body.username, body.password)


@router.post(
    "/refresh",
    response_model=RefreshResponse,
    responses={401: {"model": ErrorResponse}},
)
def refresh(
    body: RefreshRequest,
    store: Annotated[CredentialStore, Depends(get_credential_store)],
) -> RefreshResponse:
    """Exchange a refresh token for a new access token."""
    return auth_service.refresh_access_token(store, body.refresh_token)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    store: Annotated[CredentialStore, Depends(get_credential_store)],
) -> CurrentUser:
    """Dependency: require valid Bearer JWT and return the current user. Raises 401 if missing or invalid."""
    if credentials is None:
        raise _unauthorized("Not authenticated")
    try:
        payload = decode_access_token(credentials.credentials)
    except jwt.PyJWTError:
        raise _unauthorized("Invalid or expired token")
    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise _unauthorized("Invalid token payload")
    user = store.get_user_by_id(user_id)
    if user is None:
        raise _unauthorized("User not found")
    return CurrentUser(id=user.id, username=user.username, role_id=user.role_id)


def require_permission(permission: str) -> Callable[..., CurrentUser]:
    """Dependency factory: require the current user's role to grant permission. Raises 403 otherwise."""

    def dependency(
        current_user: Annotated[CurrentUser, Depends(get_current_user)],
    ) -> CurrentUser:
        if permission not in permissions_for(current_user.role_id):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Permission required: {permission}",
            )
        return current_user

    return dependency


@router.get("/me", response_model=MeResponse)
def me(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    store: Annotated[CredentialStore, Depends(get_credential_store)],
) -> MeResponse:
    """Profile and permissions of the authenticated user."""
    user = store.get_user_by_id(current_user.id)
    if user is None:
        raise _unauthorized("User not found")
    return MeResponse(
        user_info=auth_service.build_user_info(user),
        permissions=permissions_for(user.role_id),
    )


@router.get("/users", response_model=UsersListResponse)
def list_users(
    _admin: Annotated[CurrentUser, Depends(require_permission(GESTIONAR_USUARIOS))],
    store: Annotated[CredentialStore, Depends(get_credential_store)],
) -> UsersListResponse:
    """List all users (requires GESTIONAR_USUARIOS)."""
    return UsersListResponse(
        users=[auth_service.build_user_info(u) for u in store.list_users()]
    )
