"""
Registration, login and refresh flows.

Each flow works against an injected CredentialStore and runs as one
transaction: either every write lands or none does. Failures raise
ValidationError or AuthError and leave stored state untouched.
"""

import logging

from biblioteca_auth.core.security import hash_password, verify_password
from biblioteca_auth.models import User, UserStatus
from biblioteca_auth.schemas.auth import (
    LoginResponse,
    RefreshResponse,
    RegisterRequest,
    RegisterResponse,
    UserInfo,
)
from biblioteca_auth.services.errors import AuthError, ValidationError
from biblioteca_auth.services.roles import permissions_for, role_name
from biblioteca_auth.services.store import CredentialStore
from biblioteca_auth.services.tokens import TokenIssuer

logger = logging.getLogger(__name__)

MSG_REGISTERED = "Registro exitoso. Por favor verifique su email para activar la cuenta."
MSG_LOGGED_IN = "Login exitoso"
MSG_REFRESHED = "Token renovado exitosamente"


def build_user_info(user: User) -> UserInfo:
    return UserInfo(
        user_id=user.id,
        name=user.name,
        username=user.username,
        email=user.email,
        role_id=user.role_id,
        role_name=role_name(user.role_id),
    )


def register_user(
    store: CredentialStore,
    body: RegisterRequest,
    *,
    status: UserStatus = UserStatus.INACTIVE,
) -> RegisterResponse:
    """
    Create an account, inactive unless an operator passes status=ACTIVE.
    Raises ValidationError if the username or email is taken.

    Username is checked before email. Concurrent duplicates that pass both
    checks are caught by the store's unique constraints.
    """
    with store.transaction():
        if store.username_exists(body.username):
            raise ValidationError.duplicate_username()
        if store.email_exists(body.email):
            raise ValidationError.duplicate_email()

        user = User(
            name=body.name,
            username=body.username,
            email=body.email,
            password_hash=hash_password(body.password),
            role_id=body.role_id,
            status=int(status),
            failed_attempts=0,
        )
        store.add_user(user)
        user_id = user.id

    logger.info(
        "Registered user id=%s role_id=%s status=%s", user_id, body.role_id, status.name
    )
    return RegisterResponse(user_id=user_id, message=MSG_REGISTERED)


def login(store: CredentialStore, username: str, password: str) -> LoginResponse:
    """
    Verify credentials and issue an access token plus a refresh token.

    Raises AuthError for unknown users, inactive accounts and wrong passwords.
    On success the failed-attempt counter is reset to 0.
    """
    issuer = TokenIssuer(store)
    with store.transaction():
        user = store.get_user_by_username(username)
        if user is None:
            logger.warning("Login rejected: unknown username")
            raise AuthError.invalid_credentials()
        if not user.is_active:
            logger.warning("Login rejected: inactive account user id=%s", user.id)
            raise AuthError.account_inactive()
        if not verify_password(password, user.password_hash):
            logger.warning("Login rejected: bad password for user id=%s", user.id)
            raise AuthError.invalid_credentials()

        user.failed_attempts = 0
        store.save_user(user)

        access_token = issuer.issue_access_token(user)
        refresh = issuer.issue_refresh_token(user)
        response = LoginResponse(
            user_id=user.id,
            access_token=access_token,
            refresh_token=refresh.token,
            message=MSG_LOGGED_IN,
            user_info=build_user_info(user),
            permissions=permissions_for(user.role_id),
        )

    logger.info("Login succeeded for user id=%s", response.user_id)
    return response


def refresh_access_token(store: CredentialStore, token_value: str) -> RefreshResponse:
    """
    Exchange a refresh token for a new access token bound to the token's owner.

    Raises AuthError when the token is unknown or revoked. The refresh token is
    not rotated; the same value is returned.
    """
    issuer = TokenIssuer(store)
    refresh = store.get_refresh_token(token_value)
    if refresh is None or refresh.revoked:
        logger.warning("Refresh rejected: token unknown or revoked")
        raise AuthError.invalid_refresh_token()

    user = refresh.user
    access_token = issuer.issue_access_token(user)
    logger.info("Access token refreshed for user id=%s", user.id)
    return RefreshResponse(
        access_token=access_token,
        refresh_token=token_value,
        message=MSG_REFRESHED,
    )
