"""Token issuance: signed access tokens and store-backed refresh tokens."""

from biblioteca_auth.core.security import create_access_token, generate_refresh_token_value
from biblioteca_auth.models import RefreshToken, User
from biblioteca_auth.services.store import CredentialStore


class TokenIssuer:
    """Mints access tokens (JWT) and persists opaque refresh tokens through the store."""

    def __init__(self, store: CredentialStore) -> None:
        self._store = store

    def issue_access_token(self, user: User) -> str:
        return create_access_token(sub=user.id, username=user.username, role=user.role_id)

    def issue_refresh_token(self, user: User) -> RefreshToken:
        """Create and persist a new, unrevoked refresh token owned by user."""
        token = RefreshToken(
            token=generate_refresh_token_value(),
            user_id=user.id,
            revoked=False,
        )
        return self._store.add_refresh_token(token)
