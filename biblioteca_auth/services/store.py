"""Credential store: persistence of users and refresh tokens behind an injectable interface."""

import logging
from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from typing import Protocol

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from biblioteca_auth.models import RefreshToken, User
from biblioteca_auth.services.errors import ValidationError

logger = logging.getLogger(__name__)


class CredentialStore(Protocol):
    """What the auth flows need from storage. One instance serves one request."""

    def transaction(self) -> AbstractContextManager[None]: ...

    def username_exists(self, username: str) -> bool: ...

    def email_exists(self, email: str) -> bool: ...

    def add_user(self, user: User) -> User: ...

    def get_user_by_username(self, username: str) -> User | None: ...

    def get_user_by_id(self, user_id: int) -> User | None: ...

    def list_users(self) -> list[User]: ...

    def save_user(self, user: User) -> None: ...

    def add_refresh_token(self, token: RefreshToken) -> RefreshToken: ...

    def get_refresh_token(self, value: str) -> RefreshToken | None: ...


class SqlCredentialStore:
    """CredentialStore backed by a SQLAlchemy session."""

    def __init__(self, session: Session) -> None:
        self._session = session

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Commit the enclosed work as a unit; roll back if anything raises."""
        try:
            yield
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

    def username_exists(self, username: str) -> bool:
        return (
            self._session.query(User.id).filter(User.username == username).first()
            is not None
        )

    def email_exists(self, email: str) -> bool:
        return self._session.query(User.id).filter(User.email == email).first() is not None

    def add_user(self, user: User) -> User:
        """
        Insert a user and flush to obtain its id.

        The unique constraints are the authoritative duplicate check; a violation
        on username or email (a concurrent registration won the race) becomes a
        ValidationError. Any other integrity failure propagates unchanged.
        """
        self._session.add(user)
        try:
            self._session.flush()
        except IntegrityError:
            self._session.rollback()
            if self.username_exists(user.username):
                logger.warning("Unique constraint hit on username %s", user.username)
                raise ValidationError.duplicate_username() from None
            if self.email_exists(user.email):
                logger.warning("Unique constraint hit on email for user %s", user.username)
                raise ValidationError.duplicate_email() from None
            raise
        return user

    def get_user_by_username(self, username: str) -> User | None:
        return self._session.query(User).filter(User.username == username).first()

    def get_user_by_id(self, user_id: int) -> User | None:
        return self._session.query(User).filter(User.id == user_id).first()

    def list_users(self) -> list[User]:
        return self._session.query(User).order_by(User.id).all()

    def save_user(self, user: User) -> None:
        self._session.add(user)
        self._session.flush()

    def add_refresh_token(self, token: RefreshToken) -> RefreshToken:
        self._session.add(token)
        self._session.flush()
        return token

    def get_refresh_token(self, value: str) -> RefreshToken | None:
        return (
            self._session.query(RefreshToken)
            .filter(RefreshToken.token == value)
            .first()
        )
