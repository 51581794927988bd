"""SQLAlchemy ORM models."""

from biblioteca_auth.models.base import Base
from biblioteca_auth.models.refresh_token import RefreshToken
from biblioteca_auth.models.user import User, UserStatus

__all__ = ["Base", "RefreshToken", "User", "UserStatus"]
