"""SQLAlchemy declarative Base shared by the credential store tables."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base for users and refresh_tokens."""

    pass
