"""ORM model for library users (credentials, role and account status)."""

from enum import IntEnum

from sqlalchemy import Column, DateTime, Integer, String, func
from sqlalchemy.orm import relationship

from biblioteca_auth.models.base import Base


class UserStatus(IntEnum):
    """Account status; new accounts stay inactive until email verification."""

    INACTIVE = 0
    ACTIVE = 1


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    role_id: 1 (Estudiante), 2 (Bibliotecario) or 3 (Admin)
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    username = Column(String(255), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role_id = Column(Integer, nullable=False, default=1)
    status = Column(Integer, nullable=False, default=int(UserStatus.INACTIVE))
    # Reset on successful login; nothing increments it yet.
    failed_attempts = Column(Integer, nullable=False, default=0)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    refresh_tokens = relationship("RefreshToken", back_populates="user")

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE
