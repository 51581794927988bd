"""Password hashing, JWT creation/verification and refresh token generation."""

import secrets
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from biblioteca_auth.core.config import settings

# Min/max lengths for request validation.
NAME_MIN_LEN = 1
NAME_MAX_LEN = 255
USERNAME_MIN_LEN = 1
USERNAME_MAX_LEN = 255
EMAIL_MIN_LEN = 3
EMAIL_MAX_LEN = 255
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128
# bcrypt only reads the first 72 bytes of a password.
PASSWORD_MAX_BYTES = 72


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # Registration rejects passwords over PASSWORD_MAX_BYTES; truncation keeps bcrypt from raising.
    pw_bytes = plain_password.encode("utf-8")[:PASSWORD_MAX_BYTES]
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(pw_bytes, salt).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:PASSWORD_MAX_BYTES]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def create_access_token(sub: str | int, username: str, role: int) -> str:
    """Create a JWT access token with sub (user id), username, role id, iat and exp."""
    now = datetime.now(UTC)
    expire = now + timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    payload: dict[str, Any] = {
        "sub": str(sub),
        "username": username,
        "role": role,
        "exp": expire,
        "iat": now,
    }
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.encode(
        payload,
        secret,
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and validate JWT; return payload (sub, username, role, exp, iat).
    Raises jwt.PyJWTError on invalid or expired token.
    """
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.decode(
        token,
        secret,
        algorithms=[settings.JWT_ALGORITHM],
    )


def generate_refresh_token_value() -> str:
    """Return a new opaque, URL-safe refresh token value."""
    return secrets.token_urlsafe(settings.REFRESH_TOKEN_BYTES)
