"""Test package. Pins an in-memory database and fast hashing before app modules load settings."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret-not-for-production")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
