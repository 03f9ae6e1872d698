"""Encryption key generation and password hashing."""
from __future__ import annotations

import base64
import secrets

import bcrypt


ENCRYPTION_KEY_BYTES = 32
ENCRYPTION_KEY_PREFIX = "base64:"


def generate_encryption_key() -> str:
    """Return a fresh application key: 32 random bytes, base64 encoded."""

    raw = secrets.token_bytes(ENCRYPTION_KEY_BYTES)
    return ENCRYPTION_KEY_PREFIX + base64.b64encode(raw).decode("ascii")


def hash_password(password: str) -> str:
    """Hash ``password`` with bcrypt; the salt is embedded in the result."""
    salt = bcrypt.gensalt(rounds=12)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False
