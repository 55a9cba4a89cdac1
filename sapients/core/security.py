"""Password hashing and session token helpers."""

import secrets
from functools import lru_cache

import bcrypt

from sapients.core.config import settings


def hash_password(password: str) -> str:
    """Hash a password using bcrypt with the configured work factor."""
    pwd_bytes = password.encode("utf-8")
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    hashed = bcrypt.hashpw(pwd_bytes, salt)
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    pwd_bytes = plain_password.encode("utf-8")
    hashed_bytes = hashed_password.encode("utf-8")
    try:
        return bcrypt.checkpw(pwd_bytes, hashed_bytes)
    except ValueError:
        # Malformed stored hash
        return False


@lru_cache(maxsize=1)
def dummy_password_hash() -> str:
    """Hash checked when the email is unknown, so both failures cost the same."""
    return hash_password(secrets.token_urlsafe(16))


def generate_session_token() -> str:
    """Opaque, unguessable session token (256 bits of entropy)."""
    return secrets.token_urlsafe(32)
