# app/core/security.py
"""
Credential and token primitives.

  - Password hashing / verification (passlib pbkdf2_sha256, salted)
  - Opaque session token generation
  - Timezone helpers shared by session expiry and statistics
"""

import secrets
from datetime import datetime, timezone

from passlib.hash import pbkdf2_sha256 as _pbkdf2


def hash_password(plain: str) -> str:
    """
    Hash a plaintext password with PBKDF2-SHA256.

    The salt is embedded in the returned string (passlib convention),
    e.g. "$pbkdf2-sha256$29000$...".
    """
    return _pbkdf2.hash(plain)


def verify_password(plain: str, stored_hash: str) -> bool:
    """
    Constant-time verification of `plain` against a hash produced by
    `hash_password`. Malformed hashes never verify.
    """
    try:
        return _pbkdf2.verify(plain, stored_hash)
    except ValueError:
        return False


def generate_session_token() -> str:
    """Opaque, URL-safe bearer token (256 bits of entropy)."""
    return secrets.token_urlsafe(32)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """
    Normalize a stored timestamp to an aware UTC datetime.

    SQLite hands back naive datetimes even for timezone-aware columns;
    those are UTC by construction.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
