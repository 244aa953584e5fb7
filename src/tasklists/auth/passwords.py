"""Password hashing and verification."""

from __future__ import annotations

import asyncio
import secrets

from pwdlib import PasswordHash
from pwdlib.exceptions import UnknownHashError

from ..logging import get_logger

logger = get_logger(__name__)


def _get_password_hasher() -> PasswordHash:
    """Get or create the shared PasswordHash instance."""
    if not hasattr(_get_password_hasher, "cached_instance"):
        _get_password_hasher.cached_instance = PasswordHash.recommended()
    return _get_password_hasher.cached_instance


def hash_password(password: str) -> str:
    """Hash a password with a fresh salt.

    Two calls with the same password produce different strings; use
    ``verify_password`` to compare.

    Args:
        password: Plain text password to hash

    Returns:
        Hashed password string safe to store
    """
    return _get_password_hasher().hash(password)


def dummy_password_hash() -> str:
    """Hash compared against when no account exists, so a miss costs the same as a hit."""
    if not hasattr(dummy_password_hash, "cached_hash"):
        dummy_password_hash.cached_hash = hash_password(secrets.token_urlsafe(16))
    return dummy_password_hash.cached_hash


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash.

    Args:
        plain_password: Plain text password to verify
        hashed_password: Hashed password from the Users collection

    Returns:
        True if password matches, False otherwise (including unrecognized hashes)
    """
    try:
        return _get_password_hasher().verify(plain_password, hashed_password)
    except UnknownHashError:
        logger.warning("Stored password hash has an unrecognized format")
        return False


async def hash_password_async(password: str) -> str:
    return await asyncio.to_thread(hash_password, password)


async def verify_password_async(plain_password: str, hashed_password: str) -> bool:
    return await asyncio.to_thread(verify_password, plain_password, hashed_password)


__all__ = [
    "dummy_password_hash",
    "hash_password",
    "verify_password",
    "hash_password_async",
    "verify_password_async",
]
