"""
Password hashing.

PBKDF2-SHA256 with a random per-call salt, stored as ``salt:hexdigest``.
"""

from __future__ import annotations

import hashlib
import secrets

DEFAULT_ITERATIONS = 100_000


def hash_password(
    password: str,
    salt: str | None = None,
    iterations: int = DEFAULT_ITERATIONS,
) -> str:
    """
    Hash a password using PBKDF2-SHA256.

    Returns: salt:hash format string
    """
    if salt is None:
        salt = secrets.token_hex(32)
    hash_bytes = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        salt.encode("utf-8"),
        iterations=iterations,
    )
    return f"{salt}:{hash_bytes.hex()}"


def verify_password(
    password: str,
    password_hash: str,
    iterations: int = DEFAULT_ITERATIONS,
) -> bool:
    """Verify a password against its hash. Malformed hashes never match."""
    try:
        salt, stored_hash = password_hash.split(":")
        if not salt or not stored_hash:
            return False
        hash_bytes = hashlib.pbkdf2_hmac(
            "sha256",
            password.encode("utf-8"),
            salt.encode("utf-8"),
            iterations=iterations,
        )
        return secrets.compare_digest(hash_bytes.hex(), stored_hash)
    except (ValueError, AttributeError, TypeError):
        return False
