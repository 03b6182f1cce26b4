"""Password hashing helpers using passlib.

Two functions are used by registration and login:
- hash_password(plain: str) -> str
- verify_password(plain: str, hashed: str) -> bool

bcrypt via passlib's CryptContext. The cost can be set with `BCRYPT_ROUNDS`;
if the bcrypt backend cannot be loaded the context falls back to pbkdf2_sha256.
"""
from __future__ import annotations

import warnings

from passlib.context import CryptContext

from noteful import config


def _build_context() -> CryptContext:
    rounds = config.bcrypt_rounds()
    try:
        if rounds:
            ctx = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)
        else:
            ctx = CryptContext(schemes=["bcrypt"], deprecated="auto")
        # forces the backend to load now instead of on the first request
        ctx.hash("probe")
        return ctx
    except Exception as exc:
        warnings.warn(
            "bcrypt backend not available or failed to initialize; falling back to pbkdf2_sha256. "
            f"Original error: {exc}",
            RuntimeWarning,
        )
    if rounds:
        return CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto", pbkdf2_sha256__rounds=rounds)
    return CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


pwd_context = _build_context()


def hash_password(plain: str) -> str:
    """Hash a plaintext password and return the encoded hash string."""
    if plain is None:
        raise ValueError("Password must not be None")
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    """Verify a plaintext password against a stored hash.

    Returns False for a mismatch and for a hash passlib cannot identify.
    """
    if plain is None or hashed is None:
        return False
    try:
        return pwd_context.verify(plain, hashed)
    except (ValueError, TypeError):
        return False
