"""Cryptographic utilities - password hashing, session tokens."""

from datetime import UTC, datetime, timedelta
from functools import lru_cache
from hashlib import sha256
from typing import Any
from uuid import UUID, uuid4

import argon2
from jose import JWTError, jwt

from src.atelier.core.config import get_settings


class TokenType:
    """Values of the JWT ``type`` claim."""

    SESSION = "session"


def hash_token(token: str) -> str:
    """Hash a token using SHA256 for blacklist keys."""
    return sha256(token.encode()).hexdigest()


@lru_cache
def _password_hasher() -> argon2.PasswordHasher:
    settings = get_settings()
    return argon2.PasswordHasher(
        time_cost=settings.argon2_time_cost,
        memory_cost=settings.argon2_memory_cost,
        parallelism=settings.argon2_parallelism,
    )


def hash_password(password: str) -> str:
    """Hash password using Argon2id."""
    return _password_hasher().hash(password)


def verify_password(password: str, hashed: str) -> bool:
    """Verify password against hash. Returns False on any error."""
    try:
        return _password_hasher().verify(hashed, password)
    except (argon2.exceptions.VerifyMismatchError, argon2.exceptions.InvalidHashError):
        return False


@lru_cache
def dummy_password_hash() -> str:
    """Hash verified against when the email is unknown, to keep timing uniform."""
    return hash_password(uuid4().hex)


def _encode(claims: dict[str, Any]) -> str:
    settings = get_settings()
    return jwt.encode(  # type: ignore[no-any-return]
        claims,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )


def _decode(token: str) -> dict[str, Any] | None:
    settings = get_settings()
    try:
        return jwt.decode(  # type: ignore[no-any-return]
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError:
        return None


def create_session_token(
    user_id: str | UUID,
    expires_delta: timedelta | None = None,
) -> tuple[str, datetime]:
    """Create a session JWT. Returns (token, expiry as aware UTC datetime)."""
    settings = get_settings()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.session_expire_minutes)
    expire = datetime.now(UTC) + expires_delta

    token = _encode(
        {
            "sub": str(user_id),
            "exp": expire,
            "type": TokenType.SESSION,
            # Unique per token so two sessions issued in the same second differ
            "jti": uuid4().hex,
        }
    )
    return token, expire


def decode_token(token: str) -> dict[str, Any] | None:
    """Decode and validate a JWT. Returns None on any error, including expiry."""
    return _decode(token)

