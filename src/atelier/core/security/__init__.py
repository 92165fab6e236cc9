"""Security utilities - crypto and response headers.

Re-exports all security-related helpers for convenience.
"""

from src.atelier.core.security.crypto import (
    TokenType,
    create_session_token,
    decode_token,
    dummy_password_hash,
    hash_password,
    hash_token,
    verify_password,
)
from src.atelier.core.security.headers import SecurityHeadersMiddleware

__all__ = [
    # Crypto
    "TokenType",
    "create_session_token",
    "decode_token",
    "dummy_password_hash",
    "hash_password",
    "hash_token",
    "verify_password",
    # Headers
    "SecurityHeadersMiddleware",
]
