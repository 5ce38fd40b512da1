"""Security utilities.

Re-exports crypto helpers for convenience.
"""

from src.scrum.core.security.crypto import (
    ACCESS_TOKEN_TYPE,
    DUMMY_PASSWORD_HASH,
    REFRESH_TOKEN_TYPE,
    create_access_token,
    create_refresh_token,
    decode_token,
    hash_password,
    hash_token,
    verify_password,
)

__all__ = [
    "ACCESS_TOKEN_TYPE",
    "DUMMY_PASSWORD_HASH",
    "REFRESH_TOKEN_TYPE",
    "create_access_token",
    "create_refresh_token",
    "decode_token",
    "hash_password",
    "hash_token",
    "verify_password",
]
