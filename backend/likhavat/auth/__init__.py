"""Authentication: password hashing, bearer tokens and the request gate."""

from likhavat.auth.dependencies import get_current_user_id
from likhavat.auth.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)

__all__ = [
    "create_access_token",
    "decode_access_token",
    "get_current_user_id",
    "hash_password",
    "verify_password",
]
