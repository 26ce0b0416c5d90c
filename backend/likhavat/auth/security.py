"""
Kacchi Likhavat Backend — Credentials and Bearer Tokens
========================================================

What:  Password hashing (bcrypt) and access-token signing (PyJWT, HS256).
Who:   auth_service (register/login) and the request gate in dependencies.py.

Token format:
    {"id": "<user uuid>", "iat": <issued>, "exp": <issued + JWT_EXPIRES_DAYS>}
    signed with settings.jwt_secret. The `id` claim is the only identity
    the API trusts; every owned query is scoped by it.
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt

from likhavat.config import settings
from likhavat.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a password
_BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))
    except ValueError:
        # Stored hash is not a bcrypt hash
        logger.warning("Unreadable password hash encountered during login")
        return False


def create_access_token(user_id: uuid.UUID) -> str:
    """Sign a token for `user_id` that expires after settings.jwt_expires_days."""
    issued_at = datetime.now(timezone.utc)
    payload = {
        "id": str(user_id),
        "iat": issued_at,
        "exp": issued_at + timedelta(days=settings.jwt_expires_days),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> uuid.UUID:
    """
    Verify signature and expiry, then return the user id carried by the token.

    Raises:
        AuthenticationError: expired, tampered, malformed, or missing `id`
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Your session has expired. Please log in again")
    except jwt.InvalidTokenError as e:
        logger.info("Rejected bearer token: %s", e)
        raise AuthenticationError("Invalid authentication token. Please log in again")

    try:
        return uuid.UUID(str(payload["id"]))
    except (KeyError, ValueError):
        raise AuthenticationError("Invalid authentication token. Please log in again")
