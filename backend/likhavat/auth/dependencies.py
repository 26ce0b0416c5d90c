"""
FastAPI dependency that turns the Authorization header into a user id.

Every owned route declares `user_id: uuid.UUID = Depends(get_current_user_id)`;
a failure short-circuits the request with 401 before any handler code runs.
"""

import uuid
from typing import Optional

from fastapi import Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from likhavat.auth.security import decode_access_token
from likhavat.exceptions import AuthenticationError

# auto_error=False: missing or odd headers fall through to our own messages
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user_id(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
) -> uuid.UUID:
    if credentials is not None and credentials.credentials:
        user_id = decode_access_token(credentials.credentials)
        request.state.user_id = user_id
        return user_id

    header = request.headers.get("Authorization")
    if not header:
        raise AuthenticationError("Access denied! Please log in to continue")

    scheme, _, token = header.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise AuthenticationError("Authentication token is missing. Please log in again")

    user_id = decode_access_token(token)
    request.state.user_id = user_id
    return user_id
