"""
FastAPI dependencies for authentication and authorization.

A bearer token is optional on every request: `get_token_user` decodes it when
present and yields its claims, or None for anonymous requests. The `require_*`
dependencies then decide whether the caller may use the route. All refusals
are 401, whether the caller is anonymous or just lacks the right.
"""

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from jobly.core.exceptions import UnauthorizedError
from jobly.core.security import JWTError, decode_token

logger = logging.getLogger(__name__)

# HTTP Bearer token scheme (Authorization: Bearer <token>); missing header is not an error
security = HTTPBearer(auto_error=False)


def get_token_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[dict]:
    """
    Claims of the caller's token, or None.

    An invalid or expired token is treated the same as no token.
    """
    if credentials is None:
        return None

    try:
        payload = decode_token(credentials.credentials)
    except JWTError:
        logger.warning("Ignoring invalid bearer token")
        return None

    if not payload.get("sub"):
        return None
    return payload


def require_admin(user: Optional[dict] = Depends(get_token_user)) -> dict:
    """Token whose is_admin claim is true."""
    if user is None or user.get("is_admin") is not True:
        raise UnauthorizedError()
    return user


def require_correct_user_or_admin(
    username: str,
    user: Optional[dict] = Depends(get_token_user),
) -> dict:
    """
    Admin, or the user named by the `username` path parameter.
    """
    if user is None:
        raise UnauthorizedError()
    if user.get("is_admin") is not True and user.get("sub") != username:
        raise UnauthorizedError()
    return user
