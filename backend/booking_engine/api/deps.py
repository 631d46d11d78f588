"""Shared API dependencies — single import point for all routers.

Re-exports the database session and provides the admin gate so that router
modules can import everything they need from one place::

    from booking_engine.api.deps import get_db, require_admin
"""

import secrets

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from booking_engine.config import settings
from booking_engine.database import get_db

# Strict bearer: requests without a token are rejected before the handler runs
_bearer_scheme = HTTPBearer()


async def require_admin(
    credentials: HTTPAuthorizationCredentials = Depends(_bearer_scheme),
) -> str:
    """Allow the call only when the bearer token is the configured admin key.

    Returns the actor name recorded on admin decisions.

    Raises:
        HTTPException 401: If the token does not match.
    """
    if not secrets.compare_digest(credentials.credentials, settings.admin_api_key):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid admin credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return "admin"


__all__ = [
    "get_db",
    "require_admin",
]
