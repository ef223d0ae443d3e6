"""
Owner portal authentication.

The site has a single owner who signs in with a passcode, sent as a bearer
token on every owner-only request.
"""

import hmac
import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request, status

from ideal_properties.core.config import Settings, get_settings
from ideal_properties.models.user import OwnerUser

logger = logging.getLogger(__name__)


def _bearer_token(request: Request) -> Optional[str]:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_current_user(request: Request, settings: Settings = Depends(get_settings)) -> Optional[OwnerUser]:
    """Return the signed-in owner, or None for anonymous visitors."""
    token = _bearer_token(request)
    if not token or not settings.owner_passcode:
        return None
    if not hmac.compare_digest(token.encode(), settings.owner_passcode.encode()):
        logger.warning(f"Rejected owner passcode from {request.client.host if request.client else 'unknown'}")
        return None
    return OwnerUser()


def require_owner(
    user: Optional[OwnerUser] = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
) -> OwnerUser:
    if not settings.owner_passcode:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="OWNER_PASSCODE is not configured. Set it in the server environment before using the owner portal.",
        )
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not signed in",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user
