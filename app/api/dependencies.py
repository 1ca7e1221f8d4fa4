"""Shared dependencies for API endpoints."""
import logging
from typing import Any, Dict, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.config import Settings, get_settings
from app.core.errors import AuthenticationError
from app.core.security import decode_access_token

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def verify_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> Optional[Dict[str, Any]]:
    """Verify the bearer token when authentication is enabled.

    Raises:
        AuthenticationError: 401 if the token is missing or invalid

    Returns:
        The token claims, or None when authentication is disabled
    """
    if not settings.AUTH_ENABLED:
        return None

    if credentials is None:
        raise AuthenticationError("Bearer token required")

    claims = decode_access_token(credentials.credentials, settings)
    logger.debug(f"Authenticated request for subject {claims.get('sub')}")
    return claims
