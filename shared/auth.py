# ============================================================================
# shared/auth.py - Optional API key guard for the read endpoints
# ============================================================================

from typing import Optional
from fastapi import HTTPException, Depends, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
import logging

import config

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def verify_api_key(credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)) -> dict:
    """Verify the bearer API key when EVENTS_API_KEY is configured.

    The webhooks are never guarded: the PBX dial plan cannot send credentials.
    """
    expected = config.EVENTS_API_KEY
    if not expected:
        return {"authenticated": False}

    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing authentication credentials"
        )
    if credentials.credentials != expected:
        logger.warning("Rejected request with invalid API key")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key"
        )
    return {
        "authenticated": True,
        "api_key": credentials.credentials[:8] + "...",  # Masked for logs
    }
