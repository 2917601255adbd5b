"""API key check shared by every protected route.

The browser extension sends the key in the x-api-key header. The root status page
and file downloads stay public so links can be opened directly.
"""

import hmac

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import APIKeyHeader

from src.config.settings import Settings, get_settings

_api_key_header = APIKeyHeader(name="x-api-key", auto_error=False)


async def require_api_key(
    api_key: str | None = Security(_api_key_header),
    settings: Settings = Depends(get_settings),
) -> str:
    """Validate the x-api-key header against the configured API key."""
    if not api_key or not hmac.compare_digest(api_key, settings.api_key):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden: Invalid API Key.",
        )
    return api_key
