from functools import lru_cache

from fastapi import Depends, HTTPException, Request, status

from src.config.settings import get_settings
from src.services.rate_limiter import RequestRateLimiter


@lru_cache
def get_scrape_rate_limiter() -> RequestRateLimiter:
    settings = get_settings()
    return RequestRateLimiter(limit=settings.scrape_rate_limit, window_s=settings.scrape_rate_window_s)


async def enforce_scrape_rate_limit(
    request: Request,
    limiter: RequestRateLimiter = Depends(get_scrape_rate_limiter),
) -> None:
    client_ip = request.client.host if request.client else "unknown"
    if not limiter.check(client_ip):
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many scraping requests from this IP, please try again after a minute.",
        )
