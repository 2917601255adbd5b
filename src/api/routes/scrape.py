from urllib.parse import urlparse

import structlog
from fastapi import APIRouter, Depends, HTTPException

from src.api.dependencies import get_scrape_service
from src.api.middleware.rate_limit import enforce_scrape_rate_limit
from src.models.api import MessageResponse, ScrapeRequest
from src.services.scraper import ScrapeService
from src.utils.errors import TemplateValidationError

log = structlog.get_logger()

router = APIRouter()


@router.post(
    "/scrape",
    response_model=MessageResponse,
    dependencies=[Depends(enforce_scrape_rate_limit)],
)
async def scrape(body: ScrapeRequest, service: ScrapeService = Depends(get_scrape_service)) -> MessageResponse:
    if not body.url or not body.templates:
        raise HTTPException(status_code=400, detail="URL and templates are required.")

    parsed = urlparse(body.url)
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        raise HTTPException(status_code=400, detail="Invalid URL.")

    try:
        await service.run(body.url, body.templates)
    except TemplateValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        # One outcome per request: no partial results are reported
        log.error("scrape_failed", url=body.url, error=str(e))
        raise HTTPException(status_code=500, detail="Scraping failed.")

    return MessageResponse(message="Scraping completed successfully.")
