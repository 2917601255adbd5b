from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.router import api_router
from src.config.settings import get_settings
from src.scraping.renderer.factory import create_renderer
from src.utils.logger import setup_logging

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    settings = get_settings()
    setup_logging(settings.log_level, json_logs=not settings.debug)

    renderer = create_renderer(settings)
    await renderer.start()
    app.state.renderer = renderer
    log.info("server_started", port=settings.port, renderer=settings.renderer)
    yield
    await renderer.stop()


app = FastAPI(
    title="Template Scraper",
    version="0.1.0",
    description="Template-driven extraction of listing pages with pagination",
    lifespan=lifespan,
)

# Only the browser extension may call the API from a browser
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type", "x-api-key"],
)

app.include_router(api_router)


def main() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run("src.server:app", host=settings.host, port=settings.port, reload=settings.debug)


if __name__ == "__main__":
    main()
