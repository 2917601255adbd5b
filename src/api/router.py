from fastapi import APIRouter, Depends

from src.api.middleware.auth import require_api_key
from src.api.routes import configs, files, health, scrape

api_router = APIRouter()

# Public
api_router.include_router(health.router, tags=["health"])
api_router.include_router(files.download_router, tags=["files"])

# API key required
protected = [Depends(require_api_key)]
api_router.include_router(configs.router, tags=["configs"], dependencies=protected)
api_router.include_router(scrape.router, tags=["scrape"], dependencies=protected)
api_router.include_router(files.router, tags=["files"], dependencies=protected)
