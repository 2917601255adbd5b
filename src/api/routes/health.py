from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from src.config.settings import Settings, get_settings

router = APIRouter()


@router.get("/", response_class=PlainTextResponse)
async def root(settings: Settings = Depends(get_settings)) -> str:
    return f"Server is running on http://localhost:{settings.port}"
