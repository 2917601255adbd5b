from src.config.settings import Settings
from src.scraping.renderer.base import Renderer
from src.scraping.renderer.browser_renderer import BrowserRenderer
from src.scraping.renderer.http_renderer import HttpRenderer


def create_renderer(settings: Settings) -> Renderer:
    """Create the renderer selected by settings.renderer."""
    if settings.renderer == "http":
        return HttpRenderer(timeout_ms=settings.navigation_timeout_ms)
    return BrowserRenderer(headless=settings.headless, timeout_ms=settings.navigation_timeout_ms)
