import asyncio
import random

from scrapling.fetchers import Fetcher

from src.config.constants import USER_AGENTS
from src.scraping.parser.document import HtmlDocument
from src.scraping.renderer.base import Renderer, RenderTab
from src.utils.errors import NavigationError


class HttpTab(RenderTab):
    def __init__(self, fetcher: Fetcher, timeout_ms: int):
        self.fetcher = fetcher
        self._timeout_ms = timeout_ms

    async def navigate(self, url: str) -> HtmlDocument:
        try:
            response = await asyncio.to_thread(
                self.fetcher.get,
                url,
                headers={"User-Agent": random.choice(USER_AGENTS)},
                timeout=self._timeout_ms / 1000,
            )
        except Exception as e:
            raise NavigationError(f"Failed to load {url}: {e}", url=url) from e

        if response.status >= 400:
            raise NavigationError(
                f"Failed to load {url}: HTTP {response.status}", status_code=response.status, url=url
            )
        return HtmlDocument(response.html_content, getattr(response, "url", None) or url)

    async def close(self) -> None:
        return None


class HttpRenderer(Renderer):
    """Static fetches through Scrapling. No script execution, no browser process."""

    def __init__(self, timeout_ms: int = 30000):
        self.timeout_ms = timeout_ms
        self.fetcher = Fetcher()

    async def start(self) -> None:
        return None

    async def new_tab(self) -> RenderTab:
        return HttpTab(self.fetcher, self.timeout_ms)

    async def stop(self) -> None:
        return None
