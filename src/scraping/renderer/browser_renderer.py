import random

import structlog
from playwright.async_api import Browser, BrowserContext, Page, Playwright, Route, async_playwright
from playwright.async_api import Error as PlaywrightError

from src.config.constants import BLOCKED_RESOURCE_TYPES, USER_AGENTS
from src.scraping.parser.document import HtmlDocument
from src.scraping.renderer.base import Renderer, RenderTab
from src.utils.errors import NavigationError

log = structlog.get_logger()


async def block_heavy_resources(route: Route) -> None:
    if route.request.resource_type in BLOCKED_RESOURCE_TYPES:
        await route.abort()
    else:
        await route.continue_()


class BrowserTab(RenderTab):
    def __init__(self, context: BrowserContext, page: Page, timeout_ms: int):
        self._context = context
        self._page = page
        self._timeout_ms = timeout_ms

    async def navigate(self, url: str) -> HtmlDocument:
        try:
            response = await self._page.goto(url, wait_until="networkidle", timeout=self._timeout_ms)
            html = await self._page.content()
        except PlaywrightError as e:
            raise NavigationError(f"Failed to load {url}: {e}", url=url) from e

        status_code = response.status if response else 0
        if status_code >= 400:
            raise NavigationError(
                f"Failed to load {url}: HTTP {status_code}", status_code=status_code, url=url
            )
        return HtmlDocument(html, self._page.url)

    async def close(self) -> None:
        await self._context.close()


class BrowserRenderer(Renderer):
    """Headless Chromium via Playwright. One browser per process, one tab per request."""

    def __init__(self, headless: bool = True, timeout_ms: int = 30000):
        self.headless = headless
        self.timeout_ms = timeout_ms
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None

    async def start(self) -> None:
        if self._browser is not None:
            return
        self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch(headless=self.headless)
        log.info("browser_launched", headless=self.headless)

    async def new_tab(self) -> RenderTab:
        if self._browser is None:
            raise NavigationError("Browser is not running")
        context = await self._browser.new_context(
            user_agent=random.choice(USER_AGENTS),
            viewport={"width": 1920, "height": 1080},
        )
        page = await context.new_page()
        await page.route("**/*", block_heavy_resources)
        return BrowserTab(context, page, self.timeout_ms)

    async def stop(self) -> None:
        if self._browser is not None:
            await self._browser.close()
            self._browser = None
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None
        log.info("browser_stopped")
