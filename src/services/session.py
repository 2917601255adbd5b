from src.scraping.parser.document import HtmlDocument
from src.scraping.renderer.base import RenderTab


class CrawlSession:
    """Owns the request's single tab and the document currently loaded in it.

    Templates share the tab but not traversal state: call reset() before each one.
    """

    def __init__(self, tab: RenderTab):
        self.tab = tab
        self.document: HtmlDocument | None = None
        self.current_url = ""
        self.page_number = 0

    def reset(self, start_url: str) -> None:
        self.document = None
        self.current_url = start_url
        self.page_number = 1

    async def load(self) -> HtmlDocument:
        if self.page_number < 1:
            raise RuntimeError("CrawlSession.reset() must be called before load()")
        self.document = await self.tab.navigate(self.current_url)
        return self.document

    def advance(self, next_url: str) -> None:
        self.document = None
        self.current_url = next_url
        self.page_number += 1
