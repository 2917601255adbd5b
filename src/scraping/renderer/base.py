from abc import ABC, abstractmethod

from src.scraping.parser.document import HtmlDocument


class RenderTab(ABC):
    """One rendering context, reused for every navigation of a scrape request."""

    @abstractmethod
    async def navigate(self, url: str) -> HtmlDocument:
        """Load url and return a snapshot once network activity settles.

        Raises NavigationError when the page cannot be loaded.
        """

    @abstractmethod
    async def close(self) -> None: ...


class Renderer(ABC):
    @abstractmethod
    async def start(self) -> None: ...

    @abstractmethod
    async def new_tab(self) -> RenderTab: ...

    @abstractmethod
    async def stop(self) -> None: ...
