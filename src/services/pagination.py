from enum import StrEnum

import structlog

from src.models.scraping import CrawlResult, PageBatch
from src.models.template import LinkSpec, Method, Template
from src.scraping.parser.document import HtmlDocument
from src.scraping.parser.field_extractor import extract_page
from src.scraping.parser.selector_resolver import resolve_one
from src.services.aggregator import Aggregator
from src.services.rate_limiter import PolitenessDelay
from src.services.session import CrawlSession
from src.utils.url import resolve_url

log = structlog.get_logger()


class CrawlState(StrEnum):
    FETCHING = "fetching"
    EXTRACTING = "extracting"
    CHECK_LIMIT = "check_limit"
    CHECK_NEXT_LINK = "check_next_link"
    DONE = "done"


def find_next_url(document: HtmlDocument, link: LinkSpec) -> str | None:
    """Absolute URL of the next page, or None when there is no usable next link."""
    root = document.root
    if root is None:
        return None
    # Regex next links match against anchor text only
    tag = "a" if link.method is Method.REGEX else None
    node = resolve_one(document, root, link.selector, link.method, tag=tag, include_root=True)
    if node is None:
        return None
    href = document.attr_of(node, "href")
    if not href:
        return None
    return resolve_url(href, document.url)


class PaginationController:
    """Walks one template across pages: fetch, extract, then follow the next link or stop."""

    def __init__(
        self,
        template_name: str,
        template: Template,
        session: CrawlSession,
        delay: PolitenessDelay,
    ):
        self.template_name = template_name
        self.template = template
        self.session = session
        self.delay = delay
        self.log = log.bind(template=template_name)

    async def run(self) -> CrawlResult:
        aggregator = Aggregator(self.template_name, self.template)
        state = CrawlState.FETCHING

        while state is not CrawlState.DONE:
            match state:
                case CrawlState.FETCHING:
                    await self._fetch()
                    state = CrawlState.EXTRACTING
                case CrawlState.EXTRACTING:
                    aggregator.add(self._extract())
                    state = CrawlState.CHECK_LIMIT
                case CrawlState.CHECK_LIMIT:
                    state = self._check_limit()
                case CrawlState.CHECK_NEXT_LINK:
                    state = self._check_next_link()

        self.log.info(
            "template_scraped",
            pages=aggregator.result.pages_visited,
            records=len(aggregator.result),
        )
        return aggregator.result

    async def _fetch(self) -> None:
        if self.session.page_number > 1:
            await self.delay.wait()
        self.log.info("scraping_page", page=self.session.page_number, url=self.session.current_url)
        await self.session.load()

    def _extract(self) -> PageBatch:
        document = self._document()
        records = extract_page(document, self.template)
        self.log.info("page_scraped", page=self.session.page_number, items=len(records))
        return PageBatch(page=self.session.page_number, url=document.url, records=records)

    def _check_limit(self) -> CrawlState:
        limit = self.template.pagination_limit
        if limit is not None and self.session.page_number >= limit:
            self.log.info("pagination_limit_reached", limit=limit)
            return CrawlState.DONE
        return CrawlState.CHECK_NEXT_LINK

    def _check_next_link(self) -> CrawlState:
        if self.template.next_page is None:
            return CrawlState.DONE
        next_url = find_next_url(self._document(), self.template.next_page)
        if next_url is None:
            self.log.info("no_next_page", page=self.session.page_number)
            return CrawlState.DONE
        self.session.advance(next_url)
        return CrawlState.FETCHING

    def _document(self) -> HtmlDocument:
        if self.session.document is None:
            raise RuntimeError("No document loaded")
        return self.session.document
