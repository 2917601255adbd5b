from typing import Any

import structlog

from src.models.scraping import CrawlResult
from src.models.template import Template, parse_templates
from src.scraping.exporter.csv_exporter import CsvStorage
from src.scraping.renderer.base import Renderer
from src.services.pagination import PaginationController
from src.services.rate_limiter import PolitenessDelay
from src.services.session import CrawlSession
from src.utils.errors import NavigationError, StorageError
from src.utils.url import extract_domain

log = structlog.get_logger()


class ScrapeService:
    """Runs every template of a scrape request against one start URL, then persists."""

    def __init__(self, renderer: Renderer, storage: CsvStorage, delay: PolitenessDelay):
        self.renderer = renderer
        self.storage = storage
        self.delay = delay

    async def run(self, url: str, raw_templates: dict[str, Any]) -> dict[str, CrawlResult]:
        # Validation happens before the first navigation
        templates = parse_templates(raw_templates)
        domain = extract_domain(url)

        try:
            results = await self.crawl(url, templates)
        except NavigationError as e:
            log.error("scrape_aborted", domain=domain, url=e.url, error=str(e))
            raise

        # Nothing is stored unless every template finished
        self.persist(domain, results)
        return results

    def persist(self, domain: str, results: dict[str, CrawlResult]) -> None:
        """Store every result, or none of them: files already written are removed on failure."""
        written = []
        try:
            for name, result in results.items():
                path = self.storage.store(domain, name, result)
                if path is not None:
                    written.append(path)
        except StorageError as e:
            for path in written:
                path.unlink(missing_ok=True)
            log.error("store_failed", domain=domain, removed=len(written), error=str(e))
            raise

    async def crawl(self, url: str, templates: dict[str, Template]) -> dict[str, CrawlResult]:
        """Crawl templates sequentially, in declaration order, sharing one tab."""
        tab = await self.renderer.new_tab()
        session = CrawlSession(tab)
        results: dict[str, CrawlResult] = {}
        try:
            for name, template in templates.items():
                session.reset(url)
                controller = PaginationController(name, template, session, self.delay)
                results[name] = await controller.run()
        finally:
            await tab.close()
        return results
