from src.models.scraping import CrawlResult, PageBatch
from src.models.template import Template


class Aggregator:
    """Accumulates page batches, in fetch order, into one template's result."""

    def __init__(self, template_name: str, template: Template):
        self.result = CrawlResult(template_name=template_name, field_names=template.field_names)

    def add(self, batch: PageBatch) -> None:
        self.result.records.extend(batch.records)
        self.result.pages_visited += 1
