from pydantic import BaseModel

# Field name -> extracted value; failed extractions are ""
Record = dict[str, str]


class PageBatch(BaseModel):
    page: int
    url: str
    records: list[Record] = []


class CrawlResult(BaseModel):
    template_name: str
    field_names: list[str]
    records: list[Record] = []
    pages_visited: int = 0

    def __len__(self) -> int:
        return len(self.records)
