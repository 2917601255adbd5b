import csv
import time
from pathlib import Path

import structlog

from src.config.constants import NO_TEMPLATE_DIR
from src.models.scraping import CrawlResult
from src.utils.errors import StorageError
from src.utils.url import normalize_domain

log = structlog.get_logger()


class CsvStorage:
    """Writes crawl results to <storage>/<domain>/<template>/data_<epoch_ms>.csv."""

    def __init__(self, storage_dir: str | Path):
        self.root = Path(storage_dir)

    def store(self, domain: str, template_name: str, result: CrawlResult) -> Path | None:
        """Export one template's records. Empty results are not written."""
        if not result.records:
            log.warning("no_data_collected", domain=domain, template=template_name)
            return None

        path = self.root / normalize_domain(domain) / template_name / f"data_{int(time.time() * 1000)}.csv"
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", newline="", encoding="utf-8") as f:
                writer = csv.DictWriter(f, fieldnames=result.field_names, extrasaction="ignore")
                writer.writeheader()
                writer.writerows(result.records)
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}", domain=domain) from e

        log.info("csv_written", domain=domain, template=template_name, rows=len(result), path=str(path))
        return path

    def list_files(self) -> dict[str, dict[str, list[str]]]:
        """Map domain -> template -> CSV file names. Loose CSVs go under _no_template_."""
        listing: dict[str, dict[str, list[str]]] = {}
        if not self.root.is_dir():
            return listing

        for domain_dir in sorted(p for p in self.root.iterdir() if p.is_dir()):
            templates: dict[str, list[str]] = {}
            for entry in sorted(domain_dir.iterdir()):
                if entry.is_dir():
                    templates[entry.name] = sorted(f.name for f in entry.iterdir() if f.suffix == ".csv")
                elif entry.is_file() and entry.suffix == ".csv":
                    templates.setdefault(NO_TEMPLATE_DIR, []).append(entry.name)
            listing[domain_dir.name] = templates
        return listing

    def resolve(self, domain: str, template: str | None, filename: str) -> Path | None:
        """Path of a stored file, or None if it does not exist inside the storage root."""
        base = self.root / normalize_domain(domain)
        path = base / template / filename if template and template != NO_TEMPLATE_DIR else base / filename

        root = self.root.resolve()
        resolved = path.resolve()
        if root not in resolved.parents or not resolved.is_file():
            return None
        return resolved
