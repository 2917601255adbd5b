from fastapi import Depends, Request

from src.config.settings import Settings, get_settings
from src.scraping.exporter.csv_exporter import CsvStorage
from src.services.rate_limiter import PolitenessDelay
from src.services.scraper import ScrapeService
from src.storage.config_store import ConfigStore


def get_csv_storage(settings: Settings = Depends(get_settings)) -> CsvStorage:
    return CsvStorage(settings.storage_dir)


def get_config_store(settings: Settings = Depends(get_settings)) -> ConfigStore:
    return ConfigStore(settings.storage_dir)


def get_scrape_service(
    request: Request,
    settings: Settings = Depends(get_settings),
    storage: CsvStorage = Depends(get_csv_storage),
) -> ScrapeService:
    """Scrape service bound to the renderer started in the app lifespan."""
    delay = PolitenessDelay(settings.politeness_min_delay_ms, settings.politeness_max_delay_ms)
    return ScrapeService(request.app.state.renderer, storage, delay)
