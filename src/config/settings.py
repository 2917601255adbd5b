from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    port: int = 4000
    host: str = "0.0.0.0"
    debug: bool = False
    log_level: str = "info"

    # Shared secret expected in the x-api-key header
    api_key: str = Field(..., description="API key required by every protected route")

    storage_dir: str = "storage"

    # Rendering
    renderer: str = "browser"  # browser, http
    headless: bool = True
    navigation_timeout_ms: int = 30000

    # Delay between consecutive page fetches of one template
    politeness_min_delay_ms: int = 2000
    politeness_max_delay_ms: int = 5000

    # Per-IP limit on POST /scrape
    scrape_rate_limit: int = 5
    scrape_rate_window_s: int = 60

    cors_origins: list[str] = ["chrome-extension://hcbbpjnoeokbejadnhibgigolaibiemb"]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @model_validator(mode="after")
    def check_delay_bounds(self) -> "Settings":
        if self.politeness_min_delay_ms < 0:
            raise ValueError("politeness_min_delay_ms must not be negative")
        if self.politeness_min_delay_ms > self.politeness_max_delay_ms:
            raise ValueError("politeness_min_delay_ms must not exceed politeness_max_delay_ms")
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()
