from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.api.dependencies import get_scrape_service
from src.api.middleware.rate_limit import get_scrape_rate_limiter
from src.api.router import api_router
from src.config.settings import Settings, get_settings
from src.scraping.exporter.csv_exporter import CsvStorage
from src.services.rate_limiter import RequestRateLimiter
from src.services.scraper import ScrapeService
from tests.fakes import START_URL

API_KEY = "test-secret-key"
HEADERS = {"x-api-key": API_KEY}


@pytest.fixture
def limiter() -> RequestRateLimiter:
    return RequestRateLimiter(limit=5, window_s=60)


@pytest.fixture
def client(tmp_path: Path, renderer, delay, limiter) -> TestClient:
    app = FastAPI()
    app.include_router(api_router)

    def _override_settings() -> Settings:
        return Settings(api_key=API_KEY, storage_dir=str(tmp_path))  # type: ignore[call-arg]

    app.dependency_overrides[get_settings] = _override_settings
    app.dependency_overrides[get_scrape_service] = lambda: ScrapeService(renderer, CsvStorage(tmp_path), delay)
    app.dependency_overrides[get_scrape_rate_limiter] = lambda: limiter
    return TestClient(app)


class TestAuth:
    def test_root_is_public(self, client: TestClient):
        resp = client.get("/")
        assert resp.status_code == 200
        assert resp.text == "Server is running on http://localhost:4000"

    @pytest.mark.parametrize(
        "method,path",
        [
            ("get", "/getDomains"),
            ("get", "/files"),
            ("post", "/scrape"),
            ("post", "/addConfig"),
            ("post", "/getConfig"),
        ],
    )
    def test_protected_routes_require_key(self, client: TestClient, method: str, path: str):
        resp = getattr(client, method)(path, headers={"x-api-key": "wrong"})
        assert resp.status_code == 403
        assert resp.json()["detail"] == "Forbidden: Invalid API Key."

    def test_missing_key(self, client: TestClient):
        assert client.get("/files").status_code == 403

    def test_download_is_public(self, client: TestClient):
        assert client.get("/download", params={"domain": "x.test", "file": "nope.csv"}).status_code == 404


class TestConfigs:
    TEMPLATES = {"cars": {"itemSelector": ".card", "fields": {"t": {"type": "text", "selector": "h2"}}}}

    def test_add_and_get_config(self, client: TestClient):
        resp = client.post("/addConfig", json={"domain": "www.x.test", "templates": self.TEMPLATES}, headers=HEADERS)
        assert resp.status_code == 200
        assert resp.json() == {"message": "Configuration for x.test saved."}

        resp = client.post("/getConfig", json={"domain": "x.test"}, headers=HEADERS)
        assert resp.status_code == 200
        assert resp.json() == {"templates": self.TEMPLATES}

        resp = client.get("/getDomains", headers=HEADERS)
        assert resp.json() == {"domains": ["x.test"]}

    def test_add_config_requires_domain_and_templates(self, client: TestClient):
        resp = client.post("/addConfig", json={"domain": "x.test"}, headers=HEADERS)
        assert resp.status_code == 400

    def test_get_config_errors(self, client: TestClient):
        assert client.post("/getConfig", json={}, headers=HEADERS).status_code == 400
        resp = client.post("/getConfig", json={"domain": "x.test"}, headers=HEADERS)
        assert resp.status_code == 404
        assert resp.json()["detail"] == "No configurations found."

        client.post("/addConfig", json={"domain": "y.test", "templates": self.TEMPLATES}, headers=HEADERS)
        resp = client.post("/getConfig", json={"domain": "x.test"}, headers=HEADERS)
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Configuration not found for the specified domain."

    def test_get_domains_without_configs(self, client: TestClient):
        assert client.get("/getDomains", headers=HEADERS).status_code == 404


class TestScrape:
    def test_scrape_stores_csv(self, client: TestClient, card_template: dict, tmp_path: Path):
        resp = client.post("/scrape", json={"url": START_URL, "templates": {"cars": card_template}}, headers=HEADERS)

        assert resp.status_code == 200
        assert resp.json() == {"message": "Scraping completed successfully."}
        assert len(list((tmp_path / "x.test" / "cars").glob("*.csv"))) == 1

    def test_missing_input(self, client: TestClient):
        resp = client.post("/scrape", json={"url": START_URL}, headers=HEADERS)
        assert resp.status_code == 400
        assert resp.json()["detail"] == "URL and templates are required."

    def test_invalid_url(self, client: TestClient, card_template: dict):
        resp = client.post("/scrape", json={"url": "not a url", "templates": {"cars": card_template}}, headers=HEADERS)
        assert resp.status_code == 400

    def test_invalid_template(self, client: TestClient, renderer):
        resp = client.post("/scrape", json={"url": START_URL, "templates": {"cars": {"fields": {}}}}, headers=HEADERS)
        assert resp.status_code == 400
        assert "cars" in resp.json()["detail"]
        assert renderer.tabs == []

    def test_navigation_failure(self, client: TestClient, card_template: dict, tmp_path: Path):
        resp = client.post(
            "/scrape", json={"url": "https://down.test/", "templates": {"cars": card_template}}, headers=HEADERS
        )
        assert resp.status_code == 500
        assert resp.json()["detail"] == "Scraping failed."
        assert not (tmp_path / "down.test").exists()

    def test_rate_limited_per_ip(self, client: TestClient, limiter: RequestRateLimiter):
        limiter.limit = 2
        assert client.post("/scrape", json={}, headers=HEADERS).status_code == 400
        assert client.post("/scrape", json={}, headers=HEADERS).status_code == 400

        resp = client.post("/scrape", json={}, headers=HEADERS)
        assert resp.status_code == 429
        assert "Too many scraping requests" in resp.json()["detail"]


class TestFiles:
    def test_list_and_download(self, client: TestClient, tmp_path: Path):
        (tmp_path / "x.test" / "cars").mkdir(parents=True)
        (tmp_path / "x.test" / "cars" / "data_1.csv").write_text("title\nVolvo\n")

        resp = client.get("/files", headers=HEADERS)
        assert resp.json() == {"x.test": {"cars": ["data_1.csv"]}}

        resp = client.get("/download", params={"domain": "x.test", "template": "cars", "file": "data_1.csv"})
        assert resp.status_code == 200
        assert resp.text == "title\nVolvo\n"

    def test_download_requires_params(self, client: TestClient):
        assert client.get("/download", params={"domain": "x.test"}).status_code == 400
