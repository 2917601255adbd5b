import pytest

from tests.fakes import LISTING_PAGE_1, LISTING_PAGE_2, START_URL, FakeRenderer, RecordingDelay


@pytest.fixture
def listing_pages() -> dict[str, str]:
    return {
        START_URL: LISTING_PAGE_1,
        "https://x.test/list?page=2": LISTING_PAGE_2,
    }


@pytest.fixture
def card_template() -> dict:
    return {
        "itemSelector": ".card",
        "fields": {
            "title": {"type": "text", "selector": ".title", "method": "css"},
        },
        "nextPage": {"selector": "a.next", "method": "css"},
    }


@pytest.fixture
def renderer(listing_pages: dict[str, str]) -> FakeRenderer:
    return FakeRenderer(listing_pages)


@pytest.fixture
def delay() -> RecordingDelay:
    return RecordingDelay()
