"""Fixtures: settings and scrapers wired to a mocked transport."""

import pytest
import pytest_asyncio

from src.config import Settings
from src.scraper import WebScraper
from tests.factories import API_KEY, mock_client


@pytest.fixture
def settings() -> Settings:
    return Settings(api_key=API_KEY, scraper_timeout=5.0)  # type: ignore[call-arg]


@pytest_asyncio.fixture
async def make_scraper(settings: Settings):
    """Build WebScrapers whose requests are answered by a handler function."""
    clients = []

    def _make(handler) -> WebScraper:
        client = mock_client(handler)
        clients.append(client)
        return WebScraper(settings, client=client)

    yield _make
    for client in clients:
        await client.aclose()
