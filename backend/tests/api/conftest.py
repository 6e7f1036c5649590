"""API test fixtures — FastAPI test client over a small seeded catalog.

Invariants:
    - Every test gets a fresh catalog (2 categories x 3 cards) and an empty game registry
    - Lifespan is not run by ASGITransport; the catalog singleton is patched directly
"""

import pytest
from httpx import ASGITransport, AsyncClient

import cardsort.infrastructure.dataset_catalog as catalog_module
from cardsort.api.routes.game_lifecycle import clear_games
from cardsort.config import Settings
from cardsort.infrastructure.dataset_catalog import build_catalog
from cardsort.infrastructure.dataset_source import write_dataset_file
from cardsort.main import app
from tests.core.game_fixtures import small_raw


@pytest.fixture
def small_catalog(tmp_path):
    path = write_dataset_file(small_raw(), tmp_path / "deck.yaml")
    return build_catalog(Settings(
        dataset_path=str(path), category_count=2, category_size=3, shuffle_seed=1,
    ))


@pytest.fixture
async def client(small_catalog, monkeypatch):
    monkeypatch.setattr(catalog_module, "catalog", small_catalog)
    clear_games()
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    clear_games()


@pytest.fixture
def card_titles():
    """title -> card id for the small deck (ids are hidden behind titles in play)."""
    return {
        card["title"]: card["id"]
        for category in small_raw()["categories"]
        for card in category["cards"]
    }
