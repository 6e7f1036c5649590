"""Dataset Catalog — the validated deck, loaded once per process.

Invariants:
    - The catalog exists only after a successful load; failures abort startup
    - Validated card data is immutable; every deal() permutes the source-order deck
    - deal(seed) depends only on the dataset and the seed, never on earlier deals
    - Settings.shuffle_seed, when set, is the seed for every deal without its own

Design Decisions:
    - Singleton catalog initialized on startup: FastAPI lifespan manages lifecycle
      (ADR: no global import side effects)
    - No dataset_path -> synthetic deck sized from settings (dev convenience)
"""

import logging
import random

from cardsort.config import Settings
from cardsort.core.dataset_loader import flatten_cards, load_dataset, shuffle_cards
from cardsort.core.domain_types import GameRules
from cardsort.core.errors import CatalogNotReadyError
from cardsort.core.game_state import Card, GameData
from cardsort.core.synthetic_dataset import generate_synthetic_dataset
from cardsort.infrastructure.dataset_source import read_dataset_file

logger = logging.getLogger(__name__)


class DatasetCatalog:
    """Holds the loaded categories and deck plus the rules they were checked against."""

    def __init__(
        self,
        game_data: GameData,
        rules: GameRules,
        source: str,
        deck: tuple[Card, ...],
        shuffle_seed: int | None = None,
    ):
        self.game_data = game_data
        self.rules = rules
        self.source = source
        # dataset order; deals shuffle from here
        self.deck = deck
        self.shuffle_seed = shuffle_seed

    @property
    def categories(self):
        return self.game_data.categories

    def deal(self, seed: int | None = None) -> GameData:
        """Shuffle the deck for a new game. Seeded deals are reproducible."""
        if seed is None:
            seed = self.shuffle_seed
        rng = random.Random(seed) if seed is not None else None
        return GameData(
            categories=self.game_data.categories,
            cards=shuffle_cards(self.deck, rng),
        )


def build_catalog(settings: Settings) -> DatasetCatalog:
    """Read, validate, and shuffle the dataset named by settings."""
    rules = settings.rules
    if settings.dataset_path:
        raw = read_dataset_file(settings.dataset_path)
        source = settings.dataset_path
    else:
        raw = generate_synthetic_dataset(rules.category_count, rules.category_size)
        source = "synthetic"

    rng = random.Random(settings.shuffle_seed) if settings.shuffle_seed is not None else None
    game_data = load_dataset(raw, strict=settings.strict_dataset, rules=rules, rng=rng)
    logger.info(
        f"Dataset loaded: {len(game_data.categories)} categories, "
        f"{len(game_data.cards)} cards (strict={settings.strict_dataset})",
        extra={"dataset_path": source},
    )
    return DatasetCatalog(
        game_data, rules, source, flatten_cards(raw),
        shuffle_seed=settings.shuffle_seed,
    )


# Singleton (initialized on startup)
catalog: DatasetCatalog | None = None


def init_catalog(settings: Settings) -> DatasetCatalog:
    global catalog
    catalog = build_catalog(settings)
    return catalog


def get_catalog() -> DatasetCatalog:
    """FastAPI dependency for the loaded catalog."""
    if catalog is None:
        raise CatalogNotReadyError()
    return catalog
