"""Shared builders for core tests — the 2 x 3 scenario deck.

cat-1 holds card-1..card-3, cat-2 holds card-4..card-6, category_size = 3.
Decks are built unshuffled so order assertions are exact.
"""

from itertools import count

from cardsort.core.dataset_loader import extract_categories, flatten_cards
from cardsort.core.domain_types import GameRules
from cardsort.core.game_state import GameState, Pile

SMALL_RULES = GameRules(category_count=2, category_size=3)


def small_raw() -> dict:
    return {
        "categories": [
            {
                "id": "cat-1", "name": "Planets",
                "cards": [
                    {"id": "card-1", "title": "Mercury"},
                    {"id": "card-2", "title": "Venus"},
                    {"id": "card-3", "title": "Mars"},
                ],
            },
            {
                "id": "cat-2", "name": "Metals",
                "cards": [
                    {"id": "card-4", "title": "Iron"},
                    {"id": "card-5", "title": "Copper"},
                    {"id": "card-6", "title": "Tin"},
                ],
            },
        ],
    }


def small_categories():
    return extract_categories(small_raw())


def small_state(*piles: Pile, mistakes: int = 0) -> GameState:
    """Unshuffled 6-card state, optionally seeded with piles."""
    completed = sum(1 for p in piles if p.is_complete)
    return GameState(
        cards=flatten_cards(small_raw()),
        piles=tuple(piles),
        mistakes=mistakes,
        completed_count=completed,
    )


def pile_ids(prefix: str = "pile"):
    """Deterministic pile_id_factory: pile-1, pile-2, ..."""
    counter = count(1)
    return lambda: f"{prefix}-{next(counter)}"
