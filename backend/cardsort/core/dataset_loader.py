"""Dataset Loader — validates a raw categorized dataset and deals a shuffled deck.

Invariants:
    - Validation fails fast: the first violation raises DatasetValidationError
    - Shape and id-uniqueness checks always run; cardinality checks only when strict
    - Every error message names the offending category/card id or index
    - The raw input is never mutated; shuffle_cards returns a new tuple
    - Every permutation of the deck is equally likely (Fisher-Yates via rng.shuffle)

Design Decisions:
    - Strict/relaxed modes: one loader serves the full 45x45 deck and small dev fixtures
    - rng injected (random.Random protocol): tests pass a seeded Random, production
      gets SystemRandom (OS entropy, no global seed to leak between games)
    - Raises instead of returning error dicts: a bad dataset aborts startup, there is
      no caller that could continue with a partial catalog
"""

import random
from collections.abc import Mapping, Sequence

from cardsort.core.domain_types import (
    CardId, CategoryId, GameRules, DEFAULT_RULES,
)
from cardsort.core.errors import DatasetValidationError
from cardsort.core.game_state import Card, Category, GameData


def _is_list(value: object) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _is_nonempty_str(value: object) -> bool:
    return isinstance(value, str) and value != ""


def _check_categories_present(raw: object) -> list:
    """Rule 1: top level is a mapping with a 'categories' list."""
    if not isinstance(raw, Mapping) or not _is_list(raw.get("categories")):
        raise DatasetValidationError(
            'Dataset must have a "categories" array', "categories",
        )
    return list(raw["categories"])


def _check_category_count(categories: list, rules: GameRules) -> None:
    """Rule 2 (strict only): exactly category_count categories."""
    if len(categories) != rules.category_count:
        raise DatasetValidationError(
            f"Expected {rules.category_count} categories, but found {len(categories)}. "
            f"Game requires exactly {rules.category_count} categories with "
            f"{rules.category_size} cards each ({rules.total_cards} total).",
            "categories",
        )


def _check_category_shape(index: int, category: object) -> None:
    """Rule 3: category has string id, string name, and a cards list."""
    if not isinstance(category, Mapping) or not _is_nonempty_str(category.get("id")):
        raise DatasetValidationError(
            f'Category at index {index} missing valid "id" field',
            f"categories[{index}].id",
        )
    category_id = category["id"]
    if not _is_nonempty_str(category.get("name")):
        raise DatasetValidationError(
            f'Category "{category_id}" missing valid "name" field',
            f"categories[{index}].name",
        )
    if not _is_list(category.get("cards")):
        raise DatasetValidationError(
            f'Category "{category_id}" missing "cards" array',
            f"categories[{index}].cards",
        )


def _check_category_size(index: int, category: Mapping, rules: GameRules) -> None:
    """Rule 4 (strict only): every category holds exactly category_size cards."""
    count = len(category["cards"])
    if count != rules.category_size:
        raise DatasetValidationError(
            f'Category "{category["id"]}" has {count} cards, '
            f"but requires exactly {rules.category_size}",
            f"categories[{index}].cards",
        )


def _check_card_shape(index: int, category: Mapping) -> None:
    """Rule 5: every card has a string id and a string title."""
    category_id = category["id"]
    for card_index, card in enumerate(category["cards"]):
        if not isinstance(card, Mapping) or not _is_nonempty_str(card.get("id")):
            raise DatasetValidationError(
                f'Card at index {card_index} in category "{category_id}" '
                f'missing valid "id" field',
                f"categories[{index}].cards[{card_index}].id",
            )
        if not _is_nonempty_str(card.get("title")):
            raise DatasetValidationError(
                f'Card "{card["id"]}" in category "{category_id}" '
                f'missing valid "title" field',
                f"categories[{index}].cards[{card_index}].title",
            )


def _check_unique_card_ids(categories: list) -> None:
    """Rule 6: card ids are unique across all categories."""
    seen: set[str] = set()
    for index, category in enumerate(categories):
        for card_index, card in enumerate(category["cards"]):
            if card["id"] in seen:
                raise DatasetValidationError(
                    f'Duplicate card ID found: "{card["id"]}"',
                    f"categories[{index}].cards[{card_index}].id",
                )
            seen.add(card["id"])


def _check_unique_category_ids(categories: list) -> None:
    """Rule 7: category ids are unique."""
    seen: set[str] = set()
    for index, category in enumerate(categories):
        if category["id"] in seen:
            raise DatasetValidationError(
                f'Duplicate category ID found: "{category["id"]}"',
                f"categories[{index}].id",
            )
        seen.add(category["id"])


def validate_dataset(
    raw: object, strict: bool = True, rules: GameRules = DEFAULT_RULES,
) -> None:
    """Run every dataset rule in order. Raises on the first violation."""
    categories = _check_categories_present(raw)
    if strict:
        _check_category_count(categories, rules)
    for index, category in enumerate(categories):
        _check_category_shape(index, category)
        if strict:
            _check_category_size(index, category, rules)
        _check_card_shape(index, category)
    _check_unique_card_ids(categories)
    _check_unique_category_ids(categories)


def flatten_cards(raw: Mapping) -> tuple[Card, ...]:
    """Flatten validated categories into cards tagged with their category id."""
    return tuple(
        Card(
            id=CardId(card["id"]),
            title=card["title"],
            category_id=CategoryId(category["id"]),
        )
        for category in raw["categories"]
        for card in category["cards"]
    )


def extract_categories(raw: Mapping) -> tuple[Category, ...]:
    """Category metadata (id, name) in source order."""
    return tuple(
        Category(id=CategoryId(category["id"]), name=category["name"])
        for category in raw["categories"]
    )


def shuffle_cards(
    cards: Sequence[Card], rng: random.Random | None = None,
) -> tuple[Card, ...]:
    """Unbiased permutation of cards. Returns a new tuple, input untouched."""
    rng = rng or random.SystemRandom()
    shuffled = list(cards)
    rng.shuffle(shuffled)
    return tuple(shuffled)


def load_dataset(
    raw: object,
    strict: bool = True,
    rules: GameRules = DEFAULT_RULES,
    rng: random.Random | None = None,
) -> GameData:
    """Validate raw data, then return categories and a shuffled flat deck."""
    validate_dataset(raw, strict=strict, rules=rules)
    return GameData(
        categories=extract_categories(raw),
        cards=shuffle_cards(flatten_cards(raw), rng),
    )
