"""Synthetic Dataset — letter-pattern decks for development and tests.

Invariants:
    - Output matches the raw input schema consumed by dataset_loader
    - Category ids are "category-<i>", card ids "card-<i>-<j>" (1-based)
    - Titles repeat the category label j times: a, aa, aaa, ...

Design Decisions:
    - Pure dict builder; writing YAML is the generate_dataset script's job
"""

import string

from cardsort.core.domain_types import DEFAULT_CATEGORY_COUNT, DEFAULT_CATEGORY_SIZE


def category_label(index: int) -> str:
    """a..z, then aa..zz, then aaa.. for zero-based index."""
    letters = string.ascii_lowercase
    return letters[index % len(letters)] * (index // len(letters) + 1)


def generate_synthetic_dataset(
    category_count: int = DEFAULT_CATEGORY_COUNT,
    category_size: int = DEFAULT_CATEGORY_SIZE,
) -> dict:
    """Build a raw dataset of category_count x category_size cards."""
    categories = []
    for cat_index in range(category_count):
        label = category_label(cat_index)
        categories.append({
            "id": f"category-{cat_index + 1}",
            "name": f"Category {label.upper()}",
            "cards": [
                {"id": f"card-{cat_index + 1}-{card_index}", "title": label * card_index}
                for card_index in range(1, category_size + 1)
            ],
        })
    return {"categories": categories}
