"""Dataset Generator — writes a synthetic letter-pattern dataset file.

Invariants:
    - Output always passes load_dataset in strict mode for the same sizes

Design Decisions:
    - argparse entry point registered as the cardsort-generate-dataset script
"""

import argparse
import logging

from cardsort.core.dataset_loader import validate_dataset
from cardsort.core.domain_types import (
    GameRules, DEFAULT_CATEGORY_COUNT, DEFAULT_CATEGORY_SIZE,
)
from cardsort.core.synthetic_dataset import generate_synthetic_dataset
from cardsort.infrastructure.dataset_source import write_dataset_file
from cardsort.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a synthetic categories x cards dataset.",
    )
    parser.add_argument("output", help="Destination path (.yaml, .yml or .json)")
    parser.add_argument("--categories", type=int, default=DEFAULT_CATEGORY_COUNT)
    parser.add_argument("--cards", type=int, default=DEFAULT_CATEGORY_SIZE)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging("INFO", "text")
    rules = GameRules(category_count=args.categories, category_size=args.cards)
    data = generate_synthetic_dataset(rules.category_count, rules.category_size)
    validate_dataset(data, strict=True, rules=rules)
    path = write_dataset_file(data, args.output)
    logger.info(
        f"Generated {rules.category_count} categories x {rules.category_size} cards "
        f"({rules.total_cards} total) at {path}",
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
