"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - CardId, CategoryId, PileId wrap str — never use bare str in domain logic signatures
    - GameRules.category_size >= 2 (a pile is born with two cards)
    - All outcome states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
    - GameRules as a value object: cardinality is configuration, not business logic,
      so the engine serves any N categories x M items puzzle
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

CardId = NewType("CardId", str)
CategoryId = NewType("CategoryId", str)
PileId = NewType("PileId", str)


# ─── Cardinality ─────────────────────────────────────────────────

DEFAULT_CATEGORY_COUNT: int = 45
DEFAULT_CATEGORY_SIZE: int = 45


@dataclass(frozen=True)
class GameRules:
    """Puzzle cardinality — how many hidden groups, and how big each one is."""
    category_count: int = DEFAULT_CATEGORY_COUNT
    category_size: int = DEFAULT_CATEGORY_SIZE

    def __post_init__(self):
        if self.category_count < 1:
            raise ValueError("category_count must be at least 1")
        if self.category_size < 2:
            raise ValueError("category_size must be at least 2")

    @property
    def total_cards(self) -> int:
        return self.category_count * self.category_size


DEFAULT_RULES = GameRules()


# ─── Enums ───────────────────────────────────────────────────────

class ActionType(str, Enum):
    """Tags for the five engine actions."""
    CREATE_PILE = "create_pile"
    ADD_CARD_TO_PILE = "add_card_to_pile"
    SPLIT_PILE = "split_pile"
    INCREMENT_MISTAKE = "increment_mistake"
    RESET_GAME = "reset_game"


class ActionOutcome(str, Enum):
    """What the engine did with an action."""
    APPLIED = "applied"
    IGNORED = "ignored"


class MoveStatus(str, Enum):
    """Result of a validate-then-commit move.

    ACCEPTED: state changed. REJECTED: gameplay mistake, counted.
    IGNORED: invalid reference, state unchanged and nothing counted.
    """
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    IGNORED = "ignored"


class MoveReason(str, Enum):
    """Why a move was not accepted."""
    CATEGORY_MISMATCH = "category_mismatch"
    CARD_NOT_FOUND = "card_not_found"
    PILE_NOT_FOUND = "pile_not_found"
    PILE_COMPLETE = "pile_complete"
    CARD_ALREADY_GROUPED = "card_already_grouped"
    SAME_CARD = "same_card"
    PILE_ID_TAKEN = "pile_id_taken"
    ACTION_REFUSED = "action_refused"
