"""Game Actions — tagged records consumed by the state engine.

Invariants:
    - Actions are frozen value objects; each carries its ActionType tag
    - Actions carry ids only, never Card/Pile objects (state is the source of truth)
    - AddCardToPile.revealed_name is supplied by the caller: the engine has no
      access to category metadata

Design Decisions:
    - One dataclass per action + a Union alias over a single dict-shaped action:
      type checkers can narrow on isinstance in the engine's dispatch
"""

from dataclasses import dataclass
from typing import ClassVar, Union

from cardsort.core.domain_types import ActionType


@dataclass(frozen=True)
class CreatePile:
    """Start a pile from two same-category cards. pile_id is caller-generated."""
    type: ClassVar[ActionType] = ActionType.CREATE_PILE
    pile_id: str
    card1_id: str
    card2_id: str


@dataclass(frozen=True)
class AddCardToPile:
    type: ClassVar[ActionType] = ActionType.ADD_CARD_TO_PILE
    card_id: str
    pile_id: str
    revealed_name: str | None = None


@dataclass(frozen=True)
class SplitPile:
    """Destroy a pile; its cards return to the ungrouped pool."""
    type: ClassVar[ActionType] = ActionType.SPLIT_PILE
    pile_id: str


@dataclass(frozen=True)
class IncrementMistake:
    type: ClassVar[ActionType] = ActionType.INCREMENT_MISTAKE


@dataclass(frozen=True)
class ResetGame:
    """Clear piles and counters, keep the dealt card order."""
    type: ClassVar[ActionType] = ActionType.RESET_GAME


GameAction = Union[CreatePile, AddCardToPile, SplitPile, IncrementMistake, ResetGame]
