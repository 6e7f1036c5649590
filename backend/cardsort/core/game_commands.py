"""Game Commands — validate-then-commit moves composed from enforce_moves + game_engine.

Invariants:
    - Every command returns a MoveResult; none raise on gameplay input
    - REJECTED (category mismatch) increments mistakes exactly once
    - IGNORED (invalid reference, complete pile) leaves state untouched, no mistake
    - ACCEPTED dispatches exactly one state-changing action

Design Decisions:
    - Explicit Result over bool + hidden dispatch: the gate/engine contract is
      visible and testable without a UI
    - Open question resolved: a complete target pile gets its own reason
      (PILE_COMPLETE) but stays IGNORED, never a mistake
    - pile_id_factory injectable: tests get stable ids, production uses uuid4
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from uuid import uuid4

from cardsort.core.domain_types import (
    GameRules, DEFAULT_RULES, MoveReason, MoveStatus, PileId,
)
from cardsort.core.enforce_moves import (
    INVALID_REFERENCE_REASONS, validate_add_card, validate_create_pile, would_complete,
)
from cardsort.core.game_actions import (
    AddCardToPile, CreatePile, GameAction, IncrementMistake, ResetGame, SplitPile,
)
from cardsort.core.game_engine import transition
from cardsort.core.game_queries import category_name_of
from cardsort.core.game_state import Category, GameState


@dataclass(frozen=True)
class MoveResult:
    """Outcome of a command: next state, status, reason, and the touched pile."""
    state: GameState
    status: MoveStatus
    reason: MoveReason | None = None
    pile_id: str | None = None
    action: GameAction | None = None

    @property
    def accepted(self) -> bool:
        return self.status == MoveStatus.ACCEPTED


def new_pile_id() -> PileId:
    return PileId(f"pile-{uuid4().hex}")


def _refuse(
    state: GameState, reason: MoveReason, pile_id: str | None, rules: GameRules,
) -> MoveResult:
    """Map a gate reason to IGNORED (no penalty) or REJECTED (+1 mistake)."""
    if reason in INVALID_REFERENCE_REASONS:
        return MoveResult(state, MoveStatus.IGNORED, reason, pile_id)
    action = IncrementMistake()
    return MoveResult(
        transition(state, action, rules).state,
        MoveStatus.REJECTED, reason, pile_id, action,
    )


def _commit(
    state: GameState, action: GameAction, pile_id: str | None, rules: GameRules,
) -> MoveResult:
    result = transition(state, action, rules)
    if not result.applied:
        # gate passed but the engine refused
        return MoveResult(state, MoveStatus.IGNORED, MoveReason.ACTION_REFUSED, pile_id)
    return MoveResult(result.state, MoveStatus.ACCEPTED, None, pile_id, action)


def try_create_pile(
    state: GameState,
    card1_id: str,
    card2_id: str,
    rules: GameRules = DEFAULT_RULES,
    pile_id_factory: Callable[[], str] = new_pile_id,
) -> MoveResult:
    """Drop one ungrouped card on another to start a pile."""
    reason = validate_create_pile(state, card1_id, card2_id)
    if reason:
        return _refuse(state, reason, None, rules)
    pile_id = pile_id_factory()
    if state.find_pile(pile_id) is not None:
        return MoveResult(state, MoveStatus.IGNORED, MoveReason.PILE_ID_TAKEN)
    return _commit(state, CreatePile(pile_id, card1_id, card2_id), pile_id, rules)


def try_add_card_to_pile(
    state: GameState,
    card_id: str,
    pile_id: str,
    categories: Sequence[Category] = (),
    rules: GameRules = DEFAULT_RULES,
) -> MoveResult:
    """Drop an ungrouped card on an open pile. Reveals the name on completion."""
    reason = validate_add_card(state, card_id, pile_id, rules)
    if reason:
        return _refuse(state, reason, pile_id, rules)

    pile = state.find_pile(pile_id)
    revealed_name = None
    if would_complete(pile, rules):
        revealed_name = category_name_of(state.find_card(card_id).category_id, categories)
    return _commit(state, AddCardToPile(card_id, pile_id, revealed_name), pile_id, rules)


def split_pile(
    state: GameState, pile_id: str, rules: GameRules = DEFAULT_RULES,
) -> MoveResult:
    """Break a pile apart; its cards go back to the ungrouped pool."""
    if state.find_pile(pile_id) is None:
        return MoveResult(state, MoveStatus.IGNORED, MoveReason.PILE_NOT_FOUND, pile_id)
    return _commit(state, SplitPile(pile_id), pile_id, rules)


def reset_game(state: GameState, rules: GameRules = DEFAULT_RULES) -> MoveResult:
    return _commit(state, ResetGame(), None, rules)
