"""Game Engine — pure (state, action) -> state transition function.

Invariants:
    - transition() never mutates its input; APPLIED returns a new snapshot,
      IGNORED returns the very same snapshot object
    - A card id appears in at most one pile (CreatePile/AddCardToPile ignore grouped cards)
    - Pile size never exceeds category_size; is_complete iff size == category_size
    - revealed_category_name is set exactly when a pile completes
    - completed_count == number of complete piles after every transition
    - Category matching is NOT checked here: callers go through enforce_moves first

Design Decisions:
    - Invalid references are explicit IGNORED branches, not silent returns, so
      callers can tell "ignored" from "applied" without diffing states
    - No logging in the engine: the caller decides whether an ignored action matters
    - Completion falls back to the pile's category id when the caller supplies no
      revealed name, keeping revealed_category_name non-null on every complete pile
"""

from collections.abc import Iterable
from dataclasses import dataclass, replace
from functools import reduce

from cardsort.core.domain_types import (
    ActionOutcome, GameRules, DEFAULT_RULES, PileId,
)
from cardsort.core.enforce_moves import category_id_of_pile
from cardsort.core.game_actions import (
    AddCardToPile, CreatePile, GameAction, IncrementMistake, ResetGame, SplitPile,
)
from cardsort.core.game_state import GameState, Pile


@dataclass(frozen=True)
class Transition:
    """Engine result: the next snapshot and whether the action took effect."""
    state: GameState
    outcome: ActionOutcome

    @property
    def applied(self) -> bool:
        return self.outcome == ActionOutcome.APPLIED


def _applied(state: GameState) -> Transition:
    return Transition(state, ActionOutcome.APPLIED)


def _ignored(state: GameState) -> Transition:
    return Transition(state, ActionOutcome.IGNORED)


def _create_pile(state: GameState, action: CreatePile) -> Transition:
    if action.card1_id == action.card2_id:
        return _ignored(state)
    if state.find_card(action.card1_id) is None or state.find_card(action.card2_id) is None:
        return _ignored(state)
    if state.find_pile(action.pile_id) is not None:
        return _ignored(state)
    grouped = state.grouped_card_ids()
    if action.card1_id in grouped or action.card2_id in grouped:
        return _ignored(state)

    pile = Pile(id=PileId(action.pile_id), card_ids=(action.card1_id, action.card2_id))
    return _applied(replace(state, piles=state.piles + (pile,)))


def _add_card(state: GameState, action: AddCardToPile, rules: GameRules) -> Transition:
    pile = state.find_pile(action.pile_id)
    if pile is None or pile.is_complete or pile.size >= rules.category_size:
        return _ignored(state)
    if state.find_card(action.card_id) is None:
        return _ignored(state)
    if action.card_id in state.grouped_card_ids():
        return _ignored(state)

    grown = replace(pile, card_ids=pile.card_ids + (action.card_id,))
    completed_now = grown.size == rules.category_size
    if completed_now:
        grown = replace(
            grown,
            is_complete=True,
            revealed_category_name=(
                action.revealed_name or category_id_of_pile(grown, state.cards)
            ),
        )

    piles = tuple(grown if p.id == pile.id else p for p in state.piles)
    return _applied(replace(
        state,
        piles=piles,
        completed_count=state.completed_count + (1 if completed_now else 0),
    ))


def _split_pile(state: GameState, action: SplitPile) -> Transition:
    pile = state.find_pile(action.pile_id)
    if pile is None:
        return _ignored(state)
    return _applied(replace(
        state,
        piles=tuple(p for p in state.piles if p.id != pile.id),
        completed_count=state.completed_count - (1 if pile.is_complete else 0),
    ))


def _increment_mistake(state: GameState) -> Transition:
    return _applied(replace(state, mistakes=state.mistakes + 1))


def _reset_game(state: GameState) -> Transition:
    return _applied(GameState(cards=state.cards))


def transition(
    state: GameState, action: GameAction, rules: GameRules = DEFAULT_RULES,
) -> Transition:
    """Apply one action. Unknown action objects are ignored."""
    if isinstance(action, CreatePile):
        return _create_pile(state, action)
    if isinstance(action, AddCardToPile):
        return _add_card(state, action, rules)
    if isinstance(action, SplitPile):
        return _split_pile(state, action)
    if isinstance(action, IncrementMistake):
        return _increment_mistake(state)
    if isinstance(action, ResetGame):
        return _reset_game(state)
    return _ignored(state)


def apply_action(
    state: GameState, action: GameAction, rules: GameRules = DEFAULT_RULES,
) -> GameState:
    """transition() without the outcome, for reducer-style folding."""
    return transition(state, action, rules).state


def replay(
    initial: GameState, actions: Iterable[GameAction], rules: GameRules = DEFAULT_RULES,
) -> GameState:
    """Re-derive a game from its starting snapshot and action log."""
    return reduce(lambda state, action: apply_action(state, action, rules), actions, initial)


def check_state_invariants(state: GameState, rules: GameRules = DEFAULT_RULES) -> list[str]:
    """List every structural invariant the snapshot violates (empty when sound)."""
    violations: list[str] = []
    seen: set[str] = set()
    for pile in state.piles:
        for card_id in pile.card_ids:
            if card_id in seen:
                violations.append(f"card {card_id} appears in more than one pile")
            seen.add(card_id)
        if pile.size > rules.category_size:
            violations.append(f"pile {pile.id} exceeds category size")
        if pile.is_complete != (pile.size == rules.category_size):
            violations.append(f"pile {pile.id} completion flag disagrees with its size")
        if (pile.revealed_category_name is not None) != pile.is_complete:
            violations.append(f"pile {pile.id} reveal disagrees with completion")
    complete = sum(1 for pile in state.piles if pile.is_complete)
    if complete != state.completed_count:
        violations.append(
            f"completed_count {state.completed_count} != {complete} complete piles"
        )
    if state.mistakes < 0:
        violations.append("mistakes is negative")
    return violations
