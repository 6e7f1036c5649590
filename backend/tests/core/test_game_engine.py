"""Game Engine — tests for pure state transitions.

Tests cover:
    - Each action's effect and its IGNORED branch (same snapshot returned)
    - Completion: flag, reveal, completed_count increments once
    - Split of complete vs open piles
    - Reset keeps the dealt order
    - Inputs are never mutated; replay reproduces a sequence
    - Invariants hold after every step of a mixed sequence
"""

from dataclasses import replace

from cardsort.core.domain_types import ActionOutcome, GameRules
from cardsort.core.game_actions import (
    AddCardToPile, CreatePile, IncrementMistake, ResetGame, SplitPile,
)
from cardsort.core.game_engine import (
    apply_action, check_state_invariants, replay, transition,
)
from cardsort.core.game_state import Pile
from tests.core.game_fixtures import SMALL_RULES, small_state


def _with_open_pile():
    return apply_action(small_state(), CreatePile("p1", "card-1", "card-2"), SMALL_RULES)


# ─── CreatePile ──────────────────────────────────────────────────

def test_create_pile_appends_open_pile():
    state = _with_open_pile()
    assert len(state.piles) == 1
    pile = state.piles[0]
    assert pile.id == "p1"
    assert pile.card_ids == ("card-1", "card-2")
    assert not pile.is_complete
    assert pile.revealed_category_name is None


def test_create_pile_with_unknown_card_is_ignored():
    state = small_state()
    result = transition(state, CreatePile("p1", "card-1", "ghost"), SMALL_RULES)
    assert result.outcome == ActionOutcome.IGNORED
    assert result.state is state
    assert result.state.mistakes == 0


def test_create_pile_with_duplicate_pile_id_is_ignored():
    state = _with_open_pile()
    result = transition(state, CreatePile("p1", "card-4", "card-5"), SMALL_RULES)
    assert not result.applied
    assert len(result.state.piles) == 1


def test_create_pile_with_grouped_card_is_ignored():
    state = _with_open_pile()
    result = transition(state, CreatePile("p2", "card-2", "card-3"), SMALL_RULES)
    assert not result.applied


def test_create_pile_from_one_card_is_ignored():
    result = transition(small_state(), CreatePile("p1", "card-1", "card-1"), SMALL_RULES)
    assert not result.applied


def test_create_pile_does_not_mutate_previous_state():
    before = small_state()
    apply_action(before, CreatePile("p1", "card-1", "card-2"), SMALL_RULES)
    assert before.piles == ()


# ─── AddCardToPile ───────────────────────────────────────────────

def test_add_card_grows_open_pile():
    roomy = GameRules(category_count=2, category_size=4)
    state = apply_action(small_state(), CreatePile("p1", "card-1", "card-2"), roomy)
    grown = apply_action(state, AddCardToPile("card-3", "p1"), roomy)
    assert grown.piles[0].card_ids == ("card-1", "card-2", "card-3")
    assert not grown.piles[0].is_complete
    assert grown.completed_count == 0


def test_add_card_completes_and_reveals():
    state = apply_action(_with_open_pile(), AddCardToPile("card-3", "p1", "Planets"), SMALL_RULES)
    pile = state.piles[0]
    assert pile.is_complete
    assert pile.revealed_category_name == "Planets"
    assert state.completed_count == 1


def test_completion_without_name_falls_back_to_category_id():
    state = apply_action(_with_open_pile(), AddCardToPile("card-3", "p1"), SMALL_RULES)
    assert state.piles[0].revealed_category_name == "cat-1"


def test_add_card_to_unknown_pile_is_ignored():
    state = _with_open_pile()
    result = transition(state, AddCardToPile("card-3", "nope"), SMALL_RULES)
    assert result.outcome == ActionOutcome.IGNORED
    assert result.state is state


def test_add_card_to_complete_pile_is_ignored():
    state = apply_action(_with_open_pile(), AddCardToPile("card-3", "p1", "Planets"), SMALL_RULES)
    result = transition(state, AddCardToPile("card-4", "p1"), SMALL_RULES)
    assert not result.applied
    assert result.state.piles[0].size == 3
    assert result.state.completed_count == 1


def test_add_grouped_card_is_ignored():
    state = apply_action(_with_open_pile(), CreatePile("p2", "card-4", "card-5"), SMALL_RULES)
    result = transition(state, AddCardToPile("card-4", "p1"), SMALL_RULES)
    assert not result.applied


def test_engine_does_not_check_category():
    state = apply_action(_with_open_pile(), AddCardToPile("card-4", "p1"), SMALL_RULES)
    assert state.piles[0].card_ids[-1] == "card-4"


# ─── SplitPile ───────────────────────────────────────────────────

def test_split_open_pile_keeps_completed_count():
    state = apply_action(_with_open_pile(), SplitPile("p1"), SMALL_RULES)
    assert state.piles == ()
    assert state.completed_count == 0


def test_split_complete_pile_decrements_completed_count():
    state = apply_action(_with_open_pile(), AddCardToPile("card-3", "p1", "Planets"), SMALL_RULES)
    split = apply_action(state, SplitPile("p1"), SMALL_RULES)
    assert split.completed_count == state.completed_count - 1
    assert split.piles == ()


def test_split_unknown_pile_is_ignored():
    state = _with_open_pile()
    result = transition(state, SplitPile("nope"), SMALL_RULES)
    assert result.outcome == ActionOutcome.IGNORED
    assert result.state is state


# ─── IncrementMistake / ResetGame ────────────────────────────────

def test_increment_mistake():
    state = apply_action(small_state(), IncrementMistake())
    assert state.mistakes == 1
    assert apply_action(state, IncrementMistake()).mistakes == 2


def test_reset_clears_progress_and_keeps_cards():
    state = apply_action(_with_open_pile(), AddCardToPile("card-3", "p1", "Planets"), SMALL_RULES)
    state = apply_action(state, IncrementMistake())
    reset = apply_action(state, ResetGame())
    assert reset.piles == ()
    assert reset.mistakes == 0
    assert reset.completed_count == 0
    assert [c.id for c in reset.cards] == [c.id for c in state.cards]


def test_unknown_action_is_ignored():
    state = small_state()
    result = transition(state, object())
    assert result.outcome == ActionOutcome.IGNORED
    assert result.state is state


# ─── replay / invariants ─────────────────────────────────────────

_SEQUENCE = [
    CreatePile("p1", "card-1", "card-2"),
    IncrementMistake(),
    CreatePile("p2", "card-4", "card-5"),
    AddCardToPile("card-3", "p1", "Planets"),
    AddCardToPile("card-6", "p2", "Metals"),
    SplitPile("p1"),
    AddCardToPile("card-1", "p1"),
    CreatePile("p3", "card-1", "card-3"),
    SplitPile("p2"),
]


def test_replay_matches_stepwise_application():
    stepwise = small_state()
    for action in _SEQUENCE:
        stepwise = apply_action(stepwise, action, SMALL_RULES)
    assert replay(small_state(), _SEQUENCE, SMALL_RULES) == stepwise


def test_invariants_hold_after_every_action():
    state = small_state()
    for action in _SEQUENCE:
        state = apply_action(state, action, SMALL_RULES)
        assert check_state_invariants(state, SMALL_RULES) == []
        assert state.completed_count == sum(1 for p in state.piles if p.is_complete)
        assert all(p.size <= SMALL_RULES.category_size for p in state.piles)


def test_invariant_check_reports_broken_state():
    broken = small_state(
        Pile(id="a", card_ids=("card-1", "card-2")),
        Pile(id="b", card_ids=("card-2", "card-3")),
    )
    broken = replace(broken, completed_count=1)
    violations = check_state_invariants(broken, SMALL_RULES)
    assert any("card-2" in v for v in violations)
    assert any("completed_count" in v for v in violations)
