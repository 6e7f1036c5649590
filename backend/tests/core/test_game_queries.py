"""Game Queries — tests for derived views and public projections.

Tests cover:
    - ungrouped_cards keeps deck order
    - pile_cards resolves in insertion order, skips unknown ids
    - completion_percentage rounding and the empty-deck case
    - Public projections never expose category ids
    - compute_game_stats counters
"""

from dataclasses import fields

from cardsort.core.domain_types import GameRules
from cardsort.core.game_state import GameState, Pile, PublicCard
from cardsort.core.game_queries import (
    category_name_of,
    completion_percentage,
    compute_game_stats,
    correctly_placed_count,
    is_game_solved,
    pile_cards,
    pile_containing,
    public_piles,
    public_ungrouped_cards,
    ungrouped_cards,
)
from tests.core.game_fixtures import SMALL_RULES, small_categories, small_state


def _open_pile() -> Pile:
    return Pile(id="p1", card_ids=("card-1", "card-2"))


def _complete_pile() -> Pile:
    return Pile(
        id="p2", card_ids=("card-6", "card-4", "card-5"),
        is_complete=True, revealed_category_name="Metals",
    )


# ─── ungrouped / pile contents ───────────────────────────────────

def test_ungrouped_cards_excludes_piled_cards_in_deck_order():
    state = small_state(_open_pile())
    assert [c.id for c in ungrouped_cards(state)] == ["card-3", "card-4", "card-5", "card-6"]


def test_ungrouped_cards_is_everything_without_piles():
    state = small_state()
    assert ungrouped_cards(state) == list(state.cards)


def test_pile_cards_in_insertion_order():
    state = small_state(_complete_pile())
    assert [c.id for c in pile_cards("p2", state)] == ["card-6", "card-4", "card-5"]


def test_pile_cards_skips_unresolvable_ids():
    state = small_state(Pile(id="p1", card_ids=("card-1", "ghost", "card-2")))
    assert [c.id for c in pile_cards("p1", state)] == ["card-1", "card-2"]


def test_pile_cards_for_unknown_pile_is_empty():
    assert pile_cards("nope", small_state()) == []


def test_pile_containing():
    state = small_state(_open_pile(), _complete_pile())
    assert pile_containing("card-5", state).id == "p2"
    assert pile_containing("card-3", state) is None


def test_category_name_lookup():
    categories = small_categories()
    assert category_name_of("cat-2", categories) == "Metals"
    assert category_name_of("cat-9", categories) is None


# ─── counters ────────────────────────────────────────────────────

def test_correctly_placed_counts_all_piled_cards():
    assert correctly_placed_count(small_state(_open_pile(), _complete_pile())) == 5


def test_completion_percentage_scenario():
    state = small_state(_complete_pile())
    assert state.completed_count == 1
    assert completion_percentage(state, SMALL_RULES) == 50


def test_completion_percentage_rounds_half_up():
    rules = GameRules(category_count=8, category_size=2)
    cards = small_state().cards + small_state().cards[:2]
    state = GameState(cards=cards * 2, completed_count=1)
    # 1 * 2 / 16 * 100 = 12.5
    assert completion_percentage(state, rules) == 13


def test_completion_percentage_empty_deck_is_zero():
    assert completion_percentage(GameState(cards=()), SMALL_RULES) == 0


def test_game_solved_only_when_every_card_is_complete():
    first = Pile(
        id="p1", card_ids=("card-1", "card-2", "card-3"),
        is_complete=True, revealed_category_name="Planets",
    )
    assert not is_game_solved(small_state(first), SMALL_RULES)
    assert is_game_solved(small_state(first, _complete_pile()), SMALL_RULES)
    assert not is_game_solved(GameState(cards=()), SMALL_RULES)


def test_compute_game_stats():
    stats = compute_game_stats(small_state(_open_pile(), _complete_pile(), mistakes=2), SMALL_RULES)
    assert stats == {
        "mistakes": 2,
        "completed_piles": 1,
        "total_categories": 2,
        "open_piles": 1,
        "grouped_cards": 5,
        "ungrouped_cards": 1,
        "total_cards": 6,
        "completion_percentage": 50,
        "is_solved": False,
    }


# ─── public projections ──────────────────────────────────────────

def test_public_card_has_no_category_field():
    assert {f.name for f in fields(PublicCard)} == {"id", "title"}


def test_public_ungrouped_cards_strip_category():
    cards = public_ungrouped_cards(small_state(_open_pile()))
    assert cards[0] == PublicCard(id="card-3", title="Mars")
    assert all(not hasattr(c, "category_id") for c in cards)


def test_public_piles_carry_reveal_only_when_complete():
    piles = public_piles(small_state(_open_pile(), _complete_pile()))
    assert piles[0].revealed_category_name is None
    assert piles[0].card_count == 2
    assert piles[1].revealed_category_name == "Metals"
    assert [c.title for c in piles[1].cards] == ["Tin", "Iron", "Copper"]


def test_total_categories_counts_the_dealt_deck():
    # a relaxed deck under default 45 x 45 rules
    stats = compute_game_stats(small_state(), GameRules())
    assert stats["total_categories"] == 2
    assert compute_game_stats(GameState(cards=()), SMALL_RULES)["total_categories"] == 0
