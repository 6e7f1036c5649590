"""Game Queries — derived views over a GameState for the presentation layer.

Invariants:
    - All functions are PURE: they read a snapshot and never mutate it
    - Views preserve the deck's own order (ungrouped_cards) or pile insertion order
    - Public projections strip category_id; reveal happens only via completed piles

Design Decisions:
    - Functions, not GameState methods (ADR: GameState is data, views are presentation)
    - An id that fails to resolve is skipped or yields None
"""

from collections.abc import Sequence
from dataclasses import dataclass

from cardsort.core.domain_types import GameRules, DEFAULT_RULES
from cardsort.core.game_state import Card, Category, GameState, Pile, PublicCard


@dataclass(frozen=True)
class PublicPile:
    """Pile projection safe for the presentation layer."""
    id: str
    cards: tuple[PublicCard, ...]
    card_count: int
    is_complete: bool
    revealed_category_name: str | None


def ungrouped_cards(state: GameState) -> list[Card]:
    """Cards that are not in any pile, in deck order."""
    grouped = state.grouped_card_ids()
    return [card for card in state.cards if card.id not in grouped]


def pile_cards(pile_id: str, state: GameState) -> list[Card]:
    """Cards of a pile in insertion order; unresolvable ids are skipped."""
    pile = state.find_pile(pile_id)
    if pile is None:
        return []
    by_id = {card.id: card for card in state.cards}
    return [by_id[card_id] for card_id in pile.card_ids if card_id in by_id]


def category_name_of(category_id: str, categories: Sequence[Category]) -> str | None:
    for category in categories:
        if category.id == category_id:
            return category.name
    return None


def correctly_placed_count(state: GameState) -> int:
    """Cards sitting in piles. Every pile holds only validated insertions."""
    return sum(pile.size for pile in state.piles)


def completion_percentage(state: GameState, rules: GameRules = DEFAULT_RULES) -> int:
    """Share of the deck locked in complete piles, rounded to a whole percent."""
    total_cards = len(state.cards)
    if total_cards == 0:
        return 0
    # round-half-up, not Python's banker's rounding
    return int(state.completed_count * rules.category_size * 100 / total_cards + 0.5)


def pile_containing(card_id: str, state: GameState) -> Pile | None:
    for pile in state.piles:
        if pile.contains(card_id):
            return pile
    return None


def is_game_solved(state: GameState, rules: GameRules = DEFAULT_RULES) -> bool:
    """Every card sits in a complete pile."""
    return bool(state.cards) and state.completed_count * rules.category_size == len(state.cards)


# ─── Public projections ──────────────────────────────────────────

def to_public_card(card: Card) -> PublicCard:
    return PublicCard(id=card.id, title=card.title)


def to_public_pile(pile: Pile, state: GameState) -> PublicPile:
    return PublicPile(
        id=pile.id,
        cards=tuple(to_public_card(card) for card in pile_cards(pile.id, state)),
        card_count=pile.size,
        is_complete=pile.is_complete,
        revealed_category_name=pile.revealed_category_name,
    )


def public_ungrouped_cards(state: GameState) -> list[PublicCard]:
    return [to_public_card(card) for card in ungrouped_cards(state)]


def public_piles(state: GameState) -> list[PublicPile]:
    return [to_public_pile(pile, state) for pile in state.piles]


# ─── Stats ───────────────────────────────────────────────────────

def compute_game_stats(state: GameState, rules: GameRules = DEFAULT_RULES) -> dict:
    """Summary counters for the stats panel. Pure, never raises."""
    grouped = correctly_placed_count(state)
    return {
        "mistakes": state.mistakes,
        "completed_piles": state.completed_count,
        "total_categories": len({card.category_id for card in state.cards}),
        "open_piles": sum(1 for pile in state.piles if not pile.is_complete),
        "grouped_cards": grouped,
        "ungrouped_cards": len(state.cards) - grouped,
        "total_cards": len(state.cards),
        "completion_percentage": completion_percentage(state, rules),
        "is_solved": is_game_solved(state, rules),
    }
