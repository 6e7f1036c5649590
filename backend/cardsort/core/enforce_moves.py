"""Move Enforcement — pure predicates that decide whether a grouping move is legal.

Invariants:
    - All functions are PURE: no IO, no side effects, never raise
    - A pile's category is the category of its first card (None for an empty pile)
    - check_* functions return a MoveReason on violation, None on success
    - validate_* chains run checks in order — first reason wins

Design Decisions:
    - Reasons split into two families: invalid references (card/pile missing,
      pile complete, card already grouped, same card) and the single gameplay
      mistake (CATEGORY_MISMATCH). game_commands maps them to IGNORED/REJECTED
    - Return enums (not exceptions): a rejected move is a normal outcome
"""

from collections.abc import Sequence

from cardsort.core.domain_types import CategoryId, GameRules, DEFAULT_RULES, MoveReason
from cardsort.core.game_state import Card, GameState, Pile


INVALID_REFERENCE_REASONS: frozenset[MoveReason] = frozenset({
    MoveReason.CARD_NOT_FOUND,
    MoveReason.PILE_NOT_FOUND,
    MoveReason.PILE_COMPLETE,
    MoveReason.CARD_ALREADY_GROUPED,
    MoveReason.SAME_CARD,
    MoveReason.PILE_ID_TAKEN,
    MoveReason.ACTION_REFUSED,
})


# ─── Gate predicates ─────────────────────────────────────────────

def category_id_of_pile(pile: Pile, cards: Sequence[Card]) -> CategoryId | None:
    """Category of the pile's first card, or None for an empty pile."""
    if not pile.card_ids:
        return None
    first_id = pile.card_ids[0]
    for card in cards:
        if card.id == first_id:
            return card.category_id
    return None


def can_accept_card(card: Card, pile: Pile, cards: Sequence[Card]) -> bool:
    """True when the pile is empty or the card shares the pile's category."""
    if not pile.card_ids:
        return True
    return card.category_id == category_id_of_pile(pile, cards)


def would_complete(pile: Pile, rules: GameRules = DEFAULT_RULES) -> bool:
    """True when one more card brings the pile to category_size."""
    return pile.size + 1 == rules.category_size


def is_pile_full(pile: Pile, rules: GameRules = DEFAULT_RULES) -> bool:
    return pile.size == rules.category_size


# ─── Pile creation checks ────────────────────────────────────────

def check_cards_exist(state: GameState, *card_ids: str) -> MoveReason | None:
    """Every referenced card must be in the deck."""
    if any(state.find_card(card_id) is None for card_id in card_ids):
        return MoveReason.CARD_NOT_FOUND
    return None


def check_distinct_cards(card1_id: str, card2_id: str) -> MoveReason | None:
    """A pile cannot be formed from one card dropped on itself."""
    if card1_id == card2_id:
        return MoveReason.SAME_CARD
    return None


def check_cards_ungrouped(state: GameState, *card_ids: str) -> MoveReason | None:
    """A card may sit in at most one pile."""
    grouped = state.grouped_card_ids()
    if any(card_id in grouped for card_id in card_ids):
        return MoveReason.CARD_ALREADY_GROUPED
    return None


def check_same_category(card1: Card, card2: Card) -> MoveReason | None:
    """The gameplay rule: both cards must share a hidden category."""
    if card1.category_id != card2.category_id:
        return MoveReason.CATEGORY_MISMATCH
    return None


def validate_create_pile(
    state: GameState, card1_id: str, card2_id: str,
) -> MoveReason | None:
    """Chain all pile-creation checks. Returns first reason or None."""
    reason = (
        check_cards_exist(state, card1_id, card2_id)
        or check_distinct_cards(card1_id, card2_id)
        or check_cards_ungrouped(state, card1_id, card2_id)
    )
    if reason:
        return reason
    return check_same_category(state.find_card(card1_id), state.find_card(card2_id))


# ─── Card addition checks ────────────────────────────────────────

def check_pile_exists(state: GameState, pile_id: str) -> MoveReason | None:
    if state.find_pile(pile_id) is None:
        return MoveReason.PILE_NOT_FOUND
    return None


def check_pile_open(pile: Pile, rules: GameRules = DEFAULT_RULES) -> MoveReason | None:
    """Complete piles are locked for additions."""
    if pile.is_complete or is_pile_full(pile, rules):
        return MoveReason.PILE_COMPLETE
    return None


def check_pile_accepts(state: GameState, card: Card, pile: Pile) -> MoveReason | None:
    if not can_accept_card(card, pile, state.cards):
        return MoveReason.CATEGORY_MISMATCH
    return None


def validate_add_card(
    state: GameState, card_id: str, pile_id: str, rules: GameRules = DEFAULT_RULES,
) -> MoveReason | None:
    """Chain all card-addition checks. Returns first reason or None."""
    reason = (
        check_cards_exist(state, card_id)
        or check_pile_exists(state, pile_id)
    )
    if reason:
        return reason
    pile = state.find_pile(pile_id)
    return (
        check_pile_open(pile, rules)
        or check_cards_ungrouped(state, card_id)
        or check_pile_accepts(state, state.find_card(card_id), pile)
    )
