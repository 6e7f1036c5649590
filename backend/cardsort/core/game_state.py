"""Game State — immutable snapshots of cards, categories, piles, and counters.

Invariants:
    - Every dataclass here is frozen; collections are tuples
    - A transition never mutates a snapshot, it builds a new one
    - Card.category_id is hidden: only PublicCard crosses the API boundary
    - Pile.revealed_category_name is not None iff Pile.is_complete

Design Decisions:
    - Frozen dataclasses over dicts: hashable, safe to share across renders
    - Linear lookups: a full deck is 2025 cards, well below any indexing payoff
"""

from dataclasses import dataclass, field

from cardsort.core.domain_types import CardId, CategoryId, PileId


@dataclass(frozen=True)
class Card:
    """A sortable item. category_id stays secret until its pile completes."""
    id: CardId
    title: str
    category_id: CategoryId


@dataclass(frozen=True)
class Category:
    """A hidden group with a revealable name."""
    id: CategoryId
    name: str


@dataclass(frozen=True)
class PublicCard:
    """Card projection safe for the presentation layer (no category_id)."""
    id: CardId
    title: str


@dataclass(frozen=True)
class Pile:
    """A player-formed group of cards, in insertion order."""
    id: PileId
    card_ids: tuple[CardId, ...]
    is_complete: bool = False
    revealed_category_name: str | None = None

    @property
    def size(self) -> int:
        return len(self.card_ids)

    def contains(self, card_id: str) -> bool:
        return card_id in self.card_ids


@dataclass(frozen=True)
class GameData:
    """Output of the dataset loader: categories plus the shuffled deck."""
    categories: tuple[Category, ...]
    cards: tuple[Card, ...]


@dataclass(frozen=True)
class GameState:
    """Whole-game snapshot. cards is fixed for the life of a game."""
    cards: tuple[Card, ...]
    piles: tuple[Pile, ...] = field(default_factory=tuple)
    mistakes: int = 0
    completed_count: int = 0

    def find_card(self, card_id: str) -> Card | None:
        for card in self.cards:
            if card.id == card_id:
                return card
        return None

    def find_pile(self, pile_id: str) -> Pile | None:
        for pile in self.piles:
            if pile.id == pile_id:
                return pile
        return None

    def grouped_card_ids(self) -> set[CardId]:
        """Ids of every card currently sitting in some pile."""
        return {card_id for pile in self.piles for card_id in pile.card_ids}


def new_game_state(game_data: GameData) -> GameState:
    """Fresh game over a loaded deck: no piles, no mistakes."""
    return GameState(cards=game_data.cards)
