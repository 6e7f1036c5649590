"""Game Response Helpers — map core views and results onto response schemas.

Invariants:
    - Only PublicCard / PublicPile are converted: category ids cannot leak
    - Builders are pure: no session lookup, no logging

Design Decisions:
    - Explicit field mapping over from_attributes magic: the boundary is
      easy to audit for hidden fields
"""

from cardsort.core.game_commands import MoveResult
from cardsort.core.game_queries import PublicPile
from cardsort.core.game_state import PublicCard
from cardsort.schemas.game import CardOut, GameStats, GameView, MoveResponse, PileOut
from cardsort.services.game_moves import GameMoves


def card_out(card: PublicCard) -> CardOut:
    return CardOut(id=card.id, title=card.title)


def pile_out(pile: PublicPile) -> PileOut:
    return PileOut(
        id=pile.id,
        cards=[card_out(c) for c in pile.cards],
        card_count=pile.card_count,
        is_complete=pile.is_complete,
        revealed_category_name=pile.revealed_category_name,
    )


def game_view_out(moves: GameMoves) -> GameView:
    view = moves.view()
    return GameView(
        game_id=view["game_id"],
        ungrouped_cards=[card_out(c) for c in view["ungrouped_cards"]],
        piles=[pile_out(p) for p in view["piles"]],
        stats=GameStats(**view["stats"]),
    )


def move_response_out(moves: GameMoves, result: MoveResult) -> MoveResponse:
    pile = moves.pile_view(result.pile_id) if result.pile_id else None
    return MoveResponse(
        status=result.status.value,
        reason=result.reason.value if result.reason else None,
        pile_id=result.pile_id,
        pile=pile_out(pile) if pile else None,
        stats=GameStats(**moves.stats()),
    )
