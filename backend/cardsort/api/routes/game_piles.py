"""Game Piles — grouping moves: create pile, add card, split pile.

Invariants:
    - Every move returns 200 with MoveResponse; status carries the outcome
    - A rejected move (category mismatch) has already counted a mistake
    - Unknown game -> 404; unknown card/pile inside a game -> status "ignored"

Design Decisions:
    - Gameplay outcomes are not HTTP errors: the board renders feedback from status
"""

import logging
from uuid import UUID

from fastapi import APIRouter

from cardsort.api.routes.game_lifecycle import get_game_or_404
from cardsort.api.routes.game_response_helpers import move_response_out, pile_out
from cardsort.core.errors import ErrorContext, ResourceNotFoundError
from cardsort.schemas.game import CardAdd, MoveResponse, PileCreate, PileOut
from cardsort.services.game_moves import GameMoves

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/games", tags=["piles"])


@router.post("/{game_id}/piles", response_model=MoveResponse)
async def create_pile(game_id: UUID, body: PileCreate):
    """Drop one ungrouped card onto another."""
    moves = GameMoves(get_game_or_404(game_id))
    result = moves.create_pile(body.card1_id, body.card2_id)
    return move_response_out(moves, result)


@router.post("/{game_id}/piles/{pile_id}/cards", response_model=MoveResponse)
async def add_card_to_pile(game_id: UUID, pile_id: str, body: CardAdd):
    """Drop an ungrouped card onto an existing pile."""
    moves = GameMoves(get_game_or_404(game_id))
    result = moves.add_card(body.card_id, pile_id)
    return move_response_out(moves, result)


@router.delete("/{game_id}/piles/{pile_id}", response_model=MoveResponse)
async def split_pile(game_id: UUID, pile_id: str):
    """Break a pile apart; its cards return to the ungrouped pool."""
    moves = GameMoves(get_game_or_404(game_id))
    result = moves.split(pile_id)
    return move_response_out(moves, result)


@router.get("/{game_id}/piles/{pile_id}", response_model=PileOut)
async def get_pile(game_id: UUID, pile_id: str):
    pile = GameMoves(get_game_or_404(game_id)).pile_view(pile_id)
    if pile is None:
        raise ResourceNotFoundError(
            "Pile", pile_id, ErrorContext(game_id=str(game_id), pile_id=pile_id),
        )
    return pile_out(pile)
