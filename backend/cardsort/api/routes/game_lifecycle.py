"""Game Lifecycle — create, read, reset, and delete in-memory games.

Invariants:
    - GameSession is per-game, in-memory (module-level dict)
    - Every new game is dealt by the catalog; reset keeps the deal
    - _games dict is the single source for live games

Design Decisions:
    - _games is a module-level dict: one uvicorn process, games are lost on restart
    - Registry is capped at Settings.max_games; creating past the cap evicts
      the oldest games (dict insertion order), which then answer 404
    - get_game_or_404 exported for reuse by game_piles
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from cardsort.api.routes.game_response_helpers import game_view_out
from cardsort.config import Settings, get_settings
from cardsort.core.errors import ErrorContext, ResourceNotFoundError
from cardsort.infrastructure.dataset_catalog import DatasetCatalog, get_catalog
from cardsort.schemas.game import GameCreate, GameStats, GameView
from cardsort.services.game_moves import GameMoves, GameSession

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/games", tags=["games"])

_games: dict[UUID, GameSession] = {}


def active_game_count() -> int:
    return len(_games)


def clear_games() -> None:
    _games.clear()


def evict_oldest_games(limit: int) -> list[UUID]:
    """Drop the least recently created games until at most limit remain."""
    evicted = []
    while len(_games) > limit:
        game_id = next(iter(_games))
        del _games[game_id]
        evicted.append(game_id)
    return evicted


def get_game_or_404(game_id: UUID) -> GameSession:
    """Get live game or raise 404. Exported for game_piles."""
    session = _games.get(game_id)
    if session is None:
        raise ResourceNotFoundError(
            "Game", str(game_id), ErrorContext(game_id=str(game_id)),
        )
    return session


@router.post("", response_model=GameView, status_code=status.HTTP_201_CREATED)
async def create_game(
    body: GameCreate | None = None,
    catalog: DatasetCatalog = Depends(get_catalog),
    settings: Settings = Depends(get_settings),
):
    """Deal a new game from the loaded dataset."""
    seed = body.seed if body else None
    session = GameSession.start(catalog.deal(seed), catalog.rules)
    _games[session.id] = session
    for game_id in evict_oldest_games(settings.max_games):
        logger.info("Game evicted", extra={"game_id": str(game_id)})
    logger.info(
        f"Game created with {len(session.state.cards)} cards",
        extra={"game_id": str(session.id)},
    )
    return game_view_out(GameMoves(session))


@router.get("/{game_id}", response_model=GameView)
async def get_game(game_id: UUID):
    return game_view_out(GameMoves(get_game_or_404(game_id)))


@router.get("/{game_id}/stats", response_model=GameStats)
async def get_game_stats(game_id: UUID):
    return GameStats(**GameMoves(get_game_or_404(game_id)).stats())


@router.post("/{game_id}/reset", response_model=GameView)
async def reset_game(game_id: UUID):
    """Clear piles and counters; the dealt card order is kept."""
    moves = GameMoves(get_game_or_404(game_id))
    moves.reset()
    return game_view_out(moves)


@router.delete("/{game_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_game(game_id: UUID):
    get_game_or_404(game_id)
    del _games[game_id]
    logger.info("Game deleted", extra={"game_id": str(game_id)})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
