"""Game Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - CardOut has no category field: hidden ids never reach the client
    - PileCreate rejects empty ids; same-card drops are left to the core (IGNORED)
    - MoveResponse.status is one of accepted / rejected / ignored

Design Decisions:
    - Responses are built field by field in game_response_helpers
    - Gameplay rejections are 200 responses, not HTTP errors (a mistake is normal play)
"""

from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field


class GameCreate(BaseModel):
    """Game creation — optional seed for a reproducible deal."""
    seed: int | None = None


class PileCreate(BaseModel):
    card1_id: str = Field(min_length=1, max_length=200)
    card2_id: str = Field(min_length=1, max_length=200)


class CardAdd(BaseModel):
    card_id: str = Field(min_length=1, max_length=200)


class CardOut(BaseModel):
    """Public card — id and title only."""
    id: str
    title: str


class PileOut(BaseModel):
    id: str
    cards: list[CardOut]
    card_count: int
    is_complete: bool
    revealed_category_name: str | None = None


class GameStats(BaseModel):
    mistakes: int
    completed_piles: int
    total_categories: int
    open_piles: int
    grouped_cards: int
    ungrouped_cards: int
    total_cards: int
    completion_percentage: int = Field(ge=0, le=100)
    is_solved: bool


class GameView(BaseModel):
    """Everything the board needs to render one game."""
    game_id: UUID
    ungrouped_cards: list[CardOut]
    piles: list[PileOut]
    stats: GameStats


class MoveResponse(BaseModel):
    status: Literal["accepted", "rejected", "ignored"]
    reason: str | None = None
    pile_id: str | None = None
    pile: PileOut | None = None
    stats: GameStats
