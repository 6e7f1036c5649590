"""Game Moves — per-game session holder that runs core commands and logs outcomes.

Invariants:
    - GameSession.state is replaced, never mutated; old snapshots stay valid
    - Every accepted or rejected command appends its action to the session log,
      so replay(initial_state, actions) reproduces the current state
    - IGNORED moves are logged at WARNING (wiring defect), REJECTED at INFO (gameplay)

Design Decisions:
    - Logging lives here, not in the engine: invalid references are the caller's concern
    - Single-writer assumption: one request mutates one game at a time
      (ADR: single-process uvicorn, asyncio event loop serializes handlers)
"""

import logging
from dataclasses import dataclass, field
from uuid import UUID, uuid4

from cardsort.core.domain_types import GameRules, MoveStatus
from cardsort.core.game_actions import GameAction
from cardsort.core.game_commands import (
    MoveResult, reset_game, split_pile, try_add_card_to_pile, try_create_pile,
)
from cardsort.core.game_engine import check_state_invariants, replay
from cardsort.core.game_queries import (
    compute_game_stats, public_piles, public_ungrouped_cards, to_public_pile,
)
from cardsort.core.game_state import Category, GameData, GameState, new_game_state

logger = logging.getLogger(__name__)


@dataclass
class GameSession:
    """One player's game: immutable deck, current snapshot, and action log."""
    categories: tuple[Category, ...]
    rules: GameRules
    initial_state: GameState
    state: GameState
    id: UUID = field(default_factory=uuid4)
    actions: list[GameAction] = field(default_factory=list)

    @classmethod
    def start(cls, game_data: GameData, rules: GameRules) -> "GameSession":
        state = new_game_state(game_data)
        return cls(
            categories=game_data.categories, rules=rules,
            initial_state=state, state=state,
        )

    def replayed_state(self) -> GameState:
        """Rebuild the current snapshot from the action log."""
        return replay(self.initial_state, self.actions, self.rules)


class GameMoves:
    """Command entry points for one GameSession."""

    def __init__(self, session: GameSession):
        self.session = session

    def create_pile(self, card1_id: str, card2_id: str) -> MoveResult:
        result = try_create_pile(
            self.session.state, card1_id, card2_id, self.session.rules,
        )
        return self._record(result, "create_pile", card_id=f"{card1_id},{card2_id}")

    def add_card(self, card_id: str, pile_id: str) -> MoveResult:
        result = try_add_card_to_pile(
            self.session.state, card_id, pile_id,
            self.session.categories, self.session.rules,
        )
        return self._record(result, "add_card", card_id=card_id)

    def split(self, pile_id: str) -> MoveResult:
        result = split_pile(self.session.state, pile_id, self.session.rules)
        return self._record(result, "split_pile")

    def reset(self) -> MoveResult:
        result = reset_game(self.session.state, self.session.rules)
        return self._record(result, "reset_game")

    def view(self) -> dict:
        """Public snapshot for rendering: no hidden category ids."""
        state = self.session.state
        return {
            "game_id": self.session.id,
            "ungrouped_cards": public_ungrouped_cards(state),
            "piles": public_piles(state),
            "stats": self.stats(),
        }

    def pile_view(self, pile_id: str):
        pile = self.session.state.find_pile(pile_id)
        if pile is None:
            return None
        return to_public_pile(pile, self.session.state)

    def stats(self) -> dict:
        return compute_game_stats(self.session.state, self.session.rules)

    # --- internals ------------------------------------------------------------

    def _record(self, result: MoveResult, move: str, card_id: str | None = None) -> MoveResult:
        extra = {
            "game_id": str(self.session.id),
            "pile_id": result.pile_id,
            "card_id": card_id,
            "move_status": result.status.value,
            "move_reason": result.reason.value if result.reason else None,
        }
        if result.status == MoveStatus.IGNORED:
            logger.warning(f"Ignored {move}: {result.reason.value}", extra=extra)
            return result

        self.session.state = result.state
        if result.action is not None:
            self.session.actions.append(result.action)
        if result.status == MoveStatus.REJECTED:
            logger.info(f"Rejected {move}: {result.reason.value}", extra=extra)
        else:
            logger.debug(f"Accepted {move}", extra=extra)

        violations = check_state_invariants(result.state, self.session.rules)
        if violations:
            logger.error(f"State invariants violated after {move}: {violations}", extra=extra)
        return result
