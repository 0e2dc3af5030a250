"""Turn controller: the game state machine.

Phases run AWAITING_START -> PLAYER_TURN <-> COMPUTER_TURN -> GAME_OVER.
The opponent reply is scheduled with a cancellable delay. Each scheduled call
carries its own id; a callback whose id is no longer the pending one (cancelled
by reset() or play_computer_move_now() after it already fired) is dropped.

All mutation happens under one RLock, and events are emitted while the lock
is held, after grid, scores and phase are consistent again.
"""

from __future__ import annotations

import logging
import random
import threading
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from voxelclash.common.typed_config import GameConfig
from voxelclash.core.ai import create_strategy, generate_ai_move
from voxelclash.core.constants import SIDES, Owner, TurnPhase, Winner
from voxelclash.core.grid import ClaimStatus, GridModel, check_index, index_to_coords
from voxelclash.core.scheduler import ScheduledCall, Scheduler, ThreadingScheduler
from voxelclash.core.scoring import evaluate
from voxelclash.core.state import Event, EventType, StateNotifier

logger = logging.getLogger(__name__)


class MoveStatus(Enum):
    OK = "OK"
    CELL_ALREADY_OCCUPIED = "CellAlreadyOccupied"
    INVALID_STATE_TRANSITION = "InvalidStateTransition"


@dataclass(frozen=True)
class MoveResult:
    """Outcome of an inbound game operation."""

    success: bool
    status: MoveStatus
    index: Optional[int] = None
    side: Optional[Owner] = None
    score: Optional[int] = None
    message: str = ""


def determine_winner(player_score: int, computer_score: int) -> Winner:
    if player_score > computer_score:
        return Winner.PLAYER
    if computer_score > player_score:
        return Winner.COMPUTER
    return Winner.TIE


def _zero_scores() -> Dict[Owner, int]:
    return {side: 0 for side in SIDES}


@dataclass
class GameState:
    """Everything that belongs to one playthrough."""

    grid: GridModel = field(default_factory=GridModel)
    phase: TurnPhase = TurnPhase.AWAITING_START
    scores: Dict[Owner, int] = field(default_factory=_zero_scores)
    history: List[Tuple[int, Owner]] = field(default_factory=list)
    winner: Optional[Winner] = None

    def clear(self) -> None:
        self.grid.reset()
        self.phase = TurnPhase.AWAITING_START
        self.scores = _zero_scores()
        self.history = []
        self.winner = None


class TurnController:
    """Orchestrates turns between the player and the computer.

    Example:
        >>> from voxelclash.core.scheduler import ManualScheduler
        >>> scheduler = ManualScheduler()
        >>> game = TurnController(scheduler=scheduler, rng=random.Random(1))
        >>> game.start().success
        True
        >>> game.submit_player_move(0).success
        True
        >>> game.phase
        <TurnPhase.COMPUTER_TURN: 'computer_turn'>
        >>> scheduler.run_pending()
        1
        >>> game.phase
        <TurnPhase.PLAYER_TURN: 'player_turn'>
    """

    def __init__(
        self,
        notifier: Optional[StateNotifier] = None,
        scheduler: Optional[Scheduler] = None,
        rng: Optional[random.Random] = None,
        config: Optional[GameConfig] = None,
    ) -> None:
        """
        Args:
            notifier: Event sink for front ends (a private one is created if omitted)
            scheduler: Pacing scheduler for the opponent move
            rng: Random source for the opponent's fallback moves
            config: Game settings

        Raises:
            ConfigError: config names an unknown opponent strategy
        """
        self.config = config or GameConfig()
        self.notifier = notifier or StateNotifier()
        self.scheduler: Scheduler = scheduler or ThreadingScheduler()
        self.rng = rng or random.Random(self.config.seed)
        # fail fast on a bad strategy name
        create_strategy(self.config.ai_strategy, GridModel(), Owner.COMPUTER, self.rng)

        self.state = GameState()
        self._lock = threading.RLock()
        self._pending: Optional[ScheduledCall] = None
        self._next_call_id = 0
        self._pending_call_id: Optional[int] = None

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    @property
    def phase(self) -> TurnPhase:
        with self._lock:
            return self.state.phase

    @property
    def scores(self) -> Mapping[Owner, int]:
        with self._lock:
            return MappingProxyType(dict(self.state.scores))

    def score(self, side: Owner) -> int:
        with self._lock:
            return self.state.scores[side]

    @property
    def grid(self) -> GridModel:
        """Snapshot of the grid; mutating it does not affect the game."""
        with self._lock:
            return self.state.grid.copy()

    @property
    def history(self) -> Tuple[Tuple[int, Owner], ...]:
        with self._lock:
            return tuple(self.state.history)

    @property
    def winner(self) -> Optional[Winner]:
        with self._lock:
            return self.state.winner

    @property
    def is_pending_computer_move(self) -> bool:
        with self._lock:
            return self._pending is not None and not self._pending.cancelled

    # ------------------------------------------------------------------
    # Inbound operations
    # ------------------------------------------------------------------

    def start(self) -> MoveResult:
        """Begin a new playthrough with the player to move."""
        with self._lock:
            if self.state.phase in (TurnPhase.PLAYER_TURN, TurnPhase.COMPUTER_TURN):
                return self._reject(MoveStatus.INVALID_STATE_TRANSITION, None, None, "Game already in progress")
            self._clear()
            self.state.phase = TurnPhase.PLAYER_TURN
            logger.info("Game started (strategy=%s)", self.config.ai_strategy)
            for side in SIDES:
                self._emit(EventType.SCORE_CHANGED, side=side, score=0)
            self._emit(EventType.TURN_CHANGED, side=Owner.PLAYER)
            return MoveResult(success=True, status=MoveStatus.OK, side=Owner.PLAYER, message="Your turn!")

    def restart(self) -> MoveResult:
        """Reset from any phase and start again."""
        with self._lock:
            self.reset()
            return self.start()

    def reset(self) -> None:
        """Abandon the current playthrough and cancel any pending opponent move."""
        with self._lock:
            self._clear()
            logger.debug("Game reset")
            self._emit(EventType.GAME_RESET)

    def submit_player_move(self, index: int) -> MoveResult:
        """Claim ``index`` for the player.

        Raises:
            InvalidIndexError: index outside [0, 26]
        """
        check_index(index)
        with self._lock:
            if self.state.phase is not TurnPhase.PLAYER_TURN:
                return self._reject(
                    MoveStatus.INVALID_STATE_TRANSITION,
                    index,
                    Owner.PLAYER,
                    f"Not the player's turn (phase={self.state.phase.value})",
                )
            if not self.state.grid.is_unclaimed(index):
                return self._reject(
                    MoveStatus.CELL_ALREADY_OCCUPIED, index, Owner.PLAYER, f"Cell {index} is already claimed"
                )

            result = self._apply_move(index, Owner.PLAYER)
            if self.state.grid.is_full():
                self._finish_game()
            else:
                self.state.phase = TurnPhase.COMPUTER_TURN
                self._emit(EventType.TURN_CHANGED, side=Owner.COMPUTER)
                self._schedule_computer_move()
            return result

    def play_computer_move_now(self) -> MoveResult:
        """Run the pending opponent move immediately instead of waiting for its timer."""
        with self._lock:
            if self.state.phase is not TurnPhase.COMPUTER_TURN:
                return self._reject(
                    MoveStatus.INVALID_STATE_TRANSITION,
                    None,
                    Owner.COMPUTER,
                    f"Not the computer's turn (phase={self.state.phase.value})",
                )
            self._cancel_pending()
            return self._play_computer_move()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _clear(self) -> None:
        self._cancel_pending()
        self.state.clear()

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        self._pending_call_id = None

    def _schedule_computer_move(self) -> None:
        self._next_call_id += 1
        call_id = self._next_call_id
        self._pending_call_id = call_id
        self._pending = self.scheduler.schedule(self.config.ai_move_delay, lambda: self._on_computer_timer(call_id))

    def _on_computer_timer(self, call_id: int) -> None:
        with self._lock:
            if call_id != self._pending_call_id or self.state.phase is not TurnPhase.COMPUTER_TURN:
                logger.debug(
                    "Dropping stale opponent move (call %d, pending %s, phase=%s)",
                    call_id,
                    self._pending_call_id,
                    self.state.phase.value,
                )
                return
            self._pending = None
            self._pending_call_id = None
            self._play_computer_move()

    def _play_computer_move(self) -> MoveResult:
        index, ai_thoughts = generate_ai_move(self.state.grid, self.config.ai_strategy, self.rng)
        result = self._apply_move(index, Owner.COMPUTER, ai_thoughts)
        if self.state.grid.is_full():
            self._finish_game()
        else:
            self.state.phase = TurnPhase.PLAYER_TURN
            self._emit(EventType.TURN_CHANGED, side=Owner.PLAYER)
        return result

    def _apply_move(self, index: int, side: Owner, message: str = "") -> MoveResult:
        status = self.state.grid.claim(index, side)
        assert status is ClaimStatus.OK, f"claim of {index} for {side} failed: {status}"
        self.state.history.append((index, side))

        breakdown = evaluate(self.state.grid.owned_by(side))
        self.state.scores[side] = breakdown.score
        logger.debug("%s claimed %d, score %d", side.value, index, breakdown.score)

        self._emit(EventType.CELL_CLAIMED, index=index, side=side, coords=index_to_coords(index))
        self._emit(EventType.SCORE_CHANGED, side=side, score=breakdown.score)
        if breakdown.combo_cells:
            self._emit(EventType.COMBO_CELLS, side=side, cells=breakdown.combo_cells)
        return MoveResult(
            success=True, status=MoveStatus.OK, index=index, side=side, score=breakdown.score, message=message
        )

    def _finish_game(self) -> None:
        scores = dict(self.state.scores)
        winner = determine_winner(scores[Owner.PLAYER], scores[Owner.COMPUTER])
        self.state.phase = TurnPhase.GAME_OVER
        self.state.winner = winner
        logger.info(
            "Game over: %s (player %d, computer %d)", winner.value, scores[Owner.PLAYER], scores[Owner.COMPUTER]
        )
        self._emit(EventType.GAME_OVER, winner=winner, scores=MappingProxyType(scores))

    def _reject(self, status: MoveStatus, index: Optional[int], side: Optional[Owner], message: str) -> MoveResult:
        logger.debug("Rejected: %s (%s)", status.value, message)
        return MoveResult(success=False, status=status, index=index, side=side, message=message)

    def _emit(self, event_type: EventType, **payload: Any) -> None:
        self.notifier.notify(Event.create(event_type, payload))
