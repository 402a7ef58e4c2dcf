"""
Tetris Game Session.

This module ties the engine together:
- Input commands (move, rotate, soft drop, pause)
- Gravity ticks driven by an external clock
- Landing, row clearing and scoring
- Spawning and game over detection
- Snapshots and event notifications for renderers and audio
"""
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple, Union
from enum import Enum
import numpy as np

from .arena import Arena
from .config import GameConfig
from .controller import PieceController
from .gravity import DropTimer
from .piece import ActivePiece
from .renderer import Renderer
from .scoring import ScoreKeeper
from .spawner import Difficulty, Spawner
from .storage import HighScoreStore


class Command(Enum):
    """Player input commands."""
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    ROTATE_CW = "rotate_cw"
    ROTATE_CCW = "rotate_ccw"
    SOFT_DROP_BEGIN = "soft_drop_begin"
    SOFT_DROP_END = "soft_drop_end"
    PAUSE_TOGGLE = "pause_toggle"


class SessionStatus(Enum):
    """Game status enumeration."""
    FALLING = "falling"
    GAME_OVER = "game_over"


class GameEvent(Enum):
    """Notifications sent to session listeners."""
    PAUSED = "paused"
    RESUMED = "resumed"
    GAME_OVER = "game_over"
    ROWS_CLEARED = "rows_cleared"
    HIGH_SCORE = "high_score"


Listener = Callable[[GameEvent], None]


@dataclass
class DropResult:
    """Result of one gravity drop."""
    landed: bool = False
    rows_cleared: int = 0
    score_gained: int = 0
    new_high_score: bool = False
    game_over: bool = False


@dataclass
class Snapshot:
    """Read-only view of the session for rendering."""
    arena: np.ndarray
    piece_kind: str
    piece_matrix: np.ndarray
    piece_position: Tuple[int, int]
    next_kind: Optional[str]
    score: int
    high_score: int
    difficulty: Difficulty
    paused: bool
    status: SessionStatus
    fall_interval: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "arena": self.arena.tolist(),
            "piece_kind": self.piece_kind,
            "piece_matrix": self.piece_matrix.tolist(),
            "piece_position": list(self.piece_position),
            "next_kind": self.next_kind,
            "score": self.score,
            "high_score": self.high_score,
            "difficulty": self.difficulty.name,
            "paused": self.paused,
            "status": self.status.value,
            "fall_interval": self.fall_interval,
        }


class GameSession:
    """
    One game in progress.

    Owns the arena, the active piece, the spawner, the score keeper and the
    drop timer. A session starts paused; PAUSE_TOGGLE starts play and also
    resumes after a game over.

    Args:
        config: Game settings (defaults if omitted)
        store: High score store (in-memory if omitted)
        seed: Random seed, overrides config.seed
        logger: Optional EventLogger receiving one record per event
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        store: Optional[HighScoreStore] = None,
        seed: Optional[int] = None,
        logger=None,
    ):
        self.config = config or GameConfig()
        if seed is None:
            seed = self.config.seed
        difficulty = self.config.difficulty_tier

        self.arena = Arena(self.config.rows, self.config.cols)
        self.controller = PieceController(self.arena)
        self.spawner = Spawner(
            difficulty=difficulty,
            rng=np.random.default_rng(seed),
            easy_i_retries=self.config.easy_i_retries,
            persistent_i_block=self.config.persistent_i_block,
        )
        self.scores = ScoreKeeper(store, difficulty, self.config.high_score_namespace)
        self.timer = DropTimer(
            self.config.default_drop_interval,
            self.config.min_drop_interval,
            self.config.drop_interval_step,
        )
        self.logger = logger

        self.paused = True
        self.status = SessionStatus.FALLING
        self.last_time: Optional[float] = None
        self.piece: Optional[ActivePiece] = None
        self._listeners: List[Listener] = []

        self._spawn()

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def add_listener(self, listener: Listener) -> None:
        """Register a callback for GameEvent notifications."""
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    def _emit(self, event: GameEvent, **fields: Any) -> None:
        if self.logger is not None:
            self.logger.log_event(event.value, **fields)
        for listener in list(self._listeners):
            listener(event)

    @property
    def score(self) -> int:
        return self.scores.score

    @property
    def high_score(self) -> int:
        return self.scores.high_score

    @property
    def difficulty(self) -> Difficulty:
        return self.scores.difficulty

    @property
    def next_kind(self) -> Optional[str]:
        return self.spawner.next_kind

    def is_game_over(self) -> bool:
        """Check if the game is over (and waiting to be resumed)."""
        return self.status == SessionStatus.GAME_OVER

    def snapshot(self) -> Snapshot:
        """Get a copy of everything a renderer needs."""
        return Snapshot(
            arena=self.arena.get_state(),
            piece_kind=self.piece.kind,
            piece_matrix=self.piece.matrix.copy(),
            piece_position=self.piece.position,
            next_kind=self.spawner.next_kind,
            score=self.score,
            high_score=self.high_score,
            difficulty=self.difficulty,
            paused=self.paused,
            status=self.status,
            fall_interval=self.timer.effective_interval,
        )

    # ------------------------------------------------------------------
    # Game flow
    # ------------------------------------------------------------------

    def _spawn(self) -> bool:
        """Spawn the next piece; returns False if the spawn was blocked."""
        self.piece = self.spawner.spawn(self.arena.cols)
        if self.arena.collide(self.piece):
            self._game_over()
            return False
        return True

    def _game_over(self) -> None:
        final_score = self.score
        self.arena.reset()
        self.scores.reset()
        self.timer.reset()
        self.paused = True
        self.status = SessionStatus.GAME_OVER
        self._emit(GameEvent.GAME_OVER, score=final_score, high_score=self.high_score,
                   difficulty=self.difficulty)

    def drop(self) -> DropResult:
        """
        Apply one gravity step to the active piece.

        If the piece cannot fall it is merged into the arena, full rows are
        cleared and scored, and the next piece is spawned.

        Returns:
            DropResult describing what happened
        """
        if self.controller.fall(self.piece):
            return DropResult()

        self.arena.merge(self.piece)
        cleared = self.arena.clear_full_rows()
        result = DropResult(landed=True, rows_cleared=cleared.rows_cleared)

        for points in cleared.points(self.config.row_points):
            result.score_gained += points
            if self.scores.award(points):
                result.new_high_score = True

        if cleared.combo:
            self.timer.accelerate()
            self._emit(GameEvent.ROWS_CLEARED, rows=cleared.rows_cleared,
                       multipliers=cleared.multipliers, points=result.score_gained,
                       score=self.score)
        if result.new_high_score:
            self._emit(GameEvent.HIGH_SCORE, high_score=self.high_score,
                       difficulty=self.difficulty)

        result.game_over = not self._spawn()
        return result

    def update(self, timestamp: float) -> Optional[DropResult]:
        """
        Advance the game clock.

        Args:
            timestamp: Monotonic time in milliseconds

        Returns:
            DropResult if a gravity drop happened on this tick, else None
        """
        if self.last_time is None:
            self.last_time = timestamp
        elapsed = timestamp - self.last_time
        self.last_time = timestamp

        if self.paused:
            return None
        if self.timer.tick(elapsed):
            return self.drop()
        return None

    def pause(self) -> None:
        if not self.paused:
            self.toggle_pause()

    def resume(self) -> None:
        if self.paused:
            self.toggle_pause()

    def toggle_pause(self) -> None:
        """Pause or resume; resuming after a game over starts a new game."""
        self.paused = not self.paused
        if self.paused:
            self._emit(GameEvent.PAUSED)
        else:
            if self.status == SessionStatus.GAME_OVER:
                self.status = SessionStatus.FALLING
            self._emit(GameEvent.RESUMED)

    def handle_input(self, command: Command) -> bool:
        """
        Apply a player command.

        While paused only PAUSE_TOGGLE and SOFT_DROP_END have an effect.

        Returns:
            True if the command changed the game, False if it was ignored
            or blocked
        """
        if command is Command.PAUSE_TOGGLE:
            self.toggle_pause()
            return True
        if command is Command.SOFT_DROP_END:
            self.timer.end_soft_drop()
            return True
        if self.paused:
            return False

        if command is Command.MOVE_LEFT:
            return self.controller.move(self.piece, -1)
        if command is Command.MOVE_RIGHT:
            return self.controller.move(self.piece, 1)
        if command is Command.ROTATE_CW:
            return self.controller.rotate(self.piece, 1)
        if command is Command.ROTATE_CCW:
            return self.controller.rotate(self.piece, -1)
        if command is Command.SOFT_DROP_BEGIN:
            self.timer.begin_soft_drop()
            return True
        raise ValueError(f"Unknown command: {command}. Valid commands: {[c.name for c in Command]}")

    def set_difficulty(self, difficulty: Union[Difficulty, str]) -> None:
        """Switch tiers: reloads that tier's high score and zeroes the score."""
        if not isinstance(difficulty, Difficulty):
            difficulty = Difficulty.from_name(difficulty)
        self.spawner.difficulty = difficulty
        self.scores.select_difficulty(difficulty)
        if self.logger is not None:
            self.logger.log_event("difficulty", difficulty=difficulty,
                                  high_score=self.high_score)

    def reset(self, seed: Optional[int] = None) -> Snapshot:
        """
        Start a new game (paused), keeping difficulty and high scores.

        Args:
            seed: New random seed (optional)

        Returns:
            Initial snapshot
        """
        if seed is not None:
            self.spawner.reseed(seed)
        else:
            self.spawner.next_kind = None
        self.arena.reset()
        self.scores.reset()
        self.timer.reset()
        self.paused = True
        self.status = SessionStatus.FALLING
        self.last_time = None
        self._spawn()
        return self.snapshot()

    def __str__(self) -> str:
        """String representation of the game state."""
        return Renderer().render(self.snapshot())
