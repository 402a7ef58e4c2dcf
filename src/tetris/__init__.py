"""Falling-block game engine."""
from .shapes import SHAPES, PIECE_NAMES, create_piece, get_piece_value, get_piece_kind
from .matrix import rotate, create_matrix, clone_matrix, CLOCKWISE, COUNTER_CLOCKWISE
from .piece import ActivePiece
from .arena import Arena, ClearResult
from .controller import PieceController
from .spawner import Difficulty, Spawner
from .storage import HighScoreStore, InMemoryStore, JsonFileStore, high_score_key
from .scoring import ScoreKeeper
from .gravity import DropTimer
from .config import GameConfig, load_config
from .renderer import Renderer
from .session import GameSession, Command, GameEvent, SessionStatus, DropResult, Snapshot

__all__ = [
    "SHAPES",
    "PIECE_NAMES",
    "create_piece",
    "get_piece_value",
    "get_piece_kind",
    "rotate",
    "create_matrix",
    "clone_matrix",
    "CLOCKWISE",
    "COUNTER_CLOCKWISE",
    "ActivePiece",
    "Arena",
    "ClearResult",
    "PieceController",
    "Difficulty",
    "Spawner",
    "HighScoreStore",
    "InMemoryStore",
    "JsonFileStore",
    "high_score_key",
    "ScoreKeeper",
    "DropTimer",
    "GameConfig",
    "load_config",
    "Renderer",
    "GameSession",
    "Command",
    "GameEvent",
    "SessionStatus",
    "DropResult",
    "Snapshot",
]
