# -*- coding: utf-8 -*-
"""
2048 sliding-tile puzzle: a pure board engine and the controller that drives it.
"""

from .config import GameConfig, default_config
from .core import Direction, GameState, MoveResult, apply_move, has_moves_left, new_game
from .leaderboard import Leaderboard, ScoreRecorder
from .session import GameSession

__all__ = [
    "Direction",
    "GameConfig",
    "GameSession",
    "GameState",
    "Leaderboard",
    "MoveResult",
    "ScoreRecorder",
    "apply_move",
    "default_config",
    "has_moves_left",
    "new_game",
]
