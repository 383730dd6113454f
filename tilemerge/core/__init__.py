# -*- coding: utf-8 -*-
"""
Pure board engine for the 2048 game.

It includes the game state value types, sliding and merging of tiles, tile spawning, terminal
detection and move legality predicates.
"""

from .gameboard import (
    BOARD_SIZE,
    INITIAL_TILES,
    TILE_SPAWN_PROBS,
    WINNING_TILE,
    apply_move,
    fill_cells,
    from_board,
    has_moves_left,
    has_won,
    is_done,
    latent_state,
    merge_row,
    new_game,
    reverse_rows,
    slide_and_merge,
    spawn_tile,
    transpose,
)
from .gamemove import can_move, illegal_actions, legal_actions, legal_actions_mask
from .state import Direction, GameState, MoveResult

__all__ = [
    "BOARD_SIZE",
    "INITIAL_TILES",
    "TILE_SPAWN_PROBS",
    "WINNING_TILE",
    "Direction",
    "GameState",
    "MoveResult",
    "apply_move",
    "can_move",
    "fill_cells",
    "from_board",
    "has_moves_left",
    "has_won",
    "illegal_actions",
    "is_done",
    "latent_state",
    "legal_actions",
    "legal_actions_mask",
    "merge_row",
    "new_game",
    "reverse_rows",
    "slide_and_merge",
    "spawn_tile",
    "transpose",
]
