"""
Board engine for the 2048 game: sliding, merging, tile spawning and terminal detection.

Every function here is pure. Boards are never modified in place and the only source of
randomness is the ``numpy.random.Generator`` handed in by the caller.
"""

from typing import Mapping

from numpy import all as np_all
from numpy import any as np_any
from numpy import argwhere, asarray, int64, ndarray, zeros, zeros_like
from numpy.random import Generator, default_rng

from tilemerge.core.gamemove import can_move
from tilemerge.core.state import Direction, GameState, MoveResult

# ##>: Standard game constants.
BOARD_SIZE = 4
WINNING_TILE = 2048
INITIAL_TILES = 2

# ##>: Tile spawn probabilities (90% for 2, 10% for 4).
TILE_SPAWN_PROBS: dict[int, float] = {2: 0.9, 4: 0.1}


def merge_row(row: ndarray) -> tuple[int, ndarray]:
    """
    Slide a single row to the left and merge adjacent equal tiles.

    Parameters
    ----------
    row : ndarray
        A 1D array holding one row of the board.

    Returns
    -------
    score : int
        Sum of the values produced by merges.
    merged_row : ndarray
        The row after sliding and merging, padded with zeros to its original length.

    Notes
    -----
    - Zeros are removed first, preserving the order of tiles.
    - The scan runs left to right and never restarts: a tile produced by a merge cannot
      merge again in the same move, so ``[2, 2, 2, 2]`` becomes ``[4, 4, 0, 0]``.
    """
    tiles = row[row != 0]
    result = zeros_like(row)
    score = 0

    i, j = 0, 0
    while i < len(tiles):
        if i + 1 < len(tiles) and tiles[i] == tiles[i + 1]:
            merged = tiles[i] * 2
            result[j] = merged
            score += int(merged)
            i += 2
        else:
            result[j] = tiles[i]
            i += 1
        j += 1

    return score, result


def slide_and_merge(board: ndarray) -> tuple[int, ndarray]:
    """
    Slide every row of the board to the left and merge tiles.

    Parameters
    ----------
    board : ndarray
        The game board as a 2D array.

    Returns
    -------
    score : int
        Total score produced by all the merges.
    updated_board : ndarray
        A new board after the move.
    """
    result = zeros_like(board)
    score = 0

    for i, row in enumerate(board):
        row_score, merged_row = merge_row(row)
        score += row_score
        result[i] = merged_row

    return score, result


def transpose(board: ndarray) -> ndarray:
    """Swap rows and columns. Applying it twice returns the original board."""
    return board.T.copy()


def reverse_rows(board: ndarray) -> ndarray:
    """Reverse the order of cells in each row. Applying it twice returns the original board."""
    return board[:, ::-1].copy()


def _to_left(board: ndarray, direction: Direction) -> ndarray:
    if direction is Direction.UP:
        return transpose(board)
    if direction is Direction.RIGHT:
        return reverse_rows(board)
    if direction is Direction.DOWN:
        return reverse_rows(transpose(board))
    return board


def _from_left(board: ndarray, direction: Direction) -> ndarray:
    if direction is Direction.UP:
        return transpose(board)
    if direction is Direction.RIGHT:
        return reverse_rows(board)
    if direction is Direction.DOWN:
        return transpose(reverse_rows(board))
    return board


def latent_state(board: ndarray, direction: Direction | str) -> tuple[ndarray, int]:
    """
    Compute the board after a move, without adding a new tile.

    Parameters
    ----------
    board : ndarray
        The current game board.
    direction : Direction | str
        One of ``left``, ``up``, ``right`` or ``down``.

    Returns
    -------
    new_board : ndarray
        The board after sliding and merging.
    score : int
        The score produced by this move.

    Raises
    ------
    ValueError
        If the direction is unknown.

    Notes
    -----
    Only the left move is implemented; the other directions transform the board so that
    they become a left move, then undo the transform.
    """
    direction = Direction(direction)
    score, updated = slide_and_merge(_to_left(asarray(board), direction))
    return _from_left(updated, direction), score


def spawn_tile(
    board: ndarray, generator: Generator, probs: Mapping[int, float] = TILE_SPAWN_PROBS
) -> tuple[ndarray, tuple[int, int, int] | None]:
    """
    Add one tile to a uniformly chosen empty cell.

    Parameters
    ----------
    board : ndarray
        The game board. Not modified.
    generator : Generator
        Source of randomness.
    probs : Mapping[int, float], optional
        Probability of each tile value.

    Returns
    -------
    new_board : ndarray
        A copy of the board with the new tile.
    spawned : tuple[int, int, int] | None
        ``(row, col, value)`` of the new tile, or None when the board had no empty cell.
    """
    new_board = asarray(board).copy()
    empty_cells = argwhere(new_board == 0)
    if len(empty_cells) == 0:
        return new_board, None

    row, col = empty_cells[generator.integers(len(empty_cells))]
    value = int(generator.choice(list(probs.keys()), p=list(probs.values())))
    new_board[row, col] = value
    return new_board, (int(row), int(col), value)


def fill_cells(
    board: ndarray, number_tile: int, generator: Generator, probs: Mapping[int, float] = TILE_SPAWN_PROBS
) -> ndarray:
    """
    Add several tiles, each in a distinct empty cell.

    If fewer empty cells than ``number_tile`` are available, every empty cell is filled.
    """
    for _ in range(number_tile):
        board, spawned = spawn_tile(board, generator, probs)
        if spawned is None:
            break
    return board


def has_moves_left(board: ndarray) -> bool:
    """
    Check whether at least one move can change the board.

    Parameters
    ----------
    board : ndarray
        The game board.

    Returns
    -------
    bool
        True if a cell is empty or two orthogonally adjacent cells hold the same value.
    """
    board = asarray(board)
    if not np_all(board != 0):
        return True
    return bool(np_any(board[:-1] == board[1:]) or np_any(board[:, :-1] == board[:, 1:]))


def is_done(board: ndarray) -> bool:
    """True if the game has ended on this board."""
    return not has_moves_left(board)


def has_won(board: ndarray, target: int = WINNING_TILE) -> bool:
    """True if any tile reached the target value."""
    return bool(np_any(asarray(board) >= target))


def from_board(board, score: int = 0) -> GameState:
    """
    Build a state from an existing board, evaluating the terminal condition.

    Raises
    ------
    ValueError
        If the board is not square, holds a cell that is not 0 or a power of two, or the
        score is negative.
    """
    return GameState(board=board, score=score)


def new_game(
    generator: Generator | None = None,
    size: int = BOARD_SIZE,
    initial_tiles: int = INITIAL_TILES,
    probs: Mapping[int, float] = TILE_SPAWN_PROBS,
) -> GameState:
    """
    Create the initial state: an empty board with two random tiles.

    Parameters
    ----------
    generator : Generator, optional
        Source of randomness. A freshly seeded generator is used when omitted.
    size : int, optional
        Side of the square board (default is 4).
    initial_tiles : int, optional
        Number of tiles placed on the empty board (default is 2).
    probs : Mapping[int, float], optional
        Probability of each tile value.

    Returns
    -------
    GameState
        A state with score 0 that is not over.

    Raises
    ------
    ValueError
        If the board cannot hold the initial tiles.
    """
    if size * size < initial_tiles:
        raise ValueError(f'A {size}x{size} board cannot hold {initial_tiles} tiles')
    if generator is None:
        generator = default_rng()

    board = fill_cells(zeros((size, size), dtype=int64), initial_tiles, generator, probs)
    return GameState(board=board, score=0)


def apply_move(
    state: GameState,
    direction: Direction | str,
    generator: Generator | None = None,
    probs: Mapping[int, float] = TILE_SPAWN_PROBS,
) -> MoveResult:
    """
    Apply a move to a game state.

    Parameters
    ----------
    state : GameState
        The current state. Not modified.
    direction : Direction | str
        One of ``left``, ``up``, ``right`` or ``down``.
    generator : Generator, optional
        Source of randomness for the spawned tile.
    probs : Mapping[int, float], optional
        Probability of each tile value.

    Returns
    -------
    MoveResult
        The new state and whether the move changed the board.

    Raises
    ------
    ValueError
        If the direction is unknown.

    Notes
    -----
    - A move that changes nothing returns the same state object with ``moved`` False.
    - After a legal move the score grows by the merge values, one tile is spawned and the
      terminal condition is evaluated on the resulting board.
    """
    direction = Direction(direction)
    if state.is_over:
        return MoveResult(state=state, moved=False)

    rotated = _to_left(state.board, direction)
    if not can_move(rotated):
        return MoveResult(state=state, moved=False)

    if generator is None:
        generator = default_rng()

    score, updated = slide_and_merge(rotated)
    updated, spawned = spawn_tile(_from_left(updated, direction), generator, probs)
    new_state = GameState(board=updated, score=state.score + score)
    return MoveResult(state=new_state, moved=True, score_delta=score, spawned=spawned)
