"""
Value types exchanged with the board engine.
"""

from dataclasses import dataclass
from enum import Enum

from numpy import any as np_any
from numpy import asarray, floor, int64, ndarray


class Direction(str, Enum):
    """
    Direction of a move.

    Members compare equal to their string value, so ``'left'`` and ``Direction.LEFT`` are
    interchangeable at call sites.
    """

    LEFT = 'left'
    UP = 'up'
    RIGHT = 'right'
    DOWN = 'down'


def _frozen_board(board) -> ndarray:
    raw = asarray(board)
    if raw.dtype.kind not in 'iu' and np_any(raw != floor(raw)):
        raise ValueError('Board cells must be integers')

    frozen = raw.astype(int64)
    if frozen.ndim != 2 or frozen.shape[0] != frozen.shape[1]:
        raise ValueError(f'Board must be a square grid, got shape {frozen.shape}')

    # ##>: Tiles are powers of two, at least 2.
    tiles = frozen[frozen != 0]
    if np_any(tiles < 2) or np_any((tiles & (tiles - 1)) != 0):
        raise ValueError(f'Board cells must be 0 or a power of two >= 2, got {sorted(set(tiles.tolist()))}')

    frozen.flags.writeable = False
    return frozen


@dataclass(frozen=True, eq=False)
class GameState:
    """
    Complete state of one game.

    Attributes
    ----------
    board : ndarray
        Square grid of tile values, ``0`` for an empty cell. Stored read-only.
    score : int
        Running sum of every merge value produced so far.
    is_over : bool
        True once no legal move exists. Never reverts within a game, and always true for a
        board without moves left.
    """

    board: ndarray
    score: int = 0
    is_over: bool = False

    def __post_init__(self):
        object.__setattr__(self, 'board', _frozen_board(self.board))
        if self.score < 0:
            raise ValueError(f'Score must be non-negative, got {self.score}')

        # ##>: A terminal board is over whatever the caller passed.
        from tilemerge.core.gameboard import is_done

        object.__setattr__(self, 'is_over', bool(self.is_over) or is_done(self.board))

    @property
    def size(self) -> int:
        return self.board.shape[0]

    @property
    def max_tile(self) -> int:
        return int(self.board.max())

    def to_dict(self) -> dict:
        """Plain python view of the state, suitable for JSON."""
        return {'board': self.board.tolist(), 'score': int(self.score), 'is_over': bool(self.is_over)}


@dataclass(frozen=True)
class MoveResult:
    """
    Outcome of ``apply_move``.

    Attributes
    ----------
    state : GameState
        The new state, or the very same object when the move was a no-op.
    moved : bool
        Whether any cell changed.
    score_delta : int
        Sum of the merge values produced by the move.
    spawned : tuple[int, int, int] | None
        ``(row, col, value)`` of the tile added after the move, if any.
    """

    state: GameState
    moved: bool
    score_delta: int = 0
    spawned: tuple[int, int, int] | None = None

    @property
    def finished(self) -> bool:
        """True only on the move that ended the game."""
        return self.moved and self.state.is_over
