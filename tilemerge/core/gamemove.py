"""
Move legality for the 2048 game, computed on the board without transforming it.
"""

from numpy import asarray, ndarray

from tilemerge.core.state import Direction


def can_move(board: ndarray) -> bool:
    """
    Check if a left move would change the board.

    Notes
    -----
    A left move changes the board if an empty cell sits left of a tile, or if two adjacent
    cells hold the same non-zero value.
    """
    board = asarray(board)
    left_cols, right_cols = board[:, :-1], board[:, 1:]
    if ((left_cols == 0) & (right_cols != 0)).any():
        return True
    return bool(((left_cols != 0) & (left_cols == right_cols)).any())


def legal_actions_mask(board: ndarray) -> tuple[bool, bool, bool, bool]:
    """
    Compute which directions would change the board.

    Parameters
    ----------
    board : ndarray
        The game board.

    Returns
    -------
    tuple[bool, bool, bool, bool]
        Mask for (left, up, right, down).
    """
    board = asarray(board)
    left_cols, right_cols = board[:, :-1], board[:, 1:]
    top_rows, bottom_rows = board[:-1, :], board[1:, :]

    # ##>: Merges are symmetric, slides are not.
    h_merge = ((left_cols != 0) & (left_cols == right_cols)).any()
    v_merge = ((top_rows != 0) & (top_rows == bottom_rows)).any()

    return (
        bool(h_merge or ((left_cols == 0) & (right_cols != 0)).any()),
        bool(v_merge or ((top_rows == 0) & (bottom_rows != 0)).any()),
        bool(h_merge or ((right_cols == 0) & (left_cols != 0)).any()),
        bool(v_merge or ((bottom_rows == 0) & (top_rows != 0)).any()),
    )


def legal_actions(board: ndarray) -> list[Direction]:
    """Directions that would change the board, in (left, up, right, down) order."""
    mask = legal_actions_mask(board)
    return [direction for direction, legal in zip(Direction, mask) if legal]


def illegal_actions(board: ndarray) -> list[Direction]:
    """Directions that would leave the board unchanged."""
    mask = legal_actions_mask(board)
    return [direction for direction, legal in zip(Direction, mask) if not legal]
