"""
Configuration of a 2048 game.
"""

from dataclasses import dataclass, field

from numpy.random import PCG64DXSM, Generator, default_rng

from tilemerge.core.gameboard import BOARD_SIZE, INITIAL_TILES, TILE_SPAWN_PROBS, WINNING_TILE


@dataclass
class GameConfig:
    """
    Parameters of a game.

    Attributes
    ----------
    size : int
        Side of the square board.
    winning_tile : int
        Tile value that counts as a win. Reaching it does not end the game.
    initial_tiles : int
        Number of tiles on a new board.
    tile_spawn_probs : dict[int, float]
        Probability of each spawned tile value.
    seed : int | None
        Seed of the tile spawn generator. None draws fresh entropy.
    """

    size: int = BOARD_SIZE
    winning_tile: int = WINNING_TILE
    initial_tiles: int = INITIAL_TILES
    tile_spawn_probs: dict[int, float] = field(default_factory=lambda: dict(TILE_SPAWN_PROBS))
    seed: int | None = None

    def __post_init__(self):
        if self.size < 2:
            raise ValueError(f'Board size must be at least 2, got {self.size}')
        total = sum(self.tile_spawn_probs.values())
        if abs(total - 1.0) > 1e-9:
            raise ValueError(f'Tile spawn probabilities must sum to 1, got {total}')

    def make_generator(self) -> Generator:
        """Create the random generator used to spawn tiles."""
        return default_rng(PCG64DXSM(self.seed))


def default_config(**overrides) -> GameConfig:
    """Standard 4x4 game, with optional overrides."""
    return GameConfig(**overrides)
