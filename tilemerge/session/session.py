"""
Controller driving the board engine for one player.

The session owns the current ``GameState``, keeps the player's best score, ignores input while
a blocking overlay is open, and notifies score recorders once per finished game.
"""

import logging
from dataclasses import dataclass, field

from numpy.random import Generator

from tilemerge.config import GameConfig, default_config
from tilemerge.core import Direction, GameState, MoveResult, apply_move, has_won, legal_actions, new_game
from tilemerge.leaderboard import ScoreRecorder

_logger = logging.getLogger(__name__)


@dataclass
class GameSession:
    """
    Stateful wrapper around the pure engine.

    Attributes
    ----------
    player_id : str
        Identifier passed to the score recorders.
    config : GameConfig
        Game parameters.
    best_score : int
        Best final score seen for this player.
    recorders : list[ScoreRecorder]
        Collaborators called with ``(player_id, score)`` when a game ends on a new best score.
    """

    player_id: str = 'local'
    config: GameConfig = field(default_factory=default_config)
    best_score: int = 0
    recorders: list[ScoreRecorder] = field(default_factory=list)
    _generator: Generator | None = field(default=None, repr=False)
    _state: GameState | None = field(default=None, repr=False)
    _overlays: int = field(default=0, repr=False)

    def __post_init__(self):
        if self._generator is None:
            self._generator = self.config.make_generator()

    @property
    def state(self) -> GameState:
        """
        Current game state.

        Raises
        ------
        RuntimeError
            If no game was started.
        """
        if self._state is None:
            raise RuntimeError('No game in progress. Call new_game() first.')
        return self._state

    @property
    def is_over(self) -> bool:
        return self.state.is_over

    @property
    def has_won(self) -> bool:
        return has_won(self.state.board, self.config.winning_tile)

    @property
    def input_blocked(self) -> bool:
        """True while at least one overlay is open."""
        return self._overlays > 0

    def add_recorder(self, recorder: ScoreRecorder) -> None:
        self.recorders.append(recorder)

    def open_overlay(self) -> None:
        """Block directional input, e.g. while a dialog is shown."""
        self._overlays += 1

    def close_overlay(self) -> None:
        """Release one overlay. Extra calls are ignored."""
        self._overlays = max(0, self._overlays - 1)

    def new_game(self) -> GameState:
        """Discard the current game and start a new one."""
        self._state = new_game(
            self._generator,
            size=self.config.size,
            initial_tiles=self.config.initial_tiles,
            probs=self.config.tile_spawn_probs,
        )
        _logger.debug('New game started for player %s', self.player_id)
        return self._state

    def load(self, state: GameState) -> GameState:
        """Resume play from an existing state, e.g. one restored by the caller."""
        self._state = state
        _logger.debug('Loaded game for player %s with score %d', self.player_id, state.score)
        return self._state

    def legal_moves(self) -> list[Direction]:
        if self.state.is_over:
            return []
        return legal_actions(self.state.board)

    def move(self, direction: Direction | str) -> MoveResult:
        """
        Forward a directional input to the engine.

        Input is ignored while an overlay is open. When the move ends the game, the best
        score is updated and the recorders are notified.

        Raises
        ------
        ValueError
            If the direction is unknown.
        """
        direction = Direction(direction)
        if self.input_blocked:
            _logger.debug('Ignoring %s: input blocked by an overlay', direction.value)
            return MoveResult(state=self.state, moved=False)

        result = apply_move(self.state, direction, self._generator, self.config.tile_spawn_probs)
        self._state = result.state
        if result.finished:
            self._on_game_over(result.state.score)
        return result

    def _on_game_over(self, score: int) -> None:
        _logger.info('Game over for player %s with score %d', self.player_id, score)
        if score <= self.best_score:
            return

        self.best_score = score
        for recorder in self.recorders:
            try:
                recorder.record(self.player_id, score)
            except Exception:
                # ##>: A failing collaborator must not affect the game.
                _logger.exception('Score recorder %r failed for player %s', recorder, self.player_id)
