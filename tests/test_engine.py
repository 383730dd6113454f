"""
Tests for the board engine: game creation, move application, tile spawning and game termination.
"""

from unittest import TestCase, main

import numpy as np

from tilemerge.core.gameboard import (
    apply_move,
    fill_cells,
    from_board,
    latent_state,
    new_game,
    spawn_tile,
)
from tilemerge.core.state import Direction, GameState, MoveResult

CHECKERBOARD = [[2, 4, 2, 4], [4, 2, 4, 2], [2, 4, 2, 4], [4, 2, 4, 2]]

# ##>: One left move merges 8+8 and leaves a single empty cell at (3, 3).
NEARLY_OVER = [[2, 4, 2, 4], [4, 2, 4, 2], [2, 4, 2, 4], [4, 2, 8, 8]]


class TestNewGame(TestCase):
    """Test the initial state."""

    def test_two_tiles(self):
        """New game has exactly two tiles, each 2 or 4."""
        state = new_game(np.random.default_rng(42))

        self.assertEqual(np.count_nonzero(state.board), 2)
        tiles = state.board[state.board != 0]
        self.assertTrue(np.all(np.isin(tiles, [2, 4])))
        self.assertEqual(state.score, 0)
        self.assertFalse(state.is_over)
        self.assertEqual(state.board.shape, (4, 4))

    def test_seed_reproducibility(self):
        """Same seed produces identical initial boards."""
        first = new_game(np.random.default_rng(3))
        second = new_game(np.random.default_rng(3))
        np.testing.assert_array_equal(first.board, second.board)

    def test_without_generator(self):
        state = new_game()
        self.assertEqual(np.count_nonzero(state.board), 2)

    def test_board_too_small(self):
        """Board that cannot hold the initial tiles is rejected."""
        with self.assertRaises(ValueError):
            new_game(np.random.default_rng(0), size=1)

    def test_board_is_read_only(self):
        """States are values: their board cannot be written."""
        state = new_game(np.random.default_rng(0))
        with self.assertRaises(ValueError):
            state.board[0, 0] = 2


class TestSpawn(TestCase):
    """Test tile spawning."""

    def test_spawn_on_full_board_is_noop(self):
        """No empty cell means nothing is spawned, without error."""
        board = np.array(CHECKERBOARD)
        new_board, spawned = spawn_tile(board, np.random.default_rng(0))

        self.assertIsNone(spawned)
        np.testing.assert_array_equal(new_board, board)

    def test_spawn_in_empty_cell(self):
        """Spawned tile lands in a cell that was empty."""
        board = np.array([[2, 2, 2, 2], [2, 2, 2, 2], [2, 2, 0, 2], [2, 2, 2, 2]])
        new_board, spawned = spawn_tile(board, np.random.default_rng(0))

        self.assertEqual(spawned[:2], (2, 2))
        self.assertIn(spawned[2], (2, 4))
        self.assertEqual(new_board[2, 2], spawned[2])
        self.assertEqual(board[2, 2], 0)

    def test_spawn_distribution(self):
        """Roughly nine tiles out of ten are 2."""
        generator = np.random.default_rng(1234)
        board = np.zeros((4, 4), dtype=int)
        values = [spawn_tile(board, generator)[1][2] for _ in range(5000)]

        twos = values.count(2) / len(values)
        self.assertGreater(twos, 0.87)
        self.assertLess(twos, 0.93)

    def test_spawn_position_is_uniform(self):
        """Every empty cell can be chosen."""
        generator = np.random.default_rng(99)
        board = np.zeros((4, 4), dtype=int)
        cells = {spawn_tile(board, generator)[1][:2] for _ in range(2000)}
        self.assertEqual(len(cells), 16)

    def test_fill_cells_stops_when_full(self):
        board = np.array([[2, 4], [0, 8]])
        filled = fill_cells(board, 3, np.random.default_rng(0))
        self.assertEqual(np.count_nonzero(filled), 4)


class TestApplyMove(TestCase):
    """Test move application on game states."""

    def test_merge_scenario(self):
        """Two 2s merge into a 4, score grows by 4 and one tile spawns elsewhere."""
        state = from_board([[2, 2, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        pre_spawn, delta = latent_state(state.board, Direction.LEFT)

        expected = np.zeros((4, 4), dtype=int)
        expected[0, 0] = 4
        np.testing.assert_array_equal(pre_spawn, expected)
        self.assertEqual(delta, 4)

        result = apply_move(state, Direction.LEFT, np.random.default_rng(5))

        self.assertTrue(result.moved)
        self.assertEqual(result.score_delta, 4)
        self.assertEqual(result.state.score, 4)
        self.assertEqual(result.state.board[0, 0], 4)
        self.assertEqual(np.count_nonzero(result.state.board), 2)

        row, col, value = result.spawned
        self.assertNotEqual((row, col), (0, 0))
        self.assertEqual(result.state.board[row, col], value)
        self.assertFalse(result.state.is_over)

    def test_noop_move(self):
        """A move that changes nothing returns the same state."""
        state = from_board([[2, 4, 8, 16], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]], score=36)
        result = apply_move(state, 'left', np.random.default_rng(0))

        self.assertFalse(result.moved)
        self.assertIs(result.state, state)
        self.assertEqual(result.state.score, 36)
        self.assertEqual(result.score_delta, 0)
        self.assertIsNone(result.spawned)
        self.assertFalse(result.finished)

    def test_original_state_untouched(self):
        """Moves never mutate their input."""
        state = from_board([[2, 2, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        before = state.board.copy()
        apply_move(state, Direction.RIGHT, np.random.default_rng(0))
        np.testing.assert_array_equal(state.board, before)
        self.assertEqual(state.score, 0)

    def test_moved_matches_board_change(self):
        """A move is applied exactly when sliding changes the board."""
        generator = np.random.default_rng(17)
        for _ in range(200):
            state = from_board(generator.choice([0, 0, 2, 4, 8], size=(4, 4)))
            for direction in Direction:
                pre_spawn, _ = latent_state(state.board, direction)
                result = apply_move(state, direction, generator)
                self.assertEqual(result.moved, not np.array_equal(pre_spawn, state.board))

    def test_unknown_direction(self):
        state = from_board(np.zeros((4, 4), dtype=int))
        with self.assertRaises(ValueError):
            apply_move(state, 'sideways')

    def test_mass_and_score_invariants(self):
        """Merges conserve the tile sum; every legal move adds exactly one tile of 2 or 4."""
        generator = np.random.default_rng(2024)
        state = new_game(generator)
        directions = list(Direction)

        for _ in range(500):
            if state.is_over:
                break
            direction = directions[generator.integers(4)]
            pre_spawn, delta = latent_state(state.board, direction)
            result = apply_move(state, direction, generator)
            if not result.moved:
                self.assertIs(result.state, state)
                continue

            spawned_value = result.spawned[2]
            self.assertIn(spawned_value, (2, 4))
            self.assertEqual(int(result.state.board.sum()), int(state.board.sum()) + spawned_value)
            self.assertEqual(result.score_delta, delta)
            self.assertEqual(result.state.score, state.score + delta)
            self.assertEqual(np.count_nonzero(result.state.board), np.count_nonzero(pre_spawn) + 1)
            state = result.state

    def test_deterministic_replay(self):
        """Same seed and same inputs produce the same sequence of states."""
        moves = ['left', 'up', 'right', 'down'] * 10

        def play(seed: int) -> list:
            generator = np.random.default_rng(seed)
            state = new_game(generator)
            history = [state.board.tolist()]
            for move in moves:
                state = apply_move(state, move, generator).state
                history.append((state.board.tolist(), state.score))
            return history

        self.assertEqual(play(11), play(11))


class TestGameOver(TestCase):
    """Test detection of the end of the game."""

    def test_terminal_board_without_move(self):
        """A terminal board is over as soon as the state is built."""
        state = from_board(CHECKERBOARD)
        self.assertTrue(state.is_over)

    def test_no_direction_moves_terminal_board(self):
        """Once over, every direction is a no-op."""
        state = from_board(CHECKERBOARD, score=500)
        for direction in Direction:
            result = apply_move(state, direction, np.random.default_rng(0))
            self.assertFalse(result.moved)
            self.assertIs(result.state, state)
            self.assertFalse(result.finished)

    def test_game_over_edge(self):
        """The move that fills the board without merges left ends the game."""
        state = from_board(NEARLY_OVER, score=100)
        self.assertFalse(state.is_over)

        result = apply_move(state, Direction.LEFT, np.random.default_rng(0), probs={2: 1.0})

        np.testing.assert_array_equal(result.state.board[3], np.array([4, 2, 16, 2]))
        self.assertEqual(result.state.score, 116)
        self.assertTrue(result.state.is_over)
        self.assertTrue(result.finished)

        # ##>: The edge is reported once; later moves are no-ops.
        again = apply_move(result.state, Direction.RIGHT, np.random.default_rng(0))
        self.assertFalse(again.finished)
        self.assertIs(again.state, result.state)

    def test_game_continues_when_spawn_creates_pair(self):
        """A spawned tile equal to its neighbour keeps the game alive."""
        state = from_board(NEARLY_OVER)
        result = apply_move(state, Direction.LEFT, np.random.default_rng(0), probs={4: 1.0})

        self.assertTrue(result.moved)
        self.assertFalse(result.state.is_over)
        self.assertFalse(result.finished)


class TestGameState(TestCase):
    """Test the state value type."""

    def test_rejects_non_square_board(self):
        with self.assertRaises(ValueError):
            GameState(board=np.zeros((3, 4), dtype=int))

    def test_rejects_negative_score(self):
        with self.assertRaises(ValueError):
            GameState(board=np.zeros((4, 4), dtype=int), score=-1)

    def test_rejects_invalid_tiles(self):
        """Cells are 0 or powers of two of at least 2."""
        invalid_boards = [
            [[3, 3], [0, 0]],
            [[2, 0], [0, -2]],
            [[1, 0], [0, 0]],
            [[2, 6], [0, 0]],
            [[2.5, 0], [0, 0]],
        ]
        for board in invalid_boards:
            with self.assertRaises(ValueError):
                from_board(board)

    def test_accepts_integral_floats(self):
        state = GameState(board=np.array([[2.0, 0.0], [0.0, 4096.0]]))
        self.assertEqual(state.board.dtype, np.int64)
        self.assertEqual(state.max_tile, 4096)

    def test_terminal_board_built_directly_is_over(self):
        """The terminal condition holds even when the caller leaves is_over unset."""
        state = GameState(board=np.array(CHECKERBOARD))
        self.assertTrue(state.is_over)

        result = apply_move(state, Direction.LEFT, np.random.default_rng(0))
        self.assertFalse(result.moved)
        self.assertTrue(result.state.is_over)

    def test_is_over_never_cleared(self):
        """A state marked over stays over."""
        state = GameState(board=np.array([[2, 0], [0, 0]]), is_over=True)
        self.assertTrue(state.is_over)
        self.assertFalse(apply_move(state, 'right').moved)

    def test_to_dict(self):
        state = from_board([[2, 0], [0, 4]], score=8)
        self.assertEqual(state.to_dict(), {'board': [[2, 0], [0, 4]], 'score': 8, 'is_over': False})
        self.assertEqual(state.size, 2)
        self.assertEqual(state.max_tile, 4)

    def test_move_result_finished(self):
        state = from_board(CHECKERBOARD)
        self.assertTrue(MoveResult(state=state, moved=True).finished)
        self.assertFalse(MoveResult(state=state, moved=False).finished)


if __name__ == "__main__":
    main()
