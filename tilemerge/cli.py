# -*- coding: utf-8 -*-
"""
Play 2048 in the terminal.
"""

import argparse
import logging

from tilemerge.config import GameConfig
from tilemerge.core import Direction, GameState
from tilemerge.leaderboard import Leaderboard
from tilemerge.session import GameSession

# ##: Keyboard bindings.
KEYS = {'w': Direction.UP, 'a': Direction.LEFT, 's': Direction.DOWN, 'd': Direction.RIGHT}


def render(state: GameState) -> str:
    """
    Format the board and score as text.

    Parameters
    ----------
    state: GameState
        State to draw

    Returns
    -------
    str
        One line per board row, followed by the score.
    """
    width = max(4, len(str(state.max_tile)))
    lines = [' '.join(f'{cell:>{width}}' if cell else '.'.rjust(width) for cell in row) for row in state.board.tolist()]
    lines.append(f'Score: {state.score}')
    return '\n'.join(lines)


def render_leaderboard(leaderboard: Leaderboard, limit: int = 10) -> str:
    """Format the ranked view of the leaderboard as text."""
    entries = leaderboard.ranked(limit)
    if not entries:
        return 'No scores yet.'
    return '\n'.join(f'{rank:>3}. {entry.username:<20} {entry.best_score:>8}' for rank, entry in enumerate(entries, 1))


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Play 2048 in the terminal.')
    parser.add_argument('--size', type=int, default=4, help='Side of the square board')
    parser.add_argument('--seed', type=int, default=None, help='Seed of the tile spawn generator')
    parser.add_argument('--target', type=int, default=2048, help='Tile value that counts as a win')
    parser.add_argument('--player', type=str, default='local', help='Player identifier for the leaderboard')
    parser.add_argument('--name', type=str, default='', help='Display name on the leaderboard')
    parser.add_argument('--log-level', type=str, default='WARNING', help='Logging level')
    return parser.parse_args(argv)


def handle_key(session: GameSession, leaderboard: Leaderboard, key: str) -> bool:
    """
    Apply one key press.

    Parameters
    ----------
    session: GameSession
        The running game

    leaderboard: Leaderboard
        Leaderboard shown on demand

    key: str
        Key pressed by the player

    Returns
    -------
    bool
        False when the player asked to quit.
    """
    if session.input_blocked:
        # ##>: Any key dismisses the leaderboard; only 'q' also acts.
        session.close_overlay()
        return key != 'q'

    if key == 'q':
        return False

    if key == 'n':
        session.new_game()
        return True

    if key == 'l':
        session.open_overlay()
        print(render_leaderboard(leaderboard))
        print('Press any key to close the leaderboard.')
        return True

    if key in KEYS:
        won_before = session.has_won
        result = session.move(KEYS[key])
        if not result.moved:
            print('Nothing moved.')
        elif session.has_won and not won_before:
            print(f'You reached {session.config.winning_tile}!')
        if result.finished:
            print(f'Game over! Final score: {result.state.score} (best: {session.best_score})')
            print("Press 'n' for a new game or 'q' to quit.")
        return True

    print("Use 'w', 'a', 's', 'd' to move, 'n' for a new game, 'l' for the leaderboard, 'q' to quit.")
    return True


def main(argv=None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    leaderboard = Leaderboard()
    if args.name:
        leaderboard.set_username(args.player, args.name)

    config = GameConfig(size=args.size, winning_tile=args.target, seed=args.seed)
    session = GameSession(player_id=args.player, config=config, recorders=[leaderboard])
    session.new_game()

    running = True
    while running:
        print(render(session.state))
        try:
            key = input('> ').strip().lower()
        except EOFError:
            break
        running = handle_key(session, leaderboard, key)
    print('Thanks for playing!')


if __name__ == '__main__':
    main()
