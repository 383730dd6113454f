"""
In-process leaderboard: best score per player and a view ranked by score.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime


def _now() -> datetime:
    return datetime.now(tz=UTC)


def default_username(player_id: str) -> str:
    """Display name given to a player who did not choose one."""
    return f'Player {player_id[:4]}'


@dataclass(frozen=True)
class LeaderboardEntry:
    """One row of the leaderboard."""

    player_id: str
    username: str
    best_score: int
    updated_at: datetime

    def to_dict(self) -> dict:
        return {
            'player_id': self.player_id,
            'username': self.username,
            'best_score': self.best_score,
            'updated_at': self.updated_at.isoformat(),
        }


@dataclass
class Leaderboard:
    """
    Best score of every player.

    Recording a score lower than or equal to the stored best leaves the entry untouched.
    Implements the ``ScoreRecorder`` protocol.
    """

    _entries: dict[str, LeaderboardEntry] = field(default_factory=dict, repr=False)
    _usernames: dict[str, str] = field(default_factory=dict, repr=False)

    def __len__(self) -> int:
        return len(self._entries)

    def set_username(self, player_id: str, username: str) -> None:
        """Change the display name of a player, including any existing entry."""
        username = username.strip() or default_username(player_id)
        self._usernames[player_id] = username
        entry = self._entries.get(player_id)
        if entry is not None:
            self._entries[player_id] = LeaderboardEntry(
                player_id=player_id, username=username, best_score=entry.best_score, updated_at=entry.updated_at
            )

    def username(self, player_id: str) -> str:
        return self._usernames.get(player_id, default_username(player_id))

    def best_score(self, player_id: str) -> int:
        """Best recorded score of a player, 0 if none."""
        entry = self._entries.get(player_id)
        return entry.best_score if entry is not None else 0

    def record(self, player_id: str, score: int) -> bool:
        """
        Record a final score.

        Returns
        -------
        bool
            True if the score became the player's new best.

        Raises
        ------
        ValueError
            If the score is negative.
        """
        if score < 0:
            raise ValueError(f'Score must be non-negative, got {score}')
        if player_id in self._entries and score <= self._entries[player_id].best_score:
            return False

        self._entries[player_id] = LeaderboardEntry(
            player_id=player_id, username=self.username(player_id), best_score=score, updated_at=_now()
        )
        return True

    def ranked(self, limit: int | None = None) -> list[LeaderboardEntry]:
        """
        Entries sorted by best score, highest first.

        Ties are broken by the earliest time the score was reached.
        """
        entries = sorted(self._entries.values(), key=lambda entry: (-entry.best_score, entry.updated_at))
        return entries if limit is None else entries[:limit]

    def rank_of(self, player_id: str) -> int | None:
        """1-based position of a player in the ranked view, None if absent."""
        for position, entry in enumerate(self.ranked(), start=1):
            if entry.player_id == player_id:
                return position
        return None
