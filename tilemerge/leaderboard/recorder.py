"""
Contract of the collaborators notified when a game ends with a new best score.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class ScoreRecorder(Protocol):
    """Anything able to store a final score for a player."""

    def record(self, player_id: str, score: int) -> None:
        """Store ``score`` for ``player_id``. May raise; callers isolate failures."""
