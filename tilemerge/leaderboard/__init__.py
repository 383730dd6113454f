# -*- coding: utf-8 -*-
"""
Score collaborators of the 2048 game: the recorder contract and an in-process leaderboard.
"""

from .ranking import Leaderboard, LeaderboardEntry, default_username
from .recorder import ScoreRecorder

__all__ = ["Leaderboard", "LeaderboardEntry", "ScoreRecorder", "default_username"]
