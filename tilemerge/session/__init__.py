# -*- coding: utf-8 -*-
"""
Controller layer of the 2048 game.

This module provides the `GameSession` class, which holds the current game state, gates input and
reports finished games to score recorders.
"""

from .session import GameSession

__all__ = ["GameSession"]
