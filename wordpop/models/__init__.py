"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .game import (
    Verdict, GameMode, GameOutcome, RejectionReason, GuessRecord, GameState, SessionFlags, UNUSED
)
from .results import GameResult, GameStats

__all__ = [
    'Verdict', 'GameMode', 'GameOutcome', 'RejectionReason', 'GuessRecord', 'GameState',
    'SessionFlags', 'UNUSED', 'GameResult', 'GameStats'
]
