"""
Game Data Models

Contains all game-related data structures and enums.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple


class Verdict(Enum):
    """Per-position feedback for a scored guess."""
    CORRECT = "CORRECT"
    PRESENT = "PRESENT"
    ABSENT = "ABSENT"

    @property
    def rank(self) -> int:
        """Ordering used by the keyboard: CORRECT > PRESENT > ABSENT."""
        return _VERDICT_RANKS[self]


_VERDICT_RANKS = {Verdict.ABSENT: 1, Verdict.PRESENT: 2, Verdict.CORRECT: 3}

# Keyboard value for letters no guess has touched yet
UNUSED = "UNUSED"


class GameMode(Enum):
    """How a session's target word is drawn."""
    RANDOM = "random"
    DAILY = "daily"
    DAILY_CHALLENGE = "daily-challenge"
    CATEGORY = "category"

    @property
    def is_daily(self) -> bool:
        return self in (GameMode.DAILY, GameMode.DAILY_CHALLENGE)


class GameOutcome(Enum):
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


class RejectionReason(Enum):
    """Reason codes reported to the caller for a rejected guess."""
    WRONG_LENGTH = "WRONG_LENGTH"
    NOT_IN_DICTIONARY = "NOT_IN_DICTIONARY"
    GAME_OVER = "GAME_OVER"


@dataclass(frozen=True)
class GuessRecord:
    """An attempted word plus its computed verdicts. Immutable once created."""
    word: str
    verdicts: Tuple[Verdict, ...]

    def to_pairs(self) -> List[Tuple[str, str]]:
        """Letter/verdict pairs as strings for JSON serialization."""
        return [(letter, verdict.value) for letter, verdict in zip(self.word, self.verdicts)]

    @property
    def is_solved(self) -> bool:
        return all(verdict is Verdict.CORRECT for verdict in self.verdicts)


@dataclass
class GameState:
    """Client-facing snapshot of a session."""
    game_id: str
    mode: str
    current_round: int
    max_rounds: int
    remaining_attempts: int
    outcome: str
    game_over: bool
    won: bool
    guesses: List[str]
    guess_results: List[List[Tuple[str, str]]]  # Letter status as string for JSON serialization
    letter_status: Dict[str, str]
    timed: bool = False
    blind: bool = False
    time_remaining: Optional[int] = None
    ended_by_time: bool = False
    score: int = 0
    category: Optional[str] = None
    answer: Optional[str] = None  # Only included when game is over


@dataclass
class SessionFlags:
    """Mode flags a session is created with."""
    timed: bool = False
    daily: bool = False
    blind: bool = False
