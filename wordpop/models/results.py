"""
Result Data Models

Contains the finished-game record and the aggregate player statistics.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

GUESS_DISTRIBUTION_KEYS = ("1", "2", "3", "4", "5", "6")


@dataclass
class GameResult:
    """One finished game as handed to the persistence collaborator."""
    id: str
    word: str
    attempts: int
    time_elapsed: int
    points: int
    is_win: bool
    is_challenge_mode: bool = False
    played_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'word': self.word,
            'attempts': self.attempts,
            'timeElapsed': self.time_elapsed,
            'points': self.points,
            'isWin': self.is_win,
            'isChallengeMode': self.is_challenge_mode,
            'playedAt': self.played_at.isoformat() if self.played_at else None,
        }


def _empty_distribution() -> Dict[str, int]:
    return {key: 0 for key in GUESS_DISTRIBUTION_KEYS}


@dataclass
class GameStats:
    """Aggregate statistics across all saved results."""
    total_games: int = 0
    total_wins: int = 0
    current_streak: int = 0
    max_streak: int = 0
    total_points: int = 0
    guess_distribution: Dict[str, int] = field(default_factory=_empty_distribution)
    last_played: Optional[datetime] = None

    def apply(self, result: GameResult) -> None:
        """Fold one saved result into the running totals."""
        self.total_games += 1
        self.total_points += result.points

        if result.is_win:
            self.total_wins += 1
            self.current_streak += 1
            key = str(result.attempts)
            if key in self.guess_distribution:
                self.guess_distribution[key] += 1
        else:
            self.current_streak = 0

        self.max_streak = max(self.max_streak, self.current_streak)
        self.last_played = result.played_at

    @property
    def win_rate(self) -> float:
        if not self.total_games:
            return 0.0
        return round(self.total_wins / self.total_games * 100, 1)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'totalGames': self.total_games,
            'totalWins': self.total_wins,
            'currentStreak': self.current_streak,
            'maxStreak': self.max_streak,
            'totalPoints': self.total_points,
            'guessDistribution': dict(self.guess_distribution),
            'winRate': self.win_rate,
            'lastPlayed': self.last_played.isoformat() if self.last_played else None,
        }
