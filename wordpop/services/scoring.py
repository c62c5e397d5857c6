"""
Scoring

Converts attempts, elapsed time and the timed-mode flag into points.
"""

from ..config.game_settings import (
    BASE_SCORE, ATTEMPT_PENALTY, MIN_SCORE, TIMED_MULTIPLIER,
    TIME_BONUS_WINDOW_SECONDS, TIME_BONUS_PER_SECOND
)


def score(attempts: int, elapsed_seconds: int, timed_mode: bool, won: bool = True) -> int:
    """
    Compute the points for a finished game.

    The base score starts at 1000 and drops 150 per extra attempt, never below
    100. Timed games multiply the base by 1.5 and add two points for every
    second left of the first three minutes. Lost games always score 0.

    Args:
        attempts: Guesses used, 1..6
        elapsed_seconds: Seconds from start to the winning guess
        timed_mode: Whether the game ran against the clock
        won: Whether the game was won

    Returns:
        int: Points, rounded to the nearest integer
    """
    if not won:
        return 0

    points = max(MIN_SCORE, BASE_SCORE - (attempts - 1) * ATTEMPT_PENALTY)

    if timed_mode:
        points *= TIMED_MULTIPLIER
        points += max(0, TIME_BONUS_WINDOW_SECONDS - elapsed_seconds) * TIME_BONUS_PER_SECOND

    return int(round(points))
