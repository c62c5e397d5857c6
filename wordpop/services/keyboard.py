"""
Keyboard State

Folds the verdicts of every guess into the best-known state per letter.
"""

from typing import Dict, Iterable

from ..config.game_settings import ALPHABET
from ..models.game import GuessRecord, Verdict, UNUSED


def update_letter_status(letter_status: Dict[str, Verdict], record: GuessRecord) -> None:
    """
    Updates letter status tracking based on one guess result.

    Status can only progress in priority order (ABSENT -> PRESENT -> CORRECT),
    so replaying any history in order reaches the same fixed point.
    """
    for letter, new_status in zip(record.word, record.verdicts):
        current_status = letter_status.get(letter)
        if current_status is None or new_status.rank > current_status.rank:
            letter_status[letter] = new_status


def fold(history: Iterable[GuessRecord]) -> Dict[str, Verdict]:
    """
    Recompute keyboard state from the full guess history.

    Args:
        history: Guess records in submission order

    Returns:
        Dict mapping each letter seen so far to its best verdict; letters
        absent from the mapping are unknown.
    """
    letter_status: Dict[str, Verdict] = {}
    for record in history:
        update_letter_status(letter_status, record)
    return letter_status


def to_letter_status(keyboard: Dict[str, Verdict]) -> Dict[str, str]:
    """Serialize keyboard state for all 26 letters, unknown ones as UNUSED."""
    return {letter: keyboard[letter].value if letter in keyboard else UNUSED for letter in ALPHABET}
