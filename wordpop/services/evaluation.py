"""
Guess Evaluation

Scores a guess against the target word with the duplicate-letter rules of the
reference game.
"""

from collections import Counter
from typing import List, Optional

from ..models.game import GuessRecord, Verdict


def evaluate(guess: str, target: str) -> List[Verdict]:
    """
    Implements the authentic Wordle letter evaluation algorithm.

    Exact matches are marked first and consume one occurrence of their letter.
    The remaining positions are then scanned left to right: a letter is PRESENT
    while unconsumed occurrences of it remain in the target, ABSENT otherwise.
    A letter never earns more CORRECT/PRESENT marks than the target contains.

    Args:
        guess: The guessed word (same length as target)
        target: The hidden word

    Returns:
        List[Verdict]: One verdict per position
    """
    guess = guess.upper()
    target = target.upper()

    result: List[Optional[Verdict]] = [None] * len(target)
    remaining = Counter()

    # First pass: exact position matches
    for i, (guess_letter, target_letter) in enumerate(zip(guess, target)):
        if guess_letter == target_letter:
            result[i] = Verdict.CORRECT
        else:
            remaining[target_letter] += 1

    # Second pass: misplaced letters, limited by what the target still has
    for i, guess_letter in enumerate(guess):
        if result[i] is not None:
            continue
        if remaining[guess_letter] > 0:
            result[i] = Verdict.PRESENT
            remaining[guess_letter] -= 1
        else:
            result[i] = Verdict.ABSENT

    return result


def build_guess_record(guess: str, target: str) -> GuessRecord:
    """Evaluate a guess and freeze it together with its verdicts."""
    normalized = guess.upper()
    return GuessRecord(word=normalized, verdicts=tuple(evaluate(normalized, target)))
