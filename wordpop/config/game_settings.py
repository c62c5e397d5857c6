"""
Game Configuration Constants Module

This module defines the game rules, scoring constants and the bundled word data.
All game parameters are centralized here so rule changes never touch the engine.

"""

import json
import os
from collections import Counter
from typing import Dict, FrozenSet, List, Final

# Core Game Configuration Constants
WORD_LENGTH: Final[int] = 5
"""
Number of letters in every guess and every target word.
"""

MAX_ROUNDS: Final[int] = 6
"""
Maximum number of guess attempts allowed per game.
"""

TIME_LIMIT_SECONDS: Final[int] = 180
"""
Countdown length for timed (challenge) games.
"""

# Scoring constants
BASE_SCORE: Final[int] = 1000
ATTEMPT_PENALTY: Final[int] = 150
MIN_SCORE: Final[int] = 100
TIMED_MULTIPLIER: Final[float] = 1.5
TIME_BONUS_WINDOW_SECONDS: Final[int] = 180
TIME_BONUS_PER_SECOND: Final[int] = 2

VOWELS: Final[FrozenSet[str]] = frozenset("AEIOU")
ALPHABET: Final[str] = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# Obscure scrabble entries and archaic forms kept out of play
DEFAULT_BLOCKLIST: Final[FrozenSet[str]] = frozenset([
    "ERVIL", "EMPTS", "QOPHS", "QADIS", "KUFIS", "AAHED", "AARGH",
    "ABEAM", "ABELE", "ABOON", "ABRIN", "ABRIS", "ABSIT", "ABUNA",
    "ACARI", "ACCAD", "ACCOY", "ACYLS", "ADEEM", "ADUNC", "ADUST",
    "AFALD", "AFEAR", "AFLAJ", "AFRIT", "AGAZE", "AGENE", "AHENT",
])

# Force-included words that fail the vowel or pattern filters
DEFAULT_ALLOWLIST: Final[FrozenSet[str]] = frozenset([
    "NYMPH", "LYMPH", "PSYCH", "STYLE", "TYPAL", "SYLPH",
])

DEFAULT_CATEGORY: Final[str] = "nature"

_CONFIG_DIR = os.path.dirname(os.path.abspath(__file__))


def validate_word_list_integrity(word_list: List[str], source: str = "word list") -> bool:
    """
    Check that a word list is usable by the game.

    Every entry must be exactly WORD_LENGTH uppercase letters and appear once.

    Raises:
        ValueError: Naming the first offending entry, or every duplicate
    """
    if not word_list:
        raise ValueError(f"{source} cannot be empty")

    for index, word in enumerate(word_list):
        if not isinstance(word, str) or len(word) != WORD_LENGTH or not word.isalpha() or not word.isupper():
            raise ValueError(f"{source}[{index}] {word!r} is not {WORD_LENGTH} uppercase letters")

    duplicates = sorted(word for word, count in Counter(word_list).items() if count > 1)
    if duplicates:
        raise ValueError(f"{source} has duplicate entries: {duplicates}")

    return True


def _read_json(filename: str):
    json_file_path = os.path.join(_CONFIG_DIR, filename)
    try:
        with open(json_file_path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {filename}: {e}") from e


def _load_word_list(filename: str) -> List[str]:
    """
    Load and validate a JSON array of words stored next to this module.

    Raises:
        FileNotFoundError: If the file is missing
        ValueError: If the file is malformed or holds an invalid word
    """
    word_list = _read_json(filename)
    if not isinstance(word_list, list):
        raise ValueError(f"{filename} must contain an array of words")

    words = [word.upper() if isinstance(word, str) else word for word in word_list]
    validate_word_list_integrity(words, filename)
    return words


def _load_categories(filename: str) -> Dict[str, List[str]]:
    """Load the category -> words mapping, uppercasing every word."""
    raw = _read_json(filename)
    if not isinstance(raw, dict) or not raw:
        raise ValueError(f"{filename} must contain a non-empty object of categories")

    return {
        name.lower(): [word.upper() for word in words if len(word) == WORD_LENGTH and word.isalpha()]
        for name, words in raw.items()
    }


# Curated word database loaded from JSON files
ANSWER_WORDS: Final[List[str]] = _load_word_list('answers.json')
GUESS_WORDS: Final[List[str]] = _load_word_list('guesses.json')
DAILY_CHALLENGE_WORDS: Final[List[str]] = _load_word_list('daily_challenge.json')
WORD_CATEGORIES: Final[Dict[str, List[str]]] = _load_categories('categories.json')


def get_word_statistics(word_list: List[str] = ANSWER_WORDS) -> dict:
    """Letter and vowel statistics for a word list, used when curating the bundled data."""
    if not word_list:
        return {"error": "Word list is empty"}

    letters = Counter(char for word in word_list for char in word)
    vowel_counts = [sum(1 for char in word if char in VOWELS) for word in word_list]

    return {
        "total_words": len(word_list),
        "avg_vowel_count": round(sum(vowel_counts) / len(word_list), 2),
        "without_vowels": vowel_counts.count(0),
        "letter_frequency": dict(letters),
        "most_common_letters": letters.most_common(5),
    }


if __name__ == "__main__":
    try:
        for name, words in (("answers", ANSWER_WORDS), ("guesses", GUESS_WORDS),
                            ("daily challenge", DAILY_CHALLENGE_WORDS)):
            print(f" {name}: {len(words)} words")
        print(f" Answer statistics: {get_word_statistics()}")
    except ValueError as config_error:
        print(f" Configuration validation failed: {config_error}")
        exit(1)
