"""
Word Corpus

Read-only word sets with blocklist/allowlist overrides and the structural and
frequency filters used to keep obscure entries out of the answer pool.
"""

import re
from typing import Dict, FrozenSet, Iterable, List, Optional

from ..config.game_settings import WORD_LENGTH, VOWELS

_WORD_PATTERN = re.compile(r'^[A-Z]{%d}$' % WORD_LENGTH)

# Patterns typical of archaic or obscure entries
_PROBLEMATIC_PATTERNS = (
    re.compile(r'^[AEIOU]{2}'),                 # double vowel start
    re.compile(r'[QX](?![UO])'),                # Q/X not followed by U or O
    re.compile(r'[BCDFGHJKLMNPQRSTVWXYZ]{4}'),  # 4+ consonants in a row
    re.compile(r'[JZ].*[JZ]'),                  # multiple rare letters
)


def normalize(word: str) -> str:
    return word.strip().upper() if isinstance(word, str) else ""


def is_well_formed(word: str) -> bool:
    """True for exactly five uppercase letters A-Z."""
    return bool(_WORD_PATTERN.match(word))


def meets_vowel_requirement(word: str) -> bool:
    """A standard vowel, or a Y anywhere but the first letter."""
    if any(letter in VOWELS for letter in word):
        return True
    return 'Y' in word[1:]


def has_problematic_patterns(word: str) -> bool:
    return any(pattern.search(word) for pattern in _PROBLEMATIC_PATTERNS)


class WordCorpus:
    """
    Immutable word sets plus the queries the game engine runs against them.

    Precedence for every query: the allowlist wins over everything, then the
    blocklist rejects, then the regular set membership and filters apply.
    """

    def __init__(self,
                 answers: Iterable[str],
                 guesses: Iterable[str] = (),
                 blocklist: Iterable[str] = (),
                 allowlist: Iterable[str] = (),
                 frequency_table: Optional[Dict[str, int]] = None,
                 guess_frequency_threshold: int = 0):
        self._answers: FrozenSet[str] = frozenset(normalize(w) for w in answers)
        # The guess set is always a superset of the answer set
        self._guesses: FrozenSet[str] = self._answers | frozenset(normalize(w) for w in guesses)
        self._blocklist: FrozenSet[str] = frozenset(normalize(w) for w in blocklist)
        self._allowlist: FrozenSet[str] = frozenset(normalize(w) for w in allowlist)
        self._frequency: Dict[str, int] = {normalize(w): rank for w, rank in (frequency_table or {}).items()}
        self.guess_frequency_threshold = guess_frequency_threshold

    @property
    def answers(self) -> FrozenSet[str]:
        return self._answers

    @property
    def guesses(self) -> FrozenSet[str]:
        return self._guesses

    @property
    def blocklist(self) -> FrozenSet[str]:
        return self._blocklist

    @property
    def allowlist(self) -> FrozenSet[str]:
        return self._allowlist

    def frequency_rank(self, word: str) -> int:
        """Integer frequency rank, 0 for words missing from the table."""
        return self._frequency.get(normalize(word), 0)

    def is_valid_guess(self, word: str) -> bool:
        """
        Check whether a word may be submitted as a guess.

        Answer words skip the frequency floor; other guess words must also reach
        guess_frequency_threshold when it is set.

        Returns:
            bool: True for a well-formed word that is allowlisted, or that is in
            the guess set and not blocklisted
        """
        word = normalize(word)
        if not is_well_formed(word):
            return False
        if word in self._allowlist:
            return True
        if word in self._blocklist or word not in self._guesses:
            return False
        if word in self._answers:
            return True
        return self.frequency_rank(word) >= self.guess_frequency_threshold

    def passes_answer_filters(self, word: str) -> bool:
        """Vowel and structural filters for a word that is not allowlisted."""
        return meets_vowel_requirement(word) and not has_problematic_patterns(word)

    def is_answer_candidate(self, word: str) -> bool:
        """Check whether a word may be drawn as a target."""
        word = normalize(word)
        if not is_well_formed(word):
            return False
        if word in self._allowlist:
            return True
        if word in self._blocklist or word not in self._answers:
            return False
        return self.passes_answer_filters(word)

    def filtered_answers(self, frequency_threshold: int = 0) -> List[str]:
        """
        Build the ordered answer pool for word selection.

        Answer candidates ranked at or above the threshold, unioned with the
        allowlist. Sorted so index-based selection is stable across processes.

        Args:
            frequency_threshold: Minimum frequency rank; 0 disables the filter

        Returns:
            List[str]: Sorted answer pool
        """
        pool = {
            word for word in self._answers
            if self.is_answer_candidate(word) and self.frequency_rank(word) >= frequency_threshold
        }
        pool.update(word for word in self._allowlist if is_well_formed(word))
        return sorted(pool)

    def filter_candidates(self, words: Iterable[str]) -> List[str]:
        """Keep the answer candidates from an arbitrary word list, sorted and deduplicated."""
        return sorted({normalize(w) for w in words if self.is_answer_candidate(w)})

    def with_words(self, guesses: Iterable[str] = (), answers: Iterable[str] = ()) -> 'WordCorpus':
        """Return a new corpus with extra guess and answer words merged in."""
        return WordCorpus(
            answers=self._answers | frozenset(normalize(w) for w in answers),
            guesses=self._guesses | frozenset(normalize(w) for w in guesses),
            blocklist=self._blocklist,
            allowlist=self._allowlist,
            frequency_table=self._frequency,
            guess_frequency_threshold=self.guess_frequency_threshold,
        )

    def __len__(self) -> int:
        return len(self._guesses)
