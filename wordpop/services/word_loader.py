"""
Word List Loader

Builds the WordCorpus from the bundled word data plus optional custom word,
blocklist and allowlist files, and caches per-category answer pools.
"""

import os
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Set

from wordfreq import zipf_frequency

from ..config.game_settings import (
    ANSWER_WORDS, GUESS_WORDS, DAILY_CHALLENGE_WORDS, WORD_CATEGORIES,
    DEFAULT_BLOCKLIST, DEFAULT_ALLOWLIST, DEFAULT_CATEGORY
)
from ..utils.errors import CorpusUnavailable
from ..utils.game_logger import game_logger
from .word_corpus import WordCorpus, is_well_formed, normalize


@dataclass
class CacheEntry:
    value: Any
    inserted_at: float

    def is_fresh(self, now: float, ttl: float) -> bool:
        return now - self.inserted_at < ttl


class TimedCache:
    """
    Small keyed cache whose entries expire after a fixed time-to-live.

    The clock is injectable so expiry can be tested without sleeping.
    """

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.time):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}

    def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None or not entry.is_fresh(self._clock(), self.ttl_seconds):
            return None
        return entry.value

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = CacheEntry(value=value, inserted_at=self._clock())

    def is_fresh(self, key: str) -> bool:
        entry = self._entries.get(key)
        return entry is not None and entry.is_fresh(self._clock(), self.ttl_seconds)

    def invalidate(self, key: Optional[str] = None) -> None:
        if key is None:
            self._entries.clear()
        else:
            self._entries.pop(key, None)

    def stats(self) -> Dict[str, Dict[str, Any]]:
        now = self._clock()
        return {
            key: {
                'size': len(entry.value) if hasattr(entry.value, '__len__') else 1,
                'inserted_at': entry.inserted_at,
                'is_fresh': entry.is_fresh(now, self.ttl_seconds),
            }
            for key, entry in self._entries.items()
        }


def read_word_file(path: Optional[str]) -> Set[str]:
    """
    Read a one-word-per-line text file.

    Lines that are not exactly five letters are ignored. A missing path or a
    missing file yields an empty set.
    """
    if not path or not os.path.exists(path):
        return set()

    with open(path, 'r', encoding='utf-8') as f:
        words = {normalize(line) for line in f}
    return {word for word in words if is_well_formed(word)}


def build_frequency_table(words: Iterable[str]) -> Dict[str, int]:
    """Integer Zipf frequency rank per word (0 = unseen, ~7 = very common)."""
    return {word: int(zipf_frequency(word.lower(), 'en')) for word in words}


class WordListLoader:
    """
    Produces WordCorpus instances and owns the category pool cache.

    This class handles:
    - Merging bundled, custom, blocklist and allowlist word sources
    - Frequency ranking when the frequency filter is enabled
    - Refreshing the corpus between sessions
    - Caching filtered category pools with a TTL
    """

    def __init__(self, config, clock: Callable[[], float] = time.time):
        self.config = config
        self.cache = TimedCache(config.WORD_CACHE_TTL_SECONDS, clock=clock)
        self._corpus: Optional[WordCorpus] = None

    def load(self) -> WordCorpus:
        """
        Build a fresh corpus from every configured source.

        Raises:
            CorpusUnavailable: If a word source cannot be read or no answers remain
        """
        try:
            custom_words = read_word_file(self.config.CUSTOM_WORDS_FILE)
            blocklist = set(DEFAULT_BLOCKLIST) | read_word_file(self.config.BLOCKLIST_FILE)
            allowlist = set(DEFAULT_ALLOWLIST) | read_word_file(self.config.ALLOWLIST_FILE)
        except (OSError, UnicodeDecodeError) as e:
            game_logger.logger.error(f"Failed to read word list files: {e}")
            raise CorpusUnavailable(f"Failed to read word list files: {e}") from e

        answers = set(ANSWER_WORDS) | set(DAILY_CHALLENGE_WORDS)
        for words in WORD_CATEGORIES.values():
            answers.update(words)

        if not answers:
            raise CorpusUnavailable("No answer words available")

        guesses = set(GUESS_WORDS) | custom_words
        frequency_table = {}
        guess_threshold = 0
        if self.config.USE_FREQUENCY_FILTER:
            frequency_table = build_frequency_table(answers | guesses | allowlist)
            guess_threshold = self.config.GUESS_MIN_FREQUENCY
            # Custom words are accepted as guesses regardless of frequency
            for word in custom_words:
                frequency_table[word] = max(frequency_table[word], guess_threshold)

        corpus = WordCorpus(
            answers=answers,
            guesses=guesses,
            blocklist=blocklist,
            allowlist=allowlist,
            frequency_table=frequency_table,
            guess_frequency_threshold=guess_threshold,
        )
        self._corpus = corpus
        self.cache.invalidate()

        game_logger.logger.info(
            f"Word corpus loaded: {len(corpus.answers)} answers, {len(corpus.guesses)} valid guesses, "
            f"{len(custom_words)} custom, {len(blocklist)} blocked, {len(allowlist)} allowed"
        )
        return corpus

    @property
    def corpus(self) -> WordCorpus:
        """The most recently loaded corpus, loading one on first use."""
        if self._corpus is None:
            return self.load()
        return self._corpus

    def refresh(self) -> WordCorpus:
        """Reload all sources. Running sessions keep their previous corpus."""
        return self.load()

    def use(self, corpus: WordCorpus) -> WordCorpus:
        """Serve an externally built corpus and drop pools cached from the old one."""
        self._corpus = corpus
        self.cache.invalidate()
        return corpus

    def add_custom_word(self, word: str) -> bool:
        """
        Append a word to the custom words file.

        Returns:
            bool: True if the word is well formed and now present in the file
        """
        normalized = normalize(word)
        path = self.config.CUSTOM_WORDS_FILE
        if not path or not is_well_formed(normalized):
            return False

        existing = read_word_file(path)
        if normalized in existing:
            return True

        with open(path, 'w', encoding='utf-8') as f:
            f.write('\n'.join(sorted(existing | {normalized})) + '\n')

        game_logger.logger.info(f"Added custom word: {normalized}")
        return True

    def available_categories(self) -> List[str]:
        return sorted(WORD_CATEGORIES)

    def category_words(self, category: str) -> List[str]:
        """
        Answer pool for a category, served from the TTL cache when fresh.

        Unknown categories fall back to the default category.
        """
        key = (category or DEFAULT_CATEGORY).lower()
        if key not in WORD_CATEGORIES:
            key = DEFAULT_CATEGORY

        cache_key = f"category_{key}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached

        words = self.corpus.filter_candidates(WORD_CATEGORIES[key])
        if words:
            self.cache.set(cache_key, words)
        return words

    def daily_challenge_words(self) -> List[str]:
        cached = self.cache.get('daily_challenge')
        if cached is not None:
            return cached

        words = self.corpus.filter_candidates(DAILY_CHALLENGE_WORDS)
        if words:
            self.cache.set('daily_challenge', words)
        return words

    def cache_stats(self) -> Dict[str, Dict[str, Any]]:
        return self.cache.stats()
