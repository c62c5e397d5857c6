"""
Word Selection

Deterministic daily selection from a calendar date, plus uniform random and
category draws. The daily index is a pure function of the date string and the
pool size, so every player sees the same daily word without stored state.
"""

import random
from datetime import date, datetime, timezone, tzinfo
from typing import List, Optional, Tuple
from zoneinfo import ZoneInfo

from ..models.game import GameMode
from ..utils.errors import CorpusUnavailable

_UINT32 = 0xFFFFFFFF

DAILY_CHALLENGE_SUFFIX = "-challenge"


def string_hash(value: str) -> int:
    """
    32-bit signed polynomial string hash (hash * 31 + char code per character).

    Matches the widely used JavaScript idiom ``((h << 5) - h + c) | 0``.
    """
    h = 0
    for char in value:
        h = ((h << 5) - h + ord(char)) & _UINT32
    if h >= 0x80000000:
        h -= 0x100000000
    return h


def daily_index(date_string: str, pool_size: int) -> int:
    """
    Reproducible index in [0, pool_size) for a date string.

    Raises:
        ValueError: If pool_size is not positive
    """
    if pool_size <= 0:
        raise ValueError("pool_size must be positive")
    return abs(string_hash(date_string)) % pool_size


def date_key(day: date) -> str:
    """Canonical YYYY-MM-DD key with zero-padded month and day."""
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def resolve_timezone(name: Optional[str]) -> tzinfo:
    if not name or name.upper() == 'UTC':
        return timezone.utc
    return ZoneInfo(name)


def today_key(tz: tzinfo = timezone.utc, now: Optional[datetime] = None) -> str:
    """Date key for the current calendar day in the given timezone."""
    current = now.astimezone(tz) if now is not None else datetime.now(tz)
    return date_key(current.date())


def random_index(pool_size: int, rng: Optional[random.Random] = None) -> int:
    """Uniform, non-deterministic draw in [0, pool_size)."""
    if pool_size <= 0:
        raise ValueError("pool_size must be positive")
    return (rng or random).randrange(pool_size)


class WordSelector:
    """
    Draws session targets for every game mode.

    The caller chooses the mode; this class chooses the pool:
    - random: uniform over the frequency-filtered answer pool
    - daily: date hash over the same pool
    - daily-challenge: suffixed date hash over the harder challenge pool
    - category: uniform over a cached category pool
    """

    def __init__(self, loader, config, rng: Optional[random.Random] = None):
        self.loader = loader
        self.config = config
        self.rng = rng
        self.tz = resolve_timezone(config.DAILY_TIMEZONE)

    def _threshold(self) -> int:
        return self.config.ANSWER_MIN_FREQUENCY if self.config.USE_FREQUENCY_FILTER else 0

    def answer_pool(self) -> List[str]:
        pool = self.loader.corpus.filtered_answers(self._threshold())
        if not pool:
            raise CorpusUnavailable("Answer pool is empty")
        return pool

    def random_word(self) -> str:
        pool = self.answer_pool()
        return pool[random_index(len(pool), self.rng)]

    def daily_word(self, day_key: Optional[str] = None) -> str:
        pool = self.answer_pool()
        return pool[daily_index(day_key or today_key(self.tz), len(pool))]

    def daily_challenge_word(self, day_key: Optional[str] = None) -> str:
        pool = self.loader.daily_challenge_words()
        if not pool:
            raise CorpusUnavailable("Daily challenge pool is empty")
        key = (day_key or today_key(self.tz)) + DAILY_CHALLENGE_SUFFIX
        return pool[daily_index(key, len(pool))]

    def category_word(self, category: Optional[str]) -> str:
        pool = self.loader.category_words(category)
        if not pool:
            raise CorpusUnavailable(f"No words available for category '{category}'")
        return pool[random_index(len(pool), self.rng)]

    def pick(self, mode: GameMode, category: Optional[str] = None,
             day_key: Optional[str] = None) -> Tuple[str, Optional[str]]:
        """
        Select a target for a mode.

        Returns:
            Tuple of (word, date key used or None)
        """
        if mode is GameMode.DAILY:
            key = day_key or today_key(self.tz)
            return self.daily_word(key), key
        if mode is GameMode.DAILY_CHALLENGE:
            key = day_key or today_key(self.tz)
            return self.daily_challenge_word(key), key
        if mode is GameMode.CATEGORY:
            return self.category_word(category), None
        return self.random_word(), None
