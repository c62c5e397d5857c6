import os
import random
import subprocess
import sys
from datetime import date, datetime, timedelta, timezone
from pathlib import Path

import pytest

from wordpop.config.app_config import TestingConfig
from wordpop.config.game_settings import DAILY_CHALLENGE_WORDS, WORD_CATEGORIES
from wordpop.models.game import GameMode
from wordpop.services.selector import (
    WordSelector, date_key, daily_index, random_index, resolve_timezone, string_hash, today_key
)
from wordpop.services.word_corpus import WordCorpus
from wordpop.services.word_loader import WordListLoader
from wordpop.utils.errors import CorpusUnavailable

REPO_ROOT = Path(__file__).resolve().parents[1]


@pytest.mark.parametrize("value, expected", [
    ("", 0),
    ("a", 97),
    ("abc", 96354),
    ("2024-01-01", -613341632),
    ("2024-01-02", -613341631),
    ("2024-01-01-challenge", 1919530262),
])
def test_string_hash_matches_reference_values(value, expected):
    assert string_hash(value) == expected


def test_daily_index_known_values():
    assert daily_index("2024-01-01", 100) == 32
    assert daily_index("2024-01-02", 100) == 31
    assert daily_index("2024-01-01-challenge", 100) == 62


def test_daily_index_in_range():
    for day in range(1, 29):
        key = f"2024-02-{day:02d}"
        assert 0 <= daily_index(key, 7) < 7


def test_daily_index_rejects_empty_pool():
    with pytest.raises(ValueError):
        daily_index("2024-01-01", 0)


def test_daily_index_stable_across_processes():
    code = "from wordpop.services.selector import daily_index; print(daily_index('2024-06-15', 1234))"
    output = subprocess.run(
        [sys.executable, "-c", code],
        cwd=str(REPO_ROOT), capture_output=True, text=True, check=True,
        env={**os.environ, "PYTHONHASHSEED": "12345"},
    ).stdout.strip()
    assert int(output) == daily_index("2024-06-15", 1234)


def test_date_key_zero_pads():
    assert date_key(date(2024, 1, 5)) == "2024-01-05"


def test_today_key_respects_timezone():
    now = datetime(2024, 3, 1, 23, 30, tzinfo=timezone.utc)
    assert today_key(timezone.utc, now=now) == "2024-03-01"
    assert today_key(timezone(timedelta(hours=9)), now=now) == "2024-03-02"


def test_resolve_timezone_defaults_to_utc():
    assert resolve_timezone("UTC") is timezone.utc
    assert resolve_timezone(None) is timezone.utc


def test_random_index_uses_given_rng():
    assert random_index(10, random.Random(3)) == random.Random(3).randrange(10)
    with pytest.raises(ValueError):
        random_index(0)


def test_daily_word_same_for_same_date(loader):
    first = WordSelector(loader, TestingConfig).daily_word("2024-01-01")
    second = WordSelector(loader, TestingConfig).daily_word("2024-01-01")
    assert first == second


def test_daily_word_ignores_input_order(clock):
    words = ["CRANE", "SLATE", "ARGOT", "SOAPS", "HOUSE"]
    picks = []
    for ordering in (words, list(reversed(words))):
        word_loader = WordListLoader(TestingConfig, clock=clock)
        word_loader.use(WordCorpus(answers=ordering))
        picks.append(WordSelector(word_loader, TestingConfig).daily_word("2024-05-20"))
    assert picks[0] == picks[1]


def test_daily_word_indexes_sorted_pool(loader):
    selector = WordSelector(loader, TestingConfig)
    pool = selector.answer_pool()
    assert pool == sorted(pool)
    assert selector.daily_word("2024-01-01") == pool[daily_index("2024-01-01", len(pool))]


def test_daily_challenge_uses_suffixed_key(bundled_loader):
    selector = WordSelector(bundled_loader, TestingConfig)
    pool = bundled_loader.daily_challenge_words()
    word = selector.daily_challenge_word("2024-01-01")
    assert word in DAILY_CHALLENGE_WORDS
    assert word == pool[daily_index("2024-01-01-challenge", len(pool))]


def test_daily_challenge_empty_pool_raises(loader):
    with pytest.raises(CorpusUnavailable):
        WordSelector(loader, TestingConfig).daily_challenge_word("2024-01-01")


def test_category_word_and_fallback(bundled_loader):
    selector = WordSelector(bundled_loader, TestingConfig, rng=random.Random(1))
    assert selector.category_word("colors") in WORD_CATEGORIES["colors"]
    assert selector.category_word("no-such-category") in WORD_CATEGORIES["nature"]


def test_random_word_from_answer_pool(loader):
    selector = WordSelector(loader, TestingConfig, rng=random.Random(42))
    assert selector.random_word() in selector.answer_pool()


def test_pick_returns_date_key_for_daily_modes(loader):
    selector = WordSelector(loader, TestingConfig)
    word, key = selector.pick(GameMode.DAILY, day_key="2024-01-01")
    assert key == "2024-01-01"
    assert word == selector.daily_word("2024-01-01")

    word, key = selector.pick(GameMode.RANDOM)
    assert key is None
    assert word in selector.answer_pool()


def test_empty_answer_pool_raises(clock):
    word_loader = WordListLoader(TestingConfig, clock=clock)
    word_loader.use(WordCorpus(answers=["AUDIO"]))
    with pytest.raises(CorpusUnavailable):
        WordSelector(word_loader, TestingConfig).random_word()
