import pytest

from wordpop import create_app
from wordpop.config.app_config import TestingConfig
from wordpop.services import game_service as game_service_module
from wordpop.services import results_service as results_service_module
from wordpop.services.game_service import GameService
from wordpop.services.results_service import MemoryResultsService
from wordpop.services.word_corpus import WordCorpus
from wordpop.services.word_loader import WordListLoader

ANSWERS = ["CRANE", "SLATE", "ARGOT", "SOAPS"]
EXTRA_GUESSES = ["RATIO", "SASSY", "AUDIO", "ERVIL"]
LOSING_GUESSES = ["SLATE", "ARGOT", "SOAPS", "RATIO", "SASSY", "AUDIO"]


class FakeClock:
    """Manually advanced clock for timer and cache tests."""

    def __init__(self, start=1_000_000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class FixedSelector:
    """Selector double that always draws the same word."""

    def __init__(self, word="CRANE"):
        self.word = word
        self.calls = []

    def pick(self, mode, category=None, day_key=None):
        self.calls.append((mode, category))
        return self.word, None


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def small_corpus():
    return WordCorpus(
        answers=ANSWERS,
        guesses=EXTRA_GUESSES,
        blocklist=["ERVIL"],
        allowlist=["NYMPH"],
    )


@pytest.fixture
def loader(clock, small_corpus):
    word_loader = WordListLoader(TestingConfig, clock=clock)
    word_loader.use(small_corpus)
    return word_loader


@pytest.fixture
def bundled_loader(clock):
    word_loader = WordListLoader(TestingConfig, clock=clock)
    word_loader.load()
    return word_loader


@pytest.fixture
def selector():
    return FixedSelector("CRANE")


@pytest.fixture
def results():
    return MemoryResultsService()


@pytest.fixture
def service(loader, selector, results, clock):
    return GameService(loader, selector, results_service=results, config=TestingConfig, clock=clock)


@pytest.fixture
def app_and_socketio(service, results, monkeypatch):
    monkeypatch.setattr(game_service_module, '_game_service', service)
    monkeypatch.setattr(results_service_module, '_results_service', results)
    return create_app(TestingConfig)


@pytest.fixture
def app(app_and_socketio):
    return app_and_socketio[0]


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def socket_client(app_and_socketio):
    app, socketio = app_and_socketio
    test_client = socketio.test_client(app)
    yield test_client
    if test_client.is_connected():
        test_client.disconnect()
