from datetime import datetime

import pytest

from wordpop.models.results import GameStats
from wordpop.services import results_service as results_service_module
from wordpop.services.results_service import (
    MemoryResultsService, MongoResultsService, initialize_results_service, validate_result_payload
)


def payload(word="CRANE", attempts=3, time_elapsed=40, points=700, is_win=True, **extra):
    return {
        'word': word,
        'attempts': attempts,
        'timeElapsed': time_elapsed,
        'points': points,
        'isWin': is_win,
        **extra
    }


def test_valid_payload_has_no_errors():
    assert validate_result_payload(payload()) == []
    assert validate_result_payload(payload(isChallengeMode=True)) == []


@pytest.mark.parametrize("bad", [
    payload(word="CRAN"),
    payload(word=12345),
    payload(attempts=7),
    payload(attempts=True),
    payload(time_elapsed=-1),
    payload(points="700"),
    payload(is_win="yes"),
    payload(isChallengeMode="no"),
])
def test_invalid_payloads(bad):
    assert validate_result_payload(bad)


def test_non_object_payload():
    assert validate_result_payload(None) == ["Request body must be a JSON object"]
    assert validate_result_payload(["CRANE"])


def test_save_result_assigns_id_and_timestamp():
    service = MemoryResultsService()
    result = service.save_result(payload(word="crane"))
    assert result.id
    assert result.word == "CRANE"
    assert result.played_at is not None
    assert result.to_dict()['playedAt'] is not None


def test_stats_track_streaks_and_distribution():
    service = MemoryResultsService()
    service.save_result(payload(attempts=3, points=700))
    service.save_result(payload(attempts=1, points=1000))
    service.save_result(payload(attempts=6, points=0, is_win=False))
    service.save_result(payload(attempts=3, points=700))

    stats = service.get_stats()
    assert stats.total_games == 4
    assert stats.total_wins == 3
    assert stats.current_streak == 1
    assert stats.max_streak == 2
    assert stats.total_points == 2400
    assert stats.guess_distribution == {"1": 1, "2": 0, "3": 2, "4": 0, "5": 0, "6": 0}
    assert stats.win_rate == 75.0


def test_get_stats_returns_a_copy():
    service = MemoryResultsService()
    service.save_result(payload(attempts=2))
    stats = service.get_stats()
    stats.guess_distribution["2"] = 99
    assert service.get_stats().guess_distribution["2"] == 1


def test_recent_results_newest_first():
    service = MemoryResultsService()
    for word in ("CRANE", "SLATE", "ARGOT"):
        service.save_result(payload(word=word))

    recent = service.get_recent_results(2)
    assert [result.word for result in recent] == ["ARGOT", "SLATE"]


def test_empty_stats_dict():
    data = GameStats().to_dict()
    assert data['totalGames'] == 0
    assert data['winRate'] == 0.0
    assert data['lastPlayed'] is None
    assert set(data['guessDistribution']) == {"1", "2", "3", "4", "5", "6"}


def test_initialize_without_mongo_uses_memory(monkeypatch):
    monkeypatch.setattr(results_service_module, '_results_service', None)
    service = initialize_results_service(None)
    assert isinstance(service, MemoryResultsService)
    assert results_service_module.get_results_service() is service


class FakeCursor:
    def __init__(self, docs):
        self.docs = list(docs)

    def sort(self, key, direction):
        self.docs.sort(key=lambda doc: doc[key], reverse=direction < 0)
        return self

    def limit(self, count):
        self.docs = self.docs[:count]
        return self

    def __iter__(self):
        return iter(self.docs)


class FakeCollection:
    """Stores documents the way pymongo returns them, naive unless tz_aware."""

    def __init__(self, tz_aware):
        self.tz_aware = tz_aware
        self.docs = {}

    def _store(self, doc):
        return {
            key: value.replace(tzinfo=None) if isinstance(value, datetime) and not self.tz_aware else value
            for key, value in doc.items()
        }

    def insert_one(self, doc):
        self.docs[doc["_id"]] = self._store(doc)

    def replace_one(self, query, doc, upsert=False):
        self.docs[query["_id"]] = {"_id": query["_id"], **self._store(doc)}

    def find_one(self, query):
        return self.docs.get(query["_id"])

    def find(self):
        return FakeCursor(self.docs.values())

    def create_index(self, keys):
        return "played_at_-1"


class FakeMongoClient:
    def __init__(self, uri, server_api=None, tz_aware=False):
        self.tz_aware = tz_aware
        self.admin = self
        self.database = type('FakeDatabase', (), {
            'game_results': FakeCollection(tz_aware),
            'game_stats': FakeCollection(tz_aware),
        })()

    def command(self, name):
        return {'ok': 1}

    def __getitem__(self, name):
        return self.database

    def close(self):
        pass


def test_mongo_results_keep_utc_offset(monkeypatch):
    monkeypatch.setattr(results_service_module, 'MongoClient', FakeMongoClient)
    mongo = MongoResultsService("mongodb://localhost:27017", "wordpop_test")
    memory = MemoryResultsService()

    saved = mongo.save_result(payload())
    reference = memory.save_result(payload())

    assert mongo.client.tz_aware
    stored = mongo.get_recent_results()[0].to_dict()['playedAt']
    assert stored == saved.to_dict()['playedAt']
    assert stored.endswith('+00:00')
    assert reference.to_dict()['playedAt'].endswith('+00:00')
    assert mongo.get_stats().last_played.utcoffset() is not None
