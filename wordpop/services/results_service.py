"""
Results Service

Persistence collaborator for finished games. Stores each result and keeps the
aggregate statistics up to date, in memory by default or in MongoDB when a
connection string is configured.
"""

import threading
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pymongo import DESCENDING
from pymongo.errors import PyMongoError
from pymongo.mongo_client import MongoClient
from pymongo.server_api import ServerApi

from ..config.game_settings import WORD_LENGTH, MAX_ROUNDS
from ..models.results import GameResult, GameStats
from ..utils.errors import ResultsStorageError
from ..utils.game_logger import game_logger


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_result_payload(data: Any) -> List[str]:
    """
    Check a result payload against the wire shape.

    Returns:
        List[str]: Validation errors, empty when the payload is acceptable
    """
    if not isinstance(data, dict):
        return ["Request body must be a JSON object"]

    errors = []

    word = data.get('word')
    if not isinstance(word, str) or len(word.strip()) != WORD_LENGTH or not word.strip().isalpha():
        errors.append(f"word must be a {WORD_LENGTH}-letter string")

    attempts = data.get('attempts')
    if not _is_int(attempts) or not 0 <= attempts <= MAX_ROUNDS:
        errors.append(f"attempts must be an integer between 0 and {MAX_ROUNDS}")

    for name in ('timeElapsed', 'points'):
        value = data.get(name)
        if not _is_int(value) or value < 0:
            errors.append(f"{name} must be a non-negative integer")

    if not isinstance(data.get('isWin'), bool):
        errors.append("isWin must be a boolean")

    if 'isChallengeMode' in data and not isinstance(data['isChallengeMode'], bool):
        errors.append("isChallengeMode must be a boolean")

    return errors


def _build_result(payload: Dict[str, Any]) -> GameResult:
    return GameResult(
        id=str(uuid.uuid4()),
        word=payload['word'].strip().upper(),
        attempts=payload['attempts'],
        time_elapsed=payload['timeElapsed'],
        points=payload['points'],
        is_win=payload['isWin'],
        is_challenge_mode=payload.get('isChallengeMode', False),
        played_at=datetime.now(timezone.utc),
    )


class ResultsService:
    """Interface shared by the storage back ends."""

    def save_result(self, payload: Dict[str, Any]) -> GameResult:
        raise NotImplementedError

    def get_recent_results(self, limit: int = 10) -> List[GameResult]:
        raise NotImplementedError

    def get_stats(self) -> GameStats:
        raise NotImplementedError

    def close(self) -> None:
        pass


class MemoryResultsService(ResultsService):
    """In-process storage; contents are lost on restart."""

    def __init__(self):
        self._results: List[GameResult] = []
        self._stats = GameStats()
        self._lock = threading.Lock()

    def save_result(self, payload: Dict[str, Any]) -> GameResult:
        result = _build_result(payload)
        with self._lock:
            self._results.append(result)
            self._stats.apply(result)
        return result

    def get_recent_results(self, limit: int = 10) -> List[GameResult]:
        with self._lock:
            return list(reversed(self._results))[:limit]

    def get_stats(self) -> GameStats:
        with self._lock:
            return GameStats(
                total_games=self._stats.total_games,
                total_wins=self._stats.total_wins,
                current_streak=self._stats.current_streak,
                max_streak=self._stats.max_streak,
                total_points=self._stats.total_points,
                guess_distribution=dict(self._stats.guess_distribution),
                last_played=self._stats.last_played,
            )


class MongoResultsService(ResultsService):
    """
    MongoDB-backed storage.

    Results live in the game_results collection; the running statistics are a
    single document in game_stats, replaced after every saved result.
    """

    STATS_ID = "global"

    def __init__(self, mongo_uri: str, db_name: str = "wordpop"):
        """
        Initialize the results service with a MongoDB connection.

        Args:
            mongo_uri: MongoDB connection string
            db_name: Database holding the results collections
        """
        self._lock = threading.Lock()

        try:
            # played_at is read back as an aware UTC datetime
            self.client = MongoClient(mongo_uri, server_api=ServerApi('1'), tz_aware=True)
            self.db = self.client[db_name]
            self.results_collection = self.db.game_results
            self.stats_collection = self.db.game_stats
            self.client.admin.command('ping')
            game_logger.logger.info("Connected to MongoDB results storage")
        except PyMongoError as e:
            game_logger.logger.error(f"MongoDB connection error: {e}")
            raise ResultsStorageError(f"MongoDB connection error: {e}") from e

        self.results_collection.create_index([("played_at", DESCENDING)])

    @staticmethod
    def _to_document(result: GameResult) -> Dict[str, Any]:
        return {
            "_id": result.id,
            "word": result.word,
            "attempts": result.attempts,
            "time_elapsed": result.time_elapsed,
            "points": result.points,
            "is_win": result.is_win,
            "is_challenge_mode": result.is_challenge_mode,
            "played_at": result.played_at,
        }

    @staticmethod
    def _from_document(doc: Dict[str, Any]) -> GameResult:
        return GameResult(
            id=doc["_id"],
            word=doc["word"],
            attempts=doc["attempts"],
            time_elapsed=doc["time_elapsed"],
            points=doc["points"],
            is_win=doc["is_win"],
            is_challenge_mode=doc.get("is_challenge_mode", False),
            played_at=doc.get("played_at"),
        )

    def _load_stats(self) -> GameStats:
        doc = self.stats_collection.find_one({"_id": self.STATS_ID})
        if not doc:
            return GameStats()
        return GameStats(
            total_games=doc.get("total_games", 0),
            total_wins=doc.get("total_wins", 0),
            current_streak=doc.get("current_streak", 0),
            max_streak=doc.get("max_streak", 0),
            total_points=doc.get("total_points", 0),
            guess_distribution=doc.get("guess_distribution") or GameStats().guess_distribution,
            last_played=doc.get("last_played"),
        )

    def save_result(self, payload: Dict[str, Any]) -> GameResult:
        result = _build_result(payload)
        try:
            with self._lock:
                self.results_collection.insert_one(self._to_document(result))
                stats = self._load_stats()
                stats.apply(result)
                self.stats_collection.replace_one(
                    {"_id": self.STATS_ID},
                    {
                        "total_games": stats.total_games,
                        "total_wins": stats.total_wins,
                        "current_streak": stats.current_streak,
                        "max_streak": stats.max_streak,
                        "total_points": stats.total_points,
                        "guess_distribution": stats.guess_distribution,
                        "last_played": stats.last_played,
                    },
                    upsert=True
                )
        except PyMongoError as e:
            raise ResultsStorageError(f"Failed to save result: {e}") from e
        return result

    def get_recent_results(self, limit: int = 10) -> List[GameResult]:
        try:
            cursor = self.results_collection.find().sort("played_at", DESCENDING).limit(limit)
            return [self._from_document(doc) for doc in cursor]
        except PyMongoError as e:
            raise ResultsStorageError(f"Failed to read results: {e}") from e

    def get_stats(self) -> GameStats:
        try:
            return self._load_stats()
        except PyMongoError as e:
            raise ResultsStorageError(f"Failed to read stats: {e}") from e

    def close(self) -> None:
        """Close the MongoDB connection."""
        if self.client:
            self.client.close()


# Global service instance
_results_service = None


def get_results_service() -> Optional[ResultsService]:
    """Get the global results service instance."""
    return _results_service


def initialize_results_service(mongo_uri: Optional[str] = None, db_name: str = "wordpop") -> ResultsService:
    """
    Initialize the global results service instance.

    Falls back to in-memory storage when MongoDB is not configured or unreachable.
    """
    global _results_service
    if mongo_uri:
        try:
            _results_service = MongoResultsService(mongo_uri, db_name)
            return _results_service
        except ResultsStorageError as e:
            game_logger.logger.warning(f"Falling back to in-memory results storage: {e}")

    _results_service = MemoryResultsService()
    return _results_service
