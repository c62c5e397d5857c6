"""
Game Service

Hosts many concurrent game sessions, draws their targets, enforces timed-mode
limits and hands finished games to the results service.
"""

import threading
import time
import uuid
from contextlib import contextmanager
from typing import Callable, Dict, List, Optional, Set

from ..config.app_config import Config
from ..models.game import GameMode, GameState
from ..utils.errors import StateError, WordpopError
from ..utils.game_logger import game_logger
from .selector import WordSelector
from .session import GameSession
from .word_corpus import WordCorpus, normalize
from .word_loader import WordListLoader


class GameService:
    """
    Core game service managing multiple game sessions.

    This class handles:
    - Game session management with unique game IDs
    - Word selection and secure answer storage
    - Serializing guesses per session with one lock per game
    - Timed-mode expiry and idle-game cleanup
    - Reporting each finished game exactly once
    """

    def __init__(self,
                 loader: WordListLoader,
                 selector: WordSelector,
                 results_service=None,
                 config=Config,
                 clock: Callable[[], float] = time.time):
        self.loader = loader
        self.selector = selector
        self.results_service = results_service
        self.config = config
        self._clock = clock
        self.games: Dict[str, GameSession] = {}  # Store active games by game_id
        self._locks: Dict[str, threading.Lock] = {}
        self._reported: Set[str] = set()
        self._registry_lock = threading.Lock()

    @contextmanager
    def _game(self, game_id: str):
        """Yield the session for game_id under its own lock, or None if unknown."""
        with self._registry_lock:
            session = self.games.get(game_id)
            lock = self._locks.get(game_id)
        if session is None or lock is None:
            yield None
            return
        with lock:
            yield session

    def create_new_game(self,
                        mode: str = GameMode.RANDOM.value,
                        category: Optional[str] = None,
                        timed: Optional[bool] = None,
                        blind: bool = False) -> str:
        """
        Creates a new game session with a target drawn for the mode.

        Args:
            mode: "random", "daily", "daily-challenge" or "category"
            category: Category name for category mode
            timed: Run against the clock; defaults to True for daily-challenge
            blind: Hide verdicts until the game ends

        Returns:
            str: Unique game ID for this session

        Raises:
            ValueError: If the mode is unknown
            CorpusUnavailable: If no target can be drawn
        """
        game_mode = GameMode(mode)
        if timed is None:
            timed = game_mode is GameMode.DAILY_CHALLENGE

        target, day_key = self.selector.pick(game_mode, category)

        session = GameSession(
            target=target,
            corpus=self.loader.corpus,
            mode=game_mode,
            timed=timed,
            blind=blind,
            category=category if game_mode is GameMode.CATEGORY else None,
            day_key=day_key,
            max_rounds=self.config.MAX_ROUNDS,
            time_limit=self.config.TIME_LIMIT_SECONDS,
            clock=self._clock,
        )

        game_id = str(uuid.uuid4())
        with self._registry_lock:
            self.games[game_id] = session
            self._locks[game_id] = threading.Lock()
        return game_id

    def get_game_state(self, game_id: str) -> Optional[GameState]:
        """
        Returns the current game state for a session (without revealing the answer).

        Args:
            game_id: Unique game identifier

        Returns:
            GameState object or None if game not found
        """
        with self._game(game_id) as session:
            if session is None:
                return None
            if session.is_time_up():
                self._expire(game_id, session)
            return session.to_state(game_id)

    def make_guess(self, game_id: str, guess: str) -> Optional[GameState]:
        """
        Processes a guess and updates game state.

        A timed game whose clock has run out is expired first, so the guess is
        rejected as arriving after the game ended.

        Args:
            game_id: Unique game identifier
            guess: The 5-letter word guess

        Returns:
            Updated GameState or None if game not found

        Raises:
            GuessRejected: If the guess is refused; the session is unchanged
        """
        with self._game(game_id) as session:
            if session is None:
                return None

            if session.is_time_up():
                self._expire(game_id, session)
                raise StateError("Time is up", guess or "")

            session.submit_guess(guess)
            if session.is_over:
                self._report_result(game_id, session)
            return session.to_state(game_id)

    def expire_game(self, game_id: str) -> Optional[GameState]:
        """
        Ends a timed game because its countdown reached zero.

        Non-timed or already finished games are returned unchanged.
        """
        with self._game(game_id) as session:
            if session is None:
                return None
            self._expire(game_id, session)
            return session.to_state(game_id)

    def _expire(self, game_id: str, session: GameSession) -> bool:
        if not session.time_expire():
            return False
        game_logger.log_game_event(
            game_id, 'game_timed_out', 'system',
            rounds_used=session.attempts, target_word=session.target
        )
        self._report_result(game_id, session)
        return True

    def reset_game(self, game_id: str, category: Optional[str] = None) -> Optional[GameState]:
        """
        Starts the session over on a freshly drawn target with the same mode.

        Returns:
            Updated GameState or None if game not found
        """
        with self._game(game_id) as session:
            if session is None:
                return None

            if category is not None and session.mode is GameMode.CATEGORY:
                session.category = category
            target, day_key = self.selector.pick(session.mode, session.category)
            session.corpus = self.loader.corpus
            session.reset(target, day_key=day_key)
            with self._registry_lock:
                self._reported.discard(game_id)
            return session.to_state(game_id)

    def _report_result(self, game_id: str, session: GameSession) -> None:
        """Hand a finished game to the results service once."""
        with self._registry_lock:
            if game_id in self._reported:
                return
            self._reported.add(game_id)

        event = 'game_won' if session.won else 'game_lost'
        game_logger.log_game_event(
            game_id, event, 'system',
            rounds_used=session.attempts, target_word=session.target,
            points=session.score, ended_by_time=session.ended_by_time
        )

        if self.results_service is None:
            return
        try:
            self.results_service.save_result(session.result_payload())
        except WordpopError as e:
            game_logger.logger.error(f"Failed to store result for game {game_id}: {e}")

    def expire_timed_games(self, now: Optional[float] = None) -> List[str]:
        """
        Force timeExpire on every timed game whose limit has elapsed.

        Returns:
            List of game IDs that were expired by this call
        """
        with self._registry_lock:
            game_ids = list(self.games)

        expired = []
        for game_id in game_ids:
            with self._game(game_id) as session:
                if session is not None and session.is_time_up(now) and self._expire(game_id, session):
                    expired.append(game_id)
        return expired

    def cleanup_idle_games(self, now: Optional[float] = None) -> int:
        """
        Removes sessions with no activity for longer than the idle timeout.

        Returns:
            Number of sessions removed
        """
        now = self._clock() if now is None else now
        cutoff = now - self.config.GAME_IDLE_TIMEOUT_SECONDS
        with self._registry_lock:
            stale = [gid for gid, session in self.games.items() if session.last_activity < cutoff]

        for game_id in stale:
            self.delete_game(game_id)
        return len(stale)

    def replace_corpus(self, corpus: Optional[WordCorpus] = None) -> WordCorpus:
        """
        Swap in a new corpus, or reload the word sources when none is given.

        Running sessions keep the corpus they started with; only games created
        or reset afterwards see the change.
        """
        if corpus is None:
            return self.loader.refresh()
        return self.loader.use(corpus)

    def add_custom_word(self, word: str) -> bool:
        """
        Persist a custom guess word and reload the corpus so new games accept it.

        Returns:
            bool: False if no custom word file is configured or the word is malformed

        Raises:
            CorpusUnavailable: If the reload fails
        """
        if not self.loader.add_custom_word(word):
            return False
        self.replace_corpus()
        game_logger.log_game_event(None, 'custom_word_added', 'system', word=normalize(word))
        return True

    def delete_game(self, game_id: str) -> bool:
        """
        Removes a game session from memory.

        Args:
            game_id: Unique game identifier

        Returns:
            bool: True if game was deleted, False if not found
        """
        with self._registry_lock:
            if game_id not in self.games:
                return False
            del self.games[game_id]
            self._locks.pop(game_id, None)
            self._reported.discard(game_id)
            return True

    @property
    def active_games(self) -> int:
        return len(self.games)


# Global service instance
_game_service = None


def get_game_service() -> Optional[GameService]:
    """Get the global game service instance."""
    return _game_service


def initialize_game_service(config=Config, results_service=None,
                            loader: Optional[WordListLoader] = None,
                            selector: Optional[WordSelector] = None) -> GameService:
    """
    Initialize the global game service instance.

    Raises:
        CorpusUnavailable: If the word lists cannot be loaded
    """
    global _game_service
    loader = loader or WordListLoader(config)
    loader.load()
    selector = selector or WordSelector(loader, config)
    _game_service = GameService(loader, selector, results_service=results_service, config=config)
    return _game_service
