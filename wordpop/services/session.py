"""
Game Session

State machine for a single game: Playing -> Won | Lost. Holds the guess
history, current row, keyboard state and timer start, and invokes evaluation,
keyboard folding and scoring as guesses arrive.
"""

import time
from typing import Callable, Dict, List, Optional

from ..config.game_settings import WORD_LENGTH, MAX_ROUNDS, TIME_LIMIT_SECONDS
from ..models.game import GameMode, GameOutcome, GameState, GuessRecord, SessionFlags, Verdict
from ..utils.errors import DictionaryError, InputLengthError, StateError
from .evaluation import build_guess_record
from .keyboard import to_letter_status, update_letter_status
from .scoring import score as compute_score
from .word_corpus import WordCorpus, is_well_formed, normalize


class GameSession:
    """
    One player's game against one hidden target.

    History and keyboard state are append-only while the game runs and are
    replaced wholesale by reset(). Rejected submissions never mutate state.
    """

    def __init__(self,
                 target: str,
                 corpus: WordCorpus,
                 mode: GameMode = GameMode.RANDOM,
                 timed: bool = False,
                 blind: bool = False,
                 category: Optional[str] = None,
                 day_key: Optional[str] = None,
                 max_rounds: int = MAX_ROUNDS,
                 time_limit: int = TIME_LIMIT_SECONDS,
                 clock: Callable[[], float] = time.time):
        self.corpus = corpus
        self.mode = mode
        self.flags = SessionFlags(timed=timed, daily=mode.is_daily, blind=blind)
        self.category = category
        self.day_key = day_key
        self.max_rounds = max_rounds
        self.time_limit = time_limit
        self._clock = clock
        self._start(target)

    def _start(self, target: str) -> None:
        self.target = normalize(target)
        self._history: List[GuessRecord] = []
        self._keyboard: Dict[str, Verdict] = {}
        self.current_row = 0
        self.outcome = GameOutcome.PLAYING
        self.score = 0
        self.ended_by_time = False
        self.start_time = self._clock()
        self.end_time: Optional[float] = None
        self.last_activity = self.start_time

    @property
    def guesses(self) -> List[GuessRecord]:
        return list(self._history)

    @property
    def keyboard(self) -> Dict[str, Verdict]:
        return dict(self._keyboard)

    @property
    def attempts(self) -> int:
        return len(self._history)

    @property
    def remaining_attempts(self) -> int:
        return self.max_rounds - len(self._history)

    @property
    def is_over(self) -> bool:
        return self.outcome is not GameOutcome.PLAYING

    @property
    def won(self) -> bool:
        return self.outcome is GameOutcome.WON

    def elapsed_seconds(self, now: Optional[float] = None) -> int:
        if self.end_time is not None:
            end = self.end_time
        else:
            end = now if now is not None else self._clock()
        return max(0, int(end - self.start_time))

    def time_remaining(self) -> Optional[int]:
        if not self.flags.timed:
            return None
        return max(0, self.time_limit - self.elapsed_seconds())

    def check_guess(self, candidate: str) -> str:
        """
        Validate a candidate without touching session state.

        Returns:
            str: The normalized guess

        Raises:
            StateError: If the game is already over
            InputLengthError: If the guess is not exactly five letters
            DictionaryError: If the guess is not an accepted word
        """
        if self.is_over:
            raise StateError("Game is already over", candidate or "")

        normalized = normalize(candidate)
        if not is_well_formed(normalized):
            raise InputLengthError(f"Guess must be exactly {WORD_LENGTH} letters", normalized)

        if not self.corpus.is_valid_guess(normalized):
            raise DictionaryError("Word not in word list", normalized)

        return normalized

    def submit_guess(self, candidate: str) -> GuessRecord:
        """
        Processes a guess and advances the state machine.

        Args:
            candidate: The submitted word (any case)

        Returns:
            GuessRecord: The evaluated guess

        Raises:
            GuessRejected: If the guess is refused; the session is unchanged
        """
        guess = self.check_guess(candidate)

        record = build_guess_record(guess, self.target)
        self._history.append(record)
        update_letter_status(self._keyboard, record)
        self.last_activity = self._clock()

        if guess == self.target:
            self._finish(GameOutcome.WON)
            self.score = compute_score(self.current_row + 1, self.elapsed_seconds(), self.flags.timed)
        elif self.current_row == self.max_rounds - 1:
            self._finish(GameOutcome.LOST)
        else:
            self.current_row += 1

        return record

    def time_expire(self) -> bool:
        """
        Force a timed game still in play to a loss.

        Returns:
            bool: True if the session transitioned, False if it was a no-op
        """
        if not self.flags.timed or self.is_over:
            return False

        self.ended_by_time = True
        self._finish(GameOutcome.LOST)
        return True

    def is_time_up(self, now: Optional[float] = None) -> bool:
        return self.flags.timed and not self.is_over and self.elapsed_seconds(now) >= self.time_limit

    def reset(self, new_target: str, day_key: Optional[str] = None) -> None:
        """Discard history and keyboard state and start over on a new target."""
        self.day_key = day_key
        self._start(new_target)

    def _finish(self, outcome: GameOutcome) -> None:
        self.outcome = outcome
        self.end_time = self._clock()
        self.last_activity = self.end_time
        if outcome is GameOutcome.LOST:
            self.score = 0

    def result_payload(self) -> Dict:
        """Finished-game record in the wire shape the results service stores."""
        return {
            'word': self.target,
            'attempts': self.attempts,
            'timeElapsed': self.elapsed_seconds(),
            'points': self.score,
            'isWin': self.won,
            'isChallengeMode': self.flags.timed,
        }

    def to_state(self, game_id: str) -> GameState:
        """
        Client-facing snapshot.

        The answer is only included once the game is over. In blind mode the
        verdicts and keyboard stay hidden until then as well.
        """
        hide_feedback = self.flags.blind and not self.is_over

        return GameState(
            game_id=game_id,
            mode=self.mode.value,
            current_round=len(self._history),
            max_rounds=self.max_rounds,
            remaining_attempts=self.remaining_attempts,
            outcome=self.outcome.value,
            game_over=self.is_over,
            won=self.won,
            guesses=[record.word for record in self._history],
            guess_results=[] if hide_feedback else [record.to_pairs() for record in self._history],
            letter_status=to_letter_status({} if hide_feedback else self._keyboard),
            timed=self.flags.timed,
            blind=self.flags.blind,
            time_remaining=self.time_remaining(),
            ended_by_time=self.ended_by_time,
            score=self.score,
            category=self.category,
            answer=self.target if self.is_over else None,
        )
