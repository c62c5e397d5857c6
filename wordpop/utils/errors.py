"""
Error Types

Exceptions raised by the game engine and its collaborators. Every error here is
recoverable by the caller; none of them leave a session half-updated.
"""

from ..models.game import RejectionReason


class WordpopError(Exception):
    """Base class for all application errors."""


class GuessRejected(WordpopError):
    """A submitted guess was refused; the session is unchanged."""

    reason = None

    def __init__(self, message: str, guess: str = ""):
        super().__init__(message)
        self.message = message
        self.guess = guess

    def to_dict(self) -> dict:
        return {
            'success': False,
            'error': self.message,
            'reason': self.reason.value if self.reason else None,
        }


class InputLengthError(GuessRejected):
    reason = RejectionReason.WRONG_LENGTH


class DictionaryError(GuessRejected):
    reason = RejectionReason.NOT_IN_DICTIONARY


class StateError(GuessRejected):
    reason = RejectionReason.GAME_OVER


class CorpusUnavailable(WordpopError):
    """Word data could not be loaded, or a selection pool came up empty."""


class ResultsStorageError(WordpopError):
    """The results back end failed to store or read records."""
