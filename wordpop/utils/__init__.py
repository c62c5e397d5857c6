"""
Utilities Package

Contains error types, decorators, and the structured game logger.
"""

from .decorators import require_game_service, websocket_game_required
from .errors import (
    WordpopError, GuessRejected, InputLengthError, DictionaryError, StateError,
    CorpusUnavailable, ResultsStorageError
)
from .game_logger import game_logger

__all__ = [
    'require_game_service', 'websocket_game_required', 'game_logger',
    'WordpopError', 'GuessRejected', 'InputLengthError', 'DictionaryError', 'StateError',
    'CorpusUnavailable', 'ResultsStorageError'
]
