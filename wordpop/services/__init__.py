"""
Services Package

Contains the game engine and the services that host it.
"""

from .evaluation import evaluate, build_guess_record
from .keyboard import fold, update_letter_status
from .scoring import score
from .word_corpus import WordCorpus
from .word_loader import WordListLoader, TimedCache
from .selector import WordSelector, string_hash, daily_index
from .session import GameSession
from .game_service import GameService, get_game_service, initialize_game_service
from .results_service import (
    ResultsService, MemoryResultsService, MongoResultsService,
    get_results_service, initialize_results_service
)

__all__ = [
    'evaluate', 'build_guess_record', 'fold', 'update_letter_status', 'score',
    'WordCorpus', 'WordListLoader', 'TimedCache',
    'WordSelector', 'string_hash', 'daily_index',
    'GameSession',
    'GameService', 'get_game_service', 'initialize_game_service',
    'ResultsService', 'MemoryResultsService', 'MongoResultsService',
    'get_results_service', 'initialize_results_service'
]
