"""
Configuration Package

Contains all configuration-related files and settings.

This package separates two types of configuration:
- app_config.py: Flask application configuration (environment-based)
- game_settings.py: Game rules, scoring constants and bundled word data
"""

from .app_config import Config, DevelopmentConfig, ProductionConfig, TestingConfig, config
from .game_settings import (
    WORD_LENGTH, MAX_ROUNDS, TIME_LIMIT_SECONDS, ANSWER_WORDS, GUESS_WORDS,
    DAILY_CHALLENGE_WORDS, WORD_CATEGORIES, validate_word_list_integrity, get_word_statistics
)

__all__ = [
    # App configuration
    'Config', 'DevelopmentConfig', 'ProductionConfig', 'TestingConfig', 'config',
    # Game rules
    'WORD_LENGTH', 'MAX_ROUNDS', 'TIME_LIMIT_SECONDS', 'ANSWER_WORDS', 'GUESS_WORDS',
    'DAILY_CHALLENGE_WORDS', 'WORD_CATEGORIES', 'validate_word_list_integrity', 'get_word_statistics'
]
