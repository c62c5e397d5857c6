"""
Configuration Management Module

Centralized configuration management following the 12-factor app methodology.
All configuration is loaded from environment variables with sensible defaults.
"""

import os
from dotenv import load_dotenv

# Load environment variables from config.env next to this module
load_dotenv(os.path.join(os.path.dirname(os.path.abspath(__file__)), 'config.env'))


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == 'true'


class Config:
    """Base configuration class with all settings."""

    # Flask Settings
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = _env_bool('DEBUG', 'False')
    TESTING = False

    # Server Settings
    HOST = os.getenv('HOST', '127.0.0.1')
    PORT = int(os.getenv('PORT', 5000))

    # Results storage (in-memory when MONGO_URI is unset)
    MONGO_URI = os.getenv('MONGO_URI')
    MONGO_DB_NAME = os.getenv('MONGO_DB_NAME', 'wordpop')

    # Game Settings
    MAX_ROUNDS = int(os.getenv('MAX_ROUNDS', 6))
    TIME_LIMIT_SECONDS = int(os.getenv('TIME_LIMIT_SECONDS', 180))
    DAILY_TIMEZONE = os.getenv('DAILY_TIMEZONE', 'UTC')
    GAME_IDLE_TIMEOUT_SECONDS = int(os.getenv('GAME_IDLE_TIMEOUT_SECONDS', 6 * 60 * 60))
    EXPIRY_CHECK_INTERVAL_SECONDS = int(os.getenv('EXPIRY_CHECK_INTERVAL_SECONDS', 1))

    # Word list Settings
    USE_FREQUENCY_FILTER = _env_bool('USE_FREQUENCY_FILTER', 'True')
    ANSWER_MIN_FREQUENCY = int(os.getenv('ANSWER_MIN_FREQUENCY', 3))
    GUESS_MIN_FREQUENCY = int(os.getenv('GUESS_MIN_FREQUENCY', 1))
    CUSTOM_WORDS_FILE = os.getenv('CUSTOM_WORDS_FILE')
    BLOCKLIST_FILE = os.getenv('BLOCKLIST_FILE')
    ALLOWLIST_FILE = os.getenv('ALLOWLIST_FILE')
    WORD_CACHE_TTL_SECONDS = int(os.getenv('WORD_CACHE_TTL_SECONDS', 24 * 60 * 60))

    # Logging Settings
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_DIR = os.getenv('LOG_DIR', 'logs')


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    DEBUG = True
    MONGO_URI = None
    USE_FREQUENCY_FILTER = False
    ANSWER_MIN_FREQUENCY = 0
    GUESS_MIN_FREQUENCY = 0
    CUSTOM_WORDS_FILE = None
    BLOCKLIST_FILE = None
    ALLOWLIST_FILE = None
    LOG_DIR = None


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
