"""
Configuration Management Module

Centralized configuration management following the 12-factor app methodology.
All configuration is loaded from environment variables with sensible defaults.
"""

import os
from dotenv import load_dotenv

# Load environment variables from config.env next to this module
load_dotenv(os.path.join(os.path.dirname(os.path.abspath(__file__)), 'config.env'))


class Config:
    """Base configuration class with all settings."""

    # Flask Settings
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'

    # Server Settings
    HOST = os.getenv('HOST', '127.0.0.1')
    PORT = int(os.getenv('PORT', 5000))

    # Puzzle Sync Settings
    SYNC_INTERVAL_SECONDS = float(os.getenv('SYNC_INTERVAL_SECONDS', 12 * 60 * 60))
    SUDOKU_SOURCE_URL = os.getenv('SUDOKU_SOURCE_URL', 'https://www.nytimes.com/puzzles/sudoku/hard')
    WORDLE_SOURCE_URL = os.getenv('WORDLE_SOURCE_URL', 'https://wordfinder.yourdictionary.com/wordle/answers/')
    HTTP_TIMEOUT_SECONDS = float(os.getenv('HTTP_TIMEOUT_SECONDS', 20))
    HTTP_USER_AGENT = os.getenv(
        'HTTP_USER_AGENT',
        'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 '
        '(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36'
    )

    # Animation / Feedback Timing
    FLIP_DURATION_SECONDS = float(os.getenv('FLIP_DURATION_SECONDS', 0.5))
    STATUS_REVEAL_DELAY_SECONDS = float(os.getenv('STATUS_REVEAL_DELAY_SECONDS', 0.25))
    SHAKE_DURATION_SECONDS = float(os.getenv('SHAKE_DURATION_SECONDS', 0.45))
    MESSAGE_DURATION_SECONDS = float(os.getenv('MESSAGE_DURATION_SECONDS', 2.0))

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
    SYNC_INTERVAL_SECONDS = 60.0


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': Config
}


def get_config(name=None):
    """
    Resolve a configuration class by name.

    Args:
        name: Key in ``config``; defaults to the APP_CONFIG environment variable

    Raises:
        ValueError: If the name is not a known configuration
    """
    if name is None:
        name = os.getenv('APP_CONFIG', 'default')
    try:
        return config[name.strip().lower()]
    except KeyError:
        raise ValueError(f"Unknown configuration '{name}'. Expected one of: {', '.join(sorted(config))}")
