"""
Configuration Package

Contains all configuration-related files and settings.

This package separates two types of configuration:
- app_config.py: Flask application configuration (environment-based)
- game_settings.py: Board geometry, fallback puzzles and the word list
"""

from .app_config import Config, DevelopmentConfig, ProductionConfig, TestingConfig, config, get_config
from .game_settings import (
    NUM_ROWS, NUM_COLS, BOARD_SIZE, BOX_SIZE, FALLBACK_WORD,
    SAMPLE_PUZZLE, SAMPLE_SOLUTION, WORD_LIST,
    validate_word_list_integrity
)

__all__ = [
    # App configuration
    'Config', 'DevelopmentConfig', 'ProductionConfig', 'TestingConfig', 'config', 'get_config',
    # Game settings
    'NUM_ROWS', 'NUM_COLS', 'BOARD_SIZE', 'BOX_SIZE', 'FALLBACK_WORD',
    'SAMPLE_PUZZLE', 'SAMPLE_SOLUTION', 'WORD_LIST',
    'validate_word_list_integrity'
]
