"""
Utilities Package

Contains utility functions, decorators, and helper modules.
"""

from .decorators import require_service
from .helpers import format_time, parse_coord, sorted_coords
from .game_logger import game_logger

__all__ = ['require_service', 'format_time', 'parse_coord', 'sorted_coords', 'game_logger']
