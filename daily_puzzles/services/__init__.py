"""
Services Package

Contains the puzzle engines, session services and the puzzle sync controller.
"""

from .scheduler import Scheduler, ThreadingScheduler, ManualScheduler
from .sudoku_engine import SudokuEngine
from .wordle_engine import WordleEngine, evaluate_guess
from .sudoku_service import SudokuService, get_sudoku_service
from .wordle_service import WordleService, get_wordle_service
from .sync_service import PuzzleSyncController

__all__ = [
    'Scheduler', 'ThreadingScheduler', 'ManualScheduler',
    'SudokuEngine', 'WordleEngine', 'evaluate_guess',
    'SudokuService', 'get_sudoku_service',
    'WordleService', 'get_wordle_service',
    'PuzzleSyncController'
]
