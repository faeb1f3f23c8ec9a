"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .errors import PuzzleSourceError, MalformedPuzzleError
from .sudoku import Cell, Coord, HighlightSet, InputMode, MODE_ORDER, SudokuSnapshot
from .sync import SyncOutcome, SyncStatus
from .wordle import GameStatus, GuessOutcome, LetterStatus, WordleSnapshot

__all__ = [
    'PuzzleSourceError', 'MalformedPuzzleError',
    'Cell', 'Coord', 'HighlightSet', 'InputMode', 'MODE_ORDER', 'SudokuSnapshot',
    'SyncOutcome', 'SyncStatus',
    'GameStatus', 'GuessOutcome', 'LetterStatus', 'WordleSnapshot'
]
