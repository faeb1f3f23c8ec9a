"""
Sudoku Data Models

Contains the board cell, input mode, derived highlight view and the
snapshot of a fetched daily puzzle.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional, Set, Tuple

from ..config.game_settings import BOARD_SIZE
from .errors import MalformedPuzzleError

Coord = Tuple[int, int]


class InputMode(Enum):
    """What a digit press does to the targeted cells."""
    VALUE = "value"
    POSSIBLE = "possible"
    POINTING = "pointing"


# Fixed cycle order used by the mode toggle
MODE_ORDER: Tuple[InputMode, ...] = (InputMode.VALUE, InputMode.POSSIBLE, InputMode.POINTING)


@dataclass
class Cell:
    """One square of the board. Given cells are never mutated after load."""
    value: Optional[int] = None
    is_given: bool = False
    possible_notes: Set[int] = field(default_factory=set)
    pointing_notes: Set[int] = field(default_factory=set)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'value': self.value,
            'is_given': self.is_given,
            'possible_notes': sorted(self.possible_notes),
            'pointing_notes': sorted(self.pointing_notes),
        }


@dataclass(frozen=True)
class HighlightSet:
    """Cells to emphasize around the primary selection."""
    peers: FrozenSet[Coord] = frozenset()
    same_value: FrozenSet[Coord] = frozenset()


def _grid_from_payload(raw: Any, label: str, allow_blank: bool) -> List[List[int]]:
    """
    Validate a 9x9 digit grid. A flat 81-entry list is accepted as well,
    since that is how the remote page ships it.
    """
    if not isinstance(raw, list):
        raise MalformedPuzzleError(f"Sudoku {label} data is not an array")

    if len(raw) == BOARD_SIZE * BOARD_SIZE and all(not isinstance(v, list) for v in raw):
        raw = [raw[i:i + BOARD_SIZE] for i in range(0, len(raw), BOARD_SIZE)]

    if len(raw) != BOARD_SIZE or any(not isinstance(row, list) or len(row) != BOARD_SIZE for row in raw):
        raise MalformedPuzzleError(f"Sudoku {label} must be a {BOARD_SIZE}x{BOARD_SIZE} grid")

    lowest = 0 if allow_blank else 1
    grid = []
    for row in raw:
        cleaned = []
        for value in row:
            if isinstance(value, bool) or not isinstance(value, int):
                raise MalformedPuzzleError(f"Encountered non-numeric value in {label}")
            if not lowest <= value <= 9:
                raise MalformedPuzzleError(f"Invalid Sudoku digit {value} in {label}")
            cleaned.append(value)
        grid.append(cleaned)
    return grid


def compute_puzzle_key(grid: List[List[int]]) -> str:
    """Deterministic, row-order-preserving serialization of a puzzle grid."""
    return "|".join("".join(str(value) for value in row) for row in grid)


@dataclass(frozen=True)
class SudokuSnapshot:
    """A daily Sudoku as delivered by the puzzle source."""
    puzzle: Tuple[Tuple[int, ...], ...]
    solution: Tuple[Tuple[int, ...], ...]
    display_date: str = ""
    print_date: str = ""
    difficulty: str = ""

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> 'SudokuSnapshot':
        """
        Build a snapshot from the source response shape
        ``{displayDate, printDate, difficulty, puzzle, solution}``.

        Raises:
            MalformedPuzzleError: If either grid fails shape validation
        """
        if not isinstance(payload, dict):
            raise MalformedPuzzleError("Sudoku payload must be an object")

        puzzle = _grid_from_payload(payload.get('puzzle'), 'puzzle', allow_blank=True)
        solution = _grid_from_payload(payload.get('solution'), 'solution', allow_blank=False)

        for r in range(BOARD_SIZE):
            for c in range(BOARD_SIZE):
                if puzzle[r][c] and puzzle[r][c] != solution[r][c]:
                    raise MalformedPuzzleError(f"Given at ({r}, {c}) disagrees with the solution")

        return cls(
            puzzle=tuple(tuple(row) for row in puzzle),
            solution=tuple(tuple(row) for row in solution),
            display_date=str(payload.get('displayDate') or ''),
            print_date=str(payload.get('printDate') or ''),
            difficulty=str(payload.get('difficulty') or ''),
        )

    @property
    def fingerprint(self) -> str:
        return compute_puzzle_key([list(row) for row in self.puzzle])

    @property
    def display_label(self) -> str:
        return self.display_date or self.print_date

    def to_dict(self) -> Dict[str, Any]:
        return {
            'display_date': self.display_date,
            'print_date': self.print_date,
            'difficulty': self.difficulty,
            'display_label': self.display_label,
        }
