"""
Sudoku Engine

Board model for a 9x9 Sudoku with value entry, two mutually exclusive note
categories, peer-conflict detection, highlight computation and completion
detection.

The board is a flat arena of 81 cells indexed ``row * 9 + col``. Mutations
bump ``version``; hosts that need change detection compare versions and ask
for ``board_view()`` only when it moved.
"""

from typing import Iterable, List, Optional, Sequence, Set, Tuple

from ..config.game_settings import BOARD_SIZE, BOX_SIZE
from ..models.sudoku import Cell, Coord, HighlightSet, InputMode, MODE_ORDER
from .clock import SessionClock
from .selection import SelectionModel, in_bounds

CELL_COUNT = BOARD_SIZE * BOARD_SIZE


def _index(row: int, col: int) -> int:
    return row * BOARD_SIZE + col


def _coord(index: int) -> Coord:
    return divmod(index, BOARD_SIZE)


def _unit_indices(row: int, col: int) -> Tuple[int, ...]:
    """Row, column and box of a cell, the cell itself included."""
    members = set()
    for c in range(BOARD_SIZE):
        members.add(_index(row, c))
    for r in range(BOARD_SIZE):
        members.add(_index(r, col))
    box_row = (row // BOX_SIZE) * BOX_SIZE
    box_col = (col // BOX_SIZE) * BOX_SIZE
    for r in range(box_row, box_row + BOX_SIZE):
        for c in range(box_col, box_col + BOX_SIZE):
            members.add(_index(r, c))
    return tuple(sorted(members))


# Precomputed once: unit (with self) and peers (without self) for every cell
UNITS: Tuple[Tuple[int, ...], ...] = tuple(_unit_indices(*_coord(i)) for i in range(CELL_COUNT))
PEERS: Tuple[Tuple[int, ...], ...] = tuple(
    tuple(j for j in UNITS[i] if j != i) for i in range(CELL_COUNT)
)


def _is_digit(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= 9


class SudokuEngine:
    """
    Constraint engine for one Sudoku session.

    The engine optionally drives a ``SelectionModel`` and ``SessionClock``:
    loading a puzzle clears the selection and resets the clock, and completing
    the puzzle stops the clock. All mutations silently ignore given cells,
    out-of-range coordinates and out-of-range digits, and are rejected once the
    puzzle is completed.
    """

    def __init__(self, clock: Optional[SessionClock] = None,
                 selection: Optional[SelectionModel] = None):
        self.clock = clock
        self.selection = selection
        self._cells: List[Cell] = [Cell() for _ in range(CELL_COUNT)]
        self.solution: Optional[List[List[int]]] = None
        self.mode = InputMode.VALUE
        self.completed = False
        self.version = 0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def load_puzzle(self, grid: Sequence[Sequence[int]],
                    solution: Optional[Sequence[Sequence[int]]] = None) -> None:
        """
        Rebuild the board from a 9x9 grid (0 = blank). Non-zero entries become givens.

        Raises:
            ValueError: If the grid is not 9x9
        """
        if len(grid) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in grid):
            raise ValueError(f"Puzzle grid must be {BOARD_SIZE}x{BOARD_SIZE}")

        cells = []
        for row in grid:
            for value in row:
                if _is_digit(value):
                    cells.append(Cell(value=value, is_given=True))
                else:
                    cells.append(Cell())
        self._cells = cells
        self.solution = [list(row) for row in solution] if solution is not None else None
        self.mode = InputMode.VALUE
        self.completed = False
        if self.selection is not None:
            self.selection.clear()
        if self.clock is not None:
            self.clock.reset()
        self._touch()

    def cycle_mode(self) -> InputMode:
        """Advance VALUE -> POSSIBLE -> POINTING -> VALUE."""
        position = MODE_ORDER.index(self.mode)
        self.mode = MODE_ORDER[(position + 1) % len(MODE_ORDER)]
        return self.mode

    def set_mode(self, mode: InputMode) -> None:
        self.mode = InputMode(mode)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def apply_digit(self, targets: Iterable[Coord], digit: int,
                    mode: Optional[InputMode] = None) -> bool:
        """
        Apply a digit press to every target cell.

        Multi-cell VALUE input is treated as POSSIBLE notes: placing the same
        value in several cells at once is never allowed.

        Returns:
            bool: True if any cell changed
        """
        if self.completed or not _is_digit(digit):
            return False

        targets = list(targets)
        effective = InputMode(mode) if mode is not None else self.mode
        if len(targets) > 1 and effective is InputMode.VALUE:
            effective = InputMode.POSSIBLE

        changed = False
        for coord in targets:
            if not in_bounds(coord):
                continue
            index = _index(*coord)
            cell = self._cells[index]
            if cell.is_given:
                continue

            if effective is InputMode.VALUE:
                was_empty = cell.value is None
                cell.value = None if cell.value == digit else digit
                # A newly placed value rules that digit out as a pointing
                # position everywhere in the cell's row, column and box
                if was_empty and cell.value is not None:
                    for peer in PEERS[index]:
                        self._cells[peer].pointing_notes.discard(digit)
                changed = True
            elif cell.value is None:
                if effective is InputMode.POSSIBLE:
                    own, other = cell.possible_notes, cell.pointing_notes
                else:
                    own, other = cell.pointing_notes, cell.possible_notes
                if digit in own:
                    own.discard(digit)
                else:
                    own.add(digit)
                    other.discard(digit)
                changed = True

        if changed:
            self._touch()
        return changed

    def clear_values(self, targets: Iterable[Coord]) -> bool:
        """Erase values from non-given targets. Notes are kept."""
        if self.completed:
            return False
        changed = False
        for coord in targets:
            if not in_bounds(coord):
                continue
            cell = self._cells[_index(*coord)]
            if cell.is_given or cell.value is None:
                continue
            cell.value = None
            changed = True
        if changed:
            self._touch()
        return changed

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    def conflict_set(self) -> Set[Coord]:
        """Every cell that shares its value with another cell in a row, column or box."""
        conflicts = set()
        for index, cell in enumerate(self._cells):
            if cell.value is None:
                continue
            for peer in PEERS[index]:
                if self._cells[peer].value == cell.value:
                    conflicts.add(_coord(index))
                    conflicts.add(_coord(peer))
        return conflicts

    def highlight_set(self, selection: Iterable[Coord],
                      selected_digit: Optional[int] = None) -> HighlightSet:
        """
        Peers of the primary (first) selected cell, and every cell holding
        either the primary cell's value or the independently selected digit.
        """
        primary = next((tuple(c) for c in selection if in_bounds(c)), None)
        peers = set()
        wanted = set()

        if primary is not None:
            index = _index(*primary)
            peers = {_coord(i) for i in UNITS[index]}
            if self._cells[index].value is not None:
                wanted.add(self._cells[index].value)

        if _is_digit(selected_digit):
            wanted.add(selected_digit)

        same_value = {
            _coord(i) for i, cell in enumerate(self._cells)
            if cell.value is not None and cell.value in wanted
        }
        return HighlightSet(peers=frozenset(peers), same_value=frozenset(same_value))

    def note_conflicts(self, row: int, col: int, digit: int) -> bool:
        """True if ``digit`` is already placed as a value in a peer of (row, col)."""
        if not in_bounds((row, col)):
            return False
        return any(self._cells[peer].value == digit for peer in PEERS[_index(row, col)])

    def is_complete(self, solution: Optional[Sequence[Sequence[int]]] = None) -> bool:
        """
        True iff every cell holds the solution's digit. The first time this
        holds the engine becomes completed: the clock stops and further
        mutation is rejected.
        """
        if self.completed:
            return True
        grid = solution if solution is not None else self.solution
        if grid is None:
            return False

        for index, cell in enumerate(self._cells):
            row, col = _coord(index)
            if cell.value is None or cell.value != grid[row][col]:
                return False

        self.completed = True
        if self.clock is not None:
            self.clock.stop()
        self._touch()
        return True

    def cell(self, row: int, col: int) -> Optional[Cell]:
        """Copy of a cell, or None when out of range."""
        if not in_bounds((row, col)):
            return None
        cell = self._cells[_index(row, col)]
        return Cell(
            value=cell.value,
            is_given=cell.is_given,
            possible_notes=set(cell.possible_notes),
            pointing_notes=set(cell.pointing_notes),
        )

    def values(self) -> List[List[int]]:
        """Current values as a 9x9 grid with 0 for empty cells."""
        return [
            [self._cells[_index(r, c)].value or 0 for c in range(BOARD_SIZE)]
            for r in range(BOARD_SIZE)
        ]

    def board_view(self) -> List[List[dict]]:
        """Snapshot of the whole board for rendering, with per-note conflict flags."""
        view = []
        for r in range(BOARD_SIZE):
            row = []
            for c in range(BOARD_SIZE):
                cell = self._cells[_index(r, c)]
                entry = cell.to_dict()
                notes = cell.possible_notes | cell.pointing_notes
                entry['conflicting_notes'] = sorted(d for d in notes if self.note_conflicts(r, c, d))
                row.append(entry)
            view.append(row)
        return view

    def _touch(self) -> None:
        self.version += 1
