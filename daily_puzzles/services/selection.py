"""
Selection Model

Ordered set of selected Sudoku cells. The first coordinate is the primary
cell: it anchors highlighting and arrow-key navigation.
"""

from typing import Iterator, List, Optional

from ..config.game_settings import BOARD_SIZE
from ..models.sudoku import Coord


def in_bounds(coord) -> bool:
    try:
        row, col = coord
    except (TypeError, ValueError):
        return False
    return (isinstance(row, int) and isinstance(col, int)
            and 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE)


class SelectionModel:

    def __init__(self):
        self._cells: List[Coord] = []
        self.dragging = False

    def __iter__(self) -> Iterator[Coord]:
        return iter(list(self._cells))

    def __len__(self) -> int:
        return len(self._cells)

    def __contains__(self, coord) -> bool:
        return tuple(coord) in self._cells if in_bounds(coord) else False

    @property
    def cells(self) -> List[Coord]:
        return list(self._cells)

    @property
    def primary(self) -> Optional[Coord]:
        return self._cells[0] if self._cells else None

    def clear(self) -> None:
        self._cells = []
        self.dragging = False

    def select_only(self, coord: Coord) -> None:
        """Plain click: replace the selection, or clear it when the sole selected cell is clicked again."""
        if not in_bounds(coord):
            return
        coord = tuple(coord)
        if self._cells == [coord]:
            self._cells = []
        else:
            self._cells = [coord]

    def extend(self, coord: Coord) -> None:
        """Shift-click: append if absent."""
        if in_bounds(coord) and tuple(coord) not in self._cells:
            self._cells.append(tuple(coord))

    def toggle(self, coord: Coord) -> None:
        """Ctrl/Cmd-click: remove if present, else append."""
        if not in_bounds(coord):
            return
        coord = tuple(coord)
        if coord in self._cells:
            self._cells.remove(coord)
        else:
            self._cells.append(coord)

    def begin_drag(self) -> None:
        self.dragging = True

    def end_drag(self) -> None:
        self.dragging = False

    def drag_into(self, coord: Coord) -> None:
        """Pointer entered a cell while dragging. Idempotent."""
        if self.dragging:
            self.extend(coord)

    def move_anchor(self, d_row: int, d_col: int, extending: bool = False) -> bool:
        """
        Arrow-key navigation relative to the primary cell.

        Without ``extending`` the selection becomes the single new cell; with
        it the new cell is appended. Moving past an edge does nothing.

        Returns:
            bool: True if the selection changed
        """
        primary = self.primary
        if primary is None:
            return False
        target = (primary[0] + d_row, primary[1] + d_col)
        if target == primary or not in_bounds(target):
            return False
        if extending:
            self.extend(target)
        else:
            self._cells = [target]
        return True
