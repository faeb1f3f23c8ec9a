"""
Sudoku Service

The Sudoku session: engine, selection, clock and the armed palette digit,
plus the input port that turns host pointer/keyboard events into engine
operations. Also the sync target for the daily Sudoku.
"""

from typing import Callable, List, Optional

from ..config.game_settings import SAMPLE_PUZZLE, SAMPLE_SOLUTION
from ..models.sudoku import InputMode, SudokuSnapshot
from ..utils.game_logger import game_logger
from ..utils.helpers import format_time, sorted_coords
from .clock import SessionClock
from .scheduler import Scheduler
from .selection import SelectionModel
from .sudoku_engine import SudokuEngine

ARROW_KEYS = {
    'ArrowUp': (-1, 0),
    'ArrowDown': (1, 0),
    'ArrowLeft': (0, -1),
    'ArrowRight': (0, 1),
}

DIGIT_KEYS = {str(d): d for d in range(1, 10)}


class SudokuService:
    """
    One Sudoku session.

    Every public method runs under the scheduler lock so user input never
    interleaves with clock ticks or a sync being applied, and notifies
    listeners afterwards.
    """

    def __init__(self, scheduler: Scheduler):
        self.scheduler = scheduler
        self.clock = SessionClock(scheduler)
        self.selection = SelectionModel()
        self.engine = SudokuEngine(clock=self.clock, selection=self.selection)
        self.selected_digit: Optional[int] = None
        self.puzzle_info: Optional[dict] = None
        self.sync = None
        self._listeners: List[Callable[[dict], None]] = []
        self.engine.load_puzzle(SAMPLE_PUZZLE, SAMPLE_SOLUTION)

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def add_listener(self, listener: Callable[[dict], None]) -> None:
        self._listeners.append(listener)

    def _notify(self) -> None:
        if not self._listeners:
            return
        state = self.get_state()
        for listener in list(self._listeners):
            listener(state)

    # ------------------------------------------------------------------
    # Pointer input
    # ------------------------------------------------------------------

    def pointer_down(self, row: int, col: int, extend: bool = False, toggle: bool = False) -> None:
        """
        Mouse down on a cell: shift extends, ctrl/cmd toggles, plain click selects.

        The board is covered while the clock is stopped, so clicks do nothing then.
        """
        with self.scheduler.lock:
            if not self.clock.running:
                return
            coord = (row, col)
            if extend and len(self.selection) > 0:
                self.selection.extend(coord)
            elif toggle:
                self.selection.toggle(coord)
            else:
                self.selection.select_only(coord)
            self.selection.begin_drag()
        self._notify()

    def pointer_enter(self, row: int, col: int) -> None:
        with self.scheduler.lock:
            if not self.clock.running or not self.selection.dragging:
                return
            self.selection.drag_into((row, col))
        self._notify()

    def pointer_up(self) -> None:
        with self.scheduler.lock:
            self.selection.end_drag()

    # ------------------------------------------------------------------
    # Digits, modes and keys
    # ------------------------------------------------------------------

    def press_digit(self, digit: int) -> None:
        """Number pad click: toggles the highlighted digit and applies it to the selection."""
        with self.scheduler.lock:
            self.selected_digit = None if digit == self.selected_digit else digit
            if len(self.selection) > 0:
                self._apply_digit(digit)
        self._notify()

    def set_mode(self, mode) -> InputMode:
        with self.scheduler.lock:
            self.engine.set_mode(InputMode(mode))
            mode = self.engine.mode
        self._notify()
        return mode

    def cycle_mode(self) -> InputMode:
        with self.scheduler.lock:
            mode = self.engine.cycle_mode()
        self._notify()
        return mode

    def toggle_timer(self) -> bool:
        """Start or pause the clock. A completed puzzle keeps its final time."""
        with self.scheduler.lock:
            if self.engine.completed:
                return False
            running = self.clock.toggle()
        self._notify()
        return running

    def handle_key(self, key: str, shift: bool = False) -> bool:
        """
        Keyboard input. Returns True if the key was consumed.

        Space cycles the input mode only while the clock runs. Digits apply to
        the selection, or arm the highlighted digit when nothing is selected.
        """
        with self.scheduler.lock:
            if key == ' ':
                if not self.clock.running:
                    return False
                self.engine.cycle_mode()
            elif key in DIGIT_KEYS:
                if len(self.selection) > 0:
                    self._apply_digit(DIGIT_KEYS[key])
                else:
                    self.selected_digit = DIGIT_KEYS[key]
            elif key in ('Backspace', 'Delete'):
                if not self.engine.clear_values(self.selection.cells):
                    return False
            elif key in ARROW_KEYS:
                d_row, d_col = ARROW_KEYS[key]
                if not self.selection.move_anchor(d_row, d_col, extending=shift):
                    return False
            else:
                return False
        self._notify()
        return True

    def _apply_digit(self, digit: int) -> None:
        if self.engine.apply_digit(self.selection.cells, digit):
            self._check_completion()

    def _check_completion(self) -> None:
        was_completed = self.engine.completed
        if self.engine.is_complete() and not was_completed:
            game_logger.log_game_event(
                'sudoku', 'puzzle_solved',
                elapsed_seconds=self.clock.elapsed_seconds,
                puzzle=(self.puzzle_info or {}).get('display_label')
            )

    # ------------------------------------------------------------------
    # Sync target
    # ------------------------------------------------------------------

    def adopt_puzzle(self, snapshot: SudokuSnapshot) -> None:
        """New daily puzzle: full reload, selection and clock reset."""
        with self.scheduler.lock:
            self.engine.load_puzzle(snapshot.puzzle, snapshot.solution)
            self.selected_digit = None
            self.puzzle_info = snapshot.to_dict()
        game_logger.log_game_event('sudoku', 'puzzle_adopted', **snapshot.to_dict())
        self._notify()

    def refresh_metadata(self, snapshot: SudokuSnapshot) -> None:
        with self.scheduler.lock:
            self.puzzle_info = snapshot.to_dict()
        self._notify()

    def sync_failed(self, message: str) -> None:
        self._notify()

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def get_state(self) -> dict:
        """Everything the renderer needs, recomputed from the engine."""
        with self.scheduler.lock:
            highlight = self.engine.highlight_set(self.selection, self.selected_digit)
            return {
                'board': self.engine.board_view(),
                'conflicts': sorted_coords(self.engine.conflict_set()),
                'highlight': {
                    'peers': sorted_coords(highlight.peers),
                    'same_value': sorted_coords(highlight.same_value),
                },
                'selection': [list(coord) for coord in self.selection],
                'selected_digit': self.selected_digit,
                'mode': self.engine.mode.value,
                'completed': self.engine.completed,
                'elapsed_seconds': self.clock.elapsed_seconds,
                'elapsed': format_time(self.clock.elapsed_seconds),
                'timer_running': self.clock.running,
                'puzzle_info': self.puzzle_info,
                'version': self.engine.version,
                'sync': self.sync.status.to_dict() if self.sync is not None else None,
            }

    def teardown(self) -> None:
        with self.scheduler.lock:
            self.clock.stop()
            if self.sync is not None:
                self.sync.stop()


# Global service instance
_sudoku_service = None


def get_sudoku_service() -> Optional[SudokuService]:
    """Get the global Sudoku service instance."""
    return _sudoku_service


def initialize_sudoku_service(scheduler: Scheduler) -> SudokuService:
    """Initialize the global Sudoku service instance."""
    global _sudoku_service
    _sudoku_service = SudokuService(scheduler)
    return _sudoku_service
