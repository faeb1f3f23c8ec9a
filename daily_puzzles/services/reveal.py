"""
Reveal Sequencer

Staged timing for showing a submitted Wordle row one tile at a time. Each
column goes through two phases: after ``status_delay`` its status becomes
visible, after ``flip_duration`` the cursor moves on. Once all columns are
shown, one more ``flip_duration`` passes before the row is released.

The game outcome is decided when the guess is submitted; the sequencer only
controls when it becomes visible.
"""

from typing import Callable, List, Optional

from ..config.game_settings import NUM_COLS, NUM_ROWS
from .scheduler import ScheduledCall, Scheduler

FLIP_DURATION = 0.5
STATUS_REVEAL_DELAY = 0.25


class RevealSequencer:

    def __init__(self, scheduler: Scheduler,
                 flip_duration: float = FLIP_DURATION,
                 status_delay: float = STATUS_REVEAL_DELAY,
                 on_finished: Optional[Callable[[int], None]] = None,
                 on_update: Optional[Callable[[], None]] = None):
        if not 0 <= status_delay < flip_duration:
            raise ValueError("status_delay must fall inside flip_duration")
        self._scheduler = scheduler
        self.flip_duration = flip_duration
        self.status_delay = status_delay
        self.on_finished = on_finished
        self.on_update = on_update
        self._pending: List[ScheduledCall] = []
        self.active_row: Optional[int] = None
        self.step = 0
        self.revealed_up_to: List[int] = [-1] * NUM_ROWS

    @property
    def busy(self) -> bool:
        return self.active_row is not None

    def start(self, row: int) -> bool:
        """Begin revealing ``row``. Refused while another row is still revealing."""
        if self.busy or not 0 <= row < NUM_ROWS:
            return False
        self.revealed_up_to[row] = -1
        self.active_row = row
        self.step = 0
        self._run_step()
        return True

    def cancel(self) -> None:
        for handle in self._pending:
            handle.cancel()
        self._pending = []

    def reset(self) -> None:
        self.cancel()
        self.active_row = None
        self.step = 0
        self.revealed_up_to = [-1] * NUM_ROWS

    def is_revealed(self, row: int, col: int) -> bool:
        return 0 <= row < NUM_ROWS and self.revealed_up_to[row] >= col

    def is_flipping(self, row: int, col: int) -> bool:
        return self.active_row == row and self.step == col

    def to_dict(self) -> dict:
        return {
            'active_row': self.active_row,
            'step': self.step,
            'revealed_up_to': list(self.revealed_up_to),
        }

    def _schedule(self, delay: float, callback: Callable[[], None]) -> None:
        self._pending.append(self._scheduler.call_later(delay, callback))

    def _run_step(self) -> None:
        self.cancel()
        if self.step >= NUM_COLS:
            self._schedule(self.flip_duration, self._finish)
            return
        self._schedule(self.status_delay, self._show_status)
        self._schedule(self.flip_duration, self._advance)

    def _show_status(self) -> None:
        with self._scheduler.lock:
            if self.active_row is not None:
                self.revealed_up_to[self.active_row] = self.step
                self._updated()

    def _advance(self) -> None:
        with self._scheduler.lock:
            if self.active_row is None:
                return
            self.step += 1
            self._run_step()
            self._updated()

    def _finish(self) -> None:
        with self._scheduler.lock:
            row = self.active_row
            self._pending = []
            self.active_row = None
            self.step = 0
            if row is not None and self.on_finished is not None:
                self.on_finished(row)
            self._updated()

    def _updated(self) -> None:
        if self.on_update is not None:
            self.on_update()
