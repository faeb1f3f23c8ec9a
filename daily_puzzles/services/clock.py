"""
Session Clock

Elapsed-seconds timer for the active Sudoku session, ticking once per second
on the injected scheduler.
"""

from typing import Optional

from .scheduler import ScheduledCall, Scheduler

TICK_SECONDS = 1.0


class SessionClock:

    def __init__(self, scheduler: Scheduler):
        self._scheduler = scheduler
        self._tick: Optional[ScheduledCall] = None
        self.elapsed_seconds = 0
        self.running = False

    def start(self) -> None:
        if self.running:
            return
        self.running = True
        self._schedule_tick()

    def pause(self) -> None:
        self.running = False
        self._cancel_tick()

    # Stopping and pausing differ only in intent: stop is used on completion
    stop = pause

    def toggle(self) -> bool:
        """Start if paused, pause if running. Returns the new running flag."""
        if self.running:
            self.pause()
        else:
            self.start()
        return self.running

    def reset(self) -> None:
        self.pause()
        self.elapsed_seconds = 0

    def _schedule_tick(self) -> None:
        self._tick = self._scheduler.call_later(TICK_SECONDS, self._on_tick)

    def _cancel_tick(self) -> None:
        if self._tick is not None:
            self._tick.cancel()
            self._tick = None

    def _on_tick(self) -> None:
        with self._scheduler.lock:
            if not self.running:
                return
            self.elapsed_seconds += 1
            self._schedule_tick()
