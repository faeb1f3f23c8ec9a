"""
Scheduler

The single "run this later" abstraction behind every timed behavior: the
session clock tick, reveal steps, transient feedback flags and the recurring
puzzle sync.

Every scheduler owns a re-entrant ``lock``. Components take it around each
state mutation, which serializes user input against scheduled callbacks.
"""

import heapq
import itertools
import threading
from typing import Callable, List, Optional, Set, Tuple


class ScheduledCall:
    """Handle for a pending callback. Cancelling a fired call is a no-op."""

    def __init__(self, callback: Callable[[], None]):
        self.callback = callback
        self.cancelled = False
        self.on_cancel: Optional[Callable[[], None]] = None

    def cancel(self) -> None:
        if self.cancelled:
            return
        self.cancelled = True
        if self.on_cancel is not None:
            self.on_cancel()


class Scheduler:
    """Base class for schedulers."""

    def __init__(self):
        self.lock = threading.RLock()

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        raise NotImplementedError

    def shutdown(self) -> None:
        """Cancel everything that has not fired yet."""
        raise NotImplementedError


class ThreadingScheduler(Scheduler):
    """Production scheduler: one daemon ``threading.Timer`` per callback."""

    def __init__(self):
        super().__init__()
        self._timers: Set[threading.Timer] = set()
        self._timers_lock = threading.Lock()
        self._closed = False

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        handle = ScheduledCall(callback)
        timer = None

        def fire():
            with self._timers_lock:
                self._timers.discard(timer)
            if not handle.cancelled:
                callback()

        timer = threading.Timer(max(delay, 0.0), fire)
        timer.daemon = True
        with self._timers_lock:
            if self._closed:
                handle.cancel()
                return handle
            self._timers.add(timer)
        handle.on_cancel = lambda: self._stop_timer(timer)
        timer.start()
        return handle

    def _stop_timer(self, timer: threading.Timer) -> None:
        with self._timers_lock:
            self._timers.discard(timer)
        timer.cancel()

    @property
    def pending(self) -> int:
        with self._timers_lock:
            return len(self._timers)

    def shutdown(self) -> None:
        with self._timers_lock:
            self._closed = True
            timers = list(self._timers)
            self._timers.clear()
        for timer in timers:
            timer.cancel()


class ManualScheduler(Scheduler):
    """
    Virtual-time scheduler for tests and headless hosts.

    Nothing fires until ``advance`` moves the virtual clock forward; callbacks
    then run in due order, including ones scheduled by earlier callbacks that
    fall inside the advanced window.
    """

    def __init__(self):
        super().__init__()
        self.now = 0.0
        self._queue: List[Tuple[float, int, ScheduledCall]] = []
        self._counter = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        handle = ScheduledCall(callback)
        heapq.heappush(self._queue, (self.now + max(delay, 0.0), next(self._counter), handle))
        return handle

    def advance(self, seconds: float = 0.0) -> int:
        """Move virtual time forward, running every callback that comes due. Returns how many ran."""
        deadline = self.now + seconds
        fired = 0
        while self._queue and self._queue[0][0] <= deadline:
            due, _, handle = heapq.heappop(self._queue)
            self.now = max(self.now, due)
            if handle.cancelled:
                continue
            handle.callback()
            fired += 1
        self.now = deadline
        return fired

    @property
    def pending(self) -> int:
        return sum(1 for _, _, handle in self._queue if not handle.cancelled)

    def shutdown(self) -> None:
        for _, _, handle in self._queue:
            handle.cancel()
        self._queue.clear()
