"""
Puzzle Sync Service

Keeps a game session supplied with today's puzzle. A sync fetches a snapshot
from the puzzle source and compares its content fingerprint with the one
currently adopted:

- different content: the target session is fully reset onto the new puzzle
- same content: only display metadata is refreshed, in-progress play is kept
- failure: the last good snapshot and all play state are kept, the error is
  recorded for display and a retry is possible

At most one fetch is outstanding per controller. The fetch runs outside the
scheduler lock; applying its result happens under it.
"""

import threading
from datetime import datetime
from typing import Callable, Optional, Protocol

from ..config.app_config import Config
from ..models.errors import PuzzleSourceError
from ..models.sync import SyncOutcome, SyncStatus
from ..utils.game_logger import game_logger
from .scheduler import ScheduledCall, Scheduler


class PuzzleSource(Protocol):
    def fetch(self):
        """Return a validated snapshot or raise PuzzleSourceError."""


class SyncTarget(Protocol):
    def adopt_puzzle(self, snapshot) -> None:
        """Reset all play state onto a new puzzle."""

    def refresh_metadata(self, snapshot) -> None:
        """Update labels only, leaving play state alone."""

    def sync_failed(self, message: str) -> None:
        """Surface a failed sync to the player."""


class PuzzleSyncController:
    """Single-flight, fingerprint-deduplicating sync between a puzzle source and a session."""

    def __init__(self, name: str, source: PuzzleSource, target: SyncTarget,
                 scheduler: Scheduler,
                 interval_seconds: float = Config.SYNC_INTERVAL_SECONDS,
                 now: Callable[[], datetime] = datetime.now):
        self.name = name
        self._source = source
        self._target = target
        self._scheduler = scheduler
        self.interval_seconds = interval_seconds
        self._now = now

        self._flight_lock = threading.Lock()
        self._in_flight = False
        self._epoch = 0
        self._timer: Optional[ScheduledCall] = None
        self._running = False

        self.snapshot = None
        self.fingerprint: Optional[str] = None
        self.error: Optional[str] = None
        self.error_at: Optional[datetime] = None
        self.last_success_at: Optional[datetime] = None
        self.fetch_count = 0

    # ------------------------------------------------------------------
    # Scheduling
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Sync once right away, then every ``interval_seconds``."""
        if self._running:
            return
        self._running = True
        self._timer = self._scheduler.call_later(0, self._on_timer)

    def stop(self) -> None:
        """Cancel the schedule. A fetch still in flight is ignored when it returns."""
        self._running = False
        self._epoch += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _on_timer(self) -> None:
        if not self._running:
            return
        self._timer = self._scheduler.call_later(self.interval_seconds, self._on_timer)
        self.sync_now()

    # ------------------------------------------------------------------
    # Sync
    # ------------------------------------------------------------------

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    def sync_now(self) -> SyncOutcome:
        """Fetch and apply today's puzzle unless a fetch is already outstanding."""
        with self._flight_lock:
            if self._in_flight:
                game_logger.log_sync_event(self.name, SyncOutcome.SKIPPED.value)
                return SyncOutcome.SKIPPED
            self._in_flight = True

        epoch = self._epoch
        try:
            self.fetch_count += 1
            try:
                snapshot = self._source.fetch()
            except Exception as e:
                return self._record_failure(e, epoch)
            return self._apply(snapshot, epoch)
        finally:
            with self._flight_lock:
                self._in_flight = False

    # Manual retry after a failure is just another sync
    retry = sync_now

    def _apply(self, snapshot, epoch: int) -> SyncOutcome:
        with self._scheduler.lock:
            if epoch != self._epoch:
                game_logger.log_sync_event(self.name, SyncOutcome.DISCARDED.value)
                return SyncOutcome.DISCARDED

            fingerprint = snapshot.fingerprint
            is_new_puzzle = fingerprint != self.fingerprint

            self.snapshot = snapshot
            self.fingerprint = fingerprint
            self.error = None
            self.error_at = None
            self.last_success_at = self._now()

            if is_new_puzzle:
                self._target.adopt_puzzle(snapshot)
                outcome = SyncOutcome.ADOPTED
            else:
                self._target.refresh_metadata(snapshot)
                outcome = SyncOutcome.REFRESHED

        game_logger.log_sync_event(
            self.name, outcome.value,
            display_label=snapshot.display_label, difficulty=snapshot.difficulty
        )
        return outcome

    def _record_failure(self, error: Exception, epoch: int) -> SyncOutcome:
        message = str(error) or f"Failed to sync {self.name} puzzle"
        if isinstance(error, PuzzleSourceError):
            game_logger.log_sync_event(self.name, SyncOutcome.FAILED.value, success=False, error=message)
        else:
            game_logger.logger.exception(f"Unexpected error while syncing {self.name} puzzle")

        with self._scheduler.lock:
            if epoch != self._epoch:
                return SyncOutcome.DISCARDED
            self.error = message
            self.error_at = self._now()
            self._target.sync_failed(message)
        return SyncOutcome.FAILED

    @property
    def status(self) -> SyncStatus:
        snapshot = self.snapshot
        return SyncStatus(
            in_flight=self._in_flight,
            error=self.error,
            error_at=self.error_at,
            last_success_at=self.last_success_at,
            display_label=snapshot.display_label if snapshot is not None else None,
            difficulty=(snapshot.difficulty or None) if snapshot is not None else None,
            fingerprint=self.fingerprint,
        )
