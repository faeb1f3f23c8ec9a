"""
Puzzle Sync Models

Outcome and status types reported by the puzzle sync controller.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


class SyncOutcome(Enum):
    ADOPTED = "adopted"        # new puzzle content, engine was reset
    REFRESHED = "refreshed"    # same content, metadata updated only
    SKIPPED = "skipped"        # another sync was already in flight
    FAILED = "failed"          # fetch or validation failed, last good state kept
    DISCARDED = "discarded"    # completed after teardown, result ignored


@dataclass(frozen=True)
class SyncStatus:
    """Read-only view of the controller for status displays."""
    in_flight: bool
    error: Optional[str]
    error_at: Optional[datetime]
    last_success_at: Optional[datetime]
    display_label: Optional[str]
    difficulty: Optional[str]
    fingerprint: Optional[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'in_flight': self.in_flight,
            'error': self.error,
            'error_at': self.error_at.isoformat() if self.error_at else None,
            'last_success_at': self.last_success_at.isoformat() if self.last_success_at else None,
            'display_label': self.display_label,
            'difficulty': self.difficulty,
        }
