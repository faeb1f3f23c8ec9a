"""
Wordle Data Models

Contains letter statuses, game states, guess outcomes and the snapshot of a
fetched daily answer.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

from ..config.game_settings import NUM_COLS
from .errors import MalformedPuzzleError

_WORD_PATTERN = re.compile(r'^[A-Z]{%d}$' % NUM_COLS)


class LetterStatus(Enum):
    """Letter evaluation status."""
    EMPTY = ""
    ABSENT = "absent"
    PRESENT = "present"
    CORRECT = "correct"


# Keyboard summary precedence: a letter only ever moves up this ladder
STATUS_RANK = {
    LetterStatus.EMPTY: 0,
    LetterStatus.ABSENT: 1,
    LetterStatus.PRESENT: 2,
    LetterStatus.CORRECT: 3,
}


class GameStatus(Enum):
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


class GuessOutcome(Enum):
    """Result of submitting a row."""
    CONTINUE = "continue"
    WON = "won"
    LOST = "lost"
    INCOMPLETE = "incomplete"
    NOT_IN_WORD_LIST = "not_in_word_list"
    BUSY = "busy"
    GAME_OVER = "game_over"
    NOT_ACTIVE_ROW = "not_active_row"

    @property
    def accepted(self) -> bool:
        return self in (GuessOutcome.CONTINUE, GuessOutcome.WON, GuessOutcome.LOST)


def normalize_word(word: Any) -> str:
    """Trim and uppercase; returns '' for anything that is not a string."""
    if not isinstance(word, str):
        return ""
    return word.strip().upper()


def is_valid_target(word: Any) -> bool:
    """True if the word normalizes to exactly five letters A-Z."""
    return bool(_WORD_PATTERN.match(normalize_word(word)))


def format_puzzle_label(raw: str) -> str:
    """Turn the source's puzzle column into a display label such as 'Wordle #1234'."""
    trimmed = (raw or "").strip()
    if not trimmed:
        return "Wordle"
    if "wordle" in trimmed.lower():
        return trimmed
    if trimmed.startswith('#'):
        return f"Wordle {trimmed}"
    return f"Wordle #{trimmed}"


@dataclass(frozen=True)
class WordleSnapshot:
    """Today's Wordle answer as delivered by the puzzle source."""
    date: str
    word: str
    puzzle: str = "Wordle"

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> 'WordleSnapshot':
        """
        Build a snapshot from the source response shape ``{date, word, puzzle}``.

        Raises:
            MalformedPuzzleError: If the word is not five alphabetic characters
        """
        if not isinstance(payload, dict):
            raise MalformedPuzzleError("Wordle payload must be an object")

        word = normalize_word(payload.get('word'))
        if not is_valid_target(word):
            raise MalformedPuzzleError("Received invalid Wordle answer")

        return cls(
            date=str(payload.get('date') or ''),
            word=word,
            puzzle=format_puzzle_label(str(payload.get('puzzle') or '')),
        )

    @property
    def fingerprint(self) -> str:
        return self.word

    @property
    def display_label(self) -> str:
        return self.puzzle

    @property
    def difficulty(self) -> str:
        return ""

    def to_dict(self) -> Dict[str, Any]:
        # The answer itself is never part of the public metadata
        return {'date': self.date, 'puzzle': self.puzzle}
