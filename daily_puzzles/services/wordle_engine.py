"""
Wordle Engine

Contains the guess evaluation algorithm and the 6x5 grid state machine.
"""

from typing import Dict, FrozenSet, Iterable, List, Optional

from ..config.game_settings import NUM_COLS, NUM_ROWS
from ..models.wordle import (
    GameStatus, GuessOutcome, LetterStatus, STATUS_RANK, is_valid_target, normalize_word
)
from .reveal import RevealSequencer


def evaluate_guess(guess: str, target: str) -> List[LetterStatus]:
    """
    Implements the Wordle letter evaluation algorithm.

    The first pass marks exact matches and tallies the target letters they
    did not consume. The second pass walks left to right, crediting PRESENT
    only while the tally for that letter lasts, so repeated letters are never
    over-credited and the leftmost occurrences win.
    """
    statuses: List[Optional[LetterStatus]] = [None] * NUM_COLS
    remaining: Dict[str, int] = {}

    for i in range(NUM_COLS):
        if guess[i] == target[i]:
            statuses[i] = LetterStatus.CORRECT
        else:
            remaining[target[i]] = remaining.get(target[i], 0) + 1

    for i in range(NUM_COLS):
        if statuses[i] is not None:
            continue
        letter = guess[i]
        if remaining.get(letter, 0) > 0:
            statuses[i] = LetterStatus.PRESENT
            remaining[letter] -= 1
        else:
            statuses[i] = LetterStatus.ABSENT

    return statuses


class WordleEngine:
    """
    Grid state for one Wordle game.

    This class handles:
    - Letter entry and deletion on the current row
    - Guess validation against the accepted word list
    - Scoring and Playing -> Won/Lost transitions
    - Handing accepted rows to the reveal sequencer
    """

    def __init__(self, word_list: Iterable[str], sequencer: RevealSequencer,
                 target: Optional[str] = None):
        self.word_list: FrozenSet[str] = frozenset(normalize_word(w) for w in word_list)
        self.sequencer = sequencer
        self.target = ""
        self.letters: List[List[str]] = []
        self.statuses: List[List[LetterStatus]] = []
        self.current_row = 0
        self.current_col = 0
        self.status = GameStatus.PLAYING
        self.shake_row: Optional[int] = None
        self._clear_grid()
        if target is not None:
            self.reset(target)

    def _clear_grid(self) -> None:
        self.letters = [[""] * NUM_COLS for _ in range(NUM_ROWS)]
        self.statuses = [[LetterStatus.EMPTY] * NUM_COLS for _ in range(NUM_ROWS)]
        self.current_row = 0
        self.current_col = 0
        self.status = GameStatus.PLAYING
        self.shake_row = None
        self.sequencer.reset()

    def reset(self, target_word: str) -> bool:
        """
        Start a new game for ``target_word``.

        Returns:
            bool: False (and nothing changes) unless the word is five letters A-Z
        """
        if not is_valid_target(target_word):
            return False
        self.target = normalize_word(target_word)
        self._clear_grid()
        return True

    @property
    def accepting_input(self) -> bool:
        return bool(self.target) and self.status is GameStatus.PLAYING and not self.sequencer.busy

    def type_letter(self, letter: str) -> bool:
        if not self.accepting_input or self.current_col >= NUM_COLS:
            return False
        if not isinstance(letter, str) or len(letter) != 1 or not letter.isalpha() or not letter.isascii():
            return False
        self.letters[self.current_row][self.current_col] = letter.upper()
        self.current_col += 1
        return True

    def delete_letter(self) -> bool:
        if not self.accepting_input or self.current_col == 0:
            return False
        self.current_col -= 1
        self.letters[self.current_row][self.current_col] = ""
        return True

    def current_guess(self) -> str:
        return "".join(self.letters[self.current_row]) if self.current_row < NUM_ROWS else ""

    def submit_guess(self, row: Optional[int] = None) -> GuessOutcome:
        """
        Validate, score and reveal the guess on ``row`` (the current row by default).

        Rejections leave the grid untouched; NOT_IN_WORD_LIST additionally
        flags the row for a transient shake. Nothing is accepted until a
        target has been set, and the target itself always counts as a word.
        """
        if row is None:
            row = self.current_row
        if not self.target or self.status is not GameStatus.PLAYING:
            return GuessOutcome.GAME_OVER
        if row != self.current_row:
            return GuessOutcome.NOT_ACTIVE_ROW
        if self.sequencer.busy:
            return GuessOutcome.BUSY
        if self.current_col < NUM_COLS:
            return GuessOutcome.INCOMPLETE

        guess = self.current_guess()
        if guess not in self.word_list and guess != self.target:
            self.shake_row = row
            return GuessOutcome.NOT_IN_WORD_LIST

        self.statuses[row] = evaluate_guess(guess, self.target)
        self.shake_row = None
        self.sequencer.start(row)

        if guess == self.target:
            self.status = GameStatus.WON
            return GuessOutcome.WON

        if row == NUM_ROWS - 1:
            self.status = GameStatus.LOST
            return GuessOutcome.LOST

        self.current_row += 1
        self.current_col = 0
        return GuessOutcome.CONTINUE

    def clear_shake(self) -> None:
        self.shake_row = None

    def visible_status(self, row: int, col: int) -> LetterStatus:
        """Status as the player may currently see it."""
        if self.sequencer.is_revealed(row, col):
            return self.statuses[row][col]
        return LetterStatus.EMPTY

    def keyboard_status(self) -> Dict[str, str]:
        """
        Best status seen so far for each letter across revealed tiles.
        Status can only progress in priority order.
        """
        summary: Dict[str, LetterStatus] = {}
        for r in range(NUM_ROWS):
            for c in range(NUM_COLS):
                letter = self.letters[r][c]
                status = self.visible_status(r, c)
                if not letter or status is LetterStatus.EMPTY:
                    continue
                current = summary.get(letter, LetterStatus.EMPTY)
                if STATUS_RANK[status] > STATUS_RANK[current]:
                    summary[letter] = status
        return {letter: status.value for letter, status in sorted(summary.items())}

    def to_dict(self) -> dict:
        """Grid as seen by the player: statuses are masked until revealed."""
        return {
            'letters': [list(row) for row in self.letters],
            'statuses': [
                [self.visible_status(r, c).value for c in range(NUM_COLS)]
                for r in range(NUM_ROWS)
            ],
            'current_row': self.current_row,
            'current_col': self.current_col,
            'game_status': self.status.value,
            'shake_row': self.shake_row,
            'keyboard': self.keyboard_status(),
            'reveal': self.sequencer.to_dict(),
        }
