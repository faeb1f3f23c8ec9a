"""
Wordle Service

The Wordle session: engine, reveal sequencer and transient player feedback
(status message, row shake). Also the sync target for the daily answer.
"""

from typing import Callable, Iterable, List, Optional, Union

from ..config.app_config import Config
from ..config.game_settings import FALLBACK_WORD, WORD_LIST
from ..models.wordle import GameStatus, GuessOutcome, WordleSnapshot
from ..utils.game_logger import game_logger
from .reveal import RevealSequencer
from .scheduler import ScheduledCall, Scheduler
from .wordle_engine import WordleEngine

DEFAULT_HELP_TEXT = "Type a five-letter guess, then press Enter."

OUTCOME_MESSAGES = {
    GuessOutcome.INCOMPLETE: "Fill all 5 letters before submitting.",
    GuessOutcome.NOT_IN_WORD_LIST: "That word is not in the allowed list.",
    GuessOutcome.CONTINUE: "Keep going!",
}


class WordleService:
    """One Wordle session driven by keyboard input."""

    def __init__(self, scheduler: Scheduler,
                 word_list: Iterable[str] = WORD_LIST,
                 fallback_word: str = FALLBACK_WORD,
                 flip_duration: float = Config.FLIP_DURATION_SECONDS,
                 status_delay: float = Config.STATUS_REVEAL_DELAY_SECONDS,
                 shake_duration: float = Config.SHAKE_DURATION_SECONDS,
                 message_duration: float = Config.MESSAGE_DURATION_SECONDS):
        self.scheduler = scheduler
        self.shake_duration = shake_duration
        self.message_duration = message_duration
        self.sequencer = RevealSequencer(
            scheduler, flip_duration=flip_duration, status_delay=status_delay,
            on_update=self._notify
        )
        self.engine = WordleEngine(word_list, self.sequencer, target=fallback_word)
        self.puzzle_info: Optional[dict] = None
        self.sync = None
        self.message = ""
        self.show_message = False
        self._message_timer: Optional[ScheduledCall] = None
        self._shake_timer: Optional[ScheduledCall] = None
        self._listeners: List[Callable[[dict], None]] = []
        self._flash(DEFAULT_HELP_TEXT)

    # ------------------------------------------------------------------
    # Listeners and transient feedback
    # ------------------------------------------------------------------

    def add_listener(self, listener: Callable[[dict], None]) -> None:
        self._listeners.append(listener)

    def _notify(self) -> None:
        if not self._listeners:
            return
        state = self.get_state()
        for listener in list(self._listeners):
            listener(state)

    def _flash(self, text: str) -> None:
        self.message = text
        self.show_message = True
        if self._message_timer is not None:
            self._message_timer.cancel()
        self._message_timer = self.scheduler.call_later(self.message_duration, self._hide_message)

    def _hide_message(self) -> None:
        with self.scheduler.lock:
            self.show_message = False
            self._message_timer = None
        self._notify()

    def _clear_shake(self) -> None:
        with self.scheduler.lock:
            self.engine.clear_shake()
            self._shake_timer = None
        self._notify()

    # ------------------------------------------------------------------
    # Keyboard input
    # ------------------------------------------------------------------

    def handle_key(self, key: str) -> Union[GuessOutcome, bool]:
        """
        Letters fill the current row, Backspace deletes, Enter submits.

        Returns:
            The GuessOutcome for Enter, otherwise whether the key changed the grid
        """
        if key == 'Enter':
            return self.submit()

        with self.scheduler.lock:
            if key == 'Backspace':
                changed = self.engine.delete_letter()
            elif isinstance(key, str) and len(key) == 1:
                changed = self.engine.type_letter(key)
            else:
                changed = False
        if changed:
            self._notify()
        return changed

    def submit(self) -> GuessOutcome:
        with self.scheduler.lock:
            row = self.engine.current_row
            guess = self.engine.current_guess()
            outcome = self.engine.submit_guess()

            if outcome is GuessOutcome.NOT_IN_WORD_LIST:
                if self._shake_timer is not None:
                    self._shake_timer.cancel()
                self._shake_timer = self.scheduler.call_later(self.shake_duration, self._clear_shake)

            if outcome is GuessOutcome.WON:
                self._flash(f"You guessed {self.engine.target}!")
                game_logger.log_game_event('wordle', 'game_won', rounds_used=row + 1, winning_guess=guess)
            elif outcome is GuessOutcome.LOST:
                self._flash(f"Out of guesses. The word was {self.engine.target}.")
                game_logger.log_game_event('wordle', 'game_lost', rounds_used=row + 1, final_guess=guess)
            elif outcome in OUTCOME_MESSAGES:
                self._flash(OUTCOME_MESSAGES[outcome])

        if outcome is not GuessOutcome.BUSY:
            self._notify()
        return outcome

    # ------------------------------------------------------------------
    # Sync target
    # ------------------------------------------------------------------

    def adopt_puzzle(self, snapshot: WordleSnapshot) -> None:
        """New daily answer: the grid, cursors and reveal state start over."""
        with self.scheduler.lock:
            if self._shake_timer is not None:
                self._shake_timer.cancel()
                self._shake_timer = None
            if not self.engine.reset(snapshot.word):
                return
            self.puzzle_info = snapshot.to_dict()
            self._flash("Today's Wordle synced!")
        game_logger.log_game_event('wordle', 'puzzle_adopted', **snapshot.to_dict())
        self._notify()

    def refresh_metadata(self, snapshot: WordleSnapshot) -> None:
        with self.scheduler.lock:
            self.puzzle_info = snapshot.to_dict()
        self._notify()

    def sync_failed(self, message: str) -> None:
        with self.scheduler.lock:
            self._flash("Unable to sync today's Wordle right now.")
        self._notify()

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def get_state(self) -> dict:
        with self.scheduler.lock:
            state = self.engine.to_dict()
            # Only reveal the answer once the game is over
            state['answer'] = self.engine.target if self.engine.status is not GameStatus.PLAYING else None
            state['message'] = self.message if self.show_message else None
            state['puzzle_info'] = self.puzzle_info
            state['sync'] = self.sync.status.to_dict() if self.sync is not None else None
            return state

    def teardown(self) -> None:
        with self.scheduler.lock:
            self.sequencer.cancel()
            for timer in (self._message_timer, self._shake_timer):
                if timer is not None:
                    timer.cancel()
            if self.sync is not None:
                self.sync.stop()


# Global service instance
_wordle_service = None


def get_wordle_service() -> Optional[WordleService]:
    """Get the global Wordle service instance."""
    return _wordle_service


def initialize_wordle_service(scheduler: Scheduler, **kwargs) -> WordleService:
    """Initialize the global Wordle service instance."""
    global _wordle_service
    _wordle_service = WordleService(scheduler, **kwargs)
    return _wordle_service
