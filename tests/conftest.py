# tests/conftest.py
import os
import tempfile

# Keep test runs from writing log files into the working tree
os.environ.setdefault('LOG_DIR', tempfile.mkdtemp(prefix='daily_puzzles_logs_'))

import pytest

from daily_puzzles.config.game_settings import SAMPLE_PUZZLE, SAMPLE_SOLUTION
from daily_puzzles.models.sudoku import SudokuSnapshot
from daily_puzzles.models.wordle import WordleSnapshot
from daily_puzzles.services.reveal import RevealSequencer
from daily_puzzles.services.scheduler import ManualScheduler
from daily_puzzles.services.sudoku_engine import SudokuEngine
from daily_puzzles.services.sudoku_service import initialize_sudoku_service
from daily_puzzles.services.sync_service import PuzzleSyncController
from daily_puzzles.services.wordle_engine import WordleEngine
from daily_puzzles.services.wordle_service import initialize_wordle_service

TEST_WORDS = ["ALLOW", "WOOLY", "CRANE", "SLATE", "WHITE", "APPLE", "HEART", "LIGHT", "BRAIN", "CHAIR", "SPEED", "ABIDE"]


class FakeSource:
    """In-memory puzzle source. Results are consumed in order; the last one repeats."""

    def __init__(self, *results):
        self.results = list(results)
        self.calls = 0
        self.before_return = None

    def fetch(self):
        self.calls += 1
        result = self.results.pop(0) if len(self.results) > 1 else self.results[0]
        if self.before_return is not None:
            self.before_return()
        if isinstance(result, Exception):
            raise result
        return result


def make_sudoku_snapshot(blank_rows=(0,), difficulty="Hard", display_date="October 18, 2026"):
    """A snapshot of the sample solution with the given rows blanked out."""
    puzzle = [
        [0 if r in blank_rows else value for value in row]
        for r, row in enumerate(SAMPLE_SOLUTION)
    ]
    return SudokuSnapshot.from_payload({
        'displayDate': display_date,
        'printDate': '2026-10-18',
        'difficulty': difficulty,
        'puzzle': puzzle,
        'solution': SAMPLE_SOLUTION,
    })


def make_wordle_snapshot(word="CRANE", puzzle="1580", date="2026-10-18"):
    return WordleSnapshot.from_payload({'date': date, 'word': word, 'puzzle': puzzle})


def type_word(engine, word):
    for letter in word:
        engine.type_letter(letter)


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def engine():
    sudoku = SudokuEngine()
    sudoku.load_puzzle(SAMPLE_PUZZLE, SAMPLE_SOLUTION)
    return sudoku


@pytest.fixture
def sequencer(scheduler):
    return RevealSequencer(scheduler)


@pytest.fixture
def wordle(sequencer):
    return WordleEngine(TEST_WORDS, sequencer, target="CRANE")


@pytest.fixture
def services(scheduler):
    """Global game sessions backed by in-memory puzzle sources."""
    sudoku = initialize_sudoku_service(scheduler)
    sudoku.sync = PuzzleSyncController('sudoku', FakeSource(make_sudoku_snapshot()), sudoku, scheduler)
    wordle = initialize_wordle_service(scheduler, word_list=TEST_WORDS, fallback_word="CRANE")
    wordle.sync = PuzzleSyncController('wordle', FakeSource(make_wordle_snapshot("SLATE")), wordle, scheduler)
    return sudoku, wordle
