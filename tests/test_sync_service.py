# tests/test_sync_service.py
import threading
from datetime import datetime

from daily_puzzles.models.errors import MalformedPuzzleError, PuzzleSourceError
from daily_puzzles.models.sync import SyncOutcome
from daily_puzzles.services.scheduler import ManualScheduler
from daily_puzzles.services.sudoku_service import SudokuService
from daily_puzzles.services.sync_service import PuzzleSyncController
from daily_puzzles.services.wordle_service import WordleService

from conftest import TEST_WORDS, FakeSource, make_sudoku_snapshot, make_wordle_snapshot

NOW = datetime(2026, 10, 18, 9, 30)


def _sudoku_sync(scheduler, source, interval=60.0):
    service = SudokuService(scheduler)
    controller = PuzzleSyncController('sudoku', source, service, scheduler,
                                      interval_seconds=interval, now=lambda: NOW)
    service.sync = controller
    return service, controller


def test_first_sync_adopts_puzzle(scheduler):
    snapshot = make_sudoku_snapshot()
    service, controller = _sudoku_sync(scheduler, FakeSource(snapshot))

    assert controller.sync_now() is SyncOutcome.ADOPTED
    assert controller.fingerprint == snapshot.fingerprint
    assert controller.last_success_at == NOW
    assert service.engine.cell(0, 0).value is None
    assert service.engine.cell(1, 0).is_given
    assert service.puzzle_info['difficulty'] == "Hard"


def test_same_content_only_refreshes_metadata(scheduler):
    first = make_sudoku_snapshot()
    second = make_sudoku_snapshot(difficulty="Medium", display_date="October 19, 2026")
    service, controller = _sudoku_sync(scheduler, FakeSource(first, second))
    controller.sync_now()

    service.toggle_timer()
    service.pointer_down(0, 0)
    service.press_digit(5)
    scheduler.advance(3)

    assert controller.sync_now() is SyncOutcome.REFRESHED
    assert service.engine.cell(0, 0).value == 5
    assert service.selection.cells == [(0, 0)]
    assert service.clock.elapsed_seconds == 3
    assert service.clock.running
    assert service.puzzle_info['difficulty'] == "Medium"
    assert service.puzzle_info['display_label'] == "October 19, 2026"


def test_new_content_resets_session(scheduler):
    first = make_sudoku_snapshot(blank_rows=(0,))
    second = make_sudoku_snapshot(blank_rows=(0, 1))
    service, controller = _sudoku_sync(scheduler, FakeSource(first, second))
    controller.sync_now()

    service.toggle_timer()
    service.pointer_down(0, 0)
    service.press_digit(5)
    scheduler.advance(3)

    assert controller.sync_now() is SyncOutcome.ADOPTED
    assert service.engine.cell(0, 0).value is None
    assert service.engine.cell(1, 0).value is None
    assert service.selection.cells == []
    assert service.selected_digit is None
    assert service.clock.elapsed_seconds == 0
    assert not service.clock.running
    assert controller.fingerprint == second.fingerprint


def test_failure_keeps_last_good_state(scheduler):
    snapshot = make_sudoku_snapshot()
    source = FakeSource(snapshot, PuzzleSourceError("NYT Sudoku responded with HTTP 503"))
    service, controller = _sudoku_sync(scheduler, source)
    controller.sync_now()
    service.toggle_timer()
    service.pointer_down(0, 0)
    service.press_digit(5)

    assert controller.sync_now() is SyncOutcome.FAILED
    assert controller.error == "NYT Sudoku responded with HTTP 503"
    assert controller.error_at == NOW
    assert controller.snapshot is snapshot
    assert controller.fingerprint == snapshot.fingerprint
    assert service.engine.cell(0, 0).value == 5

    status = service.get_state()['sync']
    assert status['error'] == "NYT Sudoku responded with HTTP 503"
    assert status['display_label'] == "October 18, 2026"


def test_retry_after_failure_clears_error(scheduler):
    snapshot = make_sudoku_snapshot()
    source = FakeSource(PuzzleSourceError("offline"), snapshot)
    service, controller = _sudoku_sync(scheduler, source)

    assert controller.sync_now() is SyncOutcome.FAILED
    assert controller.snapshot is None
    assert controller.retry() is SyncOutcome.ADOPTED
    assert controller.error is None
    assert controller.error_at is None


def test_malformed_payload_is_a_failure(scheduler):
    source = FakeSource(MalformedPuzzleError("Sudoku puzzle must be a 9x9 grid"))
    service, controller = _sudoku_sync(scheduler, source)
    assert controller.sync_now() is SyncOutcome.FAILED
    assert "9x9" in controller.error


def test_unexpected_errors_are_recorded(scheduler):
    service, controller = _sudoku_sync(scheduler, FakeSource(RuntimeError("boom")))
    assert controller.sync_now() is SyncOutcome.FAILED
    assert controller.error == "boom"


def test_reentrant_sync_is_skipped(scheduler):
    source = FakeSource(make_sudoku_snapshot())
    service, controller = _sudoku_sync(scheduler, source)
    nested = []
    source.before_return = lambda: nested.append(controller.sync_now())

    assert controller.sync_now() is SyncOutcome.ADOPTED
    assert nested == [SyncOutcome.SKIPPED]
    assert source.calls == 1


def test_concurrent_sync_is_skipped():
    scheduler = ManualScheduler()
    entered = threading.Event()
    release = threading.Event()

    class BlockingSource:
        def fetch(self):
            entered.set()
            release.wait(5)
            return make_sudoku_snapshot()

    service, controller = _sudoku_sync(scheduler, BlockingSource())
    results = []
    worker = threading.Thread(target=lambda: results.append(controller.sync_now()))
    worker.start()
    assert entered.wait(5)

    assert controller.in_flight
    assert controller.sync_now() is SyncOutcome.SKIPPED
    release.set()
    worker.join(5)

    assert results == [SyncOutcome.ADOPTED]
    assert not controller.in_flight
    assert controller.fetch_count == 1


def test_result_after_stop_is_discarded(scheduler):
    source = FakeSource(make_sudoku_snapshot())
    service, controller = _sudoku_sync(scheduler, source)
    source.before_return = controller.stop

    assert controller.sync_now() is SyncOutcome.DISCARDED
    assert controller.snapshot is None
    assert service.puzzle_info is None


def test_failure_after_stop_is_discarded(scheduler):
    source = FakeSource(PuzzleSourceError("offline"))
    service, controller = _sudoku_sync(scheduler, source)
    source.before_return = controller.stop

    assert controller.sync_now() is SyncOutcome.DISCARDED
    assert controller.error is None


def test_schedule_runs_immediately_then_every_interval(scheduler):
    source = FakeSource(make_sudoku_snapshot())
    service, controller = _sudoku_sync(scheduler, source, interval=60.0)

    controller.start()
    controller.start()
    scheduler.advance(0)
    assert source.calls == 1

    scheduler.advance(59)
    assert source.calls == 1
    scheduler.advance(1)
    assert source.calls == 2

    controller.stop()
    scheduler.advance(600)
    assert source.calls == 2


def test_teardown_stops_sync(scheduler):
    source = FakeSource(make_sudoku_snapshot())
    service, controller = _sudoku_sync(scheduler, source)
    controller.start()
    service.teardown()
    scheduler.advance(600)
    assert source.calls == 0


def test_wordle_sync_dedups_on_word(scheduler):
    service = WordleService(scheduler, word_list=TEST_WORDS)
    source = FakeSource(make_wordle_snapshot("CRANE", "1580"), make_wordle_snapshot("CRANE", "#1580"),
                        make_wordle_snapshot("SLATE", "1581"))
    controller = PuzzleSyncController('wordle', source, service, scheduler, now=lambda: NOW)
    service.sync = controller

    assert controller.sync_now() is SyncOutcome.ADOPTED
    assert service.engine.target == "CRANE"
    service.handle_key('S')
    service.handle_key('L')

    assert controller.sync_now() is SyncOutcome.REFRESHED
    assert service.engine.current_guess() == "SL"

    assert controller.sync_now() is SyncOutcome.ADOPTED
    assert service.engine.target == "SLATE"
    assert service.engine.current_guess() == ""
    assert service.puzzle_info == {'date': '2026-10-18', 'puzzle': 'Wordle #1581'}


def test_status_view(scheduler):
    service, controller = _sudoku_sync(scheduler, FakeSource(make_sudoku_snapshot()))
    status = controller.status
    assert status.display_label is None
    assert not status.in_flight

    controller.sync_now()
    data = controller.status.to_dict()
    assert data['display_label'] == "October 18, 2026"
    assert data['difficulty'] == "Hard"
    assert data['last_success_at'] == NOW.isoformat()
    assert data['error'] is None
