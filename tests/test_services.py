# tests/test_services.py
import pytest

from daily_puzzles.config.game_settings import SAMPLE_PUZZLE, SAMPLE_SOLUTION, WORD_LIST
from daily_puzzles.models.sudoku import InputMode
from daily_puzzles.models.wordle import GuessOutcome
from daily_puzzles.services.sudoku_service import SudokuService
from daily_puzzles.services.wordle_service import DEFAULT_HELP_TEXT, WordleService

from conftest import TEST_WORDS, make_wordle_snapshot


@pytest.fixture
def sudoku(scheduler):
    return SudokuService(scheduler)


@pytest.fixture
def playing(sudoku):
    sudoku.toggle_timer()
    return sudoku


@pytest.fixture
def wordle_service(scheduler):
    service = WordleService(scheduler, word_list=TEST_WORDS, fallback_word="CRANE")
    scheduler.advance(2.0)
    return service


def _type(service, word):
    for letter in word:
        service.handle_key(letter)


# ----------------------------------------------------------------------
# Sudoku session
# ----------------------------------------------------------------------

def test_sample_puzzle_loaded_before_sync(sudoku):
    assert sudoku.engine.values() == SAMPLE_PUZZLE
    state = sudoku.get_state()
    assert state['mode'] == 'value'
    assert state['elapsed'] == '00:00'
    assert state['puzzle_info'] is None
    assert state['sync'] is None


def test_click_selects_and_reclick_clears(playing):
    playing.pointer_down(0, 2)
    playing.pointer_up()
    assert playing.selection.cells == [(0, 2)]
    playing.pointer_down(0, 2)
    assert playing.selection.cells == []


def test_shift_click_on_empty_selection_selects(playing):
    playing.pointer_down(0, 2, extend=True)
    assert playing.selection.cells == [(0, 2)]
    playing.pointer_down(0, 3, extend=True)
    assert playing.selection.cells == [(0, 2), (0, 3)]


def test_ctrl_click_toggles(playing):
    playing.pointer_down(0, 2)
    playing.pointer_down(0, 3, toggle=True)
    playing.pointer_down(0, 2, toggle=True)
    assert playing.selection.cells == [(0, 3)]


def test_drag_selection(playing):
    playing.pointer_down(0, 2)
    playing.pointer_enter(0, 3)
    playing.pointer_enter(1, 2)
    playing.pointer_enter(0, 3)
    playing.pointer_up()
    playing.pointer_enter(2, 2)
    assert playing.selection.cells == [(0, 2), (0, 3), (1, 2)]



def test_pointer_ignored_while_clock_stopped(sudoku):
    states = []
    sudoku.add_listener(states.append)
    sudoku.pointer_down(0, 2)
    sudoku.pointer_enter(0, 3)
    assert sudoku.selection.cells == []
    assert not sudoku.selection.dragging
    assert states == []

    assert sudoku.handle_key('4')
    assert sudoku.engine.cell(0, 2).value is None


def test_pointer_ignored_after_pause(playing):
    playing.pointer_down(0, 2)
    playing.pointer_up()
    playing.toggle_timer()
    playing.pointer_down(0, 3)
    assert playing.selection.cells == [(0, 2)]


def test_space_cycles_mode_only_while_clock_runs(sudoku):
    assert sudoku.handle_key(' ') is False
    assert sudoku.engine.mode is InputMode.VALUE

    assert sudoku.toggle_timer() is True
    assert sudoku.handle_key(' ') is True
    assert sudoku.engine.mode is InputMode.POSSIBLE


def test_digit_key_applies_to_selection(playing):
    playing.pointer_down(0, 2)
    assert playing.handle_key('4')
    assert playing.engine.cell(0, 2).value == 4
    assert playing.selected_digit is None


def test_digit_key_without_selection_arms_digit(sudoku):
    assert sudoku.handle_key('5')
    assert sudoku.selected_digit == 5
    highlight = sudoku.get_state()['highlight']
    assert [0, 0] in highlight['same_value']


def test_press_digit_toggles_selected_digit(sudoku):
    sudoku.press_digit(7)
    assert sudoku.selected_digit == 7
    sudoku.press_digit(7)
    assert sudoku.selected_digit is None


def test_backspace_clears_values(playing):
    playing.pointer_down(0, 2)
    playing.set_mode('possible')
    playing.handle_key('1')
    playing.set_mode('value')
    playing.handle_key('4')
    assert playing.handle_key('Backspace')
    cell = playing.engine.cell(0, 2)
    assert cell.value is None
    assert cell.possible_notes == {1}
    assert playing.handle_key('Delete') is False


def test_arrow_keys(playing):
    playing.pointer_down(0, 2)
    assert playing.handle_key('ArrowRight')
    assert playing.selection.cells == [(0, 3)]
    assert playing.handle_key('ArrowDown', shift=True)
    assert playing.selection.cells == [(0, 3), (1, 3)]
    assert playing.handle_key('ArrowUp') is False


def test_unknown_key_not_handled(sudoku):
    assert sudoku.handle_key('x') is False


def test_solving_stops_clock(sudoku, scheduler):
    sudoku.toggle_timer()
    scheduler.advance(65)
    for r in range(9):
        for c in range(9):
            if SAMPLE_PUZZLE[r][c] == 0:
                sudoku.pointer_down(r, c)
                sudoku.handle_key(str(SAMPLE_SOLUTION[r][c]))

    state = sudoku.get_state()
    assert state['completed']
    assert not state['timer_running']
    assert state['elapsed'] == '01:05'
    assert sudoku.toggle_timer() is False

    scheduler.advance(10)
    assert sudoku.clock.elapsed_seconds == 65


def test_listeners_receive_state(playing):
    states = []
    playing.add_listener(states.append)
    playing.pointer_down(0, 2)
    assert states[-1]['selection'] == [[0, 2]]


# ----------------------------------------------------------------------
# Wordle session
# ----------------------------------------------------------------------

def test_help_message_hides_after_timeout(scheduler):
    service = WordleService(scheduler, word_list=TEST_WORDS)
    assert service.get_state()['message'] == DEFAULT_HELP_TEXT
    scheduler.advance(2.0)
    assert service.get_state()['message'] is None


def test_letters_and_backspace(wordle_service):
    _type(wordle_service, "cra")
    assert wordle_service.handle_key('Backspace') is True
    assert wordle_service.engine.current_guess() == "CR"
    assert wordle_service.handle_key('Shift') is False


def test_enter_submits(wordle_service):
    _type(wordle_service, "SLATE")
    assert wordle_service.handle_key('Enter') is GuessOutcome.CONTINUE
    assert wordle_service.get_state()['message'] == "Keep going!"


def test_unknown_word_shakes_briefly(wordle_service, scheduler):
    _type(wordle_service, "ZZZZZ")
    assert wordle_service.submit() is GuessOutcome.NOT_IN_WORD_LIST
    state = wordle_service.get_state()
    assert state['shake_row'] == 0
    assert state['message'] == "That word is not in the allowed list."

    scheduler.advance(0.45)
    assert wordle_service.get_state()['shake_row'] is None


def test_answer_hidden_until_game_over(wordle_service, scheduler):
    assert wordle_service.get_state()['answer'] is None
    _type(wordle_service, "CRANE")
    assert wordle_service.submit() is GuessOutcome.WON
    state = wordle_service.get_state()
    assert state['answer'] == "CRANE"
    assert state['message'] == "You guessed CRANE!"


def test_reveal_steps_notify_listeners(wordle_service, scheduler):
    states = []
    wordle_service.add_listener(states.append)
    _type(wordle_service, "SLATE")
    wordle_service.submit()
    count = len(states)
    scheduler.advance(3.0)
    assert len(states) > count
    assert states[-1]['reveal']['active_row'] is None
    assert states[-1]['statuses'][0] == ["absent", "absent", "correct", "absent", "correct"]


def test_sync_failure_message(wordle_service):
    wordle_service.sync_failed("offline")
    assert wordle_service.get_state()['message'] == "Unable to sync today's Wordle right now."


@pytest.mark.parametrize("answer", ["QUERY", "PIXIE", "NYMPH", "KNOLL"])
def test_synced_answer_is_winnable_with_default_word_list(scheduler, answer):
    assert answer in WORD_LIST
    service = WordleService(scheduler)
    service.adopt_puzzle(make_wordle_snapshot(answer))
    assert service.engine.target == answer

    _type(service, "SLATE")
    assert service.submit() is GuessOutcome.CONTINUE
    scheduler.advance(3.0)

    _type(service, answer)
    assert service.submit() is GuessOutcome.WON
    assert service.get_state()['answer'] == answer
