"""
Sudoku Controller

HTTP input port for the Sudoku session: pointer, keyboard, number pad,
mode and timer events, plus a manual sync retry.
"""

from flask import Blueprint, request, jsonify
from ..services.sudoku_service import get_sudoku_service
from ..utils.decorators import require_service
from ..utils.game_logger import game_logger
from ..utils.helpers import parse_coord

sudoku_bp = Blueprint('sudoku', __name__)

GAME = 'sudoku'


def _state_response(action, service, **extra):
    response_data = {
        'success': True,
        'state': service.get_state(),
        **extra
    }
    game_logger.log_server_response(request, action, True, response_data, GAME)
    return jsonify(response_data)


def _error_response(action, message, status_code):
    error_response = {
        'success': False,
        'error': message
    }
    game_logger.log_server_response(request, action, False, error_response, GAME)
    return jsonify(error_response), status_code


def _failure(action, error):
    game_logger.log_error(request, error, action, GAME)
    return _error_response(action, str(error), 500)


@sudoku_bp.route('/state', methods=['GET'])
@require_service(get_sudoku_service, 'Sudoku')
def get_state(service):
    """Get the current board and all derived views."""
    try:
        game_logger.log_user_action(request, 'get_state', GAME)
        return _state_response('get_state', service)
    except Exception as e:
        return _failure('get_state', e)


@sudoku_bp.route('/select', methods=['POST'])
@require_service(get_sudoku_service, 'Sudoku')
def select_cell(service):
    """Pointer down on a cell. ``extend`` is shift, ``toggle`` is ctrl/cmd."""
    try:
        data = request.get_json(silent=True) or {}
        coord = parse_coord(data)
        if coord is None:
            return _error_response('select_cell', 'Row and column are required', 400)

        game_logger.log_user_action(request, 'select_cell', GAME, row=coord[0], col=coord[1])
        service.pointer_down(*coord, extend=bool(data.get('extend')), toggle=bool(data.get('toggle')))
        return _state_response('select_cell', service)
    except Exception as e:
        return _failure('select_cell', e)


@sudoku_bp.route('/drag', methods=['POST'])
@require_service(get_sudoku_service, 'Sudoku')
def drag_over_cell(service):
    """Pointer entered a cell while the button is held."""
    try:
        coord = parse_coord(request.get_json(silent=True))
        if coord is None:
            return _error_response('drag', 'Row and column are required', 400)

        service.pointer_enter(*coord)
        return _state_response('drag', service)
    except Exception as e:
        return _failure('drag', e)


@sudoku_bp.route('/drag/end', methods=['POST'])
@require_service(get_sudoku_service, 'Sudoku')
def end_drag(service):
    try:
        service.pointer_up()
        return _state_response('end_drag', service)
    except Exception as e:
        return _failure('end_drag', e)


@sudoku_bp.route('/digit', methods=['POST'])
@require_service(get_sudoku_service, 'Sudoku')
def press_digit(service):
    """Number pad click."""
    try:
        data = request.get_json(silent=True) or {}
        digit = data.get('digit')
        if isinstance(digit, bool) or not isinstance(digit, int) or not 1 <= digit <= 9:
            return _error_response('press_digit', 'Digit must be between 1 and 9', 400)

        game_logger.log_user_action(request, 'press_digit', GAME, digit=digit)
        service.press_digit(digit)
        return _state_response('press_digit', service)
    except Exception as e:
        return _failure('press_digit', e)


@sudoku_bp.route('/key', methods=['POST'])
@require_service(get_sudoku_service, 'Sudoku')
def press_key(service):
    """Keyboard event: digits, Backspace/Delete, arrows (with shift) and Space."""
    try:
        data = request.get_json(silent=True) or {}
        key = data.get('key')
        if not isinstance(key, str) or not key:
            return _error_response('key', 'Key is required', 400)

        game_logger.log_user_action(request, 'key', GAME, key=key)
        handled = service.handle_key(key, shift=bool(data.get('shift')))
        return _state_response('key', service, handled=handled)
    except Exception as e:
        return _failure('key', e)


@sudoku_bp.route('/mode', methods=['POST'])
@require_service(get_sudoku_service, 'Sudoku')
def change_mode(service):
    """Select an input mode, or cycle to the next one when none is given."""
    try:
        data = request.get_json(silent=True) or {}
        mode = data.get('mode')
        game_logger.log_user_action(request, 'change_mode', GAME, mode=mode)

        if mode is None:
            service.cycle_mode()
        else:
            try:
                service.set_mode(mode)
            except ValueError:
                return _error_response('change_mode', 'Mode must be "value", "possible" or "pointing"', 400)

        return _state_response('change_mode', service)
    except Exception as e:
        return _failure('change_mode', e)


@sudoku_bp.route('/timer/toggle', methods=['POST'])
@require_service(get_sudoku_service, 'Sudoku')
def toggle_timer(service):
    try:
        game_logger.log_user_action(request, 'toggle_timer', GAME)
        service.toggle_timer()
        return _state_response('toggle_timer', service)
    except Exception as e:
        return _failure('toggle_timer', e)


@sudoku_bp.route('/sync', methods=['POST'])
@require_service(get_sudoku_service, 'Sudoku')
def retry_sync(service):
    """Manual retry of today's puzzle sync."""
    try:
        if service.sync is None:
            return _error_response('retry_sync', 'Puzzle sync is not configured', 503)

        game_logger.log_user_action(request, 'retry_sync', GAME)
        outcome = service.sync.retry()
        return _state_response('retry_sync', service, outcome=outcome.value)
    except Exception as e:
        return _failure('retry_sync', e)
