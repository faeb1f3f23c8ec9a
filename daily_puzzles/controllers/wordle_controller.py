"""
Wordle Controller

HTTP input port for the Wordle session: key presses, guess submission and a
manual sync retry.
"""

from flask import Blueprint, request, jsonify
from ..models.wordle import GuessOutcome
from ..services.wordle_service import get_wordle_service
from ..utils.decorators import require_service
from ..utils.game_logger import game_logger

wordle_bp = Blueprint('wordle', __name__)

GAME = 'wordle'


def _state_response(action, service, **extra):
    response_data = {
        'success': True,
        'state': service.get_state(),
        **extra
    }
    game_logger.log_server_response(request, action, True, response_data, GAME)
    return jsonify(response_data)


def _failure(action, error):
    game_logger.log_error(request, error, action, GAME)
    error_response = {
        'success': False,
        'error': str(error)
    }
    game_logger.log_server_response(request, action, False, error_response, GAME)
    return jsonify(error_response), 500


@wordle_bp.route('/state', methods=['GET'])
@require_service(get_wordle_service, 'Wordle')
def get_state(service):
    """Get the grid as currently visible to the player."""
    try:
        game_logger.log_user_action(request, 'get_state', GAME)
        return _state_response('get_state', service)
    except Exception as e:
        return _failure('get_state', e)


@wordle_bp.route('/key', methods=['POST'])
@require_service(get_wordle_service, 'Wordle')
def press_key(service):
    """Letter A-Z, Backspace or Enter."""
    try:
        data = request.get_json(silent=True) or {}
        key = data.get('key')
        if not isinstance(key, str) or not key:
            error_response = {
                'success': False,
                'error': 'Key is required'
            }
            game_logger.log_server_response(request, 'key', False, error_response, GAME)
            return jsonify(error_response), 400

        game_logger.log_user_action(request, 'key', GAME, key=key)
        result = service.handle_key(key)
        if isinstance(result, GuessOutcome):
            return _state_response('key', service, outcome=result.value, accepted=result.accepted)
        return _state_response('key', service, handled=result)
    except Exception as e:
        return _failure('key', e)


@wordle_bp.route('/guess', methods=['POST'])
@require_service(get_wordle_service, 'Wordle')
def submit_guess(service):
    """
    Submit the current row. Rejections (incomplete, not in word list, busy)
    are reported in ``outcome`` with a 200, they are feedback, not errors.
    """
    try:
        game_logger.log_user_action(request, 'submit_guess', GAME)
        outcome = service.submit()
        return _state_response('submit_guess', service, outcome=outcome.value, accepted=outcome.accepted)
    except Exception as e:
        return _failure('submit_guess', e)


@wordle_bp.route('/sync', methods=['POST'])
@require_service(get_wordle_service, 'Wordle')
def retry_sync(service):
    """Manual retry of today's answer sync."""
    try:
        if service.sync is None:
            error_response = {
                'success': False,
                'error': 'Puzzle sync is not configured'
            }
            game_logger.log_server_response(request, 'retry_sync', False, error_response, GAME)
            return jsonify(error_response), 503

        game_logger.log_user_action(request, 'retry_sync', GAME)
        outcome = service.sync.retry()
        return _state_response('retry_sync', service, outcome=outcome.value)
    except Exception as e:
        return _failure('retry_sync', e)
