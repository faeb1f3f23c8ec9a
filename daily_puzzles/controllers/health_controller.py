"""
Health Controller

Service availability and puzzle sync status for both games.
"""

from flask import Blueprint, request, jsonify
from ..services.sudoku_service import get_sudoku_service
from ..services.wordle_service import get_wordle_service
from ..utils.game_logger import game_logger

health_bp = Blueprint('health', __name__)


def _sync_status(service):
    if service is None or service.sync is None:
        return None
    return service.sync.status.to_dict()


@health_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    try:
        sudoku_service = get_sudoku_service()
        wordle_service = get_wordle_service()

        game_logger.log_user_action(request, 'health_check')

        response_data = {
            'status': 'healthy',
            'sudoku_available': sudoku_service is not None,
            'wordle_available': wordle_service is not None,
            'sync': {
                'sudoku': _sync_status(sudoku_service),
                'wordle': _sync_status(wordle_service),
            }
        }

        game_logger.log_server_response(request, 'health_check', True, response_data)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'health_check')
        error_response = {
            'status': 'error',
            'error': str(e)
        }
        game_logger.log_server_response(request, 'health_check', False, error_response)
        return jsonify(error_response), 500
