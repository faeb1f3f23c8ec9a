"""
WebSocket Event Handlers

Real-time input port and state push for both games. Session services notify
their listeners after every change (including clock-independent scheduled
changes such as reveal steps and sync results); those notifications are
broadcast to every connected client.
"""

from flask import request
from flask_socketio import emit
from ..models.wordle import GuessOutcome
from ..services.sudoku_service import get_sudoku_service
from ..services.wordle_service import get_wordle_service
from ..utils.game_logger import game_logger
from ..utils.helpers import parse_coord


def register_websocket_handlers(socketio):
    """Register all WebSocket event handlers and state broadcasts."""

    sudoku_service = get_sudoku_service()
    wordle_service = get_wordle_service()

    if sudoku_service:
        sudoku_service.add_listener(lambda state: socketio.emit('sudoku_state', state))
    if wordle_service:
        wordle_service.add_listener(lambda state: socketio.emit('wordle_state', state))

    @socketio.on('connect')
    def handle_connect():
        """Send both games' current state to the new client."""
        sudoku = get_sudoku_service()
        wordle = get_wordle_service()
        if sudoku:
            emit('sudoku_state', sudoku.get_state())
        if wordle:
            emit('wordle_state', wordle.get_state())

    @socketio.on('sudoku_pointer')
    def handle_sudoku_pointer(data):
        """Pointer events: ``type`` is 'down', 'enter' or 'up'."""
        service = get_sudoku_service()
        if not service:
            emit('error', {'error': 'Sudoku service unavailable'})
            return

        data = data or {}
        event_type = data.get('type')
        try:
            if event_type == 'up':
                service.pointer_up()
                return

            coord = parse_coord(data)
            if coord is None:
                emit('error', {'error': 'Row and column are required'})
                return

            if event_type == 'down':
                service.pointer_down(*coord, extend=bool(data.get('extend')), toggle=bool(data.get('toggle')))
            elif event_type == 'enter':
                service.pointer_enter(*coord)
            else:
                emit('error', {'error': f'Unknown pointer event {event_type!r}'})
        except Exception as e:
            game_logger.log_error(request, e, 'sudoku_pointer', 'sudoku')
            emit('error', {'error': str(e)})

    @socketio.on('sudoku_key')
    def handle_sudoku_key(data):
        service = get_sudoku_service()
        if not service:
            emit('error', {'error': 'Sudoku service unavailable'})
            return

        data = data or {}
        key = data.get('key')
        if not isinstance(key, str) or not key:
            emit('error', {'error': 'Key is required'})
            return

        try:
            game_logger.log_user_action(request, 'key', 'sudoku', key=key, transport='websocket')
            service.handle_key(key, shift=bool(data.get('shift')))
        except Exception as e:
            game_logger.log_error(request, e, 'sudoku_key', 'sudoku')
            emit('error', {'error': str(e)})

    @socketio.on('wordle_key')
    def handle_wordle_key(data):
        service = get_wordle_service()
        if not service:
            emit('error', {'error': 'Wordle service unavailable'})
            return

        data = data or {}
        key = data.get('key')
        if not isinstance(key, str) or not key:
            emit('error', {'error': 'Key is required'})
            return

        try:
            game_logger.log_user_action(request, 'key', 'wordle', key=key, transport='websocket')
            result = service.handle_key(key)
            if isinstance(result, GuessOutcome):
                emit('wordle_outcome', {'outcome': result.value, 'accepted': result.accepted})
        except Exception as e:
            game_logger.log_error(request, e, 'wordle_key', 'wordle')
            emit('error', {'error': str(e)})
