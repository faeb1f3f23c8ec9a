"""
Daily Puzzles Server Application Package

Hosts a Sudoku and a Wordle session behind a JSON HTTP API and a websocket
channel, with today's puzzles kept in sync from remote sources.
"""

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from .config import Config


def create_app(config_class=Config):
    """
    Build the Flask app and its SocketIO server.

    Services must be initialized before the app is created so the websocket
    layer can subscribe to their state changes.

    Args:
        config_class: Configuration class to use

    Returns:
        (app, socketio) tuple
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    CORS(app)
    socketio = SocketIO(app, cors_allowed_origins="*", logger=False, engineio_logger=False)

    # HTTP input port
    from .controllers.sudoku_controller import sudoku_bp
    from .controllers.wordle_controller import wordle_bp
    from .controllers.health_controller import health_bp

    app.register_blueprint(sudoku_bp, url_prefix='/api/sudoku')
    app.register_blueprint(wordle_bp, url_prefix='/api/wordle')
    app.register_blueprint(health_bp, url_prefix='/api')

    # Websocket input port and state broadcasts
    from .websocket.handlers import register_websocket_handlers
    register_websocket_handlers(socketio)

    app.socketio = socketio

    return app, socketio
