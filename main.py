"""
Daily Puzzles Server - Main Entry Point

This is the main entry point for the puzzle server.
It initializes the scheduler, both game sessions and their puzzle sync
controllers, then starts the Flask-SocketIO application.
"""

from daily_puzzles import create_app
from daily_puzzles.config import get_config, validate_word_list_integrity
from daily_puzzles.services.scheduler import ThreadingScheduler
from daily_puzzles.services.puzzle_sources import NytSudokuSource, WordfinderWordleSource
from daily_puzzles.services.sudoku_service import initialize_sudoku_service
from daily_puzzles.services.wordle_service import initialize_wordle_service
from daily_puzzles.services.sync_service import PuzzleSyncController
from daily_puzzles.utils.game_logger import game_logger


def main():
    """Main function to initialize services and start the server."""
    app_config = get_config()
    scheduler = ThreadingScheduler()
    sudoku_service = None
    wordle_service = None
    try:
        print("Initializing services...")
        validate_word_list_integrity()

        sudoku_service = initialize_sudoku_service(scheduler)
        sudoku_service.sync = PuzzleSyncController(
            'sudoku', NytSudokuSource(), sudoku_service, scheduler,
            interval_seconds=app_config.SYNC_INTERVAL_SECONDS
        )
        print("✓ Sudoku service initialized successfully")

        wordle_service = initialize_wordle_service(
            scheduler,
            flip_duration=app_config.FLIP_DURATION_SECONDS,
            status_delay=app_config.STATUS_REVEAL_DELAY_SECONDS,
            shake_duration=app_config.SHAKE_DURATION_SECONDS,
            message_duration=app_config.MESSAGE_DURATION_SECONDS,
        )
        wordle_service.sync = PuzzleSyncController(
            'wordle', WordfinderWordleSource(), wordle_service, scheduler,
            interval_seconds=app_config.SYNC_INTERVAL_SECONDS
        )
        print("✓ Wordle service initialized successfully")

        print("Creating Flask application...")
        app, socketio = create_app(app_config)
        print("✓ Flask application created successfully")

        sudoku_service.sync.start()
        wordle_service.sync.start()
        print(f"✓ Puzzle sync started - refreshing every {app_config.SYNC_INTERVAL_SECONDS / 3600:g} hours")

        game_logger.logger.info("Daily Puzzles Server starting")

        print(f"\nStarting Daily Puzzles Server on {app_config.HOST}:{app_config.PORT}")
        print(f"Configuration: {app_config.__name__}, debug mode: {app_config.DEBUG}")
        print("=" * 50)

        # The reloader would start a second scheduler and sync loop
        socketio.run(app, host=app_config.HOST, port=app_config.PORT,
                     debug=app_config.DEBUG, use_reloader=False)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Daily Puzzles Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise
    finally:
        for service in (sudoku_service, wordle_service):
            if service is not None:
                service.teardown()
        scheduler.shutdown()


if __name__ == '__main__':
    main()
