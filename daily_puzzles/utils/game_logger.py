"""
Game Logger Module for the Daily Puzzles Server

This module provides logging for user actions, server responses, game events
and puzzle sync activity.
"""

import logging
import json
from datetime import datetime
from typing import Dict, Any, Optional
from pathlib import Path

from ..config.app_config import Config


class GameLogger:
    """
    Centralized logging system for the puzzle server.

    Features:
    - User action tracking with client identification
    - Server response logging
    - Game events (solved, won, lost) and sync events
    - JSON structured logs for easy parsing
    """

    def __init__(self, log_dir: str = "logs", level: str = "INFO"):
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.level = getattr(logging, str(level).upper(), logging.INFO)

        self.logger = self._setup_logger()

    def _setup_logger(self) -> logging.Logger:
        """Setup the main game logger with file handler."""
        logger = logging.getLogger('daily_puzzles')
        logger.setLevel(self.level)

        # Prevent duplicate handlers
        if logger.handlers:
            logger.handlers.clear()

        log_file = self.log_dir / f"puzzle_log_{datetime.now().strftime('%Y-%m-%d')}.log"

        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(self.level)

        # Console only gets warnings and errors
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.WARNING)

        file_formatter = logging.Formatter(
            '%(asctime)s | %(levelname)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        console_formatter = logging.Formatter(
            '%(levelname)s: %(message)s'
        )

        file_handler.setFormatter(file_formatter)
        console_handler.setFormatter(console_formatter)

        logger.addHandler(file_handler)
        logger.addHandler(console_handler)

        return logger

    def _get_client_identity(self, request) -> Dict[str, Optional[str]]:
        """Extract client identity information from request."""
        return {
            'client_ip': getattr(request, 'remote_addr', None) or 'unknown',
            'session_id': getattr(request, 'sid', None)
        }

    def _create_log_entry(self,
                          event_type: str,
                          action: str,
                          client_info: Dict[str, Optional[str]],
                          details: Dict[str, Any]) -> str:
        """Create a structured log entry."""
        log_entry = {
            'timestamp': datetime.now().isoformat(),
            'event_type': event_type,
            'action': action,
            'client': client_info,
            'details': details
        }
        return json.dumps(log_entry, ensure_ascii=False, default=str)

    def log_user_action(self,
                        request,
                        action: str,
                        game: Optional[str] = None,
                        **kwargs):
        """
        Log user actions with full context.

        Args:
            request: Flask request object
            action: Type of action (e.g., 'select_cell', 'key', 'retry_sync')
            game: 'sudoku' or 'wordle' if applicable
            **kwargs: Additional details to log
        """
        details = {
            'game': game,
            'endpoint': getattr(request, 'endpoint', None),
            'method': getattr(request, 'method', None),
            **kwargs
        }

        log_message = self._create_log_entry('USER_ACTION', action, self._get_client_identity(request), details)
        self.logger.info(log_message)

    def log_server_response(self,
                            request,
                            action: str,
                            success: bool,
                            response_data: Dict[str, Any],
                            game: Optional[str] = None,
                            **kwargs):
        """
        Log server responses with full context.

        Args:
            request: Flask request object
            action: Action that was performed
            success: Whether the action succeeded
            response_data: Data being returned to client
            game: 'sudoku' or 'wordle' if applicable
            **kwargs: Additional details to log
        """
        details = {
            'game': game,
            'success': success,
            'response_size': len(str(response_data)),
            'response_data': self._sanitize_response_data(response_data),
            **kwargs
        }

        event_type = 'SERVER_RESPONSE_SUCCESS' if success else 'SERVER_RESPONSE_ERROR'
        log_message = self._create_log_entry(event_type, action, self._get_client_identity(request), details)

        if success:
            self.logger.info(log_message)
        else:
            self.logger.error(log_message)

    def log_game_event(self, game: str, event: str, **kwargs):
        """
        Log game-specific events (puzzle solved, wordle won or lost, puzzle adopted).

        Args:
            game: 'sudoku' or 'wordle'
            event: Type of game event
            **kwargs: Additional game details
        """
        details = {'game': game, **kwargs}
        log_message = self._create_log_entry('GAME_EVENT', event, {'client_ip': 'system', 'session_id': None}, details)
        self.logger.info(log_message)

    def log_sync_event(self, game: str, outcome: str, success: bool = True, **kwargs):
        """
        Log the result of a puzzle sync attempt.

        Args:
            game: Which puzzle source was synced
            outcome: SyncOutcome value
            success: False for failed fetches, logged at WARNING
            **kwargs: Additional sync details
        """
        details = {'game': game, **kwargs}
        log_message = self._create_log_entry('SYNC_EVENT', outcome, {'client_ip': 'system', 'session_id': None}, details)
        if success:
            self.logger.info(log_message)
        else:
            self.logger.warning(log_message)

    def log_error(self,
                  request,
                  error: Exception,
                  action: str,
                  game: Optional[str] = None):
        """
        Log errors with full context.

        Args:
            request: Flask request object
            error: Exception that occurred
            action: Action that was being performed
            game: 'sudoku' or 'wordle' if applicable
        """
        details = {
            'game': game,
            'error_type': type(error).__name__,
            'error_message': str(error),
            'action': action
        }

        log_message = self._create_log_entry('ERROR', action, self._get_client_identity(request), details)
        self.logger.error(log_message)

    def _sanitize_response_data(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Keep response logs short: full boards are summarized."""
        if not isinstance(data, dict):
            return {'data_type': type(data).__name__}

        sanitized = data.copy()

        if 'state' in sanitized and isinstance(sanitized['state'], dict):
            state = sanitized['state']
            sanitized['state'] = {
                key: state.get(key)
                for key in ('game_status', 'completed', 'mode', 'current_row', 'elapsed_seconds', 'version')
                if key in state
            }

        return sanitized


# Global logger instance
game_logger = GameLogger(Config.LOG_DIR, Config.LOG_LEVEL)
