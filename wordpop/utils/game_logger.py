"""
Game Logger Module for the Wordpop Server

Structured logging for user actions, server responses and game events. Every
entry is a single JSON document written after a timestamp and level prefix.
"""

import json
import logging
from collections import Counter
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

# Event types as they appear in the log, keyed by the stats bucket they count toward
_STAT_BUCKETS = {
    'USER_ACTION': 'user_actions',
    'SERVER_RESPONSE_SUCCESS': 'server_responses',
    'SERVER_RESPONSE_ERROR': 'server_responses',
    'GAME_EVENT': 'game_events',
    'ERROR': 'errors',
}


class GameLogger:
    """
    Centralized logging for the game server.

    Console output carries warnings and errors only. configure() with a log
    directory adds a dated file that receives every entry at the configured
    level. Unsolved words never reach the log.
    """

    def __init__(self, log_dir: Optional[str] = None, level: str = 'INFO'):
        self.log_dir: Optional[Path] = None
        self.logger = logging.getLogger('wordpop')
        self.configure(log_dir, level)

    def configure(self, log_dir: Optional[str] = None, level: str = 'INFO') -> None:
        """Replace the handlers. Passing no log_dir keeps logging console-only."""
        self.logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))
        self.logger.propagate = False

        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        console = logging.StreamHandler()
        console.setLevel(logging.WARNING)
        console.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
        self.logger.addHandler(console)

        self.log_dir = Path(log_dir) if log_dir else None
        if self.log_dir is not None:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            log_file = logging.FileHandler(self._log_file(), encoding='utf-8')
            log_file.setFormatter(logging.Formatter(
                '%(asctime)s | %(levelname)s | %(message)s', datefmt='%Y-%m-%d %H:%M:%S'
            ))
            self.logger.addHandler(log_file)

    def _log_file(self) -> Path:
        return self.log_dir / f"game_log_{datetime.now():%Y-%m-%d}.log"

    @staticmethod
    def _client_ip(request) -> str:
        return getattr(request, 'remote_addr', None) or 'unknown'

    def _emit(self, level: int, event_type: str, action: str, user_ip: str, details: Dict[str, Any]) -> None:
        entry = {
            'timestamp': datetime.now().isoformat(),
            'event_type': event_type,
            'action': action,
            'user': {'user_ip': user_ip},
            'details': details,
        }
        self.logger.log(level, json.dumps(entry, ensure_ascii=False, default=str))

    def log_user_action(self, request, action: str, game_id: Optional[str] = None, **kwargs):
        """
        Record an incoming request.

        Args:
            request: Flask request object
            action: Handler name (e.g. 'new_game', 'submit_guess')
            game_id: Game identifier if applicable
            **kwargs: Extra request details
        """
        details = {'game_id': game_id, 'endpoint': request.endpoint, 'method': request.method, **kwargs}
        self._emit(logging.INFO, 'USER_ACTION', action, self._client_ip(request), details)

    def log_server_response(self, request, action: str, success: bool,
                            response_data: Dict[str, Any], game_id: Optional[str] = None, **kwargs):
        """Record the response to a request; failures are logged as warnings."""
        details = {
            'game_id': game_id,
            'success': success,
            'response_data': self._sanitize_response_data(response_data),
            **kwargs
        }
        if success:
            self._emit(logging.INFO, 'SERVER_RESPONSE_SUCCESS', action, self._client_ip(request), details)
        else:
            self._emit(logging.WARNING, 'SERVER_RESPONSE_ERROR', action, self._client_ip(request), details)

    def log_game_event(self, game_id: str, event: str, user_ip: str, **kwargs):
        """Record a game lifecycle event. Pass target_word only for finished games."""
        self._emit(logging.INFO, 'GAME_EVENT', event, user_ip, {'game_id': game_id, **kwargs})

    def log_error(self, request, error: Exception, action: str, game_id: Optional[str] = None):
        details = {
            'game_id': game_id,
            'error_type': type(error).__name__,
            'error_message': str(error),
        }
        self._emit(logging.ERROR, 'ERROR', action, self._client_ip(request), details)

    @staticmethod
    def _sanitize_response_data(data: Any) -> Dict[str, Any]:
        """Collapse game state to a summary and mask drawn words."""
        if not isinstance(data, dict):
            return {'data_type': type(data).__name__}

        sanitized = dict(data)

        state = sanitized.get('state')
        if isinstance(state, dict):
            sanitized['state'] = {
                'round': state.get('current_round'),
                'outcome': state.get('outcome'),
                'guesses': len(state.get('guesses', [])),
                'answer_revealed': state.get('answer') is not None,
            }

        word = sanitized.get('word')
        if isinstance(word, str):
            sanitized['word'] = '*' * len(word)

        return sanitized

    def get_log_stats(self) -> Dict[str, Any]:
        """Count today's entries per event bucket."""
        if self.log_dir is None:
            return {'error': 'File logging is not configured'}

        log_file = self._log_file()
        if not log_file.exists():
            return {'error': 'No log file found for today'}

        counts = Counter()
        try:
            with open(log_file, 'r', encoding='utf-8') as f:
                for line in f:
                    if not line.strip():
                        continue
                    payload = line.split(' | ', 2)[-1]
                    try:
                        entry = json.loads(payload)
                    except ValueError:
                        # Plain-text lines from game_logger.logger.info(...)
                        entry = None
                    event_type = entry.get('event_type') if isinstance(entry, dict) else None
                    counts['total_entries'] += 1
                    if event_type in _STAT_BUCKETS:
                        counts[_STAT_BUCKETS[event_type]] += 1
        except OSError as e:
            return {'error': f'Failed to get stats: {e}'}

        return {
            'log_file': str(log_file),
            'file_size_mb': round(log_file.stat().st_size / (1024 * 1024), 2),
            'total_entries': counts['total_entries'],
            'user_actions': counts['user_actions'],
            'server_responses': counts['server_responses'],
            'game_events': counts['game_events'],
            'errors': counts['errors'],
        }


# Global logger instance
game_logger = GameLogger()
