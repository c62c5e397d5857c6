"""
Game Controller

Handles all game-session HTTP endpoints.
"""

from flask import Blueprint, request, jsonify
from dataclasses import asdict
from ..models.game import GameMode
from ..services.results_service import get_results_service
from ..utils.decorators import require_game_service
from ..utils.errors import CorpusUnavailable, GuessRejected
from ..utils.game_logger import game_logger

game_bp = Blueprint('game', __name__)

GAME_MODES = [mode.value for mode in GameMode]


def _error(action, message, status, game_id=None, **details):
    """Log and build a JSON error response."""
    error_response = {
        'success': False,
        'error': message,
        **details
    }
    game_logger.log_server_response(request, action, False, error_response, game_id)
    return jsonify(error_response), status


def _game_not_found(action, game_id):
    return _error(action, 'Game not found', 404, game_id)


@game_bp.route('/new_game', methods=['POST'])
@require_game_service
def new_game(game_service):
    """Create a new game session."""
    try:
        data = request.get_json(silent=True) or {}
        if not isinstance(data, dict):
            return _error('new_game', 'Request body must be a JSON object', 400)

        mode = data.get('mode', GameMode.RANDOM.value)
        category = data.get('category')
        timed = data.get('timed')
        blind = data.get('blind', False)

        if mode not in GAME_MODES:
            return _error('new_game', f'Invalid game mode. Must be one of: {", ".join(GAME_MODES)}', 400)
        if timed is not None and not isinstance(timed, bool):
            return _error('new_game', 'timed must be a boolean', 400)
        if not isinstance(blind, bool):
            return _error('new_game', 'blind must be a boolean', 400)
        if category is not None and not isinstance(category, str):
            return _error('new_game', 'category must be a string', 400)

        game_logger.log_user_action(request, 'new_game', mode=mode, category=category, timed=timed, blind=blind)

        game_id = game_service.create_new_game(mode, category=category, timed=timed, blind=blind)
        state = game_service.get_game_state(game_id)

        response_data = {
            'success': True,
            'game_id': game_id,
            'state': asdict(state)
        }

        game_logger.log_server_response(
            request, 'new_game', True, response_data, game_id,
            mode=mode, max_rounds=state.max_rounds
        )

        return jsonify(response_data)

    except CorpusUnavailable as e:
        game_logger.log_error(request, e, 'new_game')
        return _error('new_game', str(e), 503)
    except Exception as e:
        game_logger.log_error(request, e, 'new_game')
        return _error('new_game', str(e), 500)


@game_bp.route('/game/<game_id>/state', methods=['GET'])
@require_game_service
def get_state(game_id, game_service):
    """Get current game state."""
    try:
        game_logger.log_user_action(request, 'get_state', game_id)

        state = game_service.get_game_state(game_id)
        if state is None:
            return _game_not_found('get_state', game_id)

        response_data = {
            'success': True,
            'state': asdict(state)
        }

        game_logger.log_server_response(
            request, 'get_state', True, response_data, game_id,
            current_round=state.current_round, game_over=state.game_over
        )

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'get_state', game_id)
        return _error('get_state', str(e), 500, game_id)


@game_bp.route('/game/<game_id>/guess', methods=['POST'])
@require_game_service
def submit_guess(game_id, game_service):
    """Submit a guess for the current game."""
    try:
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or not isinstance(data.get('guess'), str):
            return _error('submit_guess', 'Guess is required', 400, game_id)

        guess = data['guess']
        game_logger.log_user_action(request, 'submit_guess', game_id, guess=guess.strip().upper())

        try:
            state = game_service.make_guess(game_id, guess)
        except GuessRejected as e:
            error_response = e.to_dict()
            game_logger.log_server_response(
                request, 'submit_guess', False, error_response, game_id,
                attempted_guess=e.guess
            )
            return jsonify(error_response), 400

        if state is None:
            return _game_not_found('submit_guess', game_id)

        response_data = {
            'success': True,
            'state': asdict(state)
        }

        game_logger.log_server_response(
            request, 'submit_guess', True, response_data, game_id,
            round=state.current_round, game_over=state.game_over
        )

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'submit_guess', game_id)
        return _error('submit_guess', str(e), 500, game_id)


@game_bp.route('/game/<game_id>/time_up', methods=['POST'])
@require_game_service
def time_up(game_id, game_service):
    """Report that a timed game's countdown reached zero."""
    try:
        game_logger.log_user_action(request, 'time_up', game_id)

        state = game_service.expire_game(game_id)
        if state is None:
            return _game_not_found('time_up', game_id)

        response_data = {
            'success': True,
            'state': asdict(state)
        }

        game_logger.log_server_response(
            request, 'time_up', True, response_data, game_id,
            ended_by_time=state.ended_by_time
        )

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'time_up', game_id)
        return _error('time_up', str(e), 500, game_id)


@game_bp.route('/game/<game_id>/reset', methods=['POST'])
@require_game_service
def reset_game(game_id, game_service):
    """Start a game over on a freshly drawn word with the same mode."""
    try:
        data = request.get_json(silent=True) or {}
        category = data.get('category') if isinstance(data, dict) else None
        if category is not None and not isinstance(category, str):
            return _error('reset_game', 'category must be a string', 400, game_id)

        game_logger.log_user_action(request, 'reset_game', game_id, category=category)

        state = game_service.reset_game(game_id, category=category)
        if state is None:
            return _game_not_found('reset_game', game_id)

        response_data = {
            'success': True,
            'state': asdict(state)
        }

        game_logger.log_server_response(request, 'reset_game', True, response_data, game_id)
        game_logger.log_game_event(game_id, 'game_reset', request.remote_addr)

        return jsonify(response_data)

    except CorpusUnavailable as e:
        game_logger.log_error(request, e, 'reset_game', game_id)
        return _error('reset_game', str(e), 503, game_id)
    except Exception as e:
        game_logger.log_error(request, e, 'reset_game', game_id)
        return _error('reset_game', str(e), 500, game_id)


@game_bp.route('/game/<game_id>', methods=['DELETE'])
@require_game_service
def delete_game(game_id, game_service):
    """Delete a game session."""
    try:
        game_logger.log_user_action(request, 'delete_game', game_id)

        if not game_service.delete_game(game_id):
            return _game_not_found('delete_game', game_id)

        response_data = {
            'success': True
        }

        game_logger.log_server_response(request, 'delete_game', True, response_data, game_id)
        game_logger.log_game_event(game_id, 'game_deleted', request.remote_addr)

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'delete_game', game_id)
        return _error('delete_game', str(e), 500, game_id)


@game_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    from ..services.game_service import get_game_service

    try:
        game_service = get_game_service()
        results_service = get_results_service()

        game_logger.log_user_action(request, 'health_check')

        response_data = {
            'status': 'healthy' if game_service else 'degraded',
            'active_games': game_service.active_games if game_service else 0,
            'results_storage': type(results_service).__name__ if results_service else None,
            'word_cache': game_service.loader.cache_stats() if game_service else {},
            'log_stats': game_logger.get_log_stats()
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
