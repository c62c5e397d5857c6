"""
Results Controller

Handles finished-game results and aggregate statistics.
"""

from flask import Blueprint, request, jsonify
from ..services.results_service import get_results_service, validate_result_payload
from ..utils.errors import ResultsStorageError
from ..utils.game_logger import game_logger

results_bp = Blueprint('results', __name__)

DEFAULT_RESULTS_LIMIT = 10
MAX_RESULTS_LIMIT = 100


def _storage_unavailable():
    return jsonify({
        'success': False,
        'error': 'Results service unavailable'
    }), 503


@results_bp.route('/results', methods=['POST'])
def save_result():
    """Store a finished game and update the running statistics."""
    results_service = get_results_service()
    if not results_service:
        return _storage_unavailable()

    data = request.get_json(silent=True)
    errors = validate_result_payload(data)
    if errors:
        error_response = {
            'success': False,
            'error': 'Invalid data',
            'errors': errors
        }
        game_logger.log_server_response(request, 'save_result', False, error_response)
        return jsonify(error_response), 400

    try:
        result = results_service.save_result(data)
    except ResultsStorageError as e:
        game_logger.log_error(request, e, 'save_result')
        return jsonify({'success': False, 'error': 'Failed to save result'}), 500

    response_data = result.to_dict()
    game_logger.log_server_response(request, 'save_result', True, {'id': result.id, 'isWin': result.is_win})
    return jsonify(response_data)


@results_bp.route('/results', methods=['GET'])
def get_results():
    """Most recent results first."""
    results_service = get_results_service()
    if not results_service:
        return _storage_unavailable()

    limit = request.args.get('limit', DEFAULT_RESULTS_LIMIT, type=int)
    if not limit or limit < 1:
        limit = DEFAULT_RESULTS_LIMIT
    limit = min(limit, MAX_RESULTS_LIMIT)

    try:
        results = results_service.get_recent_results(limit)
    except ResultsStorageError as e:
        game_logger.log_error(request, e, 'get_results')
        return jsonify({'success': False, 'error': 'Failed to get results'}), 500

    return jsonify([result.to_dict() for result in results])


@results_bp.route('/stats', methods=['GET'])
def get_stats():
    """Aggregate statistics across every stored result."""
    results_service = get_results_service()
    if not results_service:
        return _storage_unavailable()

    try:
        stats = results_service.get_stats()
    except ResultsStorageError as e:
        game_logger.log_error(request, e, 'get_stats')
        return jsonify({'success': False, 'error': 'Failed to get stats'}), 500

    return jsonify(stats.to_dict())
