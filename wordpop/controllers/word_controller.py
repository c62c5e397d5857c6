"""
Word Controller

Standalone word endpoints: draw a word for a mode, check a word against the
dictionary, add custom words and list the available categories.
"""

from flask import Blueprint, request, jsonify
from ..models.game import GameMode
from ..services.word_corpus import is_well_formed, normalize
from ..utils.decorators import require_game_service
from ..utils.errors import CorpusUnavailable, WordpopError
from ..utils.game_logger import game_logger

word_bp = Blueprint('word', __name__)


def _error(action, message, status):
    error_response = {
        'success': False,
        'error': message
    }
    game_logger.log_server_response(request, action, False, error_response)
    return jsonify(error_response), status


def _word_from_body(action):
    """
    Pull a well-formed word out of the JSON body.

    Returns:
        tuple: (word, None) on success, (None, error response) otherwise
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not isinstance(data.get('word'), str):
        return None, _error(action, 'Word is required', 400)

    word = normalize(data['word'])
    if not is_well_formed(word):
        return None, _error(action, 'Word must be exactly 5 letters A-Z', 400)
    return word, None


@word_bp.route('/word', methods=['GET'])
@require_game_service
def get_word(game_service):
    """Draw a word the way a new game of the given mode would."""
    try:
        mode = request.args.get('mode', GameMode.RANDOM.value)
        category = request.args.get('category')

        try:
            game_mode = GameMode(mode)
        except ValueError:
            return _error('get_word', f'Invalid game mode: {mode}', 400)

        game_logger.log_user_action(request, 'get_word', mode=mode, category=category)

        word, day_key = game_service.selector.pick(game_mode, category)

        response_data = {
            'word': word,
            'mode': game_mode.value
        }
        if day_key:
            response_data['date'] = day_key
        if game_mode is GameMode.CATEGORY:
            response_data['category'] = category

        game_logger.log_server_response(request, 'get_word', True, response_data)
        return jsonify(response_data)

    except CorpusUnavailable as e:
        game_logger.log_error(request, e, 'get_word')
        return jsonify({'success': False, 'error': 'Failed to get word'}), 503


@word_bp.route('/word/validate', methods=['POST'])
@require_game_service
def validate_word(game_service):
    """Check whether a word would be accepted as a guess."""
    word, error = _word_from_body('validate_word')
    if error:
        return error

    is_valid = game_service.loader.corpus.is_valid_guess(word)

    game_logger.log_user_action(request, 'validate_word', word=word, is_valid=is_valid)
    return jsonify({'isValid': is_valid})


@word_bp.route('/word/custom', methods=['POST'])
@require_game_service
def add_custom_word(game_service):
    """Add a word to the custom word list and reload the corpus for new games."""
    word, error = _word_from_body('add_custom_word')
    if error:
        return error

    game_logger.log_user_action(request, 'add_custom_word', word=word)

    try:
        added = game_service.add_custom_word(word)
    except (OSError, WordpopError) as e:
        game_logger.log_error(request, e, 'add_custom_word')
        return jsonify({'success': False, 'error': 'Failed to add custom word'}), 500

    if not added:
        return _error('add_custom_word', 'Custom words are not enabled', 503)

    response_data = {
        'success': True,
        'word': word,
        'isValid': game_service.loader.corpus.is_valid_guess(word)
    }
    game_logger.log_server_response(request, 'add_custom_word', True, response_data)
    return jsonify(response_data)


@word_bp.route('/word/categories', methods=['GET'])
@require_game_service
def list_categories(game_service):
    """List the word categories available for category mode."""
    return jsonify({'categories': game_service.loader.available_categories()})
