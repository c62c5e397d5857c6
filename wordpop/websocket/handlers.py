"""
WebSocket Event Handlers

Handles real-time game events. Each game has its own Socket.IO room so that
every client watching a game receives its guess results and game-over notice.
"""

from dataclasses import asdict
from flask_socketio import emit, join_room, leave_room
from ..utils.decorators import websocket_game_required
from ..utils.errors import GuessRejected
from ..utils.game_logger import game_logger


def game_room(game_id: str) -> str:
    return f"game_{game_id}"


def game_over_payload(game_id: str, state) -> dict:
    return {
        'game_id': game_id,
        'won': state.won,
        'answer': state.answer,
        'score': state.score,
        'ended_by_time': state.ended_by_time,
        'state': asdict(state)
    }


def register_websocket_handlers(socketio):
    """Register all WebSocket event handlers."""

    @socketio.on('join_game')
    @websocket_game_required
    def handle_join_game(data, game_service=None, game_id=None):
        """Join a game room and receive the current state."""
        state = game_service.get_game_state(game_id)
        if state is None:
            emit('error', {'error': 'Game not found'})
            return

        join_room(game_room(game_id))
        game_logger.logger.info(f"WebSocket: client joined game {game_id}")

        emit('game_state', {
            'success': True,
            'state': asdict(state)
        })

    @socketio.on('leave_game')
    @websocket_game_required
    def handle_leave_game(data, game_service=None, game_id=None):
        """Stop receiving updates for a game."""
        leave_room(game_room(game_id))
        game_logger.logger.info(f"WebSocket: client left game {game_id}")

    @socketio.on('submit_guess')
    @websocket_game_required
    def handle_submit_guess(data, game_service=None, game_id=None):
        """Submit a guess; results go to the whole room, rejections to the sender."""
        guess = data.get('guess')
        if not isinstance(guess, str):
            emit('error', {'error': 'Guess is required'})
            return

        try:
            state = game_service.make_guess(game_id, guess)
        except GuessRejected as e:
            emit('guess_rejected', {'game_id': game_id, **e.to_dict()})
            return

        if state is None:
            emit('error', {'error': 'Game not found'})
            return

        room = game_room(game_id)
        join_room(room)
        emit('guess_result', {
            'success': True,
            'game_id': game_id,
            'guess': guess.strip().upper(),
            'state': asdict(state)
        }, room=room)

        if state.game_over:
            emit('game_over', game_over_payload(game_id, state), room=room)

    @socketio.on('time_up')
    @websocket_game_required
    def handle_time_up(data, game_service=None, game_id=None):
        """Client countdown reached zero."""
        state = game_service.expire_game(game_id)
        if state is None:
            emit('error', {'error': 'Game not found'})
            return

        if not state.game_over:
            emit('game_state', {'success': True, 'state': asdict(state)})
            return

        room = game_room(game_id)
        join_room(room)
        emit('game_over', game_over_payload(game_id, state), room=room)


def broadcast_game_over(socketio, game_service, game_id: str) -> None:
    """Notify a game's room that the server ended it (used by the expiry worker)."""
    state = game_service.get_game_state(game_id)
    if state is None:
        return
    socketio.emit('game_over', game_over_payload(game_id, state), room=game_room(game_id))
