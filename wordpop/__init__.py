"""
Wordpop Game Server Application Package

A word-guessing game server: guess evaluation, deterministic daily words,
timed and blind modes, scoring and result statistics over HTTP and WebSocket.
"""

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from .config import Config
from .utils.game_logger import game_logger


def create_app(config_class=Config):
    """
    Application factory pattern for creating Flask app instances.

    Args:
        config_class: Configuration class to use

    Returns:
        Tuple of (Flask application, SocketIO instance)
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    game_logger.configure(config_class.LOG_DIR, config_class.LOG_LEVEL)

    # Initialize extensions
    CORS(app)
    socketio = SocketIO(app, cors_allowed_origins="*", logger=False, engineio_logger=False)

    # Register blueprints
    from .controllers.game_controller import game_bp
    from .controllers.results_controller import results_bp
    from .controllers.word_controller import word_bp

    app.register_blueprint(game_bp, url_prefix='/api')
    app.register_blueprint(word_bp, url_prefix='/api')
    app.register_blueprint(results_bp, url_prefix='/api')

    # Register WebSocket handlers
    from .websocket.handlers import register_websocket_handlers
    register_websocket_handlers(socketio)

    # Store socketio instance for use in other modules
    app.socketio = socketio

    return app, socketio
