"""
Wordpop Game Server - Main Entry Point

Initializes the results and game services, starts the background expiry
worker and runs the Flask-SocketIO application.
"""

import os
import threading
import time
from wordpop import create_app
from wordpop.config import config
from wordpop.services.game_service import initialize_game_service, get_game_service
from wordpop.services.results_service import initialize_results_service
from wordpop.utils.errors import CorpusUnavailable
from wordpop.utils.game_logger import game_logger
from wordpop.websocket.handlers import broadcast_game_over


def expiry_cleanup_worker(socketio, app_config):
    """
    Background worker that ends timed games whose clock ran out and drops
    sessions that have been idle for too long.
    """
    game_logger.logger.info("Expiry cleanup worker started")
    while True:
        try:
            game_service = get_game_service()
            if game_service:
                for game_id in game_service.expire_timed_games():
                    game_logger.logger.info(f"Timed game {game_id} expired")
                    broadcast_game_over(socketio, game_service, game_id)

                removed = game_service.cleanup_idle_games()
                if removed:
                    game_logger.logger.info(f"Idle cleanup: removed {removed} game session(s)")
        except Exception as e:
            game_logger.logger.error(f"Error in expiry cleanup worker: {e}")

        time.sleep(app_config.EXPIRY_CHECK_INTERVAL_SECONDS)


def main():
    """Main function to initialize services and start the server."""
    app_config = config[os.getenv('APP_ENV', 'default')]

    try:
        print("Creating Flask application...")
        app, socketio = create_app(app_config)
        print("✓ Flask application created successfully")

        print("Initializing services...")
        results_service = initialize_results_service(app_config.MONGO_URI, app_config.MONGO_DB_NAME)
        print(f"✓ Results storage: {type(results_service).__name__}")

        initialize_game_service(app_config, results_service=results_service)
        print("✓ Game service initialized successfully")

        worker = threading.Thread(target=expiry_cleanup_worker, args=(socketio, app_config), daemon=True)
        worker.start()
        print(f"✓ Expiry worker started - checking every {app_config.EXPIRY_CHECK_INTERVAL_SECONDS}s")

        game_logger.logger.info("Wordpop Server Starting")

        print(f"\nStarting Wordpop Game Server on {app_config.HOST}:{app_config.PORT}")
        print(f"Debug mode: {app_config.DEBUG}")
        print("=" * 50)

        socketio.run(app, host=app_config.HOST, port=app_config.PORT, debug=app_config.DEBUG)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Wordpop Server shutting down (KeyboardInterrupt)")
    except CorpusUnavailable as e:
        print(f"Word lists unavailable: {e}")
        game_logger.logger.error(f"Word lists unavailable: {e}")
        raise


if __name__ == '__main__':
    main()
