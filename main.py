"""
Airport Wordle Server - Main Entry Point

This is the main entry point for the Airport Wordle server.
It loads the airport code catalog, initializes the game service and starts
the Flask-SocketIO application.
"""

import sys
from airport_wordle import create_app
from airport_wordle.config import config
from airport_wordle.services.catalog_service import CatalogError, load_catalog
from airport_wordle.services.game_service import initialize_game_service
from airport_wordle.services.puzzle_selector import parse_epoch
from airport_wordle.services.storage import StorageError, create_storage_factory
from airport_wordle.utils.clock import SystemClock
from airport_wordle.utils.game_logger import game_logger
from airport_wordle.websocket.handlers import countdown_broadcaster


def main(config_name: str = 'default'):
    """Main function to initialize services and start the server."""
    config_class = config.get(config_name, config['default'])

    try:
        print("Initializing services...")

        # The catalog is loaded once; the game cannot start without it
        try:
            catalog = load_catalog(config_class.CATALOG_SOURCE, config_class.CATALOG_TIMEOUT_SECONDS)
        except CatalogError as e:
            print(f"✗ Failed to load airport code catalog: {e}")
            game_logger.logger.error(f"Catalog load failed: {e}")
            sys.exit(1)
        print(f"✓ Loaded {len(catalog)} airport codes")

        try:
            storage_factory = create_storage_factory(config_class)
        except (StorageError, ValueError) as e:
            print(f"✗ Failed to initialize player storage: {e}")
            game_logger.logger.error(f"Storage initialization failed: {e}")
            sys.exit(1)
        print(f"✓ Player storage ready ({config_class.STORAGE_BACKEND})")

        initialize_game_service(
            catalog,
            storage_factory,
            SystemClock(),
            parse_epoch(config_class.PUZZLE_EPOCH),
            config_class.MAX_GUESSES
        )
        print("✓ Game service initialized successfully")

        print("Creating Flask application...")
        app, socketio = create_app(config_class)
        print("✓ Flask application created successfully")

        socketio.start_background_task(countdown_broadcaster, socketio)
        print("✓ Countdown broadcaster started")

        game_logger.logger.info("Airport Wordle Server Starting")

        print(f"\nStarting Airport Wordle Server on {config_class.HOST}:{config_class.PORT}")
        print(f"Debug mode: {config_class.DEBUG}")
        print("=" * 50)

        socketio.run(app, host=config_class.HOST, port=config_class.PORT, debug=config_class.DEBUG)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Airport Wordle Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main(sys.argv[1] if len(sys.argv) > 1 else 'default')
