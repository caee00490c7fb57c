from flask import Flask, current_app
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config

socketio = SocketIO(async_mode=None)

REGISTRY_KEY = 'wrdhntr.registry'


def create_app(config_class=Config, dictionary=None):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    allowed_origins = flask_app.config.get('CORS_ORIGINS') or '*'
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from wrdhntr.services.games.dictionary import load_dictionary
    from wrdhntr.services.games.registry import SessionRegistry
    from wrdhntr.services.games.scheduler import schedule_sweep

    # The word list is loaded once, before any session can validate words
    if dictionary is None:
        dictionary = load_dictionary(
            url=flask_app.config.get('WORDLIST_URL'),
            path=flask_app.config.get('WORDLIST_PATH'),
            timeout=flask_app.config.get('WORDLIST_TIMEOUT_SEC', 30),
        )
    registry = SessionRegistry(
        dictionary,
        defaults={
            'mode': flask_app.config.get('DEFAULT_MODE'),
            'letter_count': flask_app.config.get('DEFAULT_LETTER_COUNT'),
            'min_word_length': flask_app.config.get('DEFAULT_MIN_WORD_LENGTH'),
            'duration': flask_app.config.get('DEFAULT_GAME_DURATION_SEC'),
        },
        max_age=flask_app.config.get('SESSION_MAX_AGE_SEC', 30 * 60),
        max_players=flask_app.config.get('MAX_PLAYERS_PER_ROOM', 20),
    )
    flask_app.extensions[REGISTRY_KEY] = registry

    # Import and register blueprints here
    from wrdhntr.main import main
    flask_app.register_blueprint(main)

    from wrdhntr.api.games import games
    # Mount game routes under /api to match frontend API client
    flask_app.register_blueprint(games, url_prefix='/api/games')

    # Register Socket.IO event handlers
    from wrdhntr.socketio_events import register_socketio_handlers
    register_socketio_handlers()

    schedule_sweep(flask_app, registry)
    flask_app.logger.info(
        f"[startup] words={len(dictionary)} source={getattr(dictionary, 'source', '?')} origins={allowed_origins}"
    )
    return flask_app


def get_registry():
    """The session registry owned by the current application."""
    return current_app.extensions[REGISTRY_KEY]
