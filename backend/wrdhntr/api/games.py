from flask import Blueprint, jsonify, request, current_app
from wrdhntr import get_registry
from wrdhntr.services.games.errors import GameError


games = Blueprint('games', __name__)


def session_options(data: dict) -> dict:
    """Map client option names onto registry overrides."""
    return {
        'mode': data.get('mode'),
        'letter_count': data.get('letterCount'),
        'min_word_length': data.get('minWordLength'),
        'duration': data.get('gameDuration'),
    }


@games.errorhandler(GameError)
def handle_game_error(exc: GameError):
    return jsonify(exc.to_dict()), exc.http_status


@games.route('/create', methods=['POST'])
def create_game():
    data = request.get_json(silent=True) or {}
    session = get_registry().create(**session_options(data))
    current_app.logger.info(f"[create] session={session.id} mode={session.mode} via=http")
    return jsonify({
        'message': 'New game created!',
        'success': True,
        'gameId': session.id,
    }), 201


@games.route('/<string:game_id>/state', methods=['GET'])
def get_game_state(game_id):
    session = get_registry().get(game_id)
    return jsonify({'success': True, 'gameState': session.snapshot()})
