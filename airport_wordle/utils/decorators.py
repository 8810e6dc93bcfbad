"""
Request Decorators

Contains decorators shared by the HTTP and WebSocket handlers.
"""

from functools import wraps
from flask import request, jsonify
from flask_socketio import emit

from .helpers import get_player_id


def require_game_service(f):
    """
    Decorator for HTTP endpoints that need the game service.

    Resolves the player from the session cookie and passes both along as
    keyword arguments.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        from ..services.game_service import get_game_service

        game_service = get_game_service()
        if not game_service:
            return jsonify({
                'success': False,
                'error': 'Game service unavailable'
            }), 500

        player_id = get_player_id()
        request.player_id = player_id
        kwargs['game_service'] = game_service
        kwargs['player_id'] = player_id
        return f(*args, **kwargs)

    return decorated_function


def websocket_player_required(f):
    """Decorator for WebSocket events that act on the session's player."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        from ..services.game_service import get_game_service

        game_service = get_game_service()
        if not game_service:
            emit('error', {'error': 'Game service unavailable'})
            return

        player_id = get_player_id(create=False)
        if not player_id:
            emit('error', {'error': 'No player session; load the daily game first'})
            return

        kwargs['game_service'] = game_service
        kwargs['player_id'] = player_id
        return f(*args, **kwargs)

    return decorated_function
