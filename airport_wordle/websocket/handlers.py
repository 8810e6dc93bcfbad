"""
WebSocket Event Handlers

Live key entry and the once-per-second countdown broadcast.
"""

from dataclasses import asdict
from flask_socketio import emit
from ..services.evaluator import GuessRejectedError
from ..services.game_engine import build_view
from ..services.game_service import get_game_service
from ..utils.decorators import websocket_player_required
from ..utils.game_logger import game_logger


def register_websocket_handlers(socketio):
    """Register all WebSocket event handlers."""

    @socketio.on('connect')
    def handle_connect():
        """Send the countdown straight away so the client can render it."""
        game_service = get_game_service()
        if game_service:
            emit('countdown', {
                'day': game_service.current_day(),
                'countdown': game_service.countdown()
            })

    @socketio.on('key')
    @websocket_player_required
    def handle_key(data, game_service=None, player_id=None):
        """Apply one key press and send back the new state."""
        key = (data or {}).get('key') if isinstance(data, dict) else None
        if not isinstance(key, str) or not key:
            emit('error', {'error': 'Key is required'})
            return

        try:
            state = game_service.press_key(player_id, key)
        except GuessRejectedError as e:
            emit('error', {'error': e.message, 'reason': e.reason.value})
            return
        except Exception as e:
            game_logger.logger.error(f"WebSocket key press failed for {player_id}: {e}")
            emit('error', {'error': str(e)})
            return

        emit('state', asdict(build_view(state)))

    @socketio.on('get_state')
    @websocket_player_required
    def handle_get_state(data=None, game_service=None, player_id=None):
        try:
            state = game_service.get_state(player_id)
        except Exception as e:
            game_logger.logger.error(f"WebSocket get_state failed for {player_id}: {e}")
            emit('error', {'error': str(e)})
            return

        emit('state', asdict(build_view(state)))


def countdown_broadcaster(socketio, interval: float = 1.0, max_ticks=None):
    """
    Background task: broadcast the countdown every ``interval`` seconds and
    announce a new puzzle when the UTC date changes.
    """
    last_day = None
    ticks = 0
    while max_ticks is None or ticks < max_ticks:
        game_service = get_game_service()
        if game_service:
            day = game_service.current_day()
            if last_day is not None and day != last_day:
                game_logger.logger.info(f"New daily puzzle for {day}")
                socketio.emit('new_puzzle', {'day': day})
            last_day = day
            socketio.emit('countdown', {'day': day, 'countdown': game_service.countdown()})
        ticks += 1
        socketio.sleep(interval)
