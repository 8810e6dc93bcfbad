"""
Utilities Package

Contains utility functions, decorators, and helper modules.
"""

from .decorators import require_game_service, websocket_player_required
from .helpers import get_player_id
from .game_logger import game_logger
from .clock import Clock, SystemClock, FixedClock

__all__ = [
    'require_game_service', 'websocket_player_required',
    'get_player_id', 'game_logger',
    'Clock', 'SystemClock', 'FixedClock'
]
