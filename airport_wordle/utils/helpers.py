"""
Helper Functions

Contains utility functions used throughout the application.
"""

import uuid
from typing import Optional

from flask import session

PLAYER_SESSION_KEY = 'player_id'


def get_player_id(create: bool = True) -> Optional[str]:
    """
    Returns the player id kept in the signed session cookie.

    The cookie plays the part of a browser profile: each one gets its own
    stored guesses. A new id is issued when ``create`` is set and none exists.
    """
    player_id = session.get(PLAYER_SESSION_KEY)
    if player_id is None and create:
        player_id = uuid.uuid4().hex
        session[PLAYER_SESSION_KEY] = player_id
        session.permanent = True
    return player_id

