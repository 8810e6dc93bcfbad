"""
Game Configuration Constants Module

This module defines the rules of the daily airport code game.
All game parameters are centralized here to enable easy modification.
"""

import os
from datetime import datetime, timezone
from typing import Final, List

# Core Game Configuration Constants
MAX_GUESSES: Final[int] = 6
"""
Maximum number of guess attempts allowed per day.
Type: Final[int] - Immutable to prevent accidental modification
"""

CODE_LENGTH: Final[int] = 3

PUZZLE_EPOCH: Final[datetime] = datetime(2025, 1, 1, tzinfo=timezone.utc)
"""
Day zero of the puzzle sequence. The solution index is the number of whole
UTC days elapsed since this instant.
"""

DAILY_LABEL: Final[str] = "Guess an airport's three-letter code daily!"

# Storage keys, one pair per player scope
DATE_STORAGE_KEY: Final[str] = "airportWordleDate"
GUESSES_STORAGE_KEY: Final[str] = "airportWordleGuesses"

KEYBOARD_LAYOUT: Final[str] = "QWERTYUIOPASDFGHJKLZXCVBNM"

ENTER_KEY: Final[str] = "ENTER"
BACKSPACE_KEYS: Final[List[str]] = ["BACKSPACE", "DEL"]

DEFAULT_CATALOG_PATH: Final[str] = os.path.join(
    os.path.dirname(os.path.abspath(__file__)), 'airport_codes.csv'
)
