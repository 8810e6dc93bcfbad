"""
Session Store

Persists the day's guesses under a date stamp. Entries from earlier days are
simply ignored on restore; nothing is ever deleted.
"""

import json
from typing import List, Sequence

from ..config.game_settings import DATE_STORAGE_KEY, GUESSES_STORAGE_KEY
from ..utils.game_logger import game_logger
from .catalog_service import CODE_PATTERN
from .storage import Storage, StorageError


def save_guesses(storage: Storage, day: str, guesses: Sequence[str]) -> None:
    """
    Overwrites the stored date and guess list in one write.

    The guess list is ordered before the date: on a backend that writes key
    by key, a failure part way leaves an old date, so the half-written list
    is never restored as today's.

    Raises:
        StorageError: If the backend cannot write
    """
    storage.set_items({
        GUESSES_STORAGE_KEY: json.dumps(list(guesses)),
        DATE_STORAGE_KEY: day,
    })


def restore_guesses(storage: Storage, day: str) -> List[str]:
    """
    Returns the guesses stored for ``day``.

    A different stored date means a fresh day. Unreadable storage or a
    malformed guess list is treated the same way, so a broken entry never
    keeps a player out of the game.
    """
    try:
        if storage.get_item(DATE_STORAGE_KEY) != day:
            return []
        raw = storage.get_item(GUESSES_STORAGE_KEY) or "[]"
    except StorageError as e:
        game_logger.logger.warning(f"Could not read stored guesses, starting fresh: {e}")
        return []

    try:
        guesses = json.loads(raw)
    except ValueError as e:
        game_logger.logger.warning(f"Stored guesses are not valid JSON, starting fresh: {e}")
        return []

    if not isinstance(guesses, list) or not all(isinstance(g, str) for g in guesses):
        game_logger.logger.warning(f"Stored guesses have an unexpected shape, starting fresh: {raw[:100]}")
        return []

    codes = [g.upper() for g in guesses]
    if not all(CODE_PATTERN.fullmatch(code) for code in codes):
        game_logger.logger.warning(f"Stored guesses hold an invalid airport code, starting fresh: {raw[:100]}")
        return []

    return codes
