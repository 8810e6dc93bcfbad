"""
Game Service

Connects the pure game engine to player storage and the clock.
"""

import threading
from datetime import datetime
from typing import Dict, List, Optional

from ..config.game_settings import MAX_GUESSES, PUZZLE_EPOCH
from ..models.game import GameState
from ..utils.clock import Clock, SystemClock
from ..utils.game_logger import game_logger
from . import game_engine
from .catalog_service import get_catalog_statistics, validate_catalog_integrity
from .evaluator import GuessRejectedError, RejectionReason
from .puzzle_selector import format_countdown, today_iso
from .session_store import save_guesses
from .storage import StorageFactory


class DailyGameService:
    """
    Daily game service shared by every player.

    This class handles:
    - Holding the catalog loaded at startup
    - Restoring each player's guesses for the current UTC day
    - Validating, recording and persisting guesses
    - Per-player input buffers for key-by-key entry, reset every day

    Every read-modify-write of one player's guesses runs under that
    player's lock, so concurrent submits cannot drop a guess.
    """

    def __init__(self,
                 catalog: List[str],
                 storage_factory: StorageFactory,
                 clock: Optional[Clock] = None,
                 epoch: datetime = PUZZLE_EPOCH,
                 max_guesses: int = MAX_GUESSES):
        validate_catalog_integrity(catalog)
        self.catalog = list(catalog)
        self.storage_factory = storage_factory
        self.clock = clock or SystemClock()
        self.epoch = epoch
        self.max_guesses = max_guesses
        self.input_buffers: Dict[str, str] = {}
        self.buffer_day: Optional[str] = None
        self._player_locks: Dict[str, threading.Lock] = {}
        self._guard = threading.Lock()

    def _player_lock(self, player_id: str) -> threading.Lock:
        with self._guard:
            if player_id not in self._player_locks:
                self._player_locks[player_id] = threading.Lock()
            return self._player_locks[player_id]

    def _buffer_for(self, player_id: str, day: str) -> str:
        # Half-typed input never carries over to the next puzzle
        with self._guard:
            if day != self.buffer_day:
                self.input_buffers.clear()
                self.buffer_day = day
            return self.input_buffers.get(player_id, "")

    def _store_buffer(self, player_id: str, day: str, text: str) -> None:
        with self._guard:
            if day == self.buffer_day:
                self.input_buffers[player_id] = text

    def get_state(self, player_id: str) -> GameState:
        """
        Returns the player's state for today, including the input buffer.

        Args:
            player_id: Player scope for storage

        Returns:
            GameState with a fresh countdown
        """
        now = self.clock.now()
        state = game_engine.load(
            self.catalog, now, self.storage_factory(player_id), self.epoch, self.max_guesses
        )
        state = game_engine.set_input(state, self._buffer_for(player_id, state.day))
        return game_engine.tick(state, now)

    def _commit(self, player_id: str, before: GameState, after: GameState) -> GameState:
        if after.guesses != before.guesses:
            save_guesses(self.storage_factory(player_id), after.day, after.guesses)
            self._log_outcome(player_id, after)
        self._store_buffer(player_id, after.day, after.current)
        return after

    def _reject(self, player_id: str, state: GameState, error: GuessRejectedError) -> None:
        # Unknown codes clear the input; other rejections leave it alone
        if error.reason is RejectionReason.UNKNOWN_CODE:
            self._store_buffer(player_id, state.day, "")
            game_logger.log_game_event(
                state.day, 'invalid_code', player_id, attempted_guess=error.guess
            )

    def submit_guess(self, player_id: str, guess: Optional[str] = None) -> GameState:
        """
        Processes a guess and persists the updated guess list.

        Args:
            player_id: Player scope for storage
            guess: Code to submit; defaults to the player's input buffer

        Returns:
            Updated GameState

        Raises:
            GuessRejectedError: If the guess is refused; no attempt is consumed
            StorageError: If the guesses cannot be persisted
        """
        with self._player_lock(player_id):
            state = self.get_state(player_id)
            try:
                updated = game_engine.submit_guess(state, self.catalog, guess)
            except GuessRejectedError as e:
                self._reject(player_id, state, e)
                raise
            return self._commit(player_id, state, updated)

    def press_key(self, player_id: str, key: str) -> GameState:
        """
        Applies one key press for the player.

        Raises:
            GuessRejectedError: If ENTER submits an invalid guess
        """
        with self._player_lock(player_id):
            state = self.get_state(player_id)
            try:
                updated = game_engine.handle_key(state, key, self.catalog)
            except GuessRejectedError as e:
                self._reject(player_id, state, e)
                raise
            return self._commit(player_id, state, updated)

    def set_input(self, player_id: str, text: str) -> GameState:
        with self._player_lock(player_id):
            state = game_engine.set_input(self.get_state(player_id), text)
            self._store_buffer(player_id, state.day, state.current)
            return state

    def countdown(self) -> str:
        return format_countdown(self.clock.now())

    def current_day(self) -> str:
        return today_iso(self.clock.now())

    def get_catalog_statistics(self) -> dict:
        return get_catalog_statistics(self.catalog)

    def _log_outcome(self, player_id: str, state: GameState) -> None:
        if not state.game_over:
            return
        event = 'game_won' if state.solution in state.guesses else 'game_lost'
        game_logger.log_game_event(
            state.day, event, player_id,
            rounds_used=len(state.guesses), target_code=state.solution,
            final_guess=state.guesses[-1]
        )


# Global service instance
_game_service = None


def get_game_service() -> Optional[DailyGameService]:
    """Get the global game service instance."""
    return _game_service


def initialize_game_service(catalog: List[str],
                            storage_factory: StorageFactory,
                            clock: Optional[Clock] = None,
                            epoch: datetime = PUZZLE_EPOCH,
                            max_guesses: int = MAX_GUESSES) -> DailyGameService:
    """Initialize the global game service instance."""
    global _game_service
    _game_service = DailyGameService(catalog, storage_factory, clock, epoch, max_guesses)
    return _game_service
