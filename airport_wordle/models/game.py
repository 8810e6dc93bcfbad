"""
Game Data Models

Contains all game-related data structures and enums.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from ..config.game_settings import MAX_GUESSES


class LetterStatus(Enum):
    """Per-letter feedback for a guessed code."""
    CORRECT = "correct"
    PRESENT = "present"
    ABSENT = "absent"
    UNUSED = "unused"


class GameStatus(Enum):
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


@dataclass(frozen=True)
class GameState:
    """
    Immutable state of one player's daily game.

    Reducers in ``services.game_engine`` return new instances instead of
    mutating this one. ``status`` is derived from the guesses, never stored.
    """
    day: str
    solution: str
    guesses: Tuple[str, ...] = ()
    current: str = ""
    max_guesses: int = MAX_GUESSES
    countdown: str = ""

    @property
    def status(self) -> GameStatus:
        if self.solution in self.guesses:
            return GameStatus.WON
        if len(self.guesses) >= self.max_guesses:
            return GameStatus.LOST
        return GameStatus.PLAYING

    @property
    def game_over(self) -> bool:
        return self.status is not GameStatus.PLAYING

    @property
    def attempts_left(self) -> int:
        return max(self.max_guesses - len(self.guesses), 0)


@dataclass
class GameView:
    """Client-facing snapshot of a GameState."""
    day: str
    label: str
    status: str
    max_guesses: int
    attempts_left: int
    guesses: List[str]
    current: str
    rows: List[str]
    tiles: List[List[Tuple[str, str]]]  # Letter status as string for JSON serialization
    keyboard: Dict[str, str]
    countdown: str
    answer: Optional[str] = None  # Only included when game is over
    messages: List[str] = field(default_factory=list)
