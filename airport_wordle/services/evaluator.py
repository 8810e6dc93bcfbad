"""
Guess Evaluator

Validates submitted codes and scores them letter by letter against the
solution.

Scoring is positional and does not count letters: a guessed letter is
PRESENT whenever it occurs anywhere in the solution, so a letter that
appears once in the solution can be PRESENT in several tiles of one row.
"""

from enum import Enum
from typing import Dict, Iterable, List, Sequence, Tuple

from ..config.game_settings import CODE_LENGTH, KEYBOARD_LAYOUT
from ..models.game import GameState, GameStatus, LetterStatus


class RejectionReason(Enum):
    WRONG_LENGTH = "WRONG_LENGTH"
    GAME_OVER = "GAME_OVER"
    UNKNOWN_CODE = "UNKNOWN_CODE"


class GuessRejectedError(Exception):
    """A guess was refused; the game state is unchanged."""

    def __init__(self, reason: RejectionReason, guess: str, message: str):
        super().__init__(message)
        self.reason = reason
        self.guess = guess
        self.message = message


def validate_guess(state: GameState, catalog: Sequence[str], candidate: str) -> str:
    """
    Checks a candidate code against the rules of the current game.

    Args:
        state: Current game state
        catalog: Valid airport codes
        candidate: Raw text typed by the player

    Returns:
        str: The upper-cased code, ready to be appended

    Raises:
        GuessRejectedError: With reason WRONG_LENGTH, GAME_OVER or UNKNOWN_CODE
    """
    guess = (candidate or "").upper()

    if len(guess) != CODE_LENGTH:
        raise GuessRejectedError(
            RejectionReason.WRONG_LENGTH, guess,
            f"Guess must be exactly {CODE_LENGTH} letters"
        )

    if state.status is not GameStatus.PLAYING:
        raise GuessRejectedError(RejectionReason.GAME_OVER, guess, "Game is already over")

    if guess not in catalog:
        raise GuessRejectedError(
            RejectionReason.UNKNOWN_CODE, guess,
            f'Airport code "{guess}" does not exist!'
        )

    return guess


def tile_state(letter: str, pos: int, solution: str) -> LetterStatus:
    if solution[pos] == letter:
        return LetterStatus.CORRECT
    if letter in solution:
        return LetterStatus.PRESENT
    return LetterStatus.ABSENT


def evaluate_row(guess: str, solution: str) -> List[Tuple[str, LetterStatus]]:
    """Feedback for every tile of one submitted row."""
    return [(letter, tile_state(letter, pos, solution)) for pos, letter in enumerate(guess)]


def key_status(letter: str, guesses: Iterable[str], solution: str) -> LetterStatus:
    """
    Colour of one keyboard key.

    Guesses are scanned in submission order and positions left to right.
    The first CORRECT occurrence wins outright; otherwise the last occurrence
    seen decides between PRESENT and ABSENT.
    """
    state = LetterStatus.UNUSED
    for guess in guesses:
        for pos, guessed in enumerate(guess):
            if guessed != letter:
                continue
            if solution[pos] == letter:
                return LetterStatus.CORRECT
            state = LetterStatus.PRESENT if letter in solution else LetterStatus.ABSENT
    return state


def keyboard_status(guesses: Sequence[str], solution: str) -> Dict[str, LetterStatus]:
    """Key colours for the whole on-screen keyboard, in layout order."""
    return {letter: key_status(letter, guesses, solution) for letter in KEYBOARD_LAYOUT}
