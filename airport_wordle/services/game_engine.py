"""
Game Engine

Pure reducer functions over the immutable GameState. None of them touch
storage or the clock directly: callers pass "now" and a Storage in, and
persist whatever comes back.
"""

from dataclasses import replace
from datetime import datetime
from typing import List, Optional, Sequence

from ..config.game_settings import (
    BACKSPACE_KEYS, CODE_LENGTH, DAILY_LABEL, ENTER_KEY, MAX_GUESSES, PUZZLE_EPOCH
)
from ..models.game import GameState, GameStatus, GameView
from .evaluator import evaluate_row, keyboard_status, validate_guess
from .puzzle_selector import format_countdown, select_solution, today_iso
from .session_store import restore_guesses
from .storage import Storage


def load(catalog: Sequence[str],
         now: datetime,
         storage: Storage,
         epoch: datetime = PUZZLE_EPOCH,
         max_guesses: int = MAX_GUESSES) -> GameState:
    """
    Builds the state for the UTC day containing ``now``.

    Guesses stored under an earlier date are not restored, which is how a
    new day starts with an empty board.
    """
    day = today_iso(now)
    return GameState(
        day=day,
        solution=select_solution(catalog, now, epoch),
        guesses=tuple(restore_guesses(storage, day)),
        max_guesses=max_guesses,
        countdown=format_countdown(now)
    )


def submit_guess(state: GameState, catalog: Sequence[str], candidate: Optional[str] = None) -> GameState:
    """
    Appends a valid guess and clears the input buffer.

    Args:
        state: Current state
        catalog: Valid codes
        candidate: Code to submit; defaults to the input buffer

    Raises:
        GuessRejectedError: The state is left as it was
    """
    guess = validate_guess(state, catalog, state.current if candidate is None else candidate)
    return replace(state, guesses=state.guesses + (guess,), current="")


def clear_input(state: GameState) -> GameState:
    return replace(state, current="")


def type_letter(state: GameState, letter: str) -> GameState:
    if state.status is not GameStatus.PLAYING:
        return state
    letter = (letter or "").upper()
    if len(letter) != 1 or not ("A" <= letter <= "Z") or len(state.current) >= CODE_LENGTH:
        return state
    return replace(state, current=state.current + letter)


def delete_letter(state: GameState) -> GameState:
    if state.status is not GameStatus.PLAYING:
        return state
    return replace(state, current=state.current[:-1])


def set_input(state: GameState, text: str) -> GameState:
    """Raw text entry: upper-cased and cut to the code length."""
    return replace(state, current=(text or "").upper()[:CODE_LENGTH])


def handle_key(state: GameState, key: str, catalog: Sequence[str]) -> GameState:
    """
    Applies one key press: ENTER submits, BACKSPACE/DEL deletes, a letter
    is typed. Other keys, and every key once the game is over, are ignored.

    Raises:
        GuessRejectedError: When ENTER submits an invalid guess
    """
    if state.status is not GameStatus.PLAYING:
        return state
    key = (key or "").upper()
    if key in BACKSPACE_KEYS:
        return delete_letter(state)
    if key == ENTER_KEY:
        return submit_guess(state, catalog)
    return type_letter(state, key)


def tick(state: GameState, now: datetime) -> GameState:
    return replace(state, countdown=format_countdown(now))


def build_rows(state: GameState) -> List[str]:
    """Board rows: submitted guesses, the padded input row, then blanks."""
    rows = []
    for i in range(state.max_guesses):
        if i < len(state.guesses):
            rows.append(state.guesses[i])
        elif i == len(state.guesses):
            rows.append(state.current.ljust(CODE_LENGTH))
        else:
            rows.append(" " * CODE_LENGTH)
    return rows


def build_view(state: GameState) -> GameView:
    status = state.status
    messages = []
    if status is not GameStatus.PLAYING:
        messages.append(f"Ah, a shame. The correct code was {state.solution}!"
                        if status is GameStatus.LOST
                        else f"You got it! The code was {state.solution}.")

    return GameView(
        day=state.day,
        label=DAILY_LABEL,
        status=status.value,
        max_guesses=state.max_guesses,
        attempts_left=state.attempts_left,
        guesses=list(state.guesses),
        current=state.current,
        rows=build_rows(state),
        tiles=[[(letter, result.value) for letter, result in evaluate_row(guess, state.solution)]
               for guess in state.guesses],
        keyboard={letter: result.value
                  for letter, result in keyboard_status(state.guesses, state.solution).items()},
        countdown=state.countdown,
        answer=state.solution if status is not GameStatus.PLAYING else None,
        messages=messages
    )
