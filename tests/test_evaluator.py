import pytest

from airport_wordle.models.game import GameState, LetterStatus
from airport_wordle.services.evaluator import (
    GuessRejectedError, RejectionReason, evaluate_row, key_status,
    keyboard_status, tile_state, validate_guess
)

CORRECT = LetterStatus.CORRECT
PRESENT = LetterStatus.PRESENT
ABSENT = LetterStatus.ABSENT
UNUSED = LetterStatus.UNUSED

CATALOG = ["SFO", "SEA", "FSO", "OOO", "LAX", "OSS"]


def playing_state(guesses=()):
    return GameState(day="2025-01-01", solution="SFO", guesses=tuple(guesses))


def test_evaluate_row_transposed_letters():
    assert evaluate_row("FSO", "SFO") == [("F", PRESENT), ("S", PRESENT), ("O", CORRECT)]


def test_evaluate_row_mixed():
    assert evaluate_row("SEA", "SFO") == [("S", CORRECT), ("E", ABSENT), ("A", ABSENT)]


def test_repeated_letter_is_present_in_every_tile():
    # "O" occurs once in SFO but is marked present in both wrong positions
    assert evaluate_row("OOO", "SFO") == [("O", PRESENT), ("O", PRESENT), ("O", CORRECT)]
    assert [s for _, s in evaluate_row("OSS", "SFO")] == [PRESENT, PRESENT, PRESENT]


def test_tile_state():
    assert tile_state("S", 0, "SFO") is CORRECT
    assert tile_state("S", 1, "SFO") is PRESENT
    assert tile_state("Z", 2, "SFO") is ABSENT


def test_key_status_unused():
    assert key_status("Q", ["LAX"], "SFO") is UNUSED


def test_key_status_correct_wins_regardless_of_order():
    assert key_status("S", ["FSO", "SEA"], "SFO") is CORRECT
    assert key_status("S", ["SEA", "FSO"], "SFO") is CORRECT


def test_key_status_present_and_absent():
    assert key_status("F", ["FSO"], "SFO") is PRESENT
    assert key_status("L", ["LAX"], "SFO") is ABSENT


def test_keyboard_status_covers_layout():
    keys = keyboard_status(["SEA"], "SFO")
    assert len(keys) == 26
    assert keys["S"] is CORRECT
    assert keys["E"] is ABSENT
    assert keys["F"] is UNUSED


def test_validate_guess_upper_cases():
    assert validate_guess(playing_state(), CATALOG, "lax") == "LAX"


@pytest.mark.parametrize("candidate", ["", "LA", "LAXX"])
def test_validate_guess_wrong_length(candidate):
    with pytest.raises(GuessRejectedError) as exc:
        validate_guess(playing_state(), CATALOG, candidate)
    assert exc.value.reason is RejectionReason.WRONG_LENGTH


def test_validate_guess_unknown_code():
    with pytest.raises(GuessRejectedError) as exc:
        validate_guess(playing_state(), CATALOG, "zzz")
    assert exc.value.reason is RejectionReason.UNKNOWN_CODE
    assert exc.value.message == 'Airport code "ZZZ" does not exist!'


def test_validate_guess_after_win():
    with pytest.raises(GuessRejectedError) as exc:
        validate_guess(playing_state(["SFO"]), CATALOG, "LAX")
    assert exc.value.reason is RejectionReason.GAME_OVER


def test_validate_guess_fails_closed_on_empty_catalog():
    with pytest.raises(GuessRejectedError) as exc:
        validate_guess(playing_state(), [], "SFO")
    assert exc.value.reason is RejectionReason.UNKNOWN_CODE
