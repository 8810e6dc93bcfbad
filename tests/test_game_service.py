import threading
import time

import pytest

from airport_wordle.models.game import GameStatus
from airport_wordle.services.catalog_service import EmptyCatalogError
from airport_wordle.services.evaluator import GuessRejectedError, RejectionReason
from airport_wordle.services.game_service import DailyGameService, get_game_service
from airport_wordle.services.storage import Storage, StorageError, memory_storage_factory


def test_initialize_sets_global(game_service):
    assert get_game_service() is game_service


def test_empty_catalog_refused(clock):
    with pytest.raises(EmptyCatalogError):
        DailyGameService([], memory_storage_factory(), clock)


def test_guesses_persist_across_service_instances(catalog, clock):
    factory = memory_storage_factory()
    DailyGameService(catalog, factory, clock).submit_guess("p1", "LAX")
    restored = DailyGameService(catalog, factory, clock).get_state("p1")
    assert restored.guesses == ("LAX",)


def test_players_are_isolated(game_service):
    game_service.submit_guess("p1", "LAX")
    assert game_service.get_state("p2").guesses == ()


def test_invalid_code_clears_input_without_consuming_attempt(game_service):
    game_service.set_input("p1", "ZZZ")
    with pytest.raises(GuessRejectedError) as exc:
        game_service.submit_guess("p1")
    assert exc.value.reason is RejectionReason.UNKNOWN_CODE
    state = game_service.get_state("p1")
    assert state.current == ""
    assert state.guesses == ()


def test_short_guess_keeps_input(game_service):
    game_service.press_key("p1", "L")
    with pytest.raises(GuessRejectedError):
        game_service.press_key("p1", "ENTER")
    assert game_service.get_state("p1").current == "L"


def test_press_keys_to_win(game_service):
    for key in ["S", "F", "O"]:
        game_service.press_key("p1", key)
    state = game_service.press_key("p1", "ENTER")
    assert state.status is GameStatus.WON
    assert game_service.get_state("p1").status is GameStatus.WON


def test_new_day_resets_board(game_service, clock):
    game_service.submit_guess("p1", "LAX")
    clock.advance(days=1)
    state = game_service.get_state("p1")
    assert state.day == "2025-01-02"
    assert state.solution == "LAX"
    assert state.guesses == ()


def test_never_more_than_max_guesses(game_service):
    for code in ["LAX", "JFK", "SEA", "ORD", "ATL", "BOS"]:
        game_service.submit_guess("p1", code)
    with pytest.raises(GuessRejectedError):
        game_service.submit_guess("p1", "DEN")
    state = game_service.get_state("p1")
    assert len(state.guesses) == 6
    assert state.status is GameStatus.LOST


def test_storage_write_failure_propagates(catalog, clock):
    class ReadOnlyStorage(Storage):
        def get_item(self, key):
            return None

        def set_item(self, key, value):
            raise StorageError("read only")

    service = DailyGameService(catalog, lambda player_id: ReadOnlyStorage(), clock)
    with pytest.raises(StorageError):
        service.submit_guess("p1", "LAX")


def test_countdown_and_day(game_service):
    assert game_service.current_day() == "2025-01-01"
    assert game_service.countdown() == "12h 0m 0s"


def test_catalog_statistics(game_service, catalog):
    assert game_service.get_catalog_statistics()["total_codes"] == len(catalog)


def test_input_buffer_does_not_carry_over_to_next_day(game_service, clock):
    game_service.press_key("p1", "L")
    game_service.press_key("p1", "A")
    assert game_service.get_state("p1").current == "LA"
    clock.advance(days=1)
    assert game_service.get_state("p1").current == ""
    assert game_service.input_buffers == {}


def test_failed_write_on_new_day_does_not_restore_yesterday(catalog, clock):
    class FailingDateWrite(Storage):
        def __init__(self):
            self.items = {}
            self.fail = False

        def get_item(self, key):
            return self.items.get(key)

        def set_item(self, key, value):
            if self.fail and key == "airportWordleDate":
                raise StorageError("write failed")
            self.items[key] = value

    storage = FailingDateWrite()
    service = DailyGameService(catalog, lambda player_id: storage, clock)
    service.submit_guess("p1", "LAX")
    service.submit_guess("p1", "JFK")

    clock.advance(days=1)
    storage.fail = True
    with pytest.raises(StorageError):
        service.submit_guess("p1", "SEA")

    state = service.get_state("p1")
    assert state.day == "2025-01-02"
    assert state.guesses == ()


def test_concurrent_submits_keep_every_guess(catalog, clock):
    class SlowStorage(Storage):
        def __init__(self):
            self.items = {}

        def get_item(self, key):
            time.sleep(0.01)
            return self.items.get(key)

        def set_item(self, key, value):
            time.sleep(0.01)
            self.items[key] = value

    storage = SlowStorage()
    service = DailyGameService(catalog, lambda player_id: storage, clock)
    codes = ["LAX", "JFK", "SEA", "ORD"]
    threads = [threading.Thread(target=service.submit_guess, args=("p1", code)) for code in codes]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert sorted(service.get_state("p1").guesses) == sorted(codes)
