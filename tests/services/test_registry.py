"""Unit tests for src/services/registry.py"""

from threading import Event, Thread
from unittest.mock import Mock
from uuid import uuid4

import pytest

from src.core.exceptions import RepositoryError
from src.reversi.game import Game
from src.services.registry import GameRegistry


def test_loader_called_once_per_game() -> None:
    registry = GameRegistry()
    game_id = uuid4()
    loader = Mock(side_effect=Game.new_game)

    with registry.acquire(game_id, loader) as first:
        first.place(2, 3, first.turn)
    with registry.acquire(game_id, loader) as second:
        assert second is first
        assert len(second.history) == 1

    loader.assert_called_once()
    assert game_id in registry
    assert len(registry) == 1


def test_games_are_independent() -> None:
    registry = GameRegistry()
    with registry.acquire(uuid4(), Game.new_game) as game_a:
        # holding game_a's lock does not block access to another game
        with registry.acquire(uuid4(), Game.new_game) as game_b:
            assert game_a is not game_b
    assert len(registry) == 2


def test_discard_reloads_game() -> None:
    registry = GameRegistry()
    game_id = uuid4()
    loader = Mock(side_effect=Game.new_game)
    with registry.acquire(game_id, loader) as game:
        game.place(2, 3, game.turn)
        registry.discard(game_id)
    with registry.acquire(game_id, loader) as reloaded:
        assert reloaded.history == ()
    assert loader.call_count == 2


def test_evict() -> None:
    registry = GameRegistry()
    game_id = uuid4()
    with registry.acquire(game_id, Game.new_game):
        pass
    registry.evict(game_id)
    assert game_id not in registry
    # evicting twice is harmless
    registry.evict(game_id)


def test_second_caller_waits_for_the_first() -> None:
    registry = GameRegistry()
    game_id = uuid4()
    entered = Event()

    def _other_caller() -> None:
        with registry.acquire(game_id, Game.new_game):
            entered.set()

    with registry.acquire(game_id, Game.new_game):
        thread = Thread(target=_other_caller)
        thread.start()
        assert not entered.wait(timeout=0.1)

    assert entered.wait(timeout=2)
    thread.join(timeout=2)


def test_failed_load_leaves_no_slot() -> None:
    registry = GameRegistry()
    game_id = uuid4()
    loader = Mock(side_effect=RepositoryError("Game not found."))

    with pytest.raises(RepositoryError):
        with registry.acquire(game_id, loader):
            pass

    assert game_id not in registry
    assert len(registry) == 0


def test_caller_waiting_on_failed_load_gets_a_live_slot() -> None:
    registry = GameRegistry()
    game_id = uuid4()
    loading = Event()
    loaded = Event()

    def _failing_loader() -> Game:
        loading.set()
        # give the other caller time to queue up on the lock
        loaded.wait(timeout=0.1)
        raise RepositoryError("Game not found.")

    def _other_caller() -> None:
        loading.wait(timeout=2)
        with registry.acquire(game_id, Game.new_game):
            loaded.set()

    thread = Thread(target=_other_caller)
    thread.start()
    with pytest.raises(RepositoryError):
        with registry.acquire(game_id, _failing_loader):
            pass
    thread.join(timeout=2)

    assert loaded.is_set()
    # the game loaded by the second caller is cached, not lost in a dropped slot
    assert game_id in registry
    with registry.acquire(game_id, Mock(side_effect=AssertionError)) as game:
        assert game.history == ()


def test_evicted_while_waiting() -> None:
    registry = GameRegistry()
    game_id = uuid4()
    entered = Event()

    def _other_caller() -> None:
        with registry.acquire(game_id, Game.new_game):
            entered.set()

    with registry.acquire(game_id, Game.new_game):
        thread = Thread(target=_other_caller)
        thread.start()
        assert not entered.wait(timeout=0.1)
        registry.evict(game_id)

    thread.join(timeout=2)
    assert entered.is_set()
    assert game_id in registry
