"""
In-memory registry of live games.

One slot per game id, each with its own lock: moves in the same game are serialized,
while independent games never wait on each other.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from threading import Lock
from typing import Callable, Iterator, Optional
from uuid import UUID

from src.reversi.game import Game

logger = logging.getLogger(__name__)

GameLoader = Callable[[], Game]


@dataclass
class GameSlot:
    lock: Lock = field(default_factory=Lock)
    game: Optional[Game] = None


class GameRegistry:
    """Owns exclusive access to each live Game."""

    def __init__(self) -> None:
        self._slots: dict[UUID, GameSlot] = {}
        # only guards the dictionary of slots, never held while a game is in use
        self._slots_lock = Lock()

    @contextmanager
    def acquire(self, game_id: UUID, loader: GameLoader) -> Iterator[Game]:
        """
        Hold the game's lock for the duration of the with-block.
        ---

        If the game is not cached yet, `loader` is called (under the lock) to restore it, ex. from the repository.
        """
        slot = self._locked_slot(game_id)
        try:
            if slot.game is None:
                try:
                    slot.game = loader()
                except Exception:
                    # nothing to cache (ex. unknown game id): do not keep an empty slot around
                    self._drop_empty_slot(game_id, slot)
                    raise
                logger.debug("Loaded game %s into the registry", game_id)
            yield slot.game
        finally:
            slot.lock.release()

    def discard(self, game_id: UUID) -> None:
        """Forget the cached Game, but keep the slot (and its lock). Next acquire reloads it.

        NOTE: call this while holding the game's lock, ex. when persisting a move failed.
        """
        with self._slots_lock:
            slot = self._slots.get(game_id)
        if slot is not None:
            slot.game = None

    def evict(self, game_id: UUID) -> None:
        """Remove the slot entirely (game deleted or abandoned)."""
        with self._slots_lock:
            removed = self._slots.pop(game_id, None)
        if removed is not None:
            logger.debug("Evicted game %s from the registry", game_id)

    def __contains__(self, game_id: object) -> bool:
        with self._slots_lock:
            return game_id in self._slots

    def __len__(self) -> int:
        with self._slots_lock:
            return len(self._slots)

    def _slot(self, game_id: UUID) -> GameSlot:
        with self._slots_lock:
            return self._slots.setdefault(game_id, GameSlot())

    def _locked_slot(self, game_id: UUID) -> GameSlot:
        """The game's slot with its lock held.

        A slot dropped or evicted while we waited for its lock is stale: start over with the current one.
        """
        while True:
            slot = self._slot(game_id)
            slot.lock.acquire()
            with self._slots_lock:
                if self._slots.get(game_id) is slot:
                    return slot
            slot.lock.release()

    def _drop_empty_slot(self, game_id: UUID, slot: GameSlot) -> None:
        with self._slots_lock:
            if self._slots.get(game_id) is slot and slot.game is None:
                del self._slots[game_id]
