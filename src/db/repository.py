"""
Where finished and ongoing Reversi games are kept between requests.

The service only sees this Protocol. A stored game is a GameModel snapshot: the board layout,
whose turn it is, the moves played so far (in notation), the players and the game's status.
"""

from typing import Protocol
from uuid import UUID

from src.core.models import GameModel


class GameRepository(Protocol):
    """Storage of game snapshots by id. Lookups of unknown ids return None instead of raising."""

    def get_game(self, game_id: UUID) -> GameModel | None: ...

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """The repository hands out the new game's id."""
        ...

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Replace the whole snapshot, ex. after a move or a player joining."""
        ...

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Returns the snapshot that was removed"""
        ...
