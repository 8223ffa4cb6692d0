"""
Exceptions raised across layers.

Every error leaves the game it was raised from untouched: a rejected move can simply be retried.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.reversi.pieces import Piece


class GameError(Exception):
    """Base class for everything the application raises on purpose."""


# --- PLACEMENT ERRORS (checked in this order by Game.validate) ---
class PlacementError(GameError):
    """A disc cannot be placed on the requested cell."""


class OutOfBoundsError(PlacementError):
    def __init__(self, x: int, y: int) -> None:
        self.x = x
        self.y = y
        super().__init__(f"({x}, {y}) is not on the board.")


class NotYourTurnError(PlacementError):
    def __init__(self, piece: "Piece") -> None:
        self.piece = piece
        super().__init__(f"It is not {piece.value}'s turn.")


class NotAdjacentError(PlacementError):
    def __init__(self, x: int, y: int) -> None:
        self.x = x
        self.y = y
        super().__init__(f"({x}, {y}) does not touch any disc on the board.")


class OccupiedError(PlacementError):
    def __init__(self, x: int, y: int) -> None:
        self.x = x
        self.y = y
        super().__init__(f"({x}, {y}) is already occupied.")


class NoFlipsError(PlacementError):
    def __init__(self, x: int, y: int) -> None:
        self.x = x
        self.y = y
        super().__init__(f"Placing on ({x}, {y}) captures nothing.")


# --- STATE / BOUNDARY ERRORS ---
class GameStateError(GameError):
    """The game cannot do what was asked in its current state (or the stored state is invalid)."""


class InvalidLayoutError(GameStateError):
    """A board layout string could not be parsed."""


class RepositoryError(GameError):
    """Record not found, or could not be stored."""


class InvalidRequestError(GameError):
    """Request data that cannot be interpreted.

    NOTE: deliberately not a ValueError, so pydantic does not wrap it into a ValidationError.
    """
