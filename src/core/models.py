"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass

# Type aliases to make GameModel easier to read
PieceColor = str
PlayerName = str
SquareName = str


@dataclass
class GameModel:
    """Transport-safe representation of a Reversi game used between API, Service, DB, and Game layers.

    * board: layout string of the grid (see Board.from_layout)
    * turn: color name of the player to move next
    * history: every placement so far, in square notation, oldest first
    """

    board: str
    turn: PieceColor
    history: list[SquareName]
    registered_players: dict[PieceColor, PlayerName]
    status: str
