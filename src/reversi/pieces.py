"""Defines the two colors of Reversi discs"""

from enum import Enum
from typing import Self

CHAR_TO_PIECE_NAME: dict[str, str] = {
    "B": "BLACK",
    "W": "WHITE",
}


class Piece(Enum):
    """Black always moves first."""

    BLACK = "black"
    WHITE = "white"

    @classmethod
    def from_char(cls, character: str) -> Self:
        """Layout character ('B' or 'W') to the piece it denotes"""
        return cls[CHAR_TO_PIECE_NAME[character]]

    def to_char(self) -> str:
        return self.name[0]

    def complement(self) -> "Piece":
        """The opponent's color"""
        return Piece.WHITE if self == Piece.BLACK else Piece.BLACK

    def __invert__(self) -> "Piece":
        return self.complement()


FIRST_PLAYER = Piece.BLACK
