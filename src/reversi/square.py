"""
A square (cell) on the board

(placed in its own module as multiple other modules need to import it)
"""

from dataclasses import dataclass
from string import ascii_lowercase
from typing import Self

# Standard Reversi is played on 8x8. Same width in both directions, the board is always square.
BOARD_WIDTH = 8


@dataclass(frozen=True, order=True)
class Square:
    x: int
    y: int

    @classmethod
    def from_notation(cls, name: str) -> Self:
        """Notation: 'a1' - 'h8' get converted to (0,0) - (7,7). The letter picks the column (x), the number the row (y).

        NOTE: only parses. Whether the square is on the board is for the caller to check.
        """
        x = ascii_lowercase.index(name[0].lower())
        y = int(name[1:]) - 1
        return cls(x, y)

    def to_notation(self) -> str:
        return f"{ascii_lowercase[self.x]}{self.y + 1}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.x < BOARD_WIDTH) and (0 <= self.y < BOARD_WIDTH)

    def shifted(self, dx: int, dy: int) -> Self:
        return type(self)(self.x + dx, self.y + dy)
