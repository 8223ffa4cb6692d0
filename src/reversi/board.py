"""The Board holds the grid of discs and implements the capture rule that changes it.

It knows nothing about turns or history; that is the Game's business.
"""

from dataclasses import dataclass
from typing import Optional, Self

from src.core.exceptions import InvalidLayoutError
from src.reversi.pieces import CHAR_TO_PIECE_NAME, Piece
from src.reversi.square import BOARD_WIDTH, Square

Vector = tuple[int, int]

# The 8 compass directions: orthogonal and diagonal
DIRECTIONS: list[Vector] = [
    (dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if (dx, dy) != (0, 0)
]

STARTING_LAYOUT = "8/8/8/3WB3/3BW3/8/8/8"

EMPTY_CHAR = "."

# runs of empty cells within a row: 1 up to the full width
EMPTY_RUN_CHARS = "".join(str(n) for n in range(1, BOARD_WIDTH + 1))


@dataclass
class Board:
    cells: dict[Square, Optional[Piece]]

    @staticmethod
    def width() -> int:
        return BOARD_WIDTH

    @classmethod
    def new(cls) -> Self:
        """Canonical opening: the four center cells, each diagonal of that 2x2 block holding one color."""
        return cls.from_layout(STARTING_LAYOUT)

    @classmethod
    def empty(cls) -> Self:
        return cls({square: None for square in all_squares()})

    @classmethod
    def from_layout(cls, layout: str) -> Self:
        """Construct a board from a layout string.

        Similar to the first part of a FEN string in chess:
        8/8/8/3WB3/3BW3/8/8/8
        means:
        * one segment per row, starting at row y=0, separated by slashes
        * within a row, cells are read from x=0 onwards
        * 'B' and 'W' denote a black or white disc
        * a number denotes that many consecutive empty cells
        """
        rows = layout.split("/")
        if len(rows) != BOARD_WIDTH:
            raise InvalidLayoutError(
                f"Layout must have {BOARD_WIDTH} rows, got {len(rows)}: {layout!r}"
            )

        cells: dict[Square, Optional[Piece]] = {}
        for y, row in enumerate(rows):
            x = 0
            for character in row:
                if character in CHAR_TO_PIECE_NAME:
                    cells[Square(x, y)] = Piece.from_char(character)
                    x += 1
                elif character in EMPTY_RUN_CHARS:
                    for _ in range(int(character)):
                        cells[Square(x, y)] = None
                        x += 1
                else:
                    raise InvalidLayoutError(
                        f"Unknown character {character!r} in layout row {row!r}"
                    )
            if x != BOARD_WIDTH:
                raise InvalidLayoutError(
                    f"Row {y} of the layout covers {x} cells instead of {BOARD_WIDTH}: {row!r}"
                )
        return cls(cells)

    def to_layout(self) -> str:
        return "/".join(self._row_to_layout(y) for y in range(BOARD_WIDTH))

    def _row_to_layout(self, y: int) -> str:
        characters: list[str] = []
        empty_count = 0
        for x in range(BOARD_WIDTH):
            piece = self.cell(Square(x, y))
            if piece is None:
                empty_count += 1
                continue
            if empty_count > 0:
                characters.append(str(empty_count))
                empty_count = 0
            characters.append(piece.to_char())

        # a fully empty row is still written down as a number
        if empty_count > 0:
            characters.append(str(empty_count))
        return "".join(characters)

    def cell(self, square: Square) -> Optional[Piece]:
        """NOTE: square is assumed to be on the board. Bounds are checked by the Game."""
        return self.cells[square]

    def place_piece(self, square: Square, piece: Optional[Piece]) -> None:
        self.cells[square] = piece

    def locate(self, piece: Piece) -> list[Square]:
        return [square for square, occupant in self.cells.items() if occupant == piece]

    def empty_squares(self) -> list[Square]:
        return [square for square, occupant in self.cells.items() if occupant is None]

    def count(self, piece: Piece) -> int:
        return len(self.locate(piece))

    def adjacent(self, square: Square) -> bool:
        """Is any of the (up to 8) neighbouring cells occupied, by either color?"""
        for dx, dy in DIRECTIONS:
            neighbour = square.shifted(dx, dy)
            if neighbour.is_within_bounds() and self.cell(neighbour) is not None:
                return True
        return False

    def flip(self, square: Square, piece: Piece, commit: bool = False) -> list[Square]:
        """
        Capture scan
        -----

        ---
        From the square, walk along each of the 8 directions collecting the run of opponent discs.
        The run is captured only if it is non-empty and directly followed by a disc of `piece` itself.
        Running into an empty cell or the edge of the board captures nothing in that direction.

        ---
        With commit=False the board is left as is and the captured squares are only reported.
        With commit=True the captured cells are also turned over to `piece`.
        """
        opponent = piece.complement()
        flips: list[Square] = []
        for dx, dy in DIRECTIONS:
            run: list[Square] = []
            target = square.shifted(dx, dy)
            while target.is_within_bounds() and self.cell(target) == opponent:
                run.append(target)
                target = target.shifted(dx, dy)

            if run and target.is_within_bounds() and self.cell(target) == piece:
                flips.extend(s for s in run if s not in flips)

        if commit:
            self.capture(flips, piece)
        return flips

    def capture(self, squares: list[Square], piece: Piece) -> None:
        """Turn the given discs over to `piece`"""
        for square in squares:
            self.cells[square] = piece

    def __str__(self) -> str:
        return "\n".join(
            "".join(
                self._cell_to_char(Square(x, y)) for x in range(BOARD_WIDTH)
            )
            for y in range(BOARD_WIDTH)
        )

    def _cell_to_char(self, square: Square) -> str:
        piece = self.cell(square)
        return piece.to_char() if piece is not None else EMPTY_CHAR


def all_squares() -> list[Square]:
    """Every square of the board, column by column"""
    return [Square(x, y) for x in range(BOARD_WIDTH) for y in range(BOARD_WIDTH)]
