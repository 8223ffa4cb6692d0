"""
The Game class will be the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating the rules required to play a turn of Reversi -->
passes this information to the service layer, which can then pass it onwards to the API layer.

NOTE: The Game does not know about players, only about colors. Who plays which color is the service's business.
"""

from dataclasses import dataclass, field
from typing import Optional, Self

from src.core.exceptions import (
    GameStateError,
    InvalidLayoutError,
    NoFlipsError,
    NotAdjacentError,
    NotYourTurnError,
    OccupiedError,
    OutOfBoundsError,
    PlacementError,
)
from src.core.models import GameModel
from src.reversi.board import Board, all_squares
from src.reversi.pieces import FIRST_PLAYER, Piece
from src.reversi.square import Square


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    _turn: Piece = FIRST_PLAYER
    _history: list[Square] = field(default_factory=list)

    @classmethod
    def new_game(cls) -> Self:
        """Standard opening, black to move."""
        return cls(board=Board.new())

    @classmethod
    def from_position(
        cls,
        board: Board,
        turn: Piece = FIRST_PLAYER,
        history: Optional[list[Square]] = None,
    ) -> Self:
        """Start from an arbitrary position, ex. a restored game or a puzzle."""
        return cls(board=board, _turn=turn, _history=list(history or []))

    @property
    def turn(self) -> Piece:
        """Whose move is next"""
        return self._turn

    @property
    def history(self) -> tuple[Square, ...]:
        """Every placement so far, oldest first. A copy: the game itself only changes through place()."""
        return tuple(self._history)

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Restore a Game from the snapshot the persistence layer keeps."""
        if model.turn.upper() not in Piece.__members__:
            raise GameStateError(
                f"Invalid turn: {model.turn!r}. \nPick one from {','.join([p.value for p in Piece])}"
            )

        try:
            board = Board.from_layout(model.board)
        except InvalidLayoutError as e:
            raise GameStateError(f"Cannot restore game: {e}") from e

        try:
            history = [Square.from_notation(name) for name in model.history]
        except (ValueError, IndexError) as e:
            raise GameStateError(
                f"Cannot restore game. Invalid move history: {model.history!r}"
            ) from e

        off_board = [square for square in history if not square.is_within_bounds()]
        if off_board:
            raise GameStateError(
                f"Cannot restore game. Move history contains squares off the board: {off_board!r}"
            )

        # black moves first, so the number of moves played decides whose turn it is
        turn = Piece[model.turn.upper()]
        expected_turn = FIRST_PLAYER if len(history) % 2 == 0 else ~FIRST_PLAYER
        if turn != expected_turn:
            raise GameStateError(
                f"Cannot restore game. After {len(history)} moves it is {expected_turn.value}'s turn, not {turn.value}'s."
            )

        return cls.from_position(board, turn, history)

    def to_model(
        self, registered_players: dict[str, str], status: str
    ) -> GameModel:
        """Encode back into a format the Service layer uses. The service supplies what the Game does not track."""
        return GameModel(
            board=self.board.to_layout(),
            turn=self.turn.value,
            history=[square.to_notation() for square in self.history],
            registered_players=registered_players,
            status=status,
        )

    def score(self) -> tuple[int, int]:
        """(black discs, white discs)"""
        return self.board.count(Piece.BLACK), self.board.count(Piece.WHITE)

    def moves(self, piece: Piece) -> list[Square]:
        """Every square where `piece` could legally be placed right now.

        NOTE: Because of the turn check, this is always empty for the player who is not to move.
        """
        return [
            square
            for square in all_squares()
            if self._is_legal(square.x, square.y, piece)
        ]

    def validate(self, x: int, y: int, piece: Piece) -> None:
        """Raises the error of the first failing check. See _validate for the order."""
        self._validate(x, y, piece)

    def place(self, x: int, y: int, piece: Piece) -> list[Square]:
        """
        Attempt to place a disc
        -----

        1. validate (always, never trust an earlier validation)
        2. put the disc on the board
        3. turn over the captured discs
        4. record the move
        5. hand the turn to the opponent

        Returns the captured squares. Nothing changes if validation fails.
        """
        flips = self._validate(x, y, piece)
        square = Square(x, y)
        self.board.place_piece(square, piece)
        # turn over the discs found during validation
        self.board.capture(flips, piece)
        self._history.append(square)
        self._turn = piece.complement()
        return flips

    def preview(self, x: int, y: int, piece: Piece) -> list[Square]:
        """The squares that would be captured, without changing anything."""
        return self._validate(x, y, piece)

    def over(self) -> bool:
        """The player to move has no legal placement left.

        NOTE: no passing. The round ends as soon as the player to move is stuck, even if the opponent could still move.
        """
        return not self.moves(self.turn)

    def winner(self) -> Optional[Piece]:
        """Only defined once the game is over. None for a draw as well."""
        if not self.over():
            return None
        black, white = self.score()
        if black == white:
            return None
        return Piece.BLACK if black > white else Piece.WHITE

    # -- PRIVATE HELPERS ---
    def _validate(self, x: int, y: int, piece: Piece) -> list[Square]:
        """
        The order of the checks decides which error a doubly-invalid move reports:

        1. bounds
        2. turn
        3. adjacency (cheap filter before the capture scan)
        4. occupancy
        5. captures at least one disc
        """
        square = Square(x, y)
        if not square.is_within_bounds():
            raise OutOfBoundsError(x, y)

        if piece != self.turn:
            raise NotYourTurnError(piece)

        if not self.board.adjacent(square):
            raise NotAdjacentError(x, y)

        if self.board.cell(square) is not None:
            raise OccupiedError(x, y)

        flips = self.board.flip(square, piece, commit=False)
        if not flips:
            raise NoFlipsError(x, y)
        return flips

    def _is_legal(self, x: int, y: int, piece: Piece) -> bool:
        try:
            self._validate(x, y, piece)
        except PlacementError:
            return False
        return True

    def __str__(self) -> str:
        return f"Turn: {self.turn.value}\nBoard:\n{self.board}"
