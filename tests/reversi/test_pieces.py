"""Unit tests for /src/reversi/pieces.py"""

import pytest

from src.reversi.pieces import CHAR_TO_PIECE_NAME, FIRST_PLAYER, Piece


def test_black_moves_first() -> None:
    assert FIRST_PLAYER == Piece.BLACK


@pytest.mark.parametrize(
    "piece, opponent", [(Piece.BLACK, Piece.WHITE), (Piece.WHITE, Piece.BLACK)]
)
def test_complement(piece: Piece, opponent: Piece) -> None:
    assert piece.complement() == opponent
    assert ~piece == opponent


@pytest.mark.parametrize("piece", [p for p in Piece])
def test_complement_twice_is_identity(piece: Piece) -> None:
    assert piece.complement().complement() == piece


@pytest.mark.parametrize("char", CHAR_TO_PIECE_NAME.keys())
def test_char_roundtrip(char: str) -> None:
    assert Piece.from_char(char).to_char() == char


def test_unknown_char() -> None:
    with pytest.raises(KeyError):
        Piece.from_char("X")
