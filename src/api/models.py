"""Requests and Response models"""

import re
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color, Status

PieceColor = str
PlayerName = str
SquareName = str

# column letter followed by the row number, ex. 'd3'
SQUARE_NOTATION = re.compile(r"^[a-z][1-9][0-9]?$")


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    player_name: str
    color: Color


class JoinGameRequest(BaseModel):
    game_id: UUID
    player_name: str


class GetGameRequest(BaseModel):
    game_id: UUID


class LegalMovesRequest(BaseModel):
    game_id: UUID
    player_name: str


class MoveRequest(BaseModel):
    """Used both to make a move and to preview its consequences."""

    game_id: UUID
    player_name: str
    square: SquareName

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        normalized = value.strip().lower()
        if not SQUARE_NOTATION.match(normalized):
            raise InvalidRequestError(
                f"Cannot interpret square: {value!r} as a valid square name."
            )
        return normalized


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    game_id: UUID
    players: dict[PieceColor, PlayerName]
    board: str
    turn: Color
    move_history: list[SquareName]
    score: dict[Color, int]
    status: Status
    winner: Optional[PlayerName] = None


class LegalMovesResponse(BaseModel):
    game_id: UUID
    player_name: str
    color: Color
    legal_moves: list[SquareName]


class PreviewResponse(BaseModel):
    game_id: UUID
    square: SquareName
    flips: list[SquareName]


class MoveResponse(GameResponse):
    """Game state after the move, plus what the move itself did."""

    placed: SquareName
    flips: list[SquareName]


class MoveEvent(BaseModel):
    """Payload for notifying everybody watching a game (players and spectators) of a move."""

    game_id: UUID
    color: Color
    square: SquareName
    flips: list[SquareName]
