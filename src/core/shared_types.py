"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    WAITING_FOR_PLAYERS = "waiting for players"
    IN_PROGRESS = "in progress"
    FINISHED = "finished"


# --- Same names as the domain Piece values, but without the Reversi specific behaviour.
# --- Lets the API and DB layers talk about colors without importing the domain layer.
class Color(StrEnum):
    BLACK = "black"
    WHITE = "white"
