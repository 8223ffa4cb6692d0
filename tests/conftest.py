"""
Fixtures shared by the test modules of several layers (pytest picks this file up on its own).

Each test gets a fresh in-memory SQLite database, built through the same
settings -> engine -> session path the application uses.
"""

from typing import Generator

import pytest
from sqlalchemy import Engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.config import Settings
from src.core.models import GameModel
from src.core.shared_types import Status
from src.db.database import create_db_engine, get_db
from src.db.sql_repository import SQLGameRepository
from src.reversi.game import Game
from src.reversi.pieces import Piece

PLAYERS = {"black": "player_black", "white": "player_white"}


@pytest.fixture
def in_memory_settings() -> Settings:
    return Settings(database_url="sqlite:///:memory:", sql_echo=False, log_level="DEBUG")


@pytest.fixture
def engine(in_memory_settings: Settings) -> Generator[Engine, None, None]:
    """The in-memory database lives as long as the engine: disposing of it throws the games table away."""
    engine = create_db_engine(in_memory_settings)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def db_session(engine: Engine) -> Generator[Session, None, None]:
    yield from get_db(sessionmaker(bind=engine, autoflush=False))


@pytest.fixture
def sql_repository(db_session: Session) -> SQLGameRepository:
    return SQLGameRepository(db_session)


@pytest.fixture
def game_snapshot() -> GameModel:
    """Snapshot of a game in progress: black opened on c4, white to move."""
    game = Game.new_game()
    game.place(2, 3, Piece.BLACK)
    return game.to_model(registered_players=dict(PLAYERS), status=Status.IN_PROGRESS)
