"""Generate database session"""

from typing import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.config import Settings, load_settings
from src.db.schema import Base


def create_db_engine(settings: Settings) -> Engine:
    """Build the engine and ensure all tables are created"""
    engine = create_engine(settings.database_url, echo=settings.sql_echo)
    Base.metadata.create_all(bind=engine)
    return engine


def create_session_factory(settings: Settings | None = None) -> sessionmaker[Session]:
    engine = create_db_engine(settings or load_settings())
    return sessionmaker(bind=engine)


def get_db(session_factory: sessionmaker[Session]) -> Generator[Session, None, None]:
    db = session_factory()
    try:
        yield db
    finally:
        db.close()
