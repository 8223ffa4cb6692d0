"""Application settings, read from the environment (and a .env file if there is one)."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_DATABASE_URL = "sqlite:///reversi.sqlite3"
DEFAULT_LOG_LEVEL = "INFO"

TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    database_url: str
    sql_echo: bool
    log_level: str


def load_settings() -> Settings:
    load_dotenv()
    return Settings(
        database_url=os.getenv("REVERSI_DATABASE_URL", DEFAULT_DATABASE_URL),
        sql_echo=os.getenv("REVERSI_SQL_ECHO", "false").strip().lower() in TRUTHY,
        log_level=os.getenv("REVERSI_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
    )
