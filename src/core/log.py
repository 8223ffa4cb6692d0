"""Logging setup for whatever process hosts the service (web server, worker, CLI)."""

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Modules log through logging.getLogger(__name__); this only sets up the root handler."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
