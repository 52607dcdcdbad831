"""Logging configuration shared by the API and the CLI scripts."""

import logging

from app.core.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%SZ"


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )
