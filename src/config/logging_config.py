"""
Logging Configuration for the Encoded Upload Ingestion Service

JSON lines on stdout. Every module logger hangs off one service root logger,
so the handler is installed once and per-module loggers only set a level.
"""

import logging
import sys
from typing import Optional

from pythonjsonlogger import jsonlogger

from src.config.settings import LOG_LEVELS, config

ROOT_LOGGER_NAME = "encoded_ingest"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _resolve_level(level: Optional[str]) -> int:
    """Level name to logging constant; unknown names fall back to INFO."""
    name = (level or config.LOG_LEVEL).upper()
    return getattr(logging, name) if name in LOG_LEVELS else logging.INFO


def _root_logger() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(jsonlogger.JsonFormatter(LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))
        root.addHandler(handler)
        root.setLevel(_resolve_level(None))
        root.propagate = False
    return root


def setup_logger(name: str = ROOT_LOGGER_NAME, level: Optional[str] = None) -> logging.Logger:
    """
    Return a JSON logger for ``name``.

    Module names (``src.api.ingest``) become children of the service root
    logger, e.g. ``encoded_ingest.src.api.ingest``.

    Args:
        name: Logger name (usually __name__ of calling module)
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL; defaults to Config.LOG_LEVEL

    Returns:
        Configured logger instance
    """
    root = _root_logger()
    if name == ROOT_LOGGER_NAME:
        logger = root
    else:
        logger = root.getChild(name)
    logger.setLevel(_resolve_level(level))
    return logger


# Default application logger
logger = setup_logger()
