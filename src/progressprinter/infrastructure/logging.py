"""Logging setup."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "progressprinter"


def setup_logging(debug: bool = False) -> logging.Logger:
    """Configure the package logger.

    Debug mode attaches a RichHandler on stderr at DEBUG level. Otherwise
    the logger is left to the host's logging configuration.
    Idempotent: a second call does not add another handler.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if not debug:
        return logger

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    return logger


def teardown_logging() -> None:
    """Remove handlers added by setup_logging."""
    logger = logging.getLogger(LOGGER_NAME)
    for handler in [h for h in logger.handlers if isinstance(h, RichHandler)]:
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
