"""Logger configuration for gameci packages."""

import logging
import sys

from gameci_logging.filters import SecretMaskingFilter
from gameci_logging.utils import get_log_level

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

CONSOLE_FORMAT = "%(levelname)s %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s:%(lineno)d %(message)s"


def _coerce_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    if level.upper() == "TRACE":
        return TRACE
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        msg = f"Unknown log level: {level}"
        raise ValueError(msg)
    return resolved


def configure_logger(
    name: str,
    level: str | int | None = None,
    to_console: bool = True,
    log_file: str | None = None,
) -> logging.Logger:
    """Configure a package logger.

    Existing handlers are replaced so repeated calls (one per CLI invocation in
    tests) do not stack output.

    Parameters
    ----------
    name : str
        Logger name, usually a top-level package
    level : str | int, optional
        Log level; defaults to ``GAMECI_LOG_LEVEL`` or INFO
    to_console : bool
        Attach a stderr handler
    log_file : str, optional
        Also write records to this file

    Returns
    -------
    logging.Logger
        The configured logger
    """
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for existing in list(logger.filters):
        logger.removeFilter(existing)

    logger.setLevel(_coerce_level(level if level is not None else get_log_level()))
    logger.propagate = False

    masking = SecretMaskingFilter()
    if to_console:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        console.addFilter(masking)
        logger.addHandler(console)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        file_handler.addFilter(masking)
        logger.addHandler(file_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the core ``gameci`` package."""
    return logging.getLogger(name)


def get_cli_logger(name: str) -> logging.Logger:
    """Get a logger for the CLI package."""
    return logging.getLogger(name)
