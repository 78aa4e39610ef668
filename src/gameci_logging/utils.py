"""Environment helpers for gameci logging."""

import os

LOG_LEVEL_ENV = "GAMECI_LOG_LEVEL"

VALID_LEVELS = ("TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def get_log_level(default: str = "INFO") -> str:
    """Get the log level from the environment.

    Parameters
    ----------
    default : str
        Level returned when the variable is unset or invalid

    Returns
    -------
    str
        Upper-cased log level name
    """
    level = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    if level in VALID_LEVELS:
        return level
    return default
