"""Shared logging setup for the gameci packages."""

from gameci_logging.config import TRACE, configure_logger, get_cli_logger, get_logger
from gameci_logging.filters import SecretMaskingFilter, register_secret

__all__ = [
    "TRACE",
    "SecretMaskingFilter",
    "configure_logger",
    "get_cli_logger",
    "get_logger",
    "register_secret",
]
