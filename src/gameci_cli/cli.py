"""Main CLI entry point for gameci.

This module provides the main Click command group; ``build``, ``test`` and
``image`` are registered from ``gameci_cli.commands``.
"""

from dataclasses import dataclass
from pathlib import Path

import click

from gameci import __version__
from gameci_cli.commands import image, run
from gameci_cli.core.constants import (
    ALL_LOG_LEVELS,
    LOGGING_PACKAGES,
    EnvVars,
    LogLevel,
)
from gameci_logging import configure_logger, get_cli_logger
from gameci_logging.utils import get_log_level

logger = get_cli_logger(__name__)


@dataclass
class CliContext:
    """State shared by all subcommands through ``ctx.obj``."""

    verbose: bool = False
    log_level: str | None = None
    log_file: Path | None = None
    config_file: Path | None = None


def configure_logging(level: str, log_file: Path | None = None) -> None:
    """Configure the gameci package loggers."""
    for pkg_name in LOGGING_PACKAGES:
        configure_logger(
            pkg_name,
            level=level,
            to_console=True,
            log_file=str(log_file) if log_file else None,
        )


def _effective_level(verbose: bool, log_level: str | None) -> str | None:
    if log_level:
        return log_level.upper()
    if verbose:
        return LogLevel.DEBUG.value
    return None


@click.group()
@click.version_option(__version__, prog_name="gameci")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging")
@click.option(
    "--log-level",
    type=click.Choice(ALL_LOG_LEVELS, case_sensitive=False),
    default=None,
    help=f"Log level (overrides -v and {EnvVars.LOG_LEVEL})",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write logs to this file",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    envvar=EnvVars.CONFIG,
    default=None,
    help="Extra configuration file applied after user and project config",
)
@click.pass_context
def main(
    ctx: click.Context,
    verbose: bool,
    log_level: str | None,
    log_file: Path | None,
    config_file: Path | None,
) -> None:
    """Build and test game-engine projects in disposable containers."""
    level = _effective_level(verbose, log_level)
    configure_logging(level or get_log_level(), log_file)
    ctx.obj = CliContext(
        verbose=verbose,
        log_level=level,
        log_file=log_file,
        config_file=config_file,
    )
    logger.debug("gameci %s invoked: %s", __version__, ctx.invoked_subcommand)


main.add_command(run.build)
main.add_command(run.test)
main.add_command(image.image)


if __name__ == "__main__":
    main()
