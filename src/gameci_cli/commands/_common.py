"""Helpers shared by the subcommands."""

import logging
import os
from pathlib import Path

import click

from gameci_cli.core.config import CliConfig
from gameci_cli.core.constants import LOGGING_PACKAGES, EnvVars
from gameci_logging import get_cli_logger

logger = get_cli_logger(__name__)


def load_config(ctx: click.Context, project_root: Path) -> CliConfig:
    """Load configuration for ``project_root``.

    ``defaults.log_level`` applies only when neither ``--log-level``, ``-v``
    nor ``GAMECI_LOG_LEVEL`` chose a level.
    """
    cfg = CliConfig(project_root=project_root, config_file=ctx.obj.config_file)
    if ctx.obj.log_level is None and not os.environ.get(EnvVars.LOG_LEVEL):
        for pkg_name in LOGGING_PACKAGES:
            logging.getLogger(pkg_name).setLevel(cfg.log_level.value)
    logger.debug("Loaded configuration for %s", project_root)
    return cfg
