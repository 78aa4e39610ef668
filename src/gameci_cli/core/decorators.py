"""Custom Click decorators for common CLI patterns."""

import functools
import traceback
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import click

from gameci.common.errors import (
    CommandFailedError,
    ConfigError,
    GameciError,
    LicenseConflictError,
)
from gameci_cli.core.constants import ExitCode
from gameci_cli.core.param_types import SecretParamType
from gameci_cli.core.utils import CliOutput
from gameci_logging import get_cli_logger

logger = get_cli_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def handle_exceptions(func: F) -> F:
    """Convert gameci errors into styled messages and exit codes.

    Parameters
    ----------
    func : Callable
        Function to wrap

    Returns
    -------
    Callable
        Wrapped function
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> Any:
        ctx = click.get_current_context()
        try:
            return func(*args, **kwargs)
        except click.exceptions.Exit:
            raise
        except KeyboardInterrupt:
            CliOutput.error("Aborted")
            ctx.exit(ExitCode.GENERAL_ERROR)
        except CommandFailedError as e:
            CliOutput.error(str(e))
            CliOutput.hint("Re-run with --allow-failure to keep the outputs")
            ctx.exit(ExitCode.COMMAND_FAILED)
        except (ConfigError, LicenseConflictError) as e:
            CliOutput.error(str(e))
            ctx.exit(ExitCode.CONFIG_ERROR)
        except GameciError as e:
            CliOutput.error(str(e))
            ctx.exit(ExitCode.GENERAL_ERROR)
        except FileNotFoundError as e:
            CliOutput.error(f"File not found: {e}")
            ctx.exit(ExitCode.NOT_FOUND)
        except PermissionError as e:
            CliOutput.error(f"Permission denied: {e}")
            ctx.exit(ExitCode.PERMISSION_ERROR)
        except Exception as e:
            logger.debug("Unhandled error", exc_info=True)
            CliOutput.error(f"Unexpected error: {e}")
            verbose = bool(getattr(ctx.obj, "verbose", False))
            if verbose:
                CliOutput.hint(traceback.format_exc())
            else:
                CliOutput.hint("Re-run with -v for full traceback")
            ctx.exit(ExitCode.GENERAL_ERROR)

    return wrapper  # type: ignore[return-value]


_EXISTING_FILE = click.Path(exists=True, dir_okay=False, path_type=Path)

_RUN_OPTIONS = [
    click.option(
        "--src",
        type=click.Path(exists=True, file_okay=False, path_type=Path),
        default=Path("."),
        show_default=True,
        help="Project directory",
    ),
    click.option("--user", required=True, help="License account user name"),
    click.option("--platform", required=True, help="Editor image platform, e.g. linux-il2cpp"),
    click.option("--build-target", required=True, help="Editor build target, e.g. StandaloneLinux64"),
    click.option("--os", "os_name", required=True, help="Editor image OS, e.g. ubuntu"),
    click.option("--build-name", required=True, help="Name of the build output"),
    click.option(
        "--password",
        type=SecretParamType(),
        required=True,
        help="Account password as env:NAME or file:PATH",
    ),
    click.option(
        "--serial",
        type=SecretParamType(),
        default=None,
        help="License serial as env:NAME or file:PATH",
    ),
    click.option("--ulf", type=_EXISTING_FILE, default=None, help="Personal license file"),
    click.option(
        "--service-config",
        type=_EXISTING_FILE,
        default=None,
        help="Floating license services-config.json",
    ),
    click.option(
        "--output",
        "-o",
        type=click.Path(file_okay=False, path_type=Path),
        default=None,
        help="Directory receiving the exported outputs",
    ),
    click.option(
        "--allow-failure",
        is_flag=True,
        help="Export outputs even when the editor command fails",
    ),
]


def run_options(func: F) -> F:
    """Add the options shared by ``build`` and ``test``."""
    for option in reversed(_RUN_OPTIONS):
        func = option(func)
    return func
