"""Subprocess execution for host-side commands."""

import subprocess

from gameci.common.errors import ContainerError
from gameci_logging import get_logger
from gameci_logging.filters import SecretMaskingFilter

logger = get_logger(__name__)

EXIT_TIMEOUT = 124
EXIT_NOT_FOUND = 127


class CommandExecutor:
    """Runs host commands (the docker CLI) and captures their output.

    This is the only place in gameci that spawns subprocesses. Logged command
    lines and error output pass through the secret mask first.
    """

    def execute(
        self,
        cmd: list[str],
        check: bool = True,
        timeout: float | None = None,
    ) -> subprocess.CompletedProcess[str]:
        """Run ``cmd`` to completion.

        With ``check`` unset, a timeout or a missing binary is reported as a
        result with exit code 124 or 127 instead of an exception.

        Raises
        ------
        ContainerError
            If ``check`` is set and the command exits non-zero, times out, or
            cannot be found
        """
        shown = SecretMaskingFilter.mask(" ".join(cmd))
        logger.debug("$ %s", shown)

        failure = None
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            failure = f"Command timed out after {timeout} seconds: {shown}"
            result = subprocess.CompletedProcess(cmd, EXIT_TIMEOUT, "", str(e))
        except FileNotFoundError as e:
            failure = f"Command not found: {cmd[0]}"
            result = subprocess.CompletedProcess(cmd, EXIT_NOT_FOUND, "", str(e))
        else:
            if result.returncode != 0:
                failure = f"Command failed with exit code {result.returncode}: {shown}"
                if result.stderr:
                    failure += f"\nError output: {SecretMaskingFilter.mask(result.stderr)}"

        if failure is None:
            return result
        if check:
            logger.error(failure)
            raise ContainerError(failure)
        logger.debug(failure)
        return result
