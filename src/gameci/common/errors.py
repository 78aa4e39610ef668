"""Exception hierarchy for gameci."""

from gameci_logging.filters import SecretMaskingFilter


class GameciError(Exception):
    """Base class for all gameci errors."""


class ConfigError(GameciError):
    """Invalid configuration value."""


class WorkspaceError(GameciError):
    """The project tree cannot be prepared."""


class VersionResolutionError(GameciError):
    """The editor version cannot be read from the project."""


class SecretError(GameciError):
    """A secret could not be resolved to plaintext."""


class LicenseConflictError(GameciError):
    """More than one license credential was supplied for a run."""


class ContainerError(GameciError):
    """A container runtime operation failed."""


class ContainerExecError(ContainerError):
    """A command inside a container exited with an unexpected status."""

    def __init__(self, cmd: list[str], exit_code: int, stderr: str = "") -> None:
        self.cmd = cmd
        self.exit_code = exit_code
        self.stderr = stderr
        msg = f"Command exited with {exit_code}: {' '.join(cmd)}"
        if stderr:
            msg += f"\n{stderr.strip()}"
        super().__init__(SecretMaskingFilter.mask(msg))


class CommandFailedError(GameciError):
    """The editor build or test command reported failure."""

    def __init__(self, mode: str, exit_code: int) -> None:
        self.mode = mode
        self.exit_code = exit_code
        super().__init__(f"Editor {mode} command failed with exit code {exit_code}")
