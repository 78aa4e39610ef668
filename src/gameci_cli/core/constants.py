"""Constants and enums for the gameci CLI."""

from enum import Enum


class LogLevel(str, Enum):
    """Supported log levels."""

    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


ALL_LOG_LEVELS = [level.value for level in LogLevel]

LOGGING_PACKAGES = ("gameci", "gameci_cli")


class ExitCode:
    """Exit codes for CLI operations."""

    SUCCESS = 0
    GENERAL_ERROR = 1
    NOT_FOUND = 2
    CONFIG_ERROR = 3
    PERMISSION_ERROR = 4
    COMMAND_FAILED = 5


class Icons:
    """Unicode icons for CLI output."""

    SUCCESS = "✅"
    ERROR = "❌"
    BUILD = "🔨"
    TEST = "🧪"


class EnvVars:
    """Environment variable names."""

    LOG_LEVEL = "GAMECI_LOG_LEVEL"
    CONFIG = "GAMECI_CONFIG"


class ProjectPaths:
    """Configuration file locations."""

    PROJECT_CONFIG = ".gameci.yaml"
    USER_CONFIG_DIR = ".config/gameci"
    USER_CONFIG = "config.yaml"
