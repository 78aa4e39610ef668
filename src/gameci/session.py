"""Run configuration and per-stage state."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from gameci.secrets import Secret

if TYPE_CHECKING:
    from gameci.container import ExecResult
    from gameci.license import LicenseCredential


class Mode(str, Enum):
    BUILD = "build"
    TEST = "test"


@dataclass(frozen=True)
class RunConfig:
    """Inputs of one build or test run, fixed at invocation."""

    src: Path
    user: str
    platform: str
    build_target: str
    os: str
    build_name: str
    password: Secret
    serial: Secret | None = None
    ulf: Path | None = None
    service_config: Path | None = None
    test_platform: str | None = None
    junit_transform: Path | None = None


@dataclass(frozen=True)
class RunState:
    """What the pipeline knows after each stage.

    Stages never mutate a state; they return a copy with their fields filled.
    """

    config: RunConfig
    mode: Mode
    workspace: Path | None = None
    editor_version: str | None = None
    image: str | None = None
    license: "LicenseCredential | None" = None
    command_result: "ExecResult | None" = None
    release_result: "ExecResult | None" = None
    junit_report: str | None = None
