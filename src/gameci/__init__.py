"""Build and test game-engine projects in disposable containers."""

from gameci.pipeline import Pipeline, PipelineSettings, check_for_error
from gameci.secrets import Secret
from gameci.session import Mode, RunConfig, RunState

__version__ = "0.1.0"

__all__ = [
    "Mode",
    "Pipeline",
    "PipelineSettings",
    "RunConfig",
    "RunState",
    "Secret",
    "check_for_error",
]
