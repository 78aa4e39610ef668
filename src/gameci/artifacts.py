"""Export of run outputs from the environment."""

from pathlib import Path

from gameci import paths
from gameci.container import Container
from gameci.session import Mode
from gameci_logging import get_logger

logger = get_logger(__name__)

OUTPUT_DIRS = {
    Mode.BUILD: paths.BUILDS_DIR,
    Mode.TEST: paths.RESULTS_DIR,
}


def artifact_dir(mode: Mode) -> str:
    return OUTPUT_DIRS[mode]


def extract_artifacts(container: Container, mode: Mode, output_dir: Path) -> Path:
    """Copy ``/builds`` or ``/results`` out of the environment into ``output_dir``."""
    source = artifact_dir(mode)
    logger.info("Exporting %s to %s", source, output_dir)
    return container.copy_out_directory(source, output_dir)
