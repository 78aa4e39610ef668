"""Build and test runs.

Each run goes through the same stages:

1. stage the project without repository metadata
2. read the editor version and pick the editor image
3. choose the license credential
4. start the environment, copy the project in and activate the license
5. run the editor build or test command
6. return the license, whatever the command did
7. (test runs with a stylesheet) convert the results to JUnit, if the editor
   wrote any
8. fail the run if the editor command failed
9. export ``/builds`` or ``/results``
"""

import tempfile
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from pathlib import Path

from gameci import paths
from gameci.artifacts import extract_artifacts
from gameci.commands import run_build, run_test
from gameci.common.errors import CommandFailedError, ContainerError
from gameci.container import Container, ContainerRuntime
from gameci.license import register_license, return_license, select_license
from gameci.report import DEFAULT_REPORT_IMAGE, convert_to_junit
from gameci.session import Mode, RunConfig, RunState
from gameci.version import editor_image, resolve_editor_version
from gameci.workspace import prepare_workspace
from gameci_logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class PipelineSettings:
    """Values that rarely change between runs; loaded from configuration."""

    image_repository: str = "unityci/editor"
    toolchain_version: str = "3.1.0"
    report_image: str = DEFAULT_REPORT_IMAGE
    cache_volume: str = "lib"
    on_license_conflict: str = "error"


def check_for_error(state: RunState, allow_failure: bool = False) -> None:
    """Raise when the editor command of ``state`` exited non-zero.

    Raises
    ------
    CommandFailedError
        Unless ``allow_failure`` is set, in which case a warning is logged
    """
    result = state.command_result
    if result is None or result.ok:
        return
    if allow_failure:
        logger.warning(
            "Editor %s failed with exit code %d; returning outputs anyway",
            state.mode.value,
            result.exit_code,
        )
        return
    raise CommandFailedError(state.mode.value, result.exit_code)


class Pipeline:
    """Runs editor builds and tests in disposable containers."""

    def __init__(
        self,
        runtime: ContainerRuntime | None = None,
        settings: PipelineSettings | None = None,
    ) -> None:
        self.runtime = runtime or ContainerRuntime()
        self.settings = settings or PipelineSettings()

    def build(
        self,
        config: RunConfig,
        output_dir: Path,
        allow_failure: bool = False,
    ) -> Path:
        """Build the project and export ``/builds`` into ``output_dir``."""
        return self._run(config, Mode.BUILD, output_dir, allow_failure)

    def test(
        self,
        config: RunConfig,
        output_dir: Path,
        allow_failure: bool = False,
    ) -> Path:
        """Run the project tests and export ``/results`` into ``output_dir``."""
        if not config.test_platform:
            msg = "test_platform is required for test runs"
            raise ValueError(msg)
        return self._run(config, Mode.TEST, output_dir, allow_failure)

    def image_for(self, config: RunConfig, version: str) -> str:
        return editor_image(
            self.settings.image_repository,
            config.os,
            version,
            config.platform,
            self.settings.toolchain_version,
        )

    def _run(
        self,
        config: RunConfig,
        mode: Mode,
        output_dir: Path,
        allow_failure: bool,
    ) -> Path:
        state = RunState(config=config, mode=mode)
        with tempfile.TemporaryDirectory(prefix="gameci-") as tmp:
            scratch = Path(tmp)
            state = replace(
                state,
                workspace=prepare_workspace(config.src, scratch / "project"),
            )
            version = resolve_editor_version(state.workspace)
            state = replace(
                state,
                editor_version=version,
                image=self.image_for(config, version),
                license=select_license(config, self.settings.on_license_conflict),
            )
            logger.info("Editor %s, image %s", version, state.image)

            with self.runtime.start(
                state.image,
                env={"CACHEBUSTER": datetime.now(tz=timezone.utc).isoformat()},
                caches={paths.LIBRARY_CACHE_PATH: self.settings.cache_volume},
            ) as container:
                container.copy_in_directory(state.workspace, paths.PROJECT_PATH)
                if state.license is not None:
                    register_license(container, state.license)

                runner = run_build if mode is Mode.BUILD else run_test
                try:
                    state = runner(state, container)
                finally:
                    release = return_license(container)
                state = replace(state, release_result=release)

                if mode is Mode.TEST and config.junit_transform is not None:
                    state = self._convert_report(state, container, scratch)

                check_for_error(state, allow_failure)
                return extract_artifacts(container, mode, output_dir)

    def _convert_report(
        self,
        state: RunState,
        container: Container,
        scratch: Path,
    ) -> RunState:
        test_platform = state.config.test_platform
        try:
            results = container.copy_out(
                paths.results_file(test_platform),
                scratch / "nunit" / f"{test_platform}-results.xml",
            )
        except ContainerError:
            # A crashed editor may leave no results; the error check reports it.
            if state.command_result is None or state.command_result.ok:
                raise
            logger.warning(
                "No %s results to convert; editor exited with code %d",
                test_platform,
                state.command_result.exit_code,
            )
            return state
        junit = convert_to_junit(
            self.runtime,
            results,
            state.config.junit_transform,
            test_platform,
            scratch / "junit" / f"{test_platform}-junit-results.xml",
            image=self.settings.report_image,
        )
        target = paths.junit_results_file(test_platform)
        container.copy_in(junit, target)
        return replace(state, junit_report=target)
