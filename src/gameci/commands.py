"""Editor invocations for build and test runs."""

from dataclasses import replace

from gameci import paths
from gameci.container import Container, Expect
from gameci.session import RunState
from gameci_logging import get_logger

logger = get_logger(__name__)

BUILD_METHOD = "BuildCommand.PerformBuild"
COVERAGE_OPTIONS = (
    "'generateAdditionalMetrics;generateHtmlReport;generateHtmlReportHistory;"
    "generateBadgeReport;verbosity:verbose'"
)


def base_command() -> list[str]:
    """Headless editor under a virtual display, opened on the project."""
    return [
        "xvfb-run",
        "--auto-servernum",
        "--server-args='-screen 0 640x480x24'",
        "unity-editor",
        "-nographics",
        "-projectPath",
        paths.PROJECT_PATH,
    ]


def build_command(build_target: str, build_name: str) -> list[str]:
    return [
        *base_command(),
        "-buildTarget",
        build_target,
        "-customBuildPath",
        f"{paths.BUILDS_DIR}/",
        "-customBuildName",
        build_name,
        "-customBuildTarget",
        build_target,
        "-quit",
        "-executeMethod",
        BUILD_METHOD,
        "-logFile",
        f"{paths.BUILDS_DIR}/unity.log",
    ]


def run_tests_command(test_platform: str) -> list[str]:
    return [
        *base_command(),
        "-runTests",
        "-testResults",
        paths.results_file(test_platform),
        "-debugCodeOptimization",
        "-enableCodeCoverage",
        "-coverageResultsPath",
        paths.coverage_dir(test_platform),
        "-coverageHistoryPath",
        paths.coverage_history_dir(test_platform),
        "-testPlatform",
        test_platform,
        "-coverageOptions",
        COVERAGE_OPTIONS,
        "-logFile",
        f"{paths.RESULTS_DIR}/unity.log",
    ]


def run_build(state: RunState, container: Container) -> RunState:
    """Run the editor build; the exit status is recorded, not raised."""
    config = state.config
    logger.info("Building %s for %s", config.build_name, config.build_target)
    result = container.exec(
        build_command(config.build_target, config.build_name),
        expect=Expect.ANY,
    )
    _log_outcome("build", result.exit_code)
    return replace(state, command_result=result)


def run_test(state: RunState, container: Container) -> RunState:
    """Run the editor test runner; the exit status is recorded, not raised."""
    test_platform = state.config.test_platform
    if not test_platform:
        msg = "test_platform is required for test runs"
        raise ValueError(msg)
    logger.info("Running %s tests", test_platform)
    result = container.exec(run_tests_command(test_platform), expect=Expect.ANY)
    _log_outcome("test", result.exit_code)
    return replace(state, command_result=result)


def _log_outcome(mode: str, exit_code: int) -> None:
    if exit_code == 0:
        logger.info("Editor %s finished", mode)
    else:
        logger.warning("Editor %s exited with code %d", mode, exit_code)
