"""NUnit to JUnit test report conversion in a throwaway container."""

from pathlib import Path

from gameci import paths
from gameci.container import ContainerRuntime
from gameci_logging import get_logger

logger = get_logger(__name__)

DEFAULT_REPORT_IMAGE = "eclipse-temurin"
XSLT_PACKAGE = "libsaxonb-java"


def transform_command(test_platform: str) -> list[str]:
    source = paths.results_file(test_platform)
    target = paths.junit_results_file(test_platform)
    return [
        "sh",
        "-c",
        f"saxonb-xslt -s {source} -xsl {paths.TRANSFORM_PATH} > {target}",
    ]


def convert_to_junit(
    runtime: ContainerRuntime,
    results_file: Path,
    transform: Path,
    test_platform: str,
    dest: Path,
    image: str = DEFAULT_REPORT_IMAGE,
) -> Path:
    """Apply ``transform`` to an NUnit results file.

    Every step must succeed; a failed install or transform raises
    ``ContainerExecError``.

    Parameters
    ----------
    runtime : ContainerRuntime
        Runtime used to start the converter environment
    results_file : Path
        Host copy of ``<platform>-results.xml``
    transform : Path
        XSLT stylesheet
    test_platform : str
        Test platform name used in file names
    dest : Path
        Host path for the converted report
    image : str
        Image providing ``apt-get``

    Returns
    -------
    Path
        ``dest``
    """
    logger.info("Converting %s test results to JUnit", test_platform)
    with runtime.start(image) as converter:
        converter.exec(["apt-get", "update"])
        converter.exec(["apt-get", "install", "-y", XSLT_PACKAGE])
        converter.copy_in(results_file, paths.results_file(test_platform))
        converter.copy_in(transform, paths.TRANSFORM_PATH)
        converter.exec(transform_command(test_platform))
        return converter.copy_out(paths.junit_results_file(test_platform), dest)
