"""Build and test commands.

Example::

    gameci build --user me@example.com --password env:UNITY_PASSWORD \\
        --ulf Unity_lic.ulf --platform linux-il2cpp --os ubuntu \\
        --build-target StandaloneLinux64 --build-name Game
"""

from pathlib import Path

import click

from gameci import Pipeline, RunConfig
from gameci.secrets import Secret
from gameci_cli.commands._common import load_config
from gameci_cli.core.constants import Icons
from gameci_cli.core.decorators import handle_exceptions, run_options
from gameci_cli.core.utils import CliOutput
from gameci_logging import get_cli_logger

logger = get_cli_logger(__name__)


def _run_config(
    src: Path,
    user: str,
    platform: str,
    build_target: str,
    os_name: str,
    build_name: str,
    password: Secret,
    serial: Secret | None,
    ulf: Path | None,
    service_config: Path | None,
    test_platform: str | None = None,
    junit_transform: Path | None = None,
) -> RunConfig:
    return RunConfig(
        src=src.resolve(),
        user=user,
        platform=platform,
        build_target=build_target,
        os=os_name,
        build_name=build_name,
        password=password,
        serial=serial,
        ulf=ulf,
        service_config=service_config,
        test_platform=test_platform,
        junit_transform=junit_transform,
    )


@click.command()
@run_options
@click.pass_context
@handle_exceptions
def build(
    ctx: click.Context,
    src: Path,
    user: str,
    platform: str,
    build_target: str,
    os_name: str,
    build_name: str,
    password: Secret,
    serial: Secret | None,
    ulf: Path | None,
    service_config: Path | None,
    output: Path | None,
    allow_failure: bool,
) -> None:
    """Build the project and export /builds."""
    cfg = load_config(ctx, src)
    config = _run_config(
        src,
        user,
        platform,
        build_target,
        os_name,
        build_name,
        password,
        serial,
        ulf,
        service_config,
    )

    CliOutput.section(f"Building {build_name}", Icons.BUILD)
    pipeline = Pipeline(settings=cfg.pipeline_settings())
    result = pipeline.build(config, output or cfg.output_dir, allow_failure=allow_failure)
    CliOutput.success(f"Build output: {result}")


@click.command()
@run_options
@click.option("--test-platform", required=True, help="Test platform, e.g. editmode or playmode")
@click.option(
    "--junit-transform",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="XSLT converting the NUnit results to JUnit",
)
@click.pass_context
@handle_exceptions
def test(
    ctx: click.Context,
    src: Path,
    user: str,
    platform: str,
    build_target: str,
    os_name: str,
    build_name: str,
    password: Secret,
    serial: Secret | None,
    ulf: Path | None,
    service_config: Path | None,
    output: Path | None,
    allow_failure: bool,
    test_platform: str,
    junit_transform: Path | None,
) -> None:
    """Run the project tests and export /results."""
    cfg = load_config(ctx, src)
    config = _run_config(
        src,
        user,
        platform,
        build_target,
        os_name,
        build_name,
        password,
        serial,
        ulf,
        service_config,
        test_platform=test_platform,
        junit_transform=junit_transform,
    )

    CliOutput.section(f"Testing {test_platform}", Icons.TEST)
    pipeline = Pipeline(settings=cfg.pipeline_settings())
    result = pipeline.test(config, output or cfg.output_dir, allow_failure=allow_failure)
    CliOutput.success(f"Test results: {result}")
