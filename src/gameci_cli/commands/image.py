"""Show which editor image a project resolves to."""

from pathlib import Path

import click

from gameci.version import editor_image, resolve_editor_version
from gameci_cli.commands._common import load_config
from gameci_cli.core.decorators import handle_exceptions


@click.command()
@click.option(
    "--src",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Project directory",
)
@click.option("--platform", required=True, help="Editor image platform")
@click.option("--os", "os_name", required=True, help="Editor image OS")
@click.pass_context
@handle_exceptions
def image(ctx: click.Context, src: Path, platform: str, os_name: str) -> None:
    """Print the editor version and image tag without starting a container."""
    cfg = load_config(ctx, src)
    settings = cfg.pipeline_settings()
    version = resolve_editor_version(src)
    click.echo(f"version: {version}")
    click.echo(
        "image: "
        + editor_image(
            settings.image_repository,
            os_name,
            version,
            platform,
            settings.toolchain_version,
        ),
    )
