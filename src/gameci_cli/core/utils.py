"""Console output for the gameci CLI.

Results go to stdout; errors and hints go to stderr so that the
output of ``gameci image`` can be piped.
"""

import click

from gameci_cli.core.constants import Icons


class CliOutput:
    """Styled status lines shared by the commands."""

    @staticmethod
    def section(title: str, icon: str = "") -> None:
        click.secho(f"{icon} {title}" if icon else title, bold=True)

    @staticmethod
    def success(message: str) -> None:
        click.secho(f"{Icons.SUCCESS} {message}", fg="green")

    @staticmethod
    def error(message: str) -> None:
        click.secho(f"{Icons.ERROR} {message}", fg="red", err=True)

    @staticmethod
    def hint(message: str) -> None:
        click.secho(message, dim=True, err=True)
