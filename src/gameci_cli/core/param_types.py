"""Custom Click parameter types."""

import click

from gameci.common.errors import SecretError
from gameci.secrets import Secret


class SecretParamType(click.ParamType):
    """Secret reference given as ``env:NAME`` or ``file:PATH``.

    Only the reference is parsed here; the value is read when a command needs it.
    """

    name = "secret"

    def convert(self, value, param, ctx):
        if isinstance(value, Secret):
            return value
        try:
            return Secret.from_uri(value)
        except SecretError as e:
            self.fail(str(e), param, ctx)
