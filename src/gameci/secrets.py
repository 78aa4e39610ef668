"""Secret references resolved to plaintext only when a command needs them."""

import os
from dataclasses import dataclass
from pathlib import Path

from gameci.common.errors import SecretError
from gameci_logging import register_secret

SCHEMES = ("env", "file")


@dataclass(frozen=True)
class Secret:
    """A reference to a secret value.

    Only the location is stored; the value is read by :meth:`plaintext` and
    registered with the log masking filter at that point.
    """

    scheme: str
    location: str

    @classmethod
    def from_uri(cls, uri: str) -> "Secret":
        """Parse ``env:NAME`` or ``file:PATH``.

        Raises
        ------
        SecretError
            If the URI has no known scheme or an empty location
        """
        scheme, sep, location = uri.partition(":")
        if not sep or scheme not in SCHEMES or not location:
            msg = f"Invalid secret reference {uri!r}; expected env:NAME or file:PATH"
            raise SecretError(msg)
        return cls(scheme, location)

    def plaintext(self) -> str:
        """Resolve the secret.

        Raises
        ------
        SecretError
            If the variable is unset or empty, or the file cannot be read
        """
        if self.scheme == "env":
            value = os.environ.get(self.location, "")
            if not value:
                msg = f"Secret environment variable {self.location} is not set"
                raise SecretError(msg)
        else:
            try:
                value = Path(self.location).read_text(encoding="utf-8").strip()
            except OSError as e:
                msg = f"Cannot read secret file {self.location}: {e}"
                raise SecretError(msg) from e
            if not value:
                msg = f"Secret file {self.location} is empty"
                raise SecretError(msg)

        register_secret(value)
        return value

    def __str__(self) -> str:
        return f"{self.scheme}:{self.location}"
