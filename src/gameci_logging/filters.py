"""Logging filters."""

import logging

MASK = "***"


class SecretMaskingFilter(logging.Filter):
    """Replace registered secret values in log records with a mask.

    Secrets are registered process-wide with :func:`register_secret` as soon as
    their plaintext is read, so every handler carrying this filter scrubs them.
    """

    _secrets: set[str] = set()

    @classmethod
    def register(cls, value: str) -> None:
        if value:
            cls._secrets.add(value)

    @classmethod
    def clear(cls) -> None:
        cls._secrets.clear()

    @classmethod
    def mask(cls, text: str) -> str:
        for secret in cls._secrets:
            text = text.replace(secret, MASK)
        return text

    def filter(self, record: logging.LogRecord) -> bool:
        if not self._secrets:
            return True
        message = record.getMessage()
        masked = self.mask(message)
        if masked != message:
            record.msg = masked
            record.args = None
        return True


def register_secret(value: str) -> None:
    """Register a value that must never appear in log output."""
    SecretMaskingFilter.register(value)
