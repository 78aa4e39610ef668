"""Editor license activation and return.

A run uses at most one credential. ``select_license`` picks it once from the
optional inputs; ``register_license`` applies it to a running environment and
``return_license`` hands the seat back afterwards.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Union

from gameci import paths
from gameci.commands import base_command
from gameci.common.errors import ConfigError, LicenseConflictError
from gameci.container import Container, ExecResult, Expect
from gameci.secrets import Secret
from gameci.session import RunConfig
from gameci_logging import get_logger

logger = get_logger(__name__)

CONFLICT_POLICIES = ("error", "first")


@dataclass(frozen=True)
class PersonalLicense:
    ulf: Path
    user: str
    password: Secret

    kind = "personal"


@dataclass(frozen=True)
class SerialLicense:
    serial: Secret
    user: str
    password: Secret

    kind = "serial"


@dataclass(frozen=True)
class FloatingLicense:
    service_config: Path

    kind = "server"


LicenseCredential = Union[PersonalLicense, SerialLicense, FloatingLicense]


def select_license(
    config: RunConfig,
    on_conflict: str = "error",
) -> LicenseCredential | None:
    """Choose the license credential for a run.

    Candidates are considered in the order personal, serial, server.

    Parameters
    ----------
    config : RunConfig
        Run inputs
    on_conflict : str
        ``"error"`` rejects more than one credential, ``"first"`` keeps the
        first candidate and logs a warning

    Returns
    -------
    LicenseCredential | None
        The credential, or None when no license inputs were given

    Raises
    ------
    LicenseConflictError
        If several credentials are supplied and ``on_conflict`` is ``"error"``
    ConfigError
        If ``on_conflict`` is not a known policy
    """
    if on_conflict not in CONFLICT_POLICIES:
        msg = f"Unknown license conflict policy {on_conflict!r}; use one of {CONFLICT_POLICIES}"
        raise ConfigError(msg)

    candidates: list[LicenseCredential] = []
    if config.ulf is not None:
        candidates.append(PersonalLicense(config.ulf, config.user, config.password))
    if config.serial is not None:
        candidates.append(SerialLicense(config.serial, config.user, config.password))
    if config.service_config is not None:
        candidates.append(FloatingLicense(config.service_config))

    if not candidates:
        logger.info("No license credential supplied; skipping activation")
        return None

    if len(candidates) > 1:
        kinds = ", ".join(c.kind for c in candidates)
        if on_conflict == "error":
            msg = f"Only one license credential may be supplied, got: {kinds}"
            raise LicenseConflictError(msg)
        logger.warning(
            "Several license credentials supplied (%s); using %s",
            kinds,
            candidates[0].kind,
        )

    return candidates[0]


def register_license(container: Container, credential: LicenseCredential) -> ExecResult:
    """Activate ``credential`` in the environment.

    Secrets are read before anything runs, so a missing secret aborts the run
    with ``SecretError`` and leaves the container untouched. The activation
    exit status is returned, not enforced.
    """
    if isinstance(credential, PersonalLicense):
        logger.info("Registering personal license")
        password = credential.password.plaintext()
        container.copy_in(credential.ulf, paths.PERSONAL_LICENSE_PATH)
        cmd = [*base_command(), "-username", credential.user, "-password", password]
    elif isinstance(credential, SerialLicense):
        logger.info("Registering serial license")
        serial = credential.serial.plaintext()
        password = credential.password.plaintext()
        cmd = [
            *base_command(),
            "-username",
            credential.user,
            "-password",
            password,
            "-serial",
            serial,
        ]
    else:
        logger.info("Registering license server")
        container.copy_in(credential.service_config, paths.SERVICES_CONFIG_PATH)
        cmd = ["sh", "-c", f"{paths.LICENSING_CLIENT} --acquire-floating"]

    result = container.exec(cmd, expect=Expect.ANY)
    if not result.ok:
        logger.warning(
            "License activation (%s) exited with code %d",
            credential.kind,
            result.exit_code,
        )
    return result


def return_license(container: Container) -> ExecResult:
    """Return the activated license seat; failures are logged only."""
    logger.info("Returning license")
    result = container.exec([*base_command(), "-returnlicense"], expect=Expect.ANY)
    if not result.ok:
        logger.warning("License return exited with code %d", result.exit_code)
    return result
