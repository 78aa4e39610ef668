"""Disposable execution environments backed by the docker CLI.

An environment is a detached container kept alive with ``sleep infinity``.
Files are copied in with ``docker cp``, commands run with ``docker exec``, and
the container is force-removed when the ``ContainerRuntime.start`` context
exits.
"""

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from pathlib import Path, PurePosixPath

from gameci.common.errors import ContainerError, ContainerExecError
from gameci.common.executor import CommandExecutor
from gameci_logging import get_logger

logger = get_logger(__name__)

MANAGED_LABEL = "com.gameci.managed=true"


class Expect(str, Enum):
    """Which exit statuses ``Container.exec`` accepts."""

    SUCCESS = "success"
    ANY = "any"


@dataclass(frozen=True)
class ExecResult:
    """Captured outcome of a command run inside a container."""

    cmd: tuple[str, ...]
    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


class Container:
    """Handle to a running environment."""

    def __init__(self, runtime: "ContainerRuntime", container_id: str, image: str):
        self.runtime = runtime
        self.id = container_id
        self.image = image

    def __repr__(self) -> str:
        return f"Container(id={self.id[:12]!r}, image={self.image!r})"

    def exec(self, args: list[str], expect: Expect = Expect.SUCCESS) -> ExecResult:
        """Run a command in the container.

        Parameters
        ----------
        args : list[str]
            Command and arguments
        expect : Expect
            ``Expect.ANY`` records a non-zero status instead of raising

        Returns
        -------
        ExecResult
            Exit status and captured output

        Raises
        ------
        ContainerExecError
            If the command fails and ``expect`` is ``Expect.SUCCESS``
        """
        result = self.runtime.docker(["exec", self.id, *args], check=False)
        outcome = ExecResult(
            cmd=tuple(args),
            exit_code=result.returncode,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
        )
        if not outcome.ok:
            if expect is Expect.SUCCESS:
                raise ContainerExecError(list(args), outcome.exit_code, outcome.stderr)
            logger.debug("Tolerated exit code %d from %s", outcome.exit_code, args[0])
        return outcome

    def copy_in(self, src: Path, dest: str) -> None:
        """Copy a host file to ``dest``, creating its parent directory."""
        parent = str(PurePosixPath(dest).parent)
        self.exec(["mkdir", "-p", parent])
        self.runtime.docker(["cp", str(src), f"{self.id}:{dest}"])

    def copy_in_directory(self, src: Path, dest: str) -> None:
        """Copy the contents of a host directory into ``dest``."""
        self.exec(["mkdir", "-p", dest])
        self.runtime.docker(["cp", f"{src}/.", f"{self.id}:{dest}"])

    def copy_out(self, src: str, dest: Path) -> Path:
        """Copy a container file to the host path ``dest``."""
        dest.parent.mkdir(parents=True, exist_ok=True)
        self.runtime.docker(["cp", f"{self.id}:{src}", str(dest)])
        return dest

    def copy_out_directory(self, src: str, dest: Path) -> Path:
        """Copy the contents of a container directory into host ``dest``."""
        dest.mkdir(parents=True, exist_ok=True)
        self.runtime.docker(["cp", f"{self.id}:{src.rstrip('/')}/.", str(dest)])
        return dest


class ContainerRuntime:
    """Creates and removes environments through the docker CLI."""

    def __init__(
        self,
        executor: CommandExecutor | None = None,
        binary: str = "docker",
    ) -> None:
        self.executor = executor or CommandExecutor()
        self.binary = binary

    def docker(self, args: list[str], check: bool = True):
        return self.executor.execute([self.binary, *args], check=check)

    @contextmanager
    def start(
        self,
        image: str,
        env: Mapping[str, str] | None = None,
        caches: Mapping[str, str] | None = None,
    ) -> Iterator[Container]:
        """Start an environment from ``image``.

        Parameters
        ----------
        image : str
            Image reference, pulled on demand by docker
        env : Mapping[str, str], optional
            Environment variables for the container
        caches : Mapping[str, str], optional
            Container path to named volume; volumes persist across runs

        Yields
        ------
        Container
            The running environment, removed when the context exits
        """
        cmd = ["run", "-d", "--label", MANAGED_LABEL, "--entrypoint", "sleep"]
        for key, value in (env or {}).items():
            cmd.extend(["-e", f"{key}={value}"])
        for path, volume in (caches or {}).items():
            cmd.extend(["-v", f"{volume}:{path}"])
        cmd.extend([image, "infinity"])

        logger.info("Starting environment from %s", image)
        result = self.docker(cmd)
        container_id = result.stdout.strip()
        if not container_id:
            msg = f"docker run returned no container id for {image}"
            raise ContainerError(msg)

        container = Container(self, container_id, image)
        try:
            yield container
        finally:
            removed = self.docker(["rm", "-f", container_id], check=False)
            if removed.returncode != 0:
                logger.warning("Failed to remove container %s", container_id[:12])
            else:
                logger.debug("Removed container %s", container_id[:12])
