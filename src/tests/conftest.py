"""Root pytest configuration and shared fixtures for the gameci test suite."""

import logging
import subprocess
import sys
from pathlib import Path

import pytest

src_path = Path(__file__).parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from gameci.common.errors import ContainerError  # noqa: E402
from gameci.container import ContainerRuntime  # noqa: E402
from gameci.secrets import Secret  # noqa: E402
from gameci.session import RunConfig  # noqa: E402
from gameci_logging import SecretMaskingFilter  # noqa: E402


class FakeDocker:
    """Stand-in for ``CommandExecutor`` that emulates the docker CLI.

    Every container gets an in-memory filesystem (path -> content). Commands
    are recorded in ``calls``; ``exit_codes`` maps a substring of an exec'd
    command to the status it returns, and ``effects`` maps a substring to files
    the command writes.
    """

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self.images: dict[str, str] = {}
        self.filesystems: dict[str, dict[str, str]] = {}
        self.removed: list[str] = []
        self.exit_codes: dict[str, int] = {}
        self.effects: dict[str, dict[str, str]] = {}

    @property
    def execs(self) -> list[list[str]]:
        """Commands run with ``docker exec``, without the container id."""
        return [call[3:] for call in self.calls if call[1] == "exec"]

    def execs_in(self, image: str) -> list[list[str]]:
        ids = {cid for cid, img in self.images.items() if img == image}
        return [call[3:] for call in self.calls if call[1] == "exec" and call[2] in ids]

    def execute(self, cmd, check=True, **kwargs):
        self.calls.append(list(cmd))
        action, args = cmd[1], cmd[2:]
        returncode, stdout = 0, ""

        if action == "run":
            cid = f"cid{len(self.images) + 1:04d}"
            self.images[cid] = args[-2]
            self.filesystems[cid] = {}
            stdout = f"{cid}\n"
        elif action == "exec":
            cid, command = args[0], " ".join(args[1:])
            for needle, code in self.exit_codes.items():
                if needle in command:
                    returncode = code
            for needle, files in self.effects.items():
                if needle in command:
                    self.filesystems[cid].update(files)
        elif action == "cp":
            self._copy(args[0], args[1])
        elif action == "rm":
            self.removed.append(args[-1])

        if check and returncode != 0:
            msg = f"Command failed with exit code {returncode}"
            raise ContainerError(msg)
        return subprocess.CompletedProcess(cmd, returncode, stdout, "")

    def _copy(self, src: str, dest: str) -> None:
        if src.startswith("cid"):
            cid, _, path = src.partition(":")
            files = self.filesystems[cid]
            host = Path(dest)
            if path.endswith("/."):
                prefix = path[:-1]
                for name, content in files.items():
                    if name.startswith(prefix):
                        target = host / name[len(prefix) :]
                        target.parent.mkdir(parents=True, exist_ok=True)
                        target.write_text(content)
            else:
                if path not in files:
                    msg = f"No such container path: {path}"
                    raise ContainerError(msg)
                host.write_text(files[path])
            return

        cid, _, path = dest.partition(":")
        files = self.filesystems[cid]
        if src.endswith("/."):
            root = Path(src[:-2])
            for host_file in root.rglob("*"):
                if host_file.is_file():
                    rel = host_file.relative_to(root).as_posix()
                    files[f"{path.rstrip('/')}/{rel}"] = host_file.read_text()
        else:
            files[path] = Path(src).read_text()


@pytest.fixture(autouse=True)
def _reset_loggers():
    """Undo logger configuration done by CLI invocations."""
    yield
    for name in ("gameci", "gameci_cli"):
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        for log_filter in list(logger.filters):
            logger.removeFilter(log_filter)
        logger.propagate = True
        logger.setLevel(logging.NOTSET)


@pytest.fixture
def fake_docker():
    return FakeDocker()


@pytest.fixture
def runtime(fake_docker):
    return ContainerRuntime(executor=fake_docker)


@pytest.fixture
def unity_project(tmp_path):
    """A minimal project tree with repository clutter at its root."""
    project = tmp_path / "MyGame"
    (project / "ProjectSettings").mkdir(parents=True)
    (project / "ProjectSettings" / "ProjectVersion.txt").write_text(
        "m_EditorVersion: 2021.3.5f1\n"
        "m_EditorVersionWithRevision: 2021.3.5f1 (40eb3a945986)\n",
    )
    (project / "Assets" / "Scripts").mkdir(parents=True)
    (project / "Assets" / "Scripts" / "Player.cs").write_text("class Player {}\n")
    (project / "Assets" / "README.md").write_text("assets readme\n")
    for directory in (".git", ".dagger", ".vscode"):
        (project / directory).mkdir()
        (project / directory / "config").write_text("x\n")
    for name in (
        ".gitignore",
        ".gitmodules",
        ".DS_Store",
        "dagger.json",
        "go.work",
        "LICENSE",
        "README.md",
    ):
        (project / name).write_text("x\n")
    return project


@pytest.fixture
def password_env(monkeypatch):
    monkeypatch.setenv("GAMECI_TEST_PASSWORD", "hunter2")
    monkeypatch.setenv("GAMECI_TEST_SERIAL", "SB-XXXX-1234")
    yield
    SecretMaskingFilter.clear()


@pytest.fixture
def run_config(unity_project, password_env):
    return RunConfig(
        src=unity_project,
        user="ci@example.com",
        platform="linux-il2cpp",
        build_target="StandaloneLinux64",
        os="ubuntu",
        build_name="MyGame",
        password=Secret("env", "GAMECI_TEST_PASSWORD"),
    )
