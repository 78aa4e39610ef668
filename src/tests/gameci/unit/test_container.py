"""Unit tests for the docker-backed container runtime."""

import subprocess
from unittest.mock import Mock

import pytest

from gameci.common.errors import ContainerError, ContainerExecError
from gameci.container import MANAGED_LABEL, ContainerRuntime, Expect
from gameci.secrets import Secret


class TestContainerRuntime:
    """Test ContainerRuntime.start."""

    def test_run_command(self, runtime, fake_docker):
        with runtime.start(
            "unityci/editor:ubuntu-2021.3.5f1-linux-il2cpp-3.1.0",
            env={"CACHEBUSTER": "now"},
            caches={"/src/Library/": "lib"},
        ):
            pass

        run = fake_docker.calls[0]
        assert run[:3] == ["docker", "run", "-d"]
        assert ["--label", MANAGED_LABEL] == run[3:5]
        assert ["--entrypoint", "sleep"] == run[5:7]
        assert "CACHEBUSTER=now" in run
        assert "lib:/src/Library/" in run
        assert run[-2:] == ["unityci/editor:ubuntu-2021.3.5f1-linux-il2cpp-3.1.0", "infinity"]

    def test_container_removed_on_exit(self, runtime, fake_docker):
        with runtime.start("alpine") as container:
            cid = container.id

        assert fake_docker.removed == [cid]
        assert fake_docker.calls[-1] == ["docker", "rm", "-f", cid]

    def test_container_removed_on_error(self, runtime, fake_docker):
        with pytest.raises(RuntimeError), runtime.start("alpine") as container:
            cid = container.id
            raise RuntimeError("boom")

        assert fake_docker.removed == [cid]

    def test_empty_container_id_raises(self):
        executor = Mock()
        executor.execute = Mock(return_value=subprocess.CompletedProcess([], 0, "", ""))
        runtime = ContainerRuntime(executor=executor)

        with pytest.raises(ContainerError, match="no container id"), runtime.start("alpine"):
            pass

    def test_default_executor_created(self):
        runtime = ContainerRuntime()

        assert runtime.executor is not None
        assert runtime.binary == "docker"


class TestContainer:
    """Test Container operations."""

    def test_exec_success(self, runtime, fake_docker):
        with runtime.start("alpine") as container:
            result = container.exec(["echo", "hi"])

        assert result.ok
        assert result.cmd == ("echo", "hi")
        assert ["docker", "exec", container.id, "echo", "hi"] in fake_docker.calls

    def test_exec_failure_raises_by_default(self, runtime, fake_docker):
        fake_docker.exit_codes["false"] = 1

        with runtime.start("alpine") as container, pytest.raises(ContainerExecError) as exc:
            container.exec(["false"])

        assert exc.value.exit_code == 1
        assert exc.value.cmd == ["false"]

    def test_exec_failure_message_masks_secrets(self, runtime, fake_docker, password_env):
        password = Secret("env", "GAMECI_TEST_PASSWORD").plaintext()
        fake_docker.exit_codes["-password"] = 1

        with runtime.start("alpine") as container, pytest.raises(ContainerExecError) as exc:
            container.exec(["unity-editor", "-username", "ci", "-password", password])

        assert password not in str(exc.value)
        assert "-password ***" in str(exc.value)

    def test_exec_failure_tolerated(self, runtime, fake_docker):
        fake_docker.exit_codes["false"] = 3

        with runtime.start("alpine") as container:
            result = container.exec(["false"], expect=Expect.ANY)

        assert not result.ok
        assert result.exit_code == 3

    def test_copy_in_creates_parent(self, runtime, fake_docker, tmp_path):
        source = tmp_path / "Unity_lic.ulf"
        source.write_text("license")

        with runtime.start("alpine") as container:
            container.copy_in(source, "/root/.local/share/unity3d/Unity/Unity_lic.ulf")

        assert ["mkdir", "-p", "/root/.local/share/unity3d/Unity"] in fake_docker.execs
        files = fake_docker.filesystems[container.id]
        assert files["/root/.local/share/unity3d/Unity/Unity_lic.ulf"] == "license"

    def test_copy_directory_round_trip(self, runtime, fake_docker, tmp_path):
        source = tmp_path / "in"
        (source / "sub").mkdir(parents=True)
        (source / "sub" / "a.txt").write_text("a")

        with runtime.start("alpine") as container:
            container.copy_in_directory(source, "/data")
            out = container.copy_out_directory("/data/", tmp_path / "out")

        assert (out / "sub" / "a.txt").read_text() == "a"
        assert ["docker", "cp", f"{container.id}:/data/.", str(tmp_path / "out")] in fake_docker.calls
