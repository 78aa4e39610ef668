"""Unit tests for license selection, activation and return."""

import logging
from dataclasses import replace

import pytest

from gameci.common.errors import ConfigError, LicenseConflictError, SecretError
from gameci.license import (
    FloatingLicense,
    PersonalLicense,
    SerialLicense,
    register_license,
    return_license,
    select_license,
)
from gameci.secrets import Secret


@pytest.fixture
def ulf(tmp_path):
    path = tmp_path / "Unity_lic.ulf"
    path.write_text("<License/>")
    return path


@pytest.fixture
def service_config(tmp_path):
    path = tmp_path / "services-config.json"
    path.write_text('{"licensingServiceBaseUrl": "http://license:8080"}')
    return path


@pytest.fixture
def serial():
    return Secret("env", "GAMECI_TEST_SERIAL")


class TestSelectLicense:
    """Test select_license."""

    def test_none_supplied(self, run_config):
        assert select_license(run_config) is None

    def test_personal(self, run_config, ulf):
        credential = select_license(replace(run_config, ulf=ulf))

        assert isinstance(credential, PersonalLicense)
        assert credential.ulf == ulf
        assert credential.user == "ci@example.com"

    def test_serial(self, run_config, serial):
        credential = select_license(replace(run_config, serial=serial))

        assert isinstance(credential, SerialLicense)
        assert credential.serial == serial

    def test_server(self, run_config, service_config):
        credential = select_license(replace(run_config, service_config=service_config))

        assert credential == FloatingLicense(service_config)

    def test_multiple_rejected_by_default(self, run_config, ulf, serial, service_config):
        config = replace(run_config, ulf=ulf, serial=serial, service_config=service_config)

        with pytest.raises(LicenseConflictError, match="personal, serial, server"):
            select_license(config)

    def test_multiple_first_wins(self, run_config, serial, service_config, caplog):
        config = replace(run_config, serial=serial, service_config=service_config)

        with caplog.at_level(logging.WARNING, logger="gameci.license"):
            credential = select_license(config, on_conflict="first")

        assert isinstance(credential, SerialLicense)
        assert "Several license credentials" in caplog.text

    def test_unknown_policy(self, run_config):
        with pytest.raises(ConfigError, match="conflict policy"):
            select_license(run_config, on_conflict="cumulative")


class TestRegisterLicense:
    """Test register_license against a fake container."""

    def test_personal(self, runtime, fake_docker, run_config, ulf):
        credential = select_license(replace(run_config, ulf=ulf))

        with runtime.start("editor") as container:
            register_license(container, credential)

        files = fake_docker.filesystems[container.id]
        assert files["/root/.local/share/unity3d/Unity/Unity_lic.ulf"] == "<License/>"
        activation = fake_docker.execs[-1]
        assert activation[0] == "xvfb-run"
        assert activation[-4:] == ["-username", "ci@example.com", "-password", "hunter2"]

    def test_serial(self, runtime, fake_docker, run_config, serial):
        credential = select_license(replace(run_config, serial=serial))

        with runtime.start("editor") as container:
            register_license(container, credential)

        activation = fake_docker.execs[-1]
        assert activation[-6:] == [
            "-username",
            "ci@example.com",
            "-password",
            "hunter2",
            "-serial",
            "SB-XXXX-1234",
        ]

    def test_server(self, runtime, fake_docker, service_config):
        with runtime.start("editor") as container:
            register_license(container, FloatingLicense(service_config))

        files = fake_docker.filesystems[container.id]
        assert "/usr/share/unity3d/config/services-config.json" in files
        assert fake_docker.execs[-1] == [
            "sh",
            "-c",
            "/opt/unity/Editor/Data/Resources/Licensing/Client/Unity.Licensing.Client"
            " --acquire-floating",
        ]

    def test_activation_failure_tolerated(self, runtime, fake_docker, service_config):
        fake_docker.exit_codes["--acquire-floating"] = 1

        with runtime.start("editor") as container:
            result = register_license(container, FloatingLicense(service_config))

        assert result.exit_code == 1

    def test_missing_secret_aborts_before_exec(self, runtime, fake_docker, run_config, monkeypatch):
        monkeypatch.delenv("GAMECI_TEST_SERIAL")
        credential = SerialLicense(
            Secret("env", "GAMECI_TEST_SERIAL"),
            run_config.user,
            run_config.password,
        )

        with runtime.start("editor") as container, pytest.raises(SecretError):
            register_license(container, credential)

        assert fake_docker.execs == []


class TestReturnLicense:
    """Test return_license."""

    def test_runs_returnlicense(self, runtime, fake_docker):
        with runtime.start("editor") as container:
            result = return_license(container)

        assert result.ok
        assert fake_docker.execs[-1][-1] == "-returnlicense"
        assert fake_docker.execs[-1][0] == "xvfb-run"

    def test_failure_tolerated(self, runtime, fake_docker):
        fake_docker.exit_codes["-returnlicense"] = 1

        with runtime.start("editor") as container:
            result = return_license(container)

        assert result.exit_code == 1
