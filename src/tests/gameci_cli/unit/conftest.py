"""CLI-specific fixtures."""

import pytest
from click.testing import CliRunner


@pytest.fixture
def cli_runner():
    """Provide Click CLI runner for testing commands."""
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep the real ~/.config/gameci out of the tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("GAMECI_LOG_LEVEL", raising=False)
    monkeypatch.delenv("GAMECI_CONFIG", raising=False)
    return home
