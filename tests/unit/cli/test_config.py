"""Unit tests for config command."""

from pathlib import Path

import pytest
from dude.cli.main import app
from dude.core.config import load_config_layer
from typer.testing import CliRunner

runner = CliRunner()


@pytest.fixture
def xdg_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG config and state dirs at a temporary directory."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "state"))
    monkeypatch.setattr("dude.core.paths.SYSTEM_CONFIG_PATH", tmp_path / "dude.conf")
    return tmp_path


class TestConfigPath:
    """Tests for config path."""

    def test_shows_locations(self, xdg_home: Path) -> None:
        """All three locations are printed."""
        result = runner.invoke(app, ["config", "path"])

        assert result.exit_code == 0
        assert "System config" in result.output
        assert "User config" in result.output
        assert "last_run" in result.output
        assert "(missing)" in result.output


class TestConfigInit:
    """Tests for config init."""

    def test_writes_starter_config(self, xdg_home: Path) -> None:
        """init writes an empty user config."""
        result = runner.invoke(app, ["config", "init"])

        assert result.exit_code == 0
        config = load_config_layer(xdg_home / "config" / "dude" / "config")
        assert config is not None
        assert config.whitelist == []
        assert config.notify is False

    def test_refuses_overwrite(self, xdg_home: Path) -> None:
        """An existing config is kept without --force."""
        path = xdg_home / "config" / "dude" / "config"
        path.parent.mkdir(parents=True)
        path.write_text('whitelist = ["go"]\n')

        result = runner.invoke(app, ["config", "init"])

        assert result.exit_code == 1
        assert "--force" in result.output
        assert path.read_text() == 'whitelist = ["go"]\n'

    def test_force_overwrites(self, xdg_home: Path) -> None:
        """--force replaces an existing config."""
        path = xdg_home / "config" / "dude" / "config"
        path.parent.mkdir(parents=True)
        path.write_text('whitelist = ["go"]\n')

        result = runner.invoke(app, ["config", "init", "--force"])

        assert result.exit_code == 0
        config = load_config_layer(path)
        assert config is not None
        assert config.whitelist == []


class TestConfigShow:
    """Tests for config show."""

    def test_shows_merged_config(self, xdg_home: Path) -> None:
        """System and user layers are merged in the output."""
        (xdg_home / "dude.conf").write_text(
            'whitelist = ["base-devel"]\n'
            "[auto_prune]\nthreshold_mb = 100\ndays_since_last_run = 7\n"
        )
        user = xdg_home / "config" / "dude" / "config"
        user.parent.mkdir(parents=True)
        user.write_text('whitelist = ["go"]\nnotify = true\n')

        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        assert '"base-devel"' in result.output
        assert '"go"' in result.output
        assert "notify = true" in result.output
        assert "[auto_prune]" in result.output
        assert "threshold_mb = 100" in result.output

    def test_defaults(self, xdg_home: Path) -> None:
        """Without config files the defaults are shown."""
        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        assert "notify = false" in result.output
        assert "auto_prune" not in result.output
