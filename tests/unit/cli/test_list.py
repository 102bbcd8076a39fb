"""Unit tests for list command."""

from types import SimpleNamespace

from dude.cli.main import app
from dude.core.config import DudeConfig
from dude.core.errors import SourceReadError
from typer.testing import CliRunner

runner = CliRunner()


class TestListCommand:
    """Tests for the list command."""

    def test_lists_orphans_largest_first(self, mock_system: SimpleNamespace) -> None:
        """Orphans are printed with a total, biggest first."""
        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert "Found 3 orphan packages (227.0 MiB total)" in result.output
        assert result.output.index("go") < result.output.index("python-setuptools")
        assert result.output.index("python-setuptools") < result.output.index("libfoo")
        assert "firefox" not in result.output
        assert "gtk3" not in result.output
        mock_system.operator.remove.assert_not_called()

    def test_keep_pattern(self, mock_system: SimpleNamespace) -> None:
        """--keep removes matching names from the listing."""
        result = runner.invoke(app, ["--keep", "^lib", "list"])

        assert result.exit_code == 0
        assert "Found 2 orphan packages" in result.output
        assert "libfoo" not in result.output

    def test_empty_keep_pattern_keeps_everything(self, mock_system: SimpleNamespace) -> None:
        """An empty --keep pattern matches every name, so nothing is listed."""
        result = runner.invoke(app, ["--keep", "", "list"])

        assert result.exit_code == 0
        assert "No orphan packages found." in result.output
        assert "Found" not in result.output

    def test_whitelist(self, mock_system: SimpleNamespace) -> None:
        """Whitelisted names are not listed."""
        mock_system.config = DudeConfig(whitelist=["go"])

        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert "Found 2 orphan packages" in result.output

    def test_invalid_pattern(self, mock_system: SimpleNamespace) -> None:
        """An invalid --keep pattern exits with code 1."""
        result = runner.invoke(app, ["--keep", "python-(", "list"])

        assert result.exit_code == 1
        assert "Invalid pattern" in result.output

    def test_database_unreadable(self, mock_system: SimpleNamespace) -> None:
        """A SourceReadError exits with code 1."""
        mock_system.scanner.scan.side_effect = SourceReadError("pacman -Qi failed: locked")

        result = runner.invoke(app, ["list"])

        assert result.exit_code == 1
        assert "pacman -Qi failed" in result.output

    def test_no_orphans(self, mock_system: SimpleNamespace) -> None:
        """An empty result prints the no-orphans message."""
        mock_system.scanner.scan.side_effect = lambda: iter([])

        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert "No orphan packages found." in result.output

    def test_no_orphans_hook(self, mock_system: SimpleNamespace) -> None:
        """--hook suppresses the no-orphans message."""
        mock_system.scanner.scan.side_effect = lambda: iter([])

        result = runner.invoke(app, ["--hook", "list"])

        assert result.exit_code == 0
        assert result.output.strip() == ""
