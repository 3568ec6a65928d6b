"""Unit tests for the command-line interface."""

import pytest
from typer.testing import CliRunner

from sdkpatcher import __version__
from sdkpatcher.cli import app
from sdkpatcher.core.config import Settings

cli_runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_cli(monkeypatch):
    """Keep CLI runs from reconfiguring global logging or reading the environment."""
    monkeypatch.setattr("sdkpatcher.cli.setup_logging", lambda settings=None: None)
    monkeypatch.setattr("sdkpatcher.cli.get_settings", lambda: Settings())
    monkeypatch.setattr("sdkpatcher.collaborators.entry_points", lambda group: [])


class TestCli:
    """Tests for the sdkpatcher commands."""

    def test_version(self):
        result = cli_runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"sdkpatcher v{__version__}" in result.output

    def test_run_uwp(self, uwp_project, temp_dir):
        """Test a UWP run patches the project and exits successfully."""
        settings_file = temp_dir / "settings.json"
        settings_file.write_text(
            '{"use_push": true, "product_name": "Template", "scripting_backend": "dotnet", "ui_framework": "xaml"}',
            encoding="utf-8",
        )

        result = cli_runner.invoke(app, ["run", "WSAPlayer", str(uwp_project), "--settings", str(settings_file)])

        assert result.exit_code == 0
        assert "sdkpatcher" in result.output
        app_dir = uwp_project / "Template"
        assert "// App Center Push code:" in (app_dir / "App.xaml.cs").read_text(encoding="utf-8")
        assert 'Name="internetClient"' in (app_dir / "Package.appxmanifest").read_text(encoding="utf-8")

    def test_run_other_target(self, temp_dir):
        result = cli_runner.invoke(app, ["run", "StandaloneLinux64", str(temp_dir)])
        assert result.exit_code == 0

    def test_run_missing_output(self, temp_dir):
        """Test that a nonexistent output directory is rejected."""
        result = cli_runner.invoke(app, ["run", "uwp", str(temp_dir / "missing")])
        assert result.exit_code != 0

    def test_config(self, temp_dir):
        settings_file = temp_dir / "settings.json"
        settings_file.write_text('{"use_push": true, "product_name": "Game"}', encoding="utf-8")

        result = cli_runner.invoke(app, ["config", "--settings", str(settings_file)])

        assert result.exit_code == 0
        assert "Current Configuration" in result.output
        assert "Game" in result.output

    def test_run_rejects_zero_timeout(self, uwp_project, temp_dir):
        """Test an out-of-range restore timeout fails before anything is patched."""
        settings_file = temp_dir / "settings.json"
        settings_file.write_text('{"use_push": true, "product_name": "Template"}', encoding="utf-8")

        result = cli_runner.invoke(
            app, ["run", "uwp", str(uwp_project), "--settings", str(settings_file), "--timeout", "0"]
        )

        assert result.exit_code != 0
        manifest = uwp_project / "Template" / "Package.appxmanifest"
        assert 'Name="internetClient"' not in manifest.read_text(encoding="utf-8")
