"""Unit tests for core models, configuration and errors."""

import pytest
from pydantic import ValidationError

from sdkpatcher.core.config import Settings
from sdkpatcher.core.exceptions import (
    AmbiguousTargetError,
    NotFoundError,
    PatternNotMatchedError,
    SubprocessFailureError,
)
from sdkpatcher.core.types import StepResult, StepStatus
from sdkpatcher.models.build import (
    BuildOutput,
    BuildTarget,
    FeatureFlags,
    ScriptingBackend,
    UIFramework,
)
from sdkpatcher.models.patches import DependencyEntry


class TestBuildModels:
    """Tests for build-related models."""

    @pytest.mark.parametrize(
        "host, expected",
        [
            ("WSAPlayer", BuildTarget.UWP),
            ("metro", BuildTarget.UWP),
            ("iOS", BuildTarget.IOS),
            (" Android ", BuildTarget.ANDROID),
            ("StandaloneWindows64", BuildTarget.OTHER),
            (BuildTarget.IOS, BuildTarget.IOS),
            (None, BuildTarget.OTHER),
            (42, BuildTarget.OTHER),
        ],
    )
    def test_target_from_host(self, host, expected):
        """Test host platform identifiers map onto build targets."""
        assert BuildTarget.from_host(host) == expected

    def test_build_output_path_is_absolute(self, temp_dir):
        output = BuildOutput(target=BuildTarget.UWP, output_path=temp_dir / "a" / ".." / "b")
        assert output.output_path.is_absolute()
        assert ".." not in output.output_path.parts

    def test_flags_defaults(self):
        flags = FeatureFlags()
        assert not flags.use_push
        assert flags.scripting_backend == ScriptingBackend.IL2CPP
        assert flags.ui_framework == UIFramework.XAML

    def test_flags_are_frozen(self):
        """Test that the settings snapshot cannot be mutated during a pass."""
        flags = FeatureFlags(use_push=True)
        with pytest.raises(ValidationError):
            flags.use_push = False

    def test_flags_derived_names(self):
        """Test the app directory falls back to the product name."""
        flags = FeatureFlags(product_name="Game", ios_app_secret="abc")
        assert flags.app_directory_name == "Game"
        assert flags.url_scheme == "appcenter-abc"
        assert flags.model_copy(update={"tile_short_name": "G"}).app_directory_name == "G"

    def test_flags_load_ignores_unknown_keys(self, temp_dir):
        """Test loading a settings file written by a newer SDK."""
        path = temp_dir / "settings.json"
        path.write_text(
            '{"use_push": true, "scripting_backend": "dotnet", "ui_framework": "d3d", "use_analytics": true}',
            encoding="utf-8",
        )

        flags = FeatureFlags.load(path)

        assert flags.use_push
        assert flags.scripting_backend == ScriptingBackend.DOTNET
        assert flags.ui_framework == UIFramework.D3D

    def test_flags_from_env(self, monkeypatch):
        monkeypatch.setenv("SDKPATCHER_USE_PUSH", "True")
        monkeypatch.setenv("SDKPATCHER_PRODUCT_NAME", "Game")
        monkeypatch.setenv("SDKPATCHER_SCRIPTING_BACKEND", "dotnet")
        monkeypatch.delenv("SDKPATCHER_USE_DISTRIBUTE", raising=False)

        flags = FeatureFlags.from_env()

        assert flags.use_push
        assert not flags.use_distribute
        assert flags.product_name == "Game"
        assert flags.scripting_backend == ScriptingBackend.DOTNET

    def test_dependency_entry_quoted(self):
        entry = DependencyEntry(package_id="Newtonsoft.Json", version="10.0.3")
        assert entry.quoted() == '"Newtonsoft.Json": "10.0.3"'


class TestSettings:
    """Tests for tool configuration."""

    def test_restore_tool_path(self, temp_dir):
        settings = Settings(toolchain_path=temp_dir)
        assert settings.restore_tool_path == temp_dir / "PlaybackEngines" / "MetroSupport" / "Tools" / "nuget.exe"
        assert Settings().restore_tool_path is None

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(restore_timeout_seconds=0)

    def test_from_env(self, monkeypatch, temp_dir):
        monkeypatch.setenv("SDKPATCHER_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("SDKPATCHER_TOOLCHAIN_PATH", str(temp_dir))
        monkeypatch.setenv("SDKPATCHER_RESTORE_TIMEOUT", "120")

        settings = Settings.from_env()

        assert settings.log_level == "DEBUG"
        assert settings.toolchain_path == temp_dir
        assert settings.restore_timeout_seconds == 120


class TestStepResult:
    """Tests for the step result wrapper."""

    def test_ok(self):
        assert StepResult.applied("x").ok
        assert StepResult.unchanged("x").ok
        assert not StepResult.skipped("x").ok
        assert not StepResult.warned("x", "why").ok
        assert not StepResult.failed("x", "why").ok

    def test_metadata(self):
        result = StepResult.warned("merge", "partial", failed=["a"])
        assert result.status == StepStatus.WARNED
        assert result.metadata == {"failed": ["a"]}


class TestExceptions:
    """Tests for error messages."""

    def test_pattern_not_matched_message(self):
        """Test the message names the file and the troubleshooting page."""
        error = PatternNotMatchedError(
            message="anchor not found",
            file_path="App.cs",
            remediation_url="https://example.com/help",
        )
        assert str(error) == "Unable to automatically modify file 'App.cs': anchor not found. See https://example.com/help"

    def test_pattern_not_matched_without_file(self):
        assert str(PatternNotMatchedError(message="no block")) == "Pattern not matched: no block."

    def test_not_found_includes_path(self):
        assert str(NotFoundError(message="missing", path="/x")) == "missing (path: /x)"

    def test_ambiguous_lists_candidates(self):
        error = AmbiguousTargetError(message="two", candidates=["a", "b"])
        assert str(error) == "two (candidates: a, b)"

    def test_subprocess_failure(self):
        assert str(SubprocessFailureError(message="bad", command="nuget", returncode=1)) == "[nuget] exit code 1: bad"
        assert "timed out" in str(SubprocessFailureError(message="slow", command="nuget", timed_out=True))
