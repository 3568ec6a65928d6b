"""
Build-related data models.

These models describe what the host build system hands to the pipeline: which
platform was built, where the generated project lives, and the read-only SDK
settings snapshot that decides which patches apply.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, field_validator


class BuildTarget(str, Enum):
    """Output platforms the pipeline knows about."""

    UWP = "uwp"
    IOS = "ios"
    ANDROID = "android"
    OTHER = "other"

    @classmethod
    def from_host(cls, name: str | BuildTarget) -> BuildTarget:
        """Map a host platform identifier to a build target.

        Args:
            name: Host identifier such as ``WSAPlayer``, ``iOS`` or ``Android``.

        Returns:
            BuildTarget: The matching member, or ``OTHER`` when unrecognised or
            not a string.
        """
        if isinstance(name, BuildTarget):
            return name
        if not isinstance(name, str):
            return cls.OTHER
        return _HOST_TARGET_ALIASES.get(name.strip().lower(), cls.OTHER)


_HOST_TARGET_ALIASES: dict[str, BuildTarget] = {
    "uwp": BuildTarget.UWP,
    "wsaplayer": BuildTarget.UWP,
    "wsa": BuildTarget.UWP,
    "metro": BuildTarget.UWP,
    "ios": BuildTarget.IOS,
    "iphone": BuildTarget.IOS,
    "android": BuildTarget.ANDROID,
}


class ScriptingBackend(str, Enum):
    """Scripting implementation the project was built with."""

    IL2CPP = "il2cpp"
    DOTNET = "dotnet"
    MONO = "mono"


class UIFramework(str, Enum):
    """UWP application shell type."""

    XAML = "xaml"
    D3D = "d3d"


class BuildOutput(BaseModel):
    """One completed build, as reported by the host."""

    target: BuildTarget = Field(description="Platform the project was built for")
    output_path: Path = Field(description="Absolute path of the generated project")

    model_config = {"frozen": True}

    @field_validator("output_path")
    @classmethod
    def resolve_output_path(cls, value: Path) -> Path:
        return value.expanduser().resolve()


class FeatureFlags(BaseModel):
    """Read-only snapshot of the SDK settings relevant to patching."""

    use_push: bool = Field(default=False, description="Push notifications module enabled")
    use_distribute: bool = Field(default=False, description="In-app updates module enabled")
    ios_app_secret: str = Field(default="", description="iOS application secret")
    product_name: str = Field(default="", description="Player product name")
    scripting_backend: ScriptingBackend = Field(default=ScriptingBackend.IL2CPP)
    ui_framework: UIFramework = Field(default=UIFramework.XAML)
    tile_short_name: str | None = Field(
        default=None, description="UWP tile short name; defaults to the product name"
    )
    application_identifier: str = Field(default="", description="Bundle identifier")
    export_android_project: bool = Field(
        default=False, description="Whether the Android build was exported as a Gradle project"
    )

    model_config = {"frozen": True, "extra": "ignore"}

    @property
    def app_directory_name(self) -> str:
        """Name of the UWP subdirectory that holds the generated App sources."""
        return self.tile_short_name or self.product_name

    @property
    def url_scheme(self) -> str:
        """URL scheme the distribute module listens on."""
        return f"appcenter-{self.ios_app_secret}"

    @classmethod
    def load(cls, path: Path) -> FeatureFlags:
        """Load flags from a JSON settings file.

        Args:
            path: Settings file written by the SDK settings storage.

        Returns:
            FeatureFlags: The parsed snapshot.
        """
        return cls.model_validate_json(path.read_text(encoding="utf-8"))

    @classmethod
    def from_env(cls) -> FeatureFlags:
        """Create flags from environment variables."""

        def flag(name: str) -> bool:
            return os.environ.get(name, "false").lower() == "true"

        return cls(
            use_push=flag("SDKPATCHER_USE_PUSH"),
            use_distribute=flag("SDKPATCHER_USE_DISTRIBUTE"),
            ios_app_secret=os.environ.get("SDKPATCHER_IOS_APP_SECRET", ""),
            product_name=os.environ.get("SDKPATCHER_PRODUCT_NAME", ""),
            scripting_backend=os.environ.get("SDKPATCHER_SCRIPTING_BACKEND", "il2cpp"),  # type: ignore
            ui_framework=os.environ.get("SDKPATCHER_UI_FRAMEWORK", "xaml"),  # type: ignore
            tile_short_name=os.environ.get("SDKPATCHER_TILE_SHORT_NAME") or None,
            application_identifier=os.environ.get("SDKPATCHER_APPLICATION_IDENTIFIER", ""),
            export_android_project=flag("SDKPATCHER_EXPORT_ANDROID_PROJECT"),
        )
