"""
Configuration management for sdkpatcher.

Provides centralized, type-safe configuration with environment variable overrides
and sensible defaults. Feature flags (push, distribute, app secret...) are not part
of this model; they are read from the SDK settings storage, see
``sdkpatcher.models.build.FeatureFlags``.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load .env file if it exists (looks in cwd and parent directories)
load_dotenv()

DEFAULT_RESOURCES_PATH = Path(__file__).resolve().parent.parent / "resources"
DEFAULT_REMEDIATION_URL = "https://docs.microsoft.com/en-us/appcenter/sdk/troubleshooting/unity"


class Settings(BaseModel):
    """Root configuration for sdkpatcher."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging level"
    )
    toolchain_path: Path | None = Field(
        default=None,
        description="Host editor installation contents path (holds PlaybackEngines/)",
    )
    resources_path: Path = Field(
        default=DEFAULT_RESOURCES_PATH,
        description="Directory holding injection templates and replacement sources",
    )
    restore_timeout_seconds: int = Field(
        default=600, ge=1, description="Wall-clock timeout for the package restore"
    )
    settings_file: Path | None = Field(
        default=None, description="JSON file holding the SDK feature flags"
    )
    remediation_url: str = Field(
        default=DEFAULT_REMEDIATION_URL,
        description="Troubleshooting page reported when a source file cannot be patched",
    )

    model_config = {"extra": "ignore"}

    @property
    def restore_tool_path(self) -> Path | None:
        """Location of the NuGet executable shipped with the UWP build support."""
        if self.toolchain_path is None:
            return None
        return self.toolchain_path / "PlaybackEngines" / "MetroSupport" / "Tools" / "nuget.exe"

    @classmethod
    def from_env(cls) -> Settings:
        """Create configuration from environment variables."""
        toolchain = os.environ.get("SDKPATCHER_TOOLCHAIN_PATH")
        settings_file = os.environ.get("SDKPATCHER_SETTINGS_FILE")
        resources = os.environ.get("SDKPATCHER_RESOURCES_PATH")
        return cls(
            log_level=os.environ.get("SDKPATCHER_LOG_LEVEL", "INFO"),  # type: ignore
            toolchain_path=Path(toolchain) if toolchain else None,
            resources_path=Path(resources) if resources else DEFAULT_RESOURCES_PATH,
            restore_timeout_seconds=int(os.environ.get("SDKPATCHER_RESTORE_TIMEOUT", "600")),
            settings_file=Path(settings_file) if settings_file else None,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached configuration instance."""
    return Settings.from_env()
