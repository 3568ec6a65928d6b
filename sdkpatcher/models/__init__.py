"""
sdkpatcher data models.

Pydantic models describing build outputs, feature flags and the static patch
tables consumed by the platform strategies.
"""

from .build import BuildOutput, BuildTarget, FeatureFlags, ScriptingBackend, UIFramework
from .patches import (
    INTERNET_CLIENT,
    PUSH_INJECTION_SPECS,
    SENTINEL_COMMENT,
    UWP_DOTNET_DEPENDENCIES,
    CapabilityDeclaration,
    DependencyEntry,
    InjectionSpec,
)

__all__ = [
    # Build models
    "BuildOutput",
    "BuildTarget",
    "FeatureFlags",
    "ScriptingBackend",
    "UIFramework",
    # Patch descriptors
    "INTERNET_CLIENT",
    "PUSH_INJECTION_SPECS",
    "SENTINEL_COMMENT",
    "UWP_DOTNET_DEPENDENCIES",
    "CapabilityDeclaration",
    "DependencyEntry",
    "InjectionSpec",
]
