"""
Optional structured-editor collaborators.

The bundle is resolved once, at startup; strategies only ever check for ``None``.
"""

from __future__ import annotations

from dataclasses import dataclass
from importlib.metadata import entry_points

from ..core.logging import get_logger
from .entitlements import XcodeCapabilityEditor
from .interface import (
    AndroidPostBuildHook,
    CapabilityDocument,
    CapabilityEditor,
    PlistDocument,
    PlistEditor,
    ProjectDocument,
    ProjectEditor,
)
from .pbxproj import PbxprojEditor
from .plist import PlistlibEditor

logger = get_logger(__name__)

ANDROID_HOOK_ENTRY_POINT_GROUP = "sdkpatcher.android_hooks"


def discover_android_hook() -> AndroidPostBuildHook | None:
    """Load the first Android post-build hook registered as an entry point.

    Returns:
        The hook instance, or None if no Android tooling is installed.
    """
    for entry_point in entry_points(group=ANDROID_HOOK_ENTRY_POINT_GROUP):
        try:
            hook_class = entry_point.load()
        except ImportError as e:
            logger.warning("Could not load Android post-build hook", entry_point=entry_point.name, error=str(e))
            continue
        return hook_class()
    return None


@dataclass(frozen=True)
class Collaborators:
    """External editors available to the platform strategies; None means unavailable."""

    project_editor: ProjectEditor | None = None
    plist_editor: PlistEditor | None = None
    capability_editor: CapabilityEditor | None = None
    android_hook: AndroidPostBuildHook | None = None

    @classmethod
    def detect(cls) -> Collaborators:
        """Build the default collaborator bundle for this installation."""
        project_editor = PbxprojEditor()
        plist_editor = PlistlibEditor()
        return cls(
            project_editor=project_editor,
            plist_editor=plist_editor,
            capability_editor=XcodeCapabilityEditor(project_editor, plist_editor),
            android_hook=discover_android_hook(),
        )


__all__ = [
    "ANDROID_HOOK_ENTRY_POINT_GROUP",
    "AndroidPostBuildHook",
    "CapabilityDocument",
    "CapabilityEditor",
    "Collaborators",
    "PbxprojEditor",
    "PlistDocument",
    "PlistEditor",
    "PlistlibEditor",
    "ProjectDocument",
    "ProjectEditor",
    "XcodeCapabilityEditor",
    "discover_android_hook",
]
