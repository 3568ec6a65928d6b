"""
Capability editor for generated Xcode projects.

Push notifications need two things in the generated project: an ``aps-environment``
entitlement (wired into the target through ``CODE_SIGN_ENTITLEMENTS``) and the
``remote-notification`` background mode in ``Info.plist``. Every addition checks
for an existing value first.
"""

from __future__ import annotations

from pathlib import Path

from ..core.logging import get_logger
from .interface import CapabilityDocument, CapabilityEditor, PlistEditor, ProjectEditor
from .pbxproj import PbxprojEditor
from .plist import PlistlibEditor

logger = get_logger(__name__)

XCODE_PROJECT = Path("Unity-iPhone.xcodeproj") / "project.pbxproj"
INFO_PLIST = Path("Info.plist")
TARGET_DIRECTORY = "Unity-iPhone"

APS_ENVIRONMENT = "aps-environment"
BACKGROUND_MODES = "UIBackgroundModes"
REMOTE_NOTIFICATION_MODE = "remote-notification"


class XcodeCapabilityDocument(CapabilityDocument):
    """Entitlements, Info.plist and project edits for one app target."""

    def __init__(
        self,
        output_path: Path,
        entitlements_name: str,
        project_editor: ProjectEditor,
        plist_editor: PlistEditor,
    ) -> None:
        self.output_path = output_path
        self.entitlements_relative = f"{TARGET_DIRECTORY}/{entitlements_name}"
        self._project = project_editor.open(output_path / XCODE_PROJECT)
        self._plist_editor = plist_editor
        self._entitlements = None
        self._info = None

    def _entitlements_document(self):
        if self._entitlements is None:
            self._entitlements = self._plist_editor.open(
                self.output_path / self.entitlements_relative, create=True
            )
        return self._entitlements

    def _info_document(self):
        if self._info is None:
            self._info = self._plist_editor.open(self.output_path / INFO_PLIST)
        return self._info

    def add_push_notifications(self, development: bool = True) -> None:
        entitlements = self._entitlements_document()
        if APS_ENVIRONMENT not in entitlements.root:
            entitlements.set_string(
                entitlements.root, APS_ENVIRONMENT, "development" if development else "production"
            )
        # Keep an entitlements file the developer already configured
        if not self._project.has_build_property("CODE_SIGN_ENTITLEMENTS"):
            self._project.set_build_property("CODE_SIGN_ENTITLEMENTS", self.entitlements_relative)

    def add_remote_notifications_background_mode(self) -> None:
        info = self._info_document()
        modes = info.get_or_create_array(info.root, BACKGROUND_MODES)
        if REMOTE_NOTIFICATION_MODE not in modes:
            info.add_string(modes, REMOTE_NOTIFICATION_MODE)

    def save(self) -> bool:
        written = False
        for document in (self._entitlements, self._info, self._project):
            if document is not None and document.save():
                written = True
        if written:
            logger.info("Updated app capabilities", entitlements=self.entitlements_relative)
        return written


class XcodeCapabilityEditor(CapabilityEditor):
    """Default :class:`CapabilityEditor` built on the pbxproj and plist editors."""

    def __init__(
        self,
        project_editor: ProjectEditor | None = None,
        plist_editor: PlistEditor | None = None,
    ) -> None:
        self.project_editor = project_editor or PbxprojEditor()
        self.plist_editor = plist_editor or PlistlibEditor()

    def open(self, output_path: Path, entitlements_name: str) -> XcodeCapabilityDocument:
        return XcodeCapabilityDocument(output_path, entitlements_name, self.project_editor, self.plist_editor)
