"""
Application manifest capability editor.

Declares capabilities such as ``internetClient`` in a UWP ``Package.appxmanifest``.
The document is edited with lxml so namespace declarations, prefixes and comments
survive the round trip; new elements always live in the root's default namespace.

Manifest layout::

    <Package xmlns="http://schemas.microsoft.com/appx/manifest/foundation/windows10">
      <Capabilities>
        <Capability Name="internetClient" />
      </Capabilities>
    </Package>
"""

from __future__ import annotations

from pathlib import Path

from lxml import etree as ET

from ..core.exceptions import AmbiguousTargetError, NotFoundError
from ..core.logging import get_logger
from ..core.types import StepResult
from ..models.patches import INTERNET_CLIENT, CapabilityDeclaration

logger = get_logger(__name__)

APP_MANIFEST_FILE_NAME = "Package.appxmanifest"


class ManifestCapabilityEditor:
    """Idempotent insertion of capability elements into an XML manifest."""

    STEP = "ensure_capability"

    def __init__(
        self,
        manifest_name: str = APP_MANIFEST_FILE_NAME,
        declaration: CapabilityDeclaration = INTERNET_CLIENT,
    ) -> None:
        """Initialize the editor.

        Args:
            manifest_name: File name of the manifest to search for
            declaration: Element and attribute names of the capability
        """
        self.manifest_name = manifest_name
        self.declaration = declaration

    def find_manifest(self, output_path: Path) -> Path:
        """Locate the single manifest under the output directory.

        Args:
            output_path: Root of the generated project.

        Returns:
            Path: The manifest file.

        Raises:
            NotFoundError: If no manifest exists.
            AmbiguousTargetError: If several manifests exist.
        """
        manifests = sorted(p for p in output_path.rglob(self.manifest_name) if p.is_file())
        if not manifests:
            raise NotFoundError(
                message=f"Failed to add capability, file `{self.manifest_name}` is not found",
                path=str(output_path),
            )
        if len(manifests) > 1:
            raise AmbiguousTargetError(
                message=f"Failed to add capability, multiple `{self.manifest_name}` files found",
                candidates=[str(p) for p in manifests],
            )
        return manifests[0]

    def _qualified(self, namespace: str | None, local_name: str) -> str:
        return str(ET.QName(namespace, local_name)) if namespace else local_name

    def _new_capability(self, parent: ET._Element, namespace: str | None, name: str) -> None:
        element = ET.SubElement(parent, self._qualified(namespace, self.declaration.element_name))
        element.set(self.declaration.name_attribute, name)

    def ensure_capability(self, output_path: Path, capability_name: str | None = None) -> StepResult:
        """Make sure the manifest declares ``capability_name`` exactly once.

        Args:
            output_path: Root of the generated project.
            capability_name: Capability to declare; defaults to the editor's declaration.

        Returns:
            StepResult: ``applied`` if the manifest was rewritten, ``unchanged`` otherwise.

        Raises:
            NotFoundError: If no manifest exists.
            AmbiguousTargetError: If several manifests or capability containers exist.
        """
        name = capability_name or self.declaration.name
        manifest_path = self.find_manifest(output_path)

        parser = ET.XMLParser(remove_blank_text=False, remove_comments=False)
        tree = ET.parse(str(manifest_path), parser)
        root = tree.getroot()
        namespace = root.nsmap.get(None)

        containers = [
            child
            for child in root
            if isinstance(child.tag, str) and ET.QName(child).localname == self.declaration.container_name
        ]

        if len(containers) > 1:
            raise AmbiguousTargetError(
                message=(
                    f"Failed to add capability, multiple `{self.declaration.container_name}` "
                    f"elements found inside `{manifest_path}`"
                ),
                candidates=[str(manifest_path)],
            )

        if not containers:
            container = ET.SubElement(root, self._qualified(namespace, self.declaration.container_name))
            self._new_capability(container, namespace, name)
        else:
            container = containers[0]
            for element in container:
                if (
                    isinstance(element.tag, str)
                    and ET.QName(element).localname == self.declaration.element_name
                    and element.get(self.declaration.name_attribute) == name
                ):
                    logger.info("Capability already declared", capability=name, manifest=str(manifest_path))
                    return StepResult.unchanged(self.STEP, "already declared", manifest=str(manifest_path))
            self._new_capability(container, namespace, name)

        tree.write(
            str(manifest_path),
            xml_declaration=True,
            encoding=tree.docinfo.encoding or "utf-8",
        )
        logger.info("Added capability to manifest", capability=name, manifest=str(manifest_path))
        return StepResult.applied(self.STEP, manifest=str(manifest_path), capability=name)
