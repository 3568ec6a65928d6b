"""Unit tests for the manifest capability editor."""

import pytest
from lxml import etree as ET

from sdkpatcher.core.exceptions import AmbiguousTargetError, NotFoundError
from sdkpatcher.core.types import StepStatus
from sdkpatcher.editors.capabilities import ManifestCapabilityEditor

NS = "http://schemas.microsoft.com/appx/manifest/foundation/windows10"


def _capabilities(manifest_path):
    root = ET.parse(str(manifest_path)).getroot()
    return [
        element.get("Name")
        for element in root.iter(f"{{{NS}}}Capability")
    ]


def _write_manifest(path, body):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        f'<?xml version="1.0" encoding="utf-8"?>\n<Package xmlns="{NS}">\n{body}\n</Package>\n',
        encoding="utf-8",
    )


class TestManifestCapabilityEditor:
    """Tests for idempotent capability declaration."""

    def test_creates_container_when_missing(self, uwp_project):
        """Test a Capabilities element is created with the capability inside.

        Verifies that the generated manifest, which has no Capabilities
        element, ends up declaring internetClient in the default namespace.
        """
        result = ManifestCapabilityEditor().ensure_capability(uwp_project)

        manifest = uwp_project / "Template" / "Package.appxmanifest"
        assert result.status == StepStatus.APPLIED
        assert _capabilities(manifest) == ["internetClient"]

    def test_namespaces_and_comments_survive(self, uwp_project):
        """Test that prefixes, unused declarations and comments are kept."""
        ManifestCapabilityEditor().ensure_capability(uwp_project)

        text = (uwp_project / "Template" / "Package.appxmanifest").read_text(encoding="utf-8")
        assert 'xmlns:mp="http://schemas.microsoft.com/appx/2014/phone/manifest"' in text
        assert "<uap:VisualElements" in text
        assert "<!-- generated by the build -->" in text
        assert "ns0:" not in text
        assert '<Capability Name="internetClient"/>' in text

    def test_appends_to_existing_container(self, temp_dir):
        """Test the capability is added next to existing declarations."""
        manifest = temp_dir / "App" / "Package.appxmanifest"
        _write_manifest(manifest, '  <Capabilities>\n    <Capability Name="privateNetworkClientServer" />\n  </Capabilities>')

        result = ManifestCapabilityEditor().ensure_capability(temp_dir)

        assert result.status == StepStatus.APPLIED
        assert _capabilities(manifest) == ["privateNetworkClientServer", "internetClient"]

    def test_idempotent(self, uwp_project):
        """Test a second pass neither duplicates the capability nor rewrites the file."""
        editor = ManifestCapabilityEditor()
        manifest = uwp_project / "Template" / "Package.appxmanifest"

        editor.ensure_capability(uwp_project)
        first = manifest.read_bytes()
        result = editor.ensure_capability(uwp_project)

        assert result.status == StepStatus.UNCHANGED
        assert manifest.read_bytes() == first
        assert _capabilities(manifest) == ["internetClient"]

    def test_custom_capability_name(self, uwp_project):
        """Test that another capability name can be requested."""
        ManifestCapabilityEditor().ensure_capability(uwp_project, "internetClientServer")

        manifest = uwp_project / "Template" / "Package.appxmanifest"
        assert _capabilities(manifest) == ["internetClientServer"]

    def test_multiple_containers_is_ambiguous(self, temp_dir):
        """Test that two Capabilities elements abort the edit without writing."""
        manifest = temp_dir / "App" / "Package.appxmanifest"
        _write_manifest(manifest, "  <Capabilities />\n  <Capabilities />")
        before = manifest.read_bytes()

        with pytest.raises(AmbiguousTargetError):
            ManifestCapabilityEditor().ensure_capability(temp_dir)

        assert manifest.read_bytes() == before

    def test_no_manifest(self, temp_dir):
        """Test that an output without a manifest raises NotFoundError."""
        with pytest.raises(NotFoundError):
            ManifestCapabilityEditor().ensure_capability(temp_dir)

    def test_multiple_manifests(self, temp_dir):
        """Test that two manifests in the tree are reported as ambiguous."""
        _write_manifest(temp_dir / "A" / "Package.appxmanifest", "")
        _write_manifest(temp_dir / "B" / "Package.appxmanifest", "")

        with pytest.raises(AmbiguousTargetError) as exc_info:
            ManifestCapabilityEditor().find_manifest(temp_dir)

        assert len(exc_info.value.candidates) == 2

    def test_manifest_without_namespace(self, temp_dir):
        """Test that new elements stay unqualified when the root has no namespace."""
        manifest = temp_dir / "Package.appxmanifest"
        manifest.write_text('<?xml version="1.0" encoding="utf-8"?>\n<Package>\n</Package>\n', encoding="utf-8")

        ManifestCapabilityEditor().ensure_capability(temp_dir)

        root = ET.parse(str(manifest)).getroot()
        assert [c.get("Name") for c in root.iter("Capability")] == ["internetClient"]
