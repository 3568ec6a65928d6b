"""
Dependency manifest merging.

``project.json`` is consumed by NuGet and must keep its exact formatting, so
dependencies are merged with minimal text patches instead of a JSON round trip.
:func:`upsert_dependency` is a pure text transform; :class:`DependencyMerger`
adds the file I/O around it.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from pathlib import Path

from ..core.exceptions import NotFoundError, PatternNotMatchedError, SdkPatcherError
from ..core.logging import get_logger
from ..core.types import StepResult
from ..models.patches import DependencyEntry
from .files import read_text, write_text

logger = get_logger(__name__)

_DEPENDENCIES_BLOCK = re.compile(r'"dependencies"\s*:\s*\{')


def upsert_dependency(manifest_text: str, package_id: str, version: str) -> str:
    """Insert or update one dependency in a manifest's dependency block.

    An existing ``"id": "version"`` pair is replaced in place. Otherwise the pair is
    inserted on a new line right after the opening brace of ``"dependencies"``.
    Everything else in the text is left byte-identical.

    Args:
        manifest_text: Current manifest text.
        package_id: Package identifier.
        version: Version string to pin.

    Returns:
        str: The updated manifest text.

    Raises:
        PatternNotMatchedError: If the package is present with a value that is not a
            plain string, or the manifest has no dependency block.
    """
    entry = DependencyEntry(package_id=package_id, version=version).quoted()
    key = re.escape(f'"{package_id}"')

    existing = re.search(key + r'\s*:\s*"[^"]*"', manifest_text)
    if existing:
        return manifest_text[: existing.start()] + entry + manifest_text[existing.end() :]

    # Inserting next to a non-string value would create a duplicate key
    if re.search(key + r"\s*:", manifest_text):
        raise PatternNotMatchedError(
            message=f"existing entry for '{package_id}' is not a plain version string",
            pattern=key,
        )

    block = _DEPENDENCIES_BLOCK.search(manifest_text)
    if block is None:
        raise PatternNotMatchedError(
            message="no dependencies block found",
            pattern=_DEPENDENCIES_BLOCK.pattern,
        )

    idx = block.end()
    empty_block = manifest_text[idx:].lstrip().startswith("}")
    insertion = "\n" + entry + ("" if empty_block else ",")
    return manifest_text[:idx] + insertion + manifest_text[idx:]


class DependencyMerger:
    """Merges fixed dependency entries into a manifest file on disk."""

    STEP = "merge_dependencies"

    def merge(self, manifest_path: Path, entries: Iterable[DependencyEntry]) -> StepResult:
        """Upsert each entry into the manifest, writing once at the end.

        A failure for one entry is logged and the remaining entries are still merged.

        Args:
            manifest_path: Path of the dependency manifest.
            entries: Dependencies to ensure.

        Returns:
            StepResult: ``applied`` if the file changed, ``unchanged`` if it was
            already up to date, ``warned`` if some entries could not be merged.

        Raises:
            NotFoundError: If the manifest does not exist.
        """
        if not manifest_path.is_file():
            raise NotFoundError(message="Dependency manifest not found", path=str(manifest_path))

        original = read_text(manifest_path)
        text = original
        failed: list[str] = []

        for entry in entries:
            try:
                text = upsert_dependency(text, entry.package_id, entry.version)
            except SdkPatcherError as e:
                logger.warning(
                    "Could not merge dependency",
                    package=entry.package_id,
                    manifest=str(manifest_path),
                    error=str(e),
                )
                failed.append(entry.package_id)

        if text != original:
            write_text(manifest_path, text)
            logger.info("Updated dependency manifest", manifest=str(manifest_path))

        if failed:
            return StepResult.warned(
                self.STEP,
                f"could not merge {', '.join(failed)}",
                manifest=str(manifest_path),
                failed=failed,
            )
        if text == original:
            return StepResult.unchanged(self.STEP, manifest=str(manifest_path))
        return StepResult.applied(self.STEP, manifest=str(manifest_path))
