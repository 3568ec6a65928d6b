"""
Text injection into generated source files.

Generated sources vary between toolchain versions and formatters, so anchors are
matched over whitespace-normalized patterns and every injection is guarded by a
sentinel comment. A file carrying the sentinel is never written again.
"""

from __future__ import annotations

import re
from pathlib import Path

from ..core.config import DEFAULT_REMEDIATION_URL
from ..core.exceptions import NotFoundError, PatternNotMatchedError
from ..core.logging import get_logger
from ..core.types import StepResult
from ..models.patches import SENTINEL_COMMENT, InjectionSpec
from .files import read_text, write_text

logger = get_logger(__name__)

_LITERAL_WHITESPACE = re.compile(r" +")


def normalize_anchor(pattern: str) -> str:
    """Make literal spaces in a pattern match any run of whitespace, including none.

    Args:
        pattern: Regular expression written with single spaces between tokens.

    Returns:
        str: The pattern with each space run replaced by ``\\s*``.
    """
    return _LITERAL_WHITESPACE.sub(lambda _: r"\s*", pattern)


class TextInjector:
    """Idempotent, regex-anchored insertion of template blocks."""

    STEP = "inject_code"

    def __init__(
        self,
        sentinel: str = SENTINEL_COMMENT,
        remediation_url: str = DEFAULT_REMEDIATION_URL,
    ) -> None:
        """Initialize the injector.

        Args:
            sentinel: Comment text marking an already patched file
            remediation_url: Troubleshooting page reported when an anchor is missing
        """
        self.sentinel = sentinel
        self.remediation_url = remediation_url

    def inject(
        self,
        file_path: Path | None,
        anchor_pattern: str,
        template_text: str,
        include_anchor_text: bool = True,
    ) -> StepResult:
        """Insert ``template_text`` at the first match of ``anchor_pattern``.

        The replacement is the sentinel comment line followed by the template,
        prefixed with the matched text when ``include_anchor_text`` is set. Only
        the first match is replaced and the whole file is written back.

        Args:
            file_path: Source file to patch; None when the caller could not resolve it.
            anchor_pattern: Regex for the insertion point, before whitespace normalization.
            template_text: Code block to insert.
            include_anchor_text: Keep the anchor in front of the inserted block.

        Returns:
            StepResult: ``applied`` after writing, ``unchanged`` if already patched.

        Raises:
            NotFoundError: If the file does not exist.
            PatternNotMatchedError: If the anchor is not found.
        """
        if file_path is None or not file_path.is_file():
            raise NotFoundError(
                message="Source file to patch not found",
                path=str(file_path) if file_path else "",
            )

        text = read_text(file_path)

        if self.sentinel in text:
            logger.info("Source file already patched", file=str(file_path))
            return StepResult.unchanged(self.STEP, "already patched", file=str(file_path))

        match = re.search(normalize_anchor(anchor_pattern), text)
        if match is None:
            raise PatternNotMatchedError(
                message="anchor text not found",
                file_path=str(file_path),
                pattern=anchor_pattern,
                remediation_url=self.remediation_url,
            )

        replacement = f"\n// {self.sentinel}\n{template_text}"
        if include_anchor_text:
            replacement = match.group(0) + replacement

        patched = text[: match.start()] + replacement + text[match.end() :]
        write_text(file_path, patched)

        logger.info("Injected code into source file", file=str(file_path), offset=match.start())
        return StepResult.applied(self.STEP, file=str(file_path))

    def inject_spec(self, app_dir: Path, spec: InjectionSpec, resources_dir: Path) -> StepResult:
        """Resolve an injection spec against a project and apply it.

        Args:
            app_dir: Directory holding the generated App sources.
            spec: Static description of the injection.
            resources_dir: Directory containing the template resources.

        Returns:
            StepResult: Outcome of :meth:`inject`.
        """
        candidate = app_dir / spec.target_file
        file_path = candidate if candidate.is_file() else None

        template_path = resources_dir / spec.template_resource
        if not template_path.is_file():
            raise NotFoundError(message="Injection template not found", path=str(template_path))
        template_text = read_text(template_path)

        if file_path is None:
            raise NotFoundError(message="Source file to patch not found", path=str(candidate))

        return self.inject(file_path, spec.anchor_pattern, template_text, spec.include_anchor_text)
