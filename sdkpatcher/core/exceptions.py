"""
Custom exception hierarchy for sdkpatcher.

All exceptions inherit from SdkPatcherError so that a patch step can catch the
whole family in one place. None of them ever escapes the orchestrator: each is
mapped to a logged step outcome instead of failing the host build.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class SdkPatcherError(Exception):
    """Base exception for all sdkpatcher errors."""

    message: str
    context: dict[str, Any] = field(default_factory=dict)
    cause: Exception | None = None

    def __str__(self) -> str:
        ctx = f" | context: {self.context}" if self.context else ""
        cause = f" | caused by: {self.cause}" if self.cause else ""
        return f"{self.message}{ctx}{cause}"


@dataclass
class NotFoundError(SdkPatcherError):
    """Raised when an expected file or patch target is absent."""

    path: str = ""

    def __str__(self) -> str:
        base = super().__str__()
        return f"{base} (path: {self.path})" if self.path else base


@dataclass
class AmbiguousTargetError(SdkPatcherError):
    """Raised when more than one candidate exists where exactly one was required."""

    candidates: list[str] = field(default_factory=list)

    def __str__(self) -> str:
        base = super().__str__()
        if self.candidates:
            return f"{base} (candidates: {', '.join(self.candidates)})"
        return base


@dataclass
class PatternNotMatchedError(SdkPatcherError):
    """Raised when anchor text cannot be located in a source file."""

    file_path: str = ""
    pattern: str = ""
    remediation_url: str = ""

    def __str__(self) -> str:
        hint = f" See {self.remediation_url}" if self.remediation_url else ""
        if not self.file_path:
            return f"Pattern not matched: {self.message}.{hint}"
        return f"Unable to automatically modify file '{self.file_path}': {self.message}.{hint}"


@dataclass
class SubprocessFailureError(SdkPatcherError):
    """Raised when an external tool fails to launch, exits non-zero or times out."""

    command: str = ""
    returncode: int | None = None
    timed_out: bool = False

    def __str__(self) -> str:
        if self.timed_out:
            return f"[{self.command}] timed out: {self.message}"
        return f"[{self.command}] exit code {self.returncode}: {self.message}"


@dataclass
class CollaboratorUnavailableError(SdkPatcherError):
    """Raised when an optional structured-editor collaborator is not installed.

    This is an expected configuration variance, so it is reported at debug
    level only.
    """

    collaborator: str = ""
