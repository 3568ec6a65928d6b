"""
Core type definitions for sdkpatcher.

Provides the result type every patch step reports, so outcomes flow through
strategies and the orchestrator in a uniform shape.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class StepStatus(str, Enum):
    """Outcome of a single patch step."""

    APPLIED = "applied"
    UNCHANGED = "unchanged"  # already patched by an earlier build
    SKIPPED = "skipped"
    WARNED = "warned"
    FAILED = "failed"


@dataclass
class StepResult:
    """Result wrapper for patch operations.

    Provides a consistent return type that includes the step name, its outcome,
    a human-readable message and any structured details worth logging.
    """

    step: str
    status: StepStatus
    message: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """Whether the step left the project in the desired state."""
        return self.status in (StepStatus.APPLIED, StepStatus.UNCHANGED)

    @classmethod
    def applied(cls, step: str, message: str = "", **metadata: Any) -> StepResult:
        """Create a result for a mutation that was written."""
        return cls(step=step, status=StepStatus.APPLIED, message=message, metadata=metadata)

    @classmethod
    def unchanged(cls, step: str, message: str = "", **metadata: Any) -> StepResult:
        """Create a result for a mutation that was already present."""
        return cls(step=step, status=StepStatus.UNCHANGED, message=message, metadata=metadata)

    @classmethod
    def skipped(cls, step: str, message: str = "", **metadata: Any) -> StepResult:
        """Create a result for a step that did not apply to this build."""
        return cls(step=step, status=StepStatus.SKIPPED, message=message, metadata=metadata)

    @classmethod
    def warned(cls, step: str, message: str, **metadata: Any) -> StepResult:
        """Create a result for a step abandoned with a warning."""
        return cls(step=step, status=StepStatus.WARNED, message=message, metadata=metadata)

    @classmethod
    def failed(cls, step: str, message: str, **metadata: Any) -> StepResult:
        """Create a result for a step that errored."""
        return cls(step=step, status=StepStatus.FAILED, message=message, metadata=metadata)
