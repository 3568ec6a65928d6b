"""
Base platform strategy abstraction.

A strategy is the ordered list of patch steps for one build target. Steps are
independent: each one runs through :meth:`PlatformStrategy.step`, which turns any
failure into a logged :class:`StepResult` so the next step always gets its turn.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ..collaborators import Collaborators
from ..core.config import Settings
from ..core.exceptions import (
    AmbiguousTargetError,
    CollaboratorUnavailableError,
    NotFoundError,
    SdkPatcherError,
)
from ..core.logging import get_logger
from ..core.types import StepResult
from ..editors.process import ProcessRunner
from ..models.build import BuildOutput, BuildTarget, FeatureFlags

logger = get_logger(__name__)


@dataclass(frozen=True)
class PatchContext:
    """Everything a strategy needs for one post-build pass."""

    output: BuildOutput
    flags: FeatureFlags
    settings: Settings
    collaborators: Collaborators
    runner: ProcessRunner


class PlatformStrategy(ABC):
    """Base class for per-platform patch sequences."""

    TARGET: BuildTarget = BuildTarget.OTHER

    @abstractmethod
    def apply(self, ctx: PatchContext) -> list[StepResult]:
        """Run every patch step for this platform.

        Args:
            ctx: Build output, feature flags and collaborators for this pass

        Returns:
            The outcome of each step, in order.
        """
        ...

    def step(self, name: str, fn: Callable[..., StepResult | None], *args: Any, **kwargs: Any) -> StepResult:
        """Run one patch step, containing any failure.

        Args:
            name: Step name used in logs and results.
            fn: Callable performing the step.
            *args: Positional arguments for ``fn``.
            **kwargs: Keyword arguments for ``fn``.

        Returns:
            StepResult: The step's own result, or one describing how it failed.
        """
        try:
            result = fn(*args, **kwargs)
        except CollaboratorUnavailableError as e:
            logger.debug("Collaborator unavailable, skipping step", step=name, collaborator=e.collaborator)
            return StepResult.skipped(name, str(e), collaborator=e.collaborator)
        except (NotFoundError, AmbiguousTargetError) as e:
            logger.warning("Patch step skipped", step=name, reason=str(e))
            return StepResult.warned(name, str(e))
        except SdkPatcherError as e:
            logger.error("Patch step failed", step=name, error=str(e))
            return StepResult.failed(name, str(e))
        except Exception as e:
            logger.exception("Unexpected error in patch step", step=name)
            return StepResult.failed(name, f"{type(e).__name__}: {e}")

        if result is None:
            result = StepResult.applied(name)
        result.step = name
        return result
