"""
Post-build orchestration for sdkpatcher.

The host build calls :meth:`BuildOrchestrator.run` once per completed build. The
orchestrator picks the strategy registered for the target, hands it a fresh
context and logs what happened. It never raises: patching is an augmentation of a
build that has already succeeded.
"""

from __future__ import annotations

from collections import Counter
from pathlib import Path
from typing import Any

from ..collaborators import Collaborators
from ..core.config import Settings, get_settings
from ..core.logging import bind_context, clear_context, get_logger
from ..core.types import StepResult
from ..editors.process import ProcessRunner
from ..models.build import BuildOutput, BuildTarget, FeatureFlags
from ..strategies import PatchContext, StrategyRegistry

logger = get_logger(__name__)


class BuildOrchestrator:
    """Entry point invoked once per completed build."""

    def __init__(
        self,
        settings: Settings | None = None,
        flags: FeatureFlags | None = None,
        collaborators: Collaborators | None = None,
        runner: ProcessRunner | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            settings: Tool configuration; defaults to the cached environment settings
            flags: Feature flag snapshot; read from settings storage when omitted
            collaborators: Optional structured editors; detected when omitted
            runner: Process runner used for package restores
        """
        self.settings = settings if settings is not None else get_settings()
        self._flags = flags
        self.collaborators = collaborators if collaborators is not None else Collaborators.detect()
        self.runner = runner or ProcessRunner(self.settings.restore_timeout_seconds)

    def load_flags(self) -> FeatureFlags:
        """Read the feature flag snapshot for this build."""
        if self._flags is not None:
            return self._flags
        if self.settings.settings_file is not None:
            return FeatureFlags.load(self.settings.settings_file)
        return FeatureFlags.from_env()

    def run(self, target: BuildTarget | str, output_path: Path | str) -> list[StepResult]:
        """Apply the post-build patches for one build.

        Args:
            target: Build target, or the host's platform identifier.
            output_path: Directory holding the generated project.

        Returns:
            The step results, or an empty list when nothing ran or the pass aborted.
        """
        results: list[StepResult] = []
        try:
            build_target = BuildTarget.from_host(target)
            strategy_class = StrategyRegistry.get(build_target)
            if strategy_class is None:
                logger.info("No post-build patches for target", target=str(target))
                return results

            bind_context(target=build_target.value, output_path=str(output_path))
            ctx = PatchContext(
                output=BuildOutput(target=build_target, output_path=Path(output_path)),
                flags=self.load_flags(),
                settings=self.settings,
                collaborators=self.collaborators,
                runner=self.runner,
            )
            logger.info("Starting post-build patching", strategy=strategy_class.__name__)
            results = strategy_class().apply(ctx)
            self._log_summary(results)
        except Exception:
            logger.exception("Post-build patching aborted")
        finally:
            clear_context()
        return results

    def run_report(self, report: Any) -> list[StepResult]:
        """Apply the patches for a host build report.

        Args:
            report: Object exposing ``summary.platform`` and ``summary.output_path``.
        """
        try:
            platform = report.summary.platform
            output_path = report.summary.output_path
        except AttributeError:
            logger.exception("Malformed build report, skipping post-build patching")
            return []
        return self.run(platform, output_path)

    def _log_summary(self, results: list[StepResult]) -> None:
        counts = Counter(result.status.value for result in results)
        logger.info(
            "Post-build patching finished",
            steps=len(results),
            **dict(sorted(counts.items())),
        )
