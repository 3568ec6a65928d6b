"""
Android post-build strategy.

Push setup on Android is done by the SDK's own Android tooling; this strategy only
checks that there is an exported Gradle project to hand to it.
"""

from __future__ import annotations

from ..core.exceptions import CollaboratorUnavailableError
from ..core.logging import get_logger
from ..core.types import StepResult
from ..models.build import BuildTarget
from .base import PatchContext, PlatformStrategy
from .registry import StrategyRegistry

logger = get_logger(__name__)


@StrategyRegistry.register
class AndroidStrategy(PlatformStrategy):
    """Patch sequence for exported Android projects."""

    TARGET = BuildTarget.ANDROID

    def apply(self, ctx: PatchContext) -> list[StepResult]:
        if not ctx.flags.use_push:
            return []
        return [self.step("android_push", self.run_post_build_hook, ctx)]

    def run_post_build_hook(self, ctx: PatchContext) -> StepResult:
        if not ctx.flags.export_android_project:
            logger.warning("The Android project must be exported for push to work; skipping")
            return StepResult.warned("android_push", "project was not exported")

        hook = ctx.collaborators.android_hook
        if hook is None:
            raise CollaboratorUnavailableError(
                message="Android post-build hook unavailable", collaborator="android_hook"
            )

        hook.on_post_build(ctx.output.output_path)
        return StepResult.applied("android_push")
