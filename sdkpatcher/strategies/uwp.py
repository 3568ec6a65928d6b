"""
UWP (Windows Store) post-build strategy.

1. Declare the ``internetClient`` capability in ``Package.appxmanifest``.
2. With push enabled, inject the push hook into the generated App sources.
3. .NET backend: pin native NuGet dependencies in ``project.json`` and restore them.
4. IL2CPP backend: replace the generated ``Debugger.cpp``, whose
   ``System.Diagnostics.Debug`` shim is broken in the toolchain output.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from ..core.exceptions import NotFoundError
from ..core.logging import get_logger
from ..core.types import StepResult
from ..editors.capabilities import ManifestCapabilityEditor
from ..editors.dependencies import DependencyMerger
from ..editors.text_injector import TextInjector
from ..models.build import BuildTarget, ScriptingBackend
from ..models.patches import (
    IL2CPP_DEBUGGER_RESOURCE,
    IL2CPP_DEBUGGER_TARGET,
    INTERNET_CLIENT,
    PUSH_INJECTION_SPECS,
    UWP_DOTNET_DEPENDENCIES,
)
from .base import PatchContext, PlatformStrategy
from .registry import StrategyRegistry

logger = get_logger(__name__)

PROJECT_JSON = "project.json"


@StrategyRegistry.register
class UwpStrategy(PlatformStrategy):
    """Patch sequence for UWP Visual Studio solutions."""

    TARGET = BuildTarget.UWP

    def __init__(self) -> None:
        self.capabilities = ManifestCapabilityEditor()
        self.merger = DependencyMerger()

    def apply(self, ctx: PatchContext) -> list[StepResult]:
        results = [
            self.step(
                "internet_capability",
                self.capabilities.ensure_capability,
                ctx.output.output_path,
                INTERNET_CLIENT.name,
            )
        ]

        if ctx.flags.use_push:
            results.append(self.step("push_hook", self.inject_push_code, ctx))

        if ctx.flags.scripting_backend is not ScriptingBackend.IL2CPP:
            merge = self.step("nuget_dependencies", self.merge_dependencies, ctx)
            results.append(merge)
            # A partial merge is still worth restoring; a missing manifest is not
            if merge.ok or merge.metadata.get("failed"):
                results.append(self.step("nuget_restore", self.restore_packages, ctx))
            else:
                results.append(StepResult.skipped("nuget_restore", "dependency merge did not complete"))
        else:
            results.append(self.step("il2cpp_debugger_fix", self.fix_il2cpp_logging, ctx))

        return results

    def inject_push_code(self, ctx: PatchContext) -> StepResult:
        """Inject the push activation hook matching the backend and UI framework."""
        flags = ctx.flags
        spec = PUSH_INJECTION_SPECS.get((flags.scripting_backend, flags.ui_framework))
        if spec is None:
            logger.info(
                "No push hook for this configuration",
                scripting_backend=flags.scripting_backend.value,
                ui_framework=flags.ui_framework.value,
            )
            return StepResult.skipped("push_hook", "unsupported backend/UI combination")

        app_dir = ctx.output.output_path / flags.app_directory_name
        injector = TextInjector(remediation_url=ctx.settings.remediation_url)
        return injector.inject_spec(app_dir, spec, ctx.settings.resources_path)

    def project_json_path(self, ctx: PatchContext) -> Path:
        return ctx.output.output_path / ctx.flags.product_name / PROJECT_JSON

    def merge_dependencies(self, ctx: PatchContext) -> StepResult:
        return self.merger.merge(self.project_json_path(ctx), UWP_DOTNET_DEPENDENCIES)

    def restore_packages(self, ctx: PatchContext) -> StepResult:
        """Run ``nuget restore`` on the project manifest."""
        nuget = ctx.settings.restore_tool_path
        if nuget is None:
            raise NotFoundError(message="Host toolchain path is not configured; cannot locate nuget.exe")
        if not nuget.is_file():
            raise NotFoundError(message="NuGet executable not found", path=str(nuget))

        project_json = self.project_json_path(ctx)
        return ctx.runner.run(
            nuget,
            ["restore", str(project_json), "-NonInteractive"],
            timeout_seconds=ctx.settings.restore_timeout_seconds,
        )

    def fix_il2cpp_logging(self, ctx: PatchContext) -> StepResult:
        """Overwrite the generated Debugger.cpp with the corrected implementation."""
        source = ctx.settings.resources_path / IL2CPP_DEBUGGER_RESOURCE
        destination = ctx.output.output_path / IL2CPP_DEBUGGER_TARGET

        if not source.is_file():
            raise NotFoundError(message="Replacement Debugger.cpp not found", path=str(source))
        if not destination.parent.is_dir():
            raise NotFoundError(message="IL2CPP output tree not found", path=str(destination.parent))

        shutil.copyfile(source, destination)
        logger.info("Replaced generated Debugger.cpp", destination=str(destination))
        return StepResult.applied("il2cpp_debugger_fix", destination=str(destination))
