"""
iOS post-build strategy.

Works through the structured project and property-list editors; when either is
missing from the installation the whole strategy is silently skipped.
"""

from __future__ import annotations

from ..collaborators.entitlements import INFO_PLIST, TARGET_DIRECTORY, XCODE_PROJECT
from ..core.exceptions import CollaboratorUnavailableError
from ..core.logging import get_logger
from ..core.types import StepResult, StepStatus
from ..models.build import BuildTarget
from .base import PatchContext, PlatformStrategy
from .registry import StrategyRegistry

logger = get_logger(__name__)

URL_TYPES = "CFBundleURLTypes"
URL_SCHEMES = "CFBundleURLSchemes"


@StrategyRegistry.register
class IosStrategy(PlatformStrategy):
    """Patch sequence for generated Xcode projects."""

    TARGET = BuildTarget.IOS

    def apply(self, ctx: PatchContext) -> list[StepResult]:
        availability = self.step("ios_editors", self.require_editors, ctx)
        if availability.status is StepStatus.SKIPPED:
            return [availability]

        results = [self.step("xcode_build_settings", self.update_project, ctx)]

        if ctx.flags.use_distribute:
            results.append(self.step("url_scheme", self.add_url_scheme, ctx))

        if ctx.flags.use_push:
            results.append(self.step("push_capabilities", self.add_push_capabilities, ctx))

        return results

    def require_editors(self, ctx: PatchContext) -> StepResult:
        collaborators = ctx.collaborators
        if collaborators.project_editor is None:
            raise CollaboratorUnavailableError(message="Xcode project editor unavailable", collaborator="project_editor")
        if collaborators.plist_editor is None:
            raise CollaboratorUnavailableError(message="Property list editor unavailable", collaborator="plist_editor")
        return StepResult.unchanged("ios_editors")

    def update_project(self, ctx: PatchContext) -> StepResult:
        """Add the linker and module settings the SDK's SQLite storage needs."""
        project = ctx.collaborators.project_editor.open(ctx.output.output_path / XCODE_PROJECT)
        project.add_build_property("OTHER_LDFLAGS", "-lsqlite3")
        project.set_build_property("CLANG_ENABLE_MODULES", "YES")
        if project.save():
            return StepResult.applied("xcode_build_settings")
        return StepResult.unchanged("xcode_build_settings")

    def add_url_scheme(self, ctx: PatchContext) -> StepResult:
        """Register the ``appcenter-<secret>`` URL scheme in Info.plist."""
        scheme = ctx.flags.url_scheme
        info = ctx.collaborators.plist_editor.open(ctx.output.output_path / INFO_PLIST)
        url_types = info.get_or_create_array(info.root, URL_TYPES)

        for url_type in url_types:
            if isinstance(url_type, dict) and scheme in url_type.get(URL_SCHEMES, []):
                logger.info("URL scheme already registered", scheme=scheme)
                return StepResult.unchanged("url_scheme")

        url_type = info.add_dict(url_types)
        info.set_string(url_type, "CFBundleTypeRole", "None")
        info.set_string(url_type, "CFBundleURLName", ctx.flags.application_identifier)
        schemes = info.get_or_create_array(url_type, URL_SCHEMES)
        info.add_string(schemes, scheme)
        info.save()
        logger.info("Registered URL scheme", scheme=scheme)
        return StepResult.applied("url_scheme")

    def add_push_capabilities(self, ctx: PatchContext) -> StepResult:
        """Add the push entitlement and remote-notification background mode."""
        editor = ctx.collaborators.capability_editor
        if editor is None:
            raise CollaboratorUnavailableError(
                message="Capability editor unavailable", collaborator="capability_editor"
            )

        entitlements_name = f"{ctx.flags.product_name or TARGET_DIRECTORY}.entitlements"
        capabilities = editor.open(ctx.output.output_path, entitlements_name)
        capabilities.add_push_notifications()
        capabilities.add_remote_notifications_background_mode()
        if capabilities.save():
            return StepResult.applied("push_capabilities")
        return StepResult.unchanged("push_capabilities")
