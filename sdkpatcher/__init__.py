"""
sdkpatcher: Post-build project patching for mobile SDK integration.

After a game or app is exported to a platform-native project (UWP solution,
Xcode project, Gradle project), this package mutates the generated artifacts
in place so that the SDK's runtime requirements are met. Every patch is
idempotent and best-effort: re-running a build never double-applies a change,
and a step that cannot be applied is logged and skipped.
"""

__version__ = "1.0.0"
__author__ = "sdkpatcher Team"
