"""Low-level, idempotent editors for generated project files."""

from .capabilities import APP_MANIFEST_FILE_NAME, ManifestCapabilityEditor
from .dependencies import DependencyMerger, upsert_dependency
from .process import ProcessRunner
from .text_injector import TextInjector, normalize_anchor

__all__ = [
    "APP_MANIFEST_FILE_NAME",
    "ManifestCapabilityEditor",
    "DependencyMerger",
    "upsert_dependency",
    "ProcessRunner",
    "TextInjector",
    "normalize_anchor",
]
