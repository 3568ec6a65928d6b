"""Core infrastructure components for sdkpatcher."""

from .config import Settings, get_settings
from .exceptions import (
    AmbiguousTargetError,
    CollaboratorUnavailableError,
    NotFoundError,
    PatternNotMatchedError,
    SdkPatcherError,
    SubprocessFailureError,
)
from .logging import bind_context, clear_context, get_logger, setup_logging
from .types import StepResult, StepStatus

__all__ = [
    "Settings",
    "get_settings",
    "AmbiguousTargetError",
    "CollaboratorUnavailableError",
    "NotFoundError",
    "PatternNotMatchedError",
    "SdkPatcherError",
    "SubprocessFailureError",
    "bind_context",
    "clear_context",
    "get_logger",
    "setup_logging",
    "StepResult",
    "StepStatus",
]
