"""Per-platform patch strategies, registered by build target."""

from .base import PatchContext, PlatformStrategy
from .registry import StrategyRegistry

# Importing the platform modules registers them
from .android import AndroidStrategy
from .ios import IosStrategy
from .uwp import UwpStrategy

__all__ = [
    "PatchContext",
    "PlatformStrategy",
    "StrategyRegistry",
    "AndroidStrategy",
    "IosStrategy",
    "UwpStrategy",
]
