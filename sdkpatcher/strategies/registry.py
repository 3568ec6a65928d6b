"""
Strategy registry for looking up the patch sequence of a build target.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..models.build import BuildTarget

if TYPE_CHECKING:
    from .base import PlatformStrategy

# Global registry of strategies
_STRATEGY_REGISTRY: dict[BuildTarget, type[PlatformStrategy]] = {}


class StrategyRegistry:
    """Registry mapping build targets to strategy classes."""

    @classmethod
    def register(cls, strategy_class: type[PlatformStrategy]) -> type[PlatformStrategy]:
        """Register a strategy class under its ``TARGET``.

        Can be used as a decorator:
            @StrategyRegistry.register
            class MyStrategy(PlatformStrategy):
                TARGET = BuildTarget.UWP

        Args:
            strategy_class: The strategy class to register.

        Returns:
            The registered strategy class (allows use as a decorator).
        """
        _STRATEGY_REGISTRY[strategy_class.TARGET] = strategy_class
        return strategy_class

    @classmethod
    def get(cls, target: BuildTarget) -> type[PlatformStrategy] | None:
        """Get the strategy class for a target.

        Args:
            target: Build target to look up.

        Returns:
            The strategy class if one is registered, None otherwise.
        """
        return _STRATEGY_REGISTRY.get(target)

    @classmethod
    def list_targets(cls) -> list[BuildTarget]:
        """List all targets with a registered strategy."""
        return list(_STRATEGY_REGISTRY.keys())
