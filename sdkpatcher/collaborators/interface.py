"""
Structured-editor collaborator interfaces.

Defines the abstract interfaces the iOS and Android strategies need from external
editors. Any of them may be missing from a given installation; availability is
decided once when the :class:`~sdkpatcher.collaborators.Collaborators` bundle is
built, and a missing collaborator is represented by ``None``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any


class ProjectDocument(ABC):
    """An opened native project (e.g. ``project.pbxproj``)."""

    @abstractmethod
    def has_build_property(self, name: str) -> bool:
        """Whether any build configuration defines the setting ``name``."""
        ...

    @abstractmethod
    def add_build_property(self, name: str, value: str) -> bool:
        """Add ``value`` to the build setting ``name`` in every build configuration.

        Args:
            name: Build setting name, e.g. ``OTHER_LDFLAGS``.
            value: Value to add; list-valued settings get it appended.

        Returns:
            True if the project changed, False if the value was already present.
        """
        ...

    @abstractmethod
    def set_build_property(self, name: str, value: str) -> bool:
        """Set the build setting ``name`` to a single value in every build configuration.

        Args:
            name: Build setting name.
            value: Value to set.

        Returns:
            True if the project changed.
        """
        ...

    @abstractmethod
    def save(self) -> bool:
        """Write the project back if it changed.

        Returns:
            True if the file was written.
        """
        ...


class ProjectEditor(ABC):
    """Opens native projects for structured editing."""

    @abstractmethod
    def open(self, project_path: Path) -> ProjectDocument:
        """Open a project file.

        Args:
            project_path: Path of the project file.

        Returns:
            The opened document.

        Raises:
            NotFoundError: If the project file does not exist.
        """
        ...


class PlistDocument(ABC):
    """An opened property list."""

    @property
    @abstractmethod
    def root(self) -> dict[str, Any]:
        """Top-level dictionary of the property list."""
        ...

    @abstractmethod
    def get_or_create_array(self, parent: dict[str, Any], key: str) -> list[Any]:
        """Return the array stored under ``key``, creating an empty one if absent."""
        ...

    @abstractmethod
    def add_dict(self, array: list[Any]) -> dict[str, Any]:
        """Append a new empty dictionary to ``array`` and return it."""
        ...

    @abstractmethod
    def set_string(self, parent: dict[str, Any], key: str, value: str) -> None:
        """Set a string value in a dictionary."""
        ...

    @abstractmethod
    def add_string(self, array: list[Any], value: str) -> None:
        """Append a string to an array."""
        ...

    @abstractmethod
    def save(self) -> bool:
        """Write the property list back if it changed.

        Returns:
            True if the file was written.
        """
        ...


class PlistEditor(ABC):
    """Opens property lists for structured editing."""

    @abstractmethod
    def open(self, plist_path: Path, create: bool = False) -> PlistDocument:
        """Open a property list.

        Args:
            plist_path: Path of the ``.plist`` or ``.entitlements`` file.
            create: Start from an empty dictionary if the file is missing.

        Returns:
            The opened document.

        Raises:
            NotFoundError: If the file does not exist and ``create`` is False.
        """
        ...


class CapabilityDocument(ABC):
    """Capability list of one app target."""

    @abstractmethod
    def add_push_notifications(self, development: bool = True) -> None:
        """Add the push notifications entitlement."""
        ...

    @abstractmethod
    def add_remote_notifications_background_mode(self) -> None:
        """Declare the ``remote-notification`` background mode."""
        ...

    @abstractmethod
    def save(self) -> bool:
        """Write all touched files back.

        Returns:
            True if anything was written.
        """
        ...


class CapabilityEditor(ABC):
    """Opens an app target's capability list."""

    @abstractmethod
    def open(self, output_path: Path, entitlements_name: str) -> CapabilityDocument:
        """Open the capability list of the generated Xcode project.

        Args:
            output_path: Root of the generated Xcode project.
            entitlements_name: File name of the entitlements file to use or create.

        Returns:
            The opened capability list.
        """
        ...


class AndroidPostBuildHook(ABC):
    """Android-specific post-build step provided by the SDK's Android tooling."""

    @abstractmethod
    def on_post_build(self, output_path: Path) -> None:
        """Patch an exported Android project.

        Args:
            output_path: Root of the exported Gradle project.
        """
        ...
