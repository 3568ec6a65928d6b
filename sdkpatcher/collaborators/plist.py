"""
Property list editor backed by plistlib.

Keeps key order and the on-disk format (XML or binary) of the original file, and
only writes when the content actually changed.
"""

from __future__ import annotations

import copy
import plistlib
from pathlib import Path
from typing import Any

from ..core.exceptions import NotFoundError
from ..core.logging import get_logger
from .interface import PlistDocument, PlistEditor

logger = get_logger(__name__)


class PlistlibDocument(PlistDocument):
    """A property list loaded into plain dicts and lists."""

    def __init__(self, path: Path, data: dict[str, Any], fmt: plistlib.PlistFormat) -> None:
        self.path = path
        self._data = data
        self._original = copy.deepcopy(data)
        self._fmt = fmt
        self._exists = path.exists()

    @property
    def root(self) -> dict[str, Any]:
        return self._data

    def get_or_create_array(self, parent: dict[str, Any], key: str) -> list[Any]:
        value = parent.get(key)
        if not isinstance(value, list):
            value = []
            parent[key] = value
        return value

    def add_dict(self, array: list[Any]) -> dict[str, Any]:
        item: dict[str, Any] = {}
        array.append(item)
        return item

    def set_string(self, parent: dict[str, Any], key: str, value: str) -> None:
        parent[key] = value

    def add_string(self, array: list[Any], value: str) -> None:
        array.append(value)

    @property
    def changed(self) -> bool:
        return not self._exists or self._data != self._original

    def save(self) -> bool:
        if not self.changed:
            return False
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "wb") as f:
            plistlib.dump(self._data, f, fmt=self._fmt, sort_keys=False)
        self._original = copy.deepcopy(self._data)
        self._exists = True
        logger.info("Saved property list", plist=str(self.path))
        return True


class PlistlibEditor(PlistEditor):
    """Default :class:`PlistEditor` using the standard library parser."""

    def open(self, plist_path: Path, create: bool = False) -> PlistlibDocument:
        if not plist_path.is_file():
            if not create:
                raise NotFoundError(message="Property list not found", path=str(plist_path))
            return PlistlibDocument(plist_path, {}, plistlib.FMT_XML)

        raw = plist_path.read_bytes()
        fmt = plistlib.FMT_BINARY if raw.startswith(b"bplist00") else plistlib.FMT_XML
        data = plistlib.loads(raw)
        if not isinstance(data, dict):
            raise NotFoundError(message="Property list has no top-level dictionary", path=str(plist_path))
        return PlistlibDocument(plist_path, data, fmt)
