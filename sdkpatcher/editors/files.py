"""Whole-file text I/O that leaves line endings exactly as generated."""

from __future__ import annotations

from pathlib import Path


def read_text(path: Path) -> str:
    """Read a file without translating CRLF line endings."""
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def write_text(path: Path, content: str) -> None:
    """Replace a file's content in full without translating line endings."""
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)
