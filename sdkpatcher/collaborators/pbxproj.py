"""
Text-level editor for Xcode ``project.pbxproj`` build settings.

Only the ``buildSettings = { ... };`` dictionaries are touched, and only the lines
of the settings being changed; the rest of the project file is kept byte-identical.
Settings are applied to every build configuration in the file.
"""

from __future__ import annotations

import re
from pathlib import Path

from ..core.exceptions import NotFoundError
from ..core.logging import get_logger
from ..editors.files import read_text, write_text
from .interface import ProjectDocument, ProjectEditor

logger = get_logger(__name__)

_BUILD_SETTINGS_OPEN = re.compile(r"buildSettings\s*=\s*\{")
_UNQUOTED_VALUE = re.compile(r"^[A-Za-z0-9_$/.]+$")
_LIST_ITEM = re.compile(r'"(?:[^"\\]|\\.)*"|[^,\s()]+')
_FIRST_INDENT = re.compile(r"\n([ \t]+)\S")
_DEFAULT_INDENT = "\t\t\t\t"


def quote_value(value: str) -> str:
    """Quote a value the way Xcode writes it."""
    if _UNQUOTED_VALUE.match(value):
        return value
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def unquote_value(token: str) -> str:
    """Strip quoting from a value token."""
    token = token.strip()
    if len(token) >= 2 and token.startswith('"') and token.endswith('"'):
        return token[1:-1].replace('\\"', '"').replace("\\\\", "\\")
    return token


def _setting_pattern(name: str) -> re.Pattern[str]:
    return re.compile(
        r"(?m)^(?P<indent>[ \t]*)\"?" + re.escape(name) + r"\"?\s*=\s*"
        r'(?P<value>\((?:"(?:[^"\\]|\\.)*"|[^)"])*\)|"(?:[^"\\]|\\.)*"|[^;\n]*);'
    )


def _block_end(text: str, start: int) -> int:
    """Index of the ``}`` closing the dictionary whose body starts at ``start``."""
    depth = 1
    in_string = False
    i = start
    while i < len(text):
        ch = text[i]
        if in_string:
            if ch == "\\":
                i += 1
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i
        i += 1
    return -1


class PbxprojDocument(ProjectDocument):
    """An opened ``project.pbxproj`` file."""

    def __init__(self, path: Path, text: str) -> None:
        self.path = path
        self.text = text
        self._original = text

    def _build_setting_blocks(self) -> list[tuple[int, int]]:
        blocks = []
        for match in _BUILD_SETTINGS_OPEN.finditer(self.text):
            end = _block_end(self.text, match.end())
            if end != -1:
                blocks.append((match.end(), end))
        return blocks

    def _edit_blocks(self, name: str, value: str, append: bool) -> bool:
        pattern = _setting_pattern(name)
        changed = False
        # Work backwards so earlier offsets stay valid
        for start, end in reversed(self._build_setting_blocks()):
            body = self.text[start:end]
            new_body = self._edit_body(body, pattern, name, value, append)
            if new_body != body:
                self.text = self.text[:start] + new_body + self.text[end:]
                changed = True
        return changed

    def _edit_body(self, body: str, pattern: re.Pattern[str], name: str, value: str, append: bool) -> str:
        match = pattern.search(body)
        if match is None:
            indent_match = _FIRST_INDENT.match(body) or _FIRST_INDENT.search(body)
            indent = indent_match.group(1) if indent_match else _DEFAULT_INDENT
            return f"\n{indent}{name} = {quote_value(value)};" + body

        indent = match.group("indent")
        current = match.group("value").strip()

        if current.startswith("("):
            items = _LIST_ITEM.findall(current)
            if not append:
                new_value = quote_value(value)
            elif value in (unquote_value(item) for item in items):
                return body
            else:
                new_value = self._render_list(items + [quote_value(value)], indent)
        else:
            if unquote_value(current) == value:
                return body
            if append and value in unquote_value(current).split():
                return body
            if append and current:
                new_value = self._render_list([current, quote_value(value)], indent)
            else:
                new_value = quote_value(value)

        return body[: match.start("value")] + new_value + body[match.end("value") :]

    @staticmethod
    def _render_list(items: list[str], indent: str) -> str:
        lines = "".join(f"{indent}\t{item},\n" for item in items)
        return f"(\n{lines}{indent})"

    def has_build_property(self, name: str) -> bool:
        pattern = _setting_pattern(name)
        return any(pattern.search(self.text[start:end]) for start, end in self._build_setting_blocks())

    def add_build_property(self, name: str, value: str) -> bool:
        return self._edit_blocks(name, value, append=True)

    def set_build_property(self, name: str, value: str) -> bool:
        return self._edit_blocks(name, value, append=False)

    def save(self) -> bool:
        if self.text == self._original:
            return False
        write_text(self.path, self.text)
        self._original = self.text
        logger.info("Saved Xcode project", project=str(self.path))
        return True


class PbxprojEditor(ProjectEditor):
    """Default :class:`ProjectEditor` for Xcode projects."""

    def open(self, project_path: Path) -> PbxprojDocument:
        if not project_path.is_file():
            raise NotFoundError(message="Xcode project not found", path=str(project_path))
        return PbxprojDocument(project_path, read_text(project_path))
