"""Render JSON input as ZW format text."""

from __future__ import annotations

import json
import math
from typing import Any

from zwcodec.config import (
    INDENT_WIDTH,
    JSON_ARRAY_ROOT,
    JSON_OBJECT_ROOT,
    JSON_PRIMITIVE_ROOT,
    ROOT_LIST_KEY,
    ROOT_VALUE_KEY,
)
from zwcodec.json_export import canonical_number
from zwcodec.parser import ParseOptions


def from_json(json_text: str, root_type_name: str | None = None, *, options: ParseOptions | None = None) -> str:
    """Convert JSON text into ZW format text.

    Never raises for bad input: invalid JSON yields a comment-only diagnostic.

    Args:
        json_text: Any JSON document.
        root_type_name: Root type written on the first line (e.g. ``ZW-USER``).
        options: Delimiter and list-item prefix to emit.

    Returns:
        ZW text whose first line is always a valid root line, or the
        ``# Error: ...`` diagnostic.
    """
    try:
        value = json.loads(json_text)
    except (json.JSONDecodeError, TypeError) as exc:
        return f"# Error: Invalid JSON input.\n# {exc}"
    return from_value(value, root_type_name, options=options)


def from_value(value: Any, root_type_name: str | None = None, *, options: ParseOptions | None = None) -> str:
    """Convert an already decoded JSON value into ZW format text."""
    writer = _ZwWriter(options or ParseOptions())
    name = root_type_name.strip() if root_type_name and root_type_name.strip() else None

    if isinstance(value, dict):
        writer.line(0, writer.header(name or JSON_OBJECT_ROOT))
        writer.write_object(value, 1)
    elif isinstance(value, list):
        if name:
            writer.line(0, writer.header(name))
            writer.write_entry(ROOT_LIST_KEY, value, 1)
        else:
            writer.line(0, writer.header(JSON_ARRAY_ROOT))
            writer.write_list(value, 1)
    else:
        writer.line(0, writer.header(name or JSON_PRIMITIVE_ROOT))
        writer.write_entry(ROOT_VALUE_KEY, value, 1)
    return "\n".join(writer.lines)


def format_scalar(value: Any) -> str:
    """Render a JSON scalar as ZW value text.

    Strings are unquoted, except the empty string (``""``) and strings that
    span lines or carry edge whitespace, which are written as one
    double-quoted JSON string literal (ASCII-escaped, so no line breaks).
    """
    if isinstance(value, str):
        if value.splitlines() not in ([value], []) or value != value.strip():
            return json.dumps(value)
        return value if value else '""'
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, float) and math.isfinite(value):
        # Same text infer_scalar accepts as a number, so 1.0 is written as 1.
        return canonical_number(value)
    return json.dumps(value)


class _ZwWriter:
    def __init__(self, options: ParseOptions) -> None:
        self.delimiter = options.delimiter
        self.prefix = options.list_item_prefix
        self.lines: list[str] = []

    def header(self, key: str) -> str:
        return f"{key}{self.delimiter}"

    def line(self, level: int, text: str) -> None:
        self.lines.append(" " * (level * INDENT_WIDTH) + text)

    def write_scalar(self, level: int, lead: str, value: Any) -> None:
        self.line(level, f"{lead}{format_scalar(value)}")

    def write_object(self, obj: dict[str, Any], level: int) -> None:
        for key, value in obj.items():
            self.write_entry(str(key), value, level)

    def write_entry(self, key: str, value: Any, level: int) -> None:
        if isinstance(value, dict):
            self.line(level, self.header(key))
            self.write_object(value, level + 1)
        elif isinstance(value, list):
            self.line(level, self.header(key))
            self.write_list(value, level + 1)
        else:
            self.write_scalar(level, f"{key}{self.delimiter} ", value)

    def write_list(self, items: list[Any], level: int) -> None:
        marker = f"{self.prefix} "
        for item in items:
            if isinstance(item, dict) and item:
                self.write_object_item(item, level)
            else:
                self.write_scalar(level, marker, item)

    def write_object_item(self, obj: dict[str, Any], level: int) -> None:
        """Write an object as one list item: first pair on the marker line."""
        (first_key, first_value), *rest = obj.items()
        marker = f"{self.prefix} "
        if isinstance(first_value, dict) and first_value:
            self.line(level, marker + self.header(str(first_key)))
            self.write_object(first_value, level + 2)
        elif isinstance(first_value, list) and first_value:
            self.line(level, marker + self.header(str(first_key)))
            self.write_list(first_value, level + 2)
        elif isinstance(first_value, (dict, list)):
            self.line(level, marker + self.header(str(first_key)))
        else:
            self.write_scalar(level, f"{marker}{first_key}{self.delimiter} ", first_value)
        for key, value in rest:
            self.write_entry(str(key), value, level + 1)
