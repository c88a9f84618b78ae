"""Utility functions for json-schema-diff."""

from __future__ import annotations

import re
import json
from pathlib import Path
from typing import Any

from .models import JsonKind


_SEGMENT_PATTERN = re.compile(r"\[(\d+)\]|(?:^|\.)([^.\[]*)")


def build_path(parent_path: str, key: str | int) -> str:
    """Build a diff path from parent path and key or index."""
    if isinstance(key, int):
        return f"{parent_path}[{key}]"
    if not parent_path:
        return str(key)
    return f"{parent_path}.{key}"


def parse_path_segments(path: str) -> list[str | int]:
    """
    Split a diff path into key and index segments.

    'user.tags[3].name' -> ['user', 'tags', 3, 'name']

    Args:
        path: The diff path ('' for the root)

    Returns:
        List of segments; ints are array indices, strs are object keys
    """
    if not path:
        return []

    # Empty keys are kept: 'a.' -> ['a', '']
    segments: list[str | int] = []
    for match in _SEGMENT_PATTERN.finditer(path):
        if match.group(1) is not None:
            segments.append(int(match.group(1)))
        else:
            segments.append(match.group(2))
    return segments


def get_kind(value: Any) -> JsonKind:
    """Get the JSON kind of a parsed value."""
    if value is None:
        return JsonKind.NULL
    elif isinstance(value, bool):
        return JsonKind.BOOLEAN
    elif isinstance(value, (int, float)):
        return JsonKind.NUMBER
    elif isinstance(value, str):
        return JsonKind.STRING
    elif isinstance(value, list):
        return JsonKind.ARRAY
    elif isinstance(value, dict):
        return JsonKind.OBJECT
    raise TypeError(f"Not a JSON value: {type(value).__name__}")


def format_value(value: Any) -> str:
    """Render a value for human-readable output."""
    if value is None:
        return "null"
    elif isinstance(value, str):
        return f'"{value}"'
    elif isinstance(value, bool):
        return "true" if value else "false"
    elif isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def load_json_file(path: str | Path) -> Any:
    """
    Load a JSON document from disk.

    Raises:
        FileNotFoundError: If the file does not exist
        json.JSONDecodeError: If the content is not valid JSON
    """
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)
