"""Reading and writing values in nested mappings by dotted keys like ``a.b[0].c``."""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any

_INDEX = re.compile(r"[+-]?\d+")


def _split_indexed(part: str) -> tuple[str, int] | None:
    """Split ``name[3]`` into its name and index; None when the index is unusable."""
    open_at = part.index("[")
    close_at = part.find("]")
    if close_at <= open_at:
        return None
    index_text = part[open_at + 1:close_at]
    if not _INDEX.fullmatch(index_text):
        return None
    index = int(index_text)
    if index < 0:
        return None
    return part[:open_at], index


def _get(current: dict[str, Any], keys: Sequence[str]) -> Any:
    if not keys:
        return current
    head, rest = keys[0], keys[1:]
    if "[" in head:
        split = _split_indexed(head)
        if split is None:
            return current
        name, index = split
        items = current.get(name)
        if isinstance(items, list) and index < len(items):
            item = items[index]
            if isinstance(item, dict):
                return _get(item, rest)
            return item
        return current
    if head not in current:
        return current
    value = current[head]
    if isinstance(value, dict):
        return _get(value, rest)
    if isinstance(value, list):
        return current
    return value


def get_nested_value(data: dict[str, Any], key: str) -> Any:
    """Return the value at the dotted ``key``.

    Where the path cannot be followed, the innermost mapping reached is
    returned instead.
    """
    return _get(data, key.split("."))


def _set(current: dict[str, Any], keys: Sequence[str], value: Any) -> dict[str, Any]:
    if not keys:
        return current
    head, rest = keys[0], keys[1:]
    if "[" in head:
        split = _split_indexed(head)
        if split is None:
            return current
        name, index = split
        items = current.get(name)
        if isinstance(items, list) and index < len(items):
            item = items[index]
            items[index] = _set(item, rest, value) if isinstance(item, dict) else value
        return current
    if head not in current:
        return current
    existing = current[head]
    if isinstance(existing, dict):
        current[head] = _set(existing, rest, value)
    elif not isinstance(existing, list):
        current[head] = value
    return current


def set_nested_value(data: dict[str, Any], key: str, value: Any) -> dict[str, Any]:
    """Replace the existing value at the dotted ``key`` in place and return ``data``.

    Only existing leaf values and list elements are replaced; missing keys,
    whole lists and whole mappings are left untouched.
    """
    return _set(data, key.split("."), value)