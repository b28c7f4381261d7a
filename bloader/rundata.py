"""Parsing of typed ``key=value:type`` data given to a run on the command line."""

from __future__ import annotations

import math
import re
from collections.abc import Callable, Iterable
from typing import Any

DEFAULT_TYPE = "s"

_INT = re.compile(r"[+-]?[0-9]+")
_UINT = re.compile(r"[0-9]+")
_DECIMAL_FLOAT = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_HEX_FLOAT = re.compile(r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?[0-9]+")
_SPECIAL_FLOAT = re.compile(r"[+-]?(?:inf|infinity|nan)", re.IGNORECASE)
_TRUE = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE = frozenset({"0", "f", "F", "FALSE", "false", "False"})
_INT_MIN, _INT_MAX = -(2**63), 2**63 - 1
_UINT_MAX = 2**64 - 1


class RunDataError(ValueError):
    """A run data entry is malformed or its value does not fit its type."""


def _parse_int(text: str) -> int:
    if not _INT.fullmatch(text):
        raise RunDataError(f"failed to parse int: {text!r}")
    value = int(text)
    if not _INT_MIN <= value <= _INT_MAX:
        raise RunDataError(f"failed to parse int: {text!r} is out of range")
    return value


def _parse_uint(text: str) -> int:
    if not _UINT.fullmatch(text):
        raise RunDataError(f"failed to parse uint: {text!r}")
    value = int(text)
    if value > _UINT_MAX:
        raise RunDataError(f"failed to parse uint: {text!r} is out of range")
    return value


def _parse_bool(text: str) -> bool:
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise RunDataError(f"failed to parse bool: {text!r}")


def _parse_float(text: str) -> float:
    if _SPECIAL_FLOAT.fullmatch(text):
        return float(text)
    if _DECIMAL_FLOAT.fullmatch(text):
        value = float(text)
    elif _HEX_FLOAT.fullmatch(text):
        value = float.fromhex(text)
    else:
        raise RunDataError(f"failed to parse float: {text!r}")
    if math.isinf(value):
        raise RunDataError(f"failed to parse float: {text!r} is out of range")
    return value


_SCALARS: dict[str, Callable[[str], Any]] = {
    "i": _parse_int,
    "s": str,
    "b": _parse_bool,
    "f": _parse_float,
    "u": _parse_uint,
}


def _array(parse: Callable[[str], Any]) -> Callable[[str], list[Any]]:
    def parse_all(text: str) -> list[Any]:
        return [parse(item) for item in text.split(",")]

    return parse_all


_PARSERS: dict[str, Callable[[str], Any]] = {
    **_SCALARS,
    **{f"a{name}": _array(parse) for name, parse in _SCALARS.items()},
}


def parse_run_data_entry(entry: str) -> tuple[str, Any]:
    """Parse one ``key=value:type`` entry into its key and typed value.

    Types are ``i``, ``s``, ``b``, ``f``, ``u`` and their comma-separated
    array forms ``ai``, ``as``, ``ab``, ``af``, ``au``. Without a ``:type``
    part the type is ``s`` and the value is empty.
    """
    parts = entry.split("=")
    if len(parts) != 2:
        raise RunDataError(f"invalid data: {entry}")
    key, spec = parts

    type_name, text = DEFAULT_TYPE, ""
    if ":" in spec:
        pieces = spec.split(":")
        text, type_name = pieces[0], pieces[1]

    parser = _PARSERS.get(type_name)
    if parser is None:
        raise RunDataError(f"invalid data type: {type_name}")
    return key, parser(text)


def parse_run_data(entries: Iterable[str]) -> dict[str, Any]:
    """Parse all entries into one mapping; later keys replace earlier ones."""
    return dict(parse_run_data_entry(entry) for entry in entries)