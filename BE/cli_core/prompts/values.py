# BE/cli_core/prompts/values.py
"""
Value helpers shared by the schema inferencer and the collector.

- TypeHint: the scalar types a prompt answer can be parsed into
- is_non_default / guess_type_hint / serialize_default: example-value heuristics
- parse_value: raw text → typed scalar (raises ValueParseError)
- insert_at_path: write a value into a nested dict, creating containers
- as_prompt / label_for_path: human-readable labels from field names
"""

from __future__ import annotations

import math
import re
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Sequence, Union

Scalar = Union[str, int, float, bool]


class TypeHint(str, Enum):
    STRING = "string"
    INT = "int"
    FLOAT = "float"
    BOOLEAN = "boolean"


class ValueParseError(ValueError):
    """Raw input could not be converted to the field's type."""


# ────────────────────────────────────────────────────────────
# Example-value heuristics
# ────────────────────────────────────────────────────────────
def is_non_default(value: Any) -> bool:
    """
    None, numeric zero, NaN/infinity and "" are placeholders in an example
    value, not real defaults. Booleans are real values even though
    False == 0 in Python.
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return True
    if isinstance(value, (int, float)) and value == 0:
        return False
    if isinstance(value, float) and not math.isfinite(value):
        return False
    if isinstance(value, str) and value == "":
        return False
    return True


def guess_type_hint(value: Any) -> Optional[TypeHint]:
    """Type hint for a primitive example value; None for anything composite."""
    if isinstance(value, bool):
        return TypeHint.BOOLEAN
    if isinstance(value, int):
        return TypeHint.INT
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return TypeHint.INT
        return TypeHint.FLOAT
    if isinstance(value, str):
        return TypeHint.STRING
    return None


def serialize_default(value: Scalar) -> str:
    """Text form of an example value, readable back by parse_value."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


# ────────────────────────────────────────────────────────────
# Parsing
# ────────────────────────────────────────────────────────────
def parse_value(raw: str, type_hint: Optional[TypeHint]) -> Scalar:
    """
    Convert raw input according to `type_hint`.

    boolean accepts only "true"/"false" (any case); int/float use the builtin
    numeric parsers; string or no hint returns the text unchanged.
    """
    if type_hint is TypeHint.BOOLEAN:
        lower = raw.strip().lower()
        if lower == "true":
            return True
        if lower == "false":
            return False
        raise ValueParseError("Invalid boolean (must be 'true' or 'false').")
    if type_hint is TypeHint.INT:
        try:
            return int(raw.strip())
        except ValueError:
            raise ValueParseError(f"Invalid integer: {raw}") from None
    if type_hint is TypeHint.FLOAT:
        try:
            number = float(raw.strip())
        except ValueError:
            raise ValueParseError(f"Invalid float: {raw}") from None
        if math.isnan(number):
            raise ValueParseError(f"Invalid float: {raw}")
        return number
    return raw


def is_blank(raw: Optional[str]) -> bool:
    return raw is None or raw.strip() == ""


# ────────────────────────────────────────────────────────────
# Paths
# ────────────────────────────────────────────────────────────
def insert_at_path(target: Dict[str, Any], path: Sequence[str], value: Any) -> Dict[str, Any]:
    """
    Set `value` at `path` inside `target`, creating intermediate dicts as
    needed. Returns `target`. The path must not be empty.
    """
    if not path:
        raise ValueError("cannot insert at an empty path")
    node = target
    for segment in path[:-1]:
        child = node.get(segment)
        if not isinstance(child, dict):
            child = {}
            node[segment] = child
        node = child
    node[path[-1]] = value
    return target


def field_name(path: Iterable[str]) -> str:
    return ".".join(path)


_WORD_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def as_prompt(name: str) -> str:
    """
    Convert a camelCase / PascalCase / snake_case name into a readable label.
    e.g. "innerName" -> "Inner Name", "userID" -> "User ID", "max_qty" -> "Max Qty"
    """
    words = _WORD_BOUNDARY.sub(" ", name.replace("_", " ")).split()
    if not words:
        return name
    return " ".join(w[0].upper() + w[1:] for w in words)


def label_for_path(path: Sequence[str]) -> str:
    if not path:
        return "Value"
    return " -> ".join(as_prompt(segment) for segment in path)
