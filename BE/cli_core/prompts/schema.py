# BE/cli_core/prompts/schema.py
"""
Prompt schema: what to ask, in which order, and how to read the answers.

A schema is an immutable tuple of FieldDescriptor. It is inferred from an
example value (see infer_schema) and consumed by the collector; the collector
never sees the example itself.

Example
-------
    infer_schema({"foo": {"num": 123, "objects": [{"innerName": ""}]}})
    → (
        FieldDescriptor(path=("foo", "num"), type_hint=INT, default_value="123"),
        FieldDescriptor(path=("foo", "objects"), repeats=True,
                        sub_schema=(FieldDescriptor(path=("innerName",)),)),
      )
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .values import (
    TypeHint,
    field_name,
    guess_type_hint,
    is_non_default,
    label_for_path,
    serialize_default,
)


class SchemaError(ValueError):
    """A descriptor or schema violates its structural invariants."""


@dataclass(frozen=True)
class FieldDescriptor:
    path: Tuple[str, ...]
    label: str = ""
    required: bool = False
    repeats: bool = False
    default_value: Optional[str] = None
    options: Optional[Tuple[str, ...]] = None
    type_hint: Optional[TypeHint] = None
    sub_schema: Optional[Tuple["FieldDescriptor", ...]] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", tuple(str(p) for p in self.path))
        if not self.label:
            object.__setattr__(self, "label", label_for_path(self.path))
        if self.options is not None:
            object.__setattr__(self, "options", tuple(str(o) for o in self.options))
        if self.type_hint is not None and not isinstance(self.type_hint, TypeHint):
            object.__setattr__(self, "type_hint", TypeHint(self.type_hint))

        if self.sub_schema is not None:
            object.__setattr__(self, "sub_schema", tuple(self.sub_schema))
            if not self.repeats:
                raise SchemaError(f"{self.field_name or '<root>'}: a record field must repeat")
            if self.type_hint is not None or self.options is not None:
                raise SchemaError(
                    f"{self.field_name or '<root>'}: record fields take no type hint or options"
                )
            _check_level(self.sub_schema)

    @property
    def field_name(self) -> str:
        return field_name(self.path)

    @property
    def is_record_array(self) -> bool:
        return self.sub_schema is not None


Schema = Tuple[FieldDescriptor, ...]


def _check_level(schema: Sequence[FieldDescriptor]) -> None:
    """Paths on one level must be distinct; an empty path must stand alone."""
    seen = set()
    for d in schema:
        if not d.path and len(schema) > 1:
            raise SchemaError("an empty path is only valid for a single root field")
        if d.path in seen:
            raise SchemaError(f"duplicate field path: {d.field_name}")
        seen.add(d.path)


# ────────────────────────────────────────────────────────────
# Inference
# ────────────────────────────────────────────────────────────
def infer_schema(example: Any, path: Sequence[str] = ()) -> Schema:
    """Build the prompt schema for `example`. Every value shape is accepted."""
    schema = tuple(_infer(example, tuple(path)))
    _check_level(schema)
    return schema


def _infer(example: Any, path: Tuple[str, ...]) -> List[FieldDescriptor]:
    if isinstance(example, (list, tuple)):
        first = example[0] if example else None
        if isinstance(first, Mapping):
            return [FieldDescriptor(path=path, repeats=True, sub_schema=infer_schema(first))]

        hint = None
        for item in example:
            if is_non_default(item):
                hint = guess_type_hint(item)
                break
        return [FieldDescriptor(path=path, repeats=True, type_hint=hint)]

    if isinstance(example, Mapping):
        # keys are text segments; a key equal to an earlier one once turned
        # into text replaces its value and keeps the earlier position
        fields: Dict[str, Any] = {}
        for key in list(example.keys()):
            fields[str(key)] = example[key]
        out: List[FieldDescriptor] = []
        for key, value in fields.items():
            out.extend(_infer(value, path + (key,)))
        return out

    if is_non_default(example):
        return [FieldDescriptor(
            path=path,
            default_value=serialize_default(example),
            type_hint=guess_type_hint(example),
        )]
    return [FieldDescriptor(path=path)]


# ────────────────────────────────────────────────────────────
# Customisation & display
# ────────────────────────────────────────────────────────────
_OVERRIDABLE = {"label", "required", "options", "default"}


def customize_schema(schema: Schema, overrides: Mapping[str, Mapping[str, Any]]) -> Schema:
    """
    Return a copy of `schema` with per-field overrides applied.

    `overrides` maps dotted field names to attribute changes, e.g.
        {"side": {"options": ["buy", "sell"], "required": True},
         "items.name": {"label": "Item name"}}
    Names inside a record array are prefixed with the array's field name.
    """
    remaining = {name: dict(attrs) for name, attrs in overrides.items()}
    result = _apply_overrides(schema, remaining, prefix="")
    if remaining:
        raise SchemaError(f"unknown field(s) in overrides: {', '.join(sorted(remaining))}")
    return result


def _apply_overrides(schema: Schema, remaining: Dict[str, Dict[str, Any]], prefix: str) -> Schema:
    out = []
    for d in schema:
        name = prefix + d.field_name
        changes: Dict[str, Any] = {}
        attrs = remaining.pop(name, None)
        if attrs is not None:
            changes.update(_override_changes(name, attrs))
        if d.sub_schema is not None:
            changes["sub_schema"] = _apply_overrides(d.sub_schema, remaining, prefix=name + ".")
        out.append(replace(d, **changes) if changes else d)
    return tuple(out)


def _override_changes(name: str, attrs: Mapping[str, Any]) -> Dict[str, Any]:
    unknown = set(attrs) - _OVERRIDABLE
    if unknown:
        raise SchemaError(f"{name}: cannot override {', '.join(sorted(unknown))}")
    changes: Dict[str, Any] = {}
    if "label" in attrs:
        changes["label"] = str(attrs["label"])
    if "required" in attrs:
        changes["required"] = bool(attrs["required"])
    if "options" in attrs:
        opts = attrs["options"]
        changes["options"] = tuple(opts) if opts else None
    if "default" in attrs:
        default = attrs["default"]
        changes["default_value"] = None if default is None else serialize_default(default)
    return changes


def describe_schema(schema: Schema) -> List[Dict[str, Any]]:
    """Plain-dict view of a schema (JSON friendly)."""
    out = []
    for d in schema:
        out.append({
            "field_name": d.field_name,
            "label": d.label,
            "required": d.required,
            "repeats": d.repeats,
            "default_value": d.default_value,
            "options": list(d.options) if d.options is not None else None,
            "type_hint": d.type_hint.value if d.type_hint is not None else None,
            "sub_schema": describe_schema(d.sub_schema) if d.sub_schema is not None else None,
        })
    return out
