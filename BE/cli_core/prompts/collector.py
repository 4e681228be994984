# BE/cli_core/prompts/collector.py
"""
Recursive collector: walks a prompt schema, asks one question at a time
through a PromptProvider and rebuilds a value shaped like the schema's paths.

Order is strictly schema order, depth-first into record sub-schemas. Parse
problems are reported through provider.warn() and the same field is asked
again. Cancellation handling depends on CancelPolicy:

- CONTINUE (default): a cancelled prompt ends the loop it belongs to, exactly
  like answering "no" to "Add another?". A cancel at any field of a record
  ends that record loop; the partly filled record is kept if it holds any
  answer. A cancelled top-level field is left out. Collection goes on with
  the remaining fields.
- ABORT: the first cancellation raises FormCancelled, carrying the fields
  completed so far in `partial`.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from ..utils.logging import get_logger
from .provider import CANCEL, PromptProvider, is_cancel
from .schema import FieldDescriptor, Schema, customize_schema, infer_schema
from .values import ValueParseError, insert_at_path, is_blank, parse_value

log = get_logger(__name__)

# marks "no value": optional field left blank (never written to the result)
_ABSENT = object()


class CancelPolicy(str, Enum):
    CONTINUE = "continue"
    ABORT = "abort"


class FormCancelled(Exception):
    """Raised under CancelPolicy.ABORT when the user cancels any prompt."""

    def __init__(self, field_name: str, partial: Any = None) -> None:
        super().__init__(f"form cancelled at {field_name or '<root>'}")
        self.field_name = field_name
        self.partial = partial


class _RecordCancelled(Exception):
    """A prompt inside a record was cancelled; ends the enclosing record loop."""

    def __init__(self, partial: Dict[str, Any]) -> None:
        super().__init__("record cancelled")
        self.partial = partial


class Collector:
    def __init__(self, provider: PromptProvider, *, cancel_policy: CancelPolicy = CancelPolicy.CONTINUE) -> None:
        self.provider = provider
        self.cancel_policy = CancelPolicy(cancel_policy)

    def collect(self, schema: Schema, prefix: Sequence[str] = ()) -> Any:
        """
        Ask every field of `schema` and return the assembled value.

        `prefix` only decorates prompt labels (e.g. "Foo -> Objects") so the
        user can tell which record they are filling in.
        """
        return self._collect(schema, tuple(prefix), in_record=False)

    def _collect(self, schema: Schema, prefix: Tuple[str, ...], *, in_record: bool) -> Any:
        result: Dict[str, Any] = {}
        for descriptor in schema:
            try:
                value = self._resolve_field(descriptor, prefix)
            except FormCancelled as exc:
                exc.partial = result
                raise
            if is_cancel(value):
                # inside a record the cancel ends the record loop; the
                # fields answered so far are kept
                if in_record:
                    raise _RecordCancelled(result)
                value = _ABSENT
            if not descriptor.path:
                # a top-level scalar or list is the whole answer
                return None if value is _ABSENT else value
            if value is _ABSENT:
                continue
            insert_at_path(result, descriptor.path, value)
            log.debug("collected %s = %r", descriptor.field_name, value)
        return result

    # ────────────────────────────────────────────────────────────
    # Field kinds
    # ────────────────────────────────────────────────────────────
    def _resolve_field(self, descriptor: FieldDescriptor, prefix: Tuple[str, ...]) -> Any:
        label = " -> ".join(prefix + (descriptor.label,))

        if descriptor.sub_schema is not None:
            sub_schema = descriptor.sub_schema
            sub_prefix = prefix + (descriptor.label,)
            return self._repeat(
                descriptor, label, lambda: self._collect(sub_schema, sub_prefix, in_record=True)
            )

        if descriptor.repeats:
            return self._repeat(descriptor, label, lambda: self._ask_scalar(descriptor, label))

        return self._ask_scalar(descriptor, label)

    def _repeat(self, descriptor: FieldDescriptor, label: str, collect_one: Callable[[], Any]) -> List[Any]:
        items: List[Any] = []
        while True:
            try:
                item = collect_one()
            except _RecordCancelled as exc:
                if exc.partial:
                    items.append(exc.partial)
                break
            if is_cancel(item):
                break
            if item is not _ABSENT:
                items.append(item)

            more = self.provider.ask_confirm(f"Add another {label}?")
            if is_cancel(more):
                self._cancelled(descriptor)
                break
            if not more:
                break
        log.debug("%s: %d item(s)", descriptor.field_name, len(items))
        return items

    def _ask_scalar(self, descriptor: FieldDescriptor, label: str) -> Any:
        """One typed answer, _ABSENT for a blank optional field, or CANCEL."""
        while True:
            if descriptor.options:
                raw = self.provider.ask_choice(label, descriptor.options)
            else:
                raw = self.provider.ask_text(label, descriptor.default_value)

            if is_cancel(raw):
                self._cancelled(descriptor)
                return CANCEL

            if is_blank(raw):
                if descriptor.default_value is not None:
                    raw = descriptor.default_value
                elif descriptor.required:
                    continue
                else:
                    return _ABSENT

            try:
                return parse_value(raw, descriptor.type_hint)
            except ValueParseError as e:
                log.debug("%s: rejected %r (%s)", descriptor.field_name, raw, e)
                self.provider.warn(str(e))

    def _cancelled(self, descriptor: FieldDescriptor) -> None:
        log.debug("prompt cancelled at %s", descriptor.field_name or "<root>")
        if self.cancel_policy is CancelPolicy.ABORT:
            raise FormCancelled(descriptor.field_name)


def collect(
    schema: Schema,
    provider: PromptProvider,
    prefix: Sequence[str] = (),
    *,
    cancel_policy: CancelPolicy = CancelPolicy.CONTINUE,
) -> Any:
    return Collector(provider, cancel_policy=cancel_policy).collect(schema, prefix)


def fill_from_example(
    example: Any,
    provider: PromptProvider,
    *,
    overrides: Optional[Mapping[str, Mapping[str, Any]]] = None,
    cancel_policy: CancelPolicy = CancelPolicy.CONTINUE,
) -> Any:
    """Infer a schema from `example`, apply overrides and collect answers."""
    schema = infer_schema(example)
    if overrides:
        schema = customize_schema(schema, overrides)
    return collect(schema, provider, cancel_policy=cancel_policy)
