# BE/cli_core/prompts/__init__.py
"""
Schema-driven prompting engine.

- schema:    FieldDescriptor, infer_schema, customize_schema, describe_schema
- collector: Collector / collect, CancelPolicy, FormCancelled
- provider:  PromptProvider protocol and the CANCEL sentinel
- values:    TypeHint, parse_value and path/label helpers

Typical use:

    from cli_core.prompts import infer_schema, collect

    schema = infer_schema({"items": [{"name": "", "qty": 0}]})
    answer = collect(schema, provider)
"""

from .values import TypeHint, ValueParseError, parse_value, insert_at_path, as_prompt
from .provider import CANCEL, PromptProvider, is_cancel
from .schema import (
    FieldDescriptor,
    Schema,
    SchemaError,
    infer_schema,
    customize_schema,
    describe_schema,
)
from .collector import Collector, CancelPolicy, FormCancelled, collect, fill_from_example

__all__ = [
    "TypeHint",
    "ValueParseError",
    "parse_value",
    "insert_at_path",
    "as_prompt",
    "CANCEL",
    "PromptProvider",
    "is_cancel",
    "FieldDescriptor",
    "Schema",
    "SchemaError",
    "infer_schema",
    "customize_schema",
    "describe_schema",
    "Collector",
    "CancelPolicy",
    "FormCancelled",
    "collect",
    "fill_from_example",
]
