"""
cli_core
────────
Core package for the terminal assistant.

This namespace exposes the pieces used by the CLI (and anything else that
wants to drive the same flows):
• prompts: schema inference + recursive collection of answers
• persistence: config.json / session.json key-value stores, JSONL trade log
• search: HTTP search client used by "Add User"
• config: state-file locations, form templates, environment
• utils: logging, IO

Import conveniences:
    from cli_core import infer_schema, collect, CancelPolicy
"""

from __future__ import annotations

from .prompts import (
    CANCEL,
    CancelPolicy,
    FieldDescriptor,
    FormCancelled,
    TypeHint,
    collect,
    fill_from_example,
    infer_schema,
    is_cancel,
)

__all__ = [
    "CANCEL",
    "CancelPolicy",
    "FieldDescriptor",
    "FormCancelled",
    "TypeHint",
    "collect",
    "fill_from_example",
    "infer_schema",
    "is_cancel",
]
