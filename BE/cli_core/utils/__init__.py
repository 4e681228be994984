# BE/cli_core/utils/__init__.py
"""
Small cross-cutting helpers shared across the assistant.
This module re-exports the most commonly used utilities so callers can do:

    from cli_core.utils import get_logger, read_json, write_json

Nothing here should import the prompt engine or persistence modules.
Keep it lean.
"""

from .logging import apply_env_levels, get_logger, set_level
from .io import (
    read_yaml,
    read_json,
    write_json,
    ensure_dir,
    atomic_write_text,
    append_jsonl,
    iter_jsonl,
)

__all__ = [
    # logging
    "get_logger",
    "set_level",
    "apply_env_levels",
    # io
    "read_yaml",
    "read_json",
    "write_json",
    "ensure_dir",
    "atomic_write_text",
    "append_jsonl",
    "iter_jsonl",
]
