# BE/cli_core/config.py
"""
config.py
─────────
Central configuration layer:
• Resolves where state files live (config.json, session.json, trades.jsonl)
• Loads form templates (`data/forms.yml`, or the file named by CLI_FORMS_FILE)
• Centralizes environment access (search endpoint, timeouts)

Environment
-----------
CLI_STATE_DIR       directory for state files (default: current directory)
CLI_FORMS_FILE      YAML file with form templates (default: bundled forms.yml)
CLI_SEARCH_URL      search endpoint used when config.json has no `search_url`
CLI_SEARCH_TIMEOUT  HTTP timeout in seconds (default: 12)
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List

import os

from .utils.io import read_yaml
from .utils.logging import get_logger

log = get_logger(__name__)

CONFIG_FILE_NAME = "config.json"
SESSION_FILE_NAME = "session.json"
TRADES_FILE_NAME = "trades.jsonl"

DEFAULT_SEARCH_URL = "https://www.google.com/search"
DEFAULT_SEARCH_TIMEOUT = 12  # seconds


# ────────────────────────────────────────────────────────────
# Paths
# ────────────────────────────────────────────────────────────
@lru_cache(maxsize=1)
def _package_root() -> Path:
    return Path(__file__).resolve().parent


def _data_dir() -> Path:
    return _package_root() / "data"


def state_dir() -> Path:
    """Directory holding config/session/trade files. Read on every call."""
    return Path(os.getenv("CLI_STATE_DIR") or Path.cwd()).resolve()


def config_file() -> Path:
    return state_dir() / CONFIG_FILE_NAME


def session_file() -> Path:
    return state_dir() / SESSION_FILE_NAME


def trades_file() -> Path:
    return state_dir() / TRADES_FILE_NAME


def forms_file() -> Path:
    override = os.getenv("CLI_FORMS_FILE")
    if override:
        return Path(override).resolve()
    return _data_dir() / "forms.yml"


# ────────────────────────────────────────────────────────────
# Form templates
# ────────────────────────────────────────────────────────────
def load_forms() -> Dict[str, Dict[str, Any]]:
    """
    Return {form_name: {"description": str, "example": Any, "fields": {...}}}.

    forms.yml layout:
        forms:
          order:
            description: Nested order with flags and line items
            example: {...}              # any JSON/YAML value
            fields:                     # optional per-field overrides
              foo.num: {required: true}
    """
    path = forms_file()
    raw = read_yaml(path).get("forms") or {}
    if not isinstance(raw, dict):
        log.warning("Ignoring %s: 'forms' must be a mapping", path)
        return {}

    forms: Dict[str, Dict[str, Any]] = {}
    for name, entry in raw.items():
        if not isinstance(entry, dict) or "example" not in entry:
            log.warning("Skipping form %r in %s: missing 'example'", name, path)
            continue
        forms[str(name)] = {
            "description": entry.get("description") or "",
            "example": entry["example"],
            "fields": entry.get("fields") or {},
        }
    log.debug("Loaded %d form(s) from %s", len(forms), path)
    return forms


def list_forms() -> List[str]:
    return list(load_forms().keys())


def get_form(name: str) -> Dict[str, Any]:
    forms = load_forms()
    if name not in forms:
        raise KeyError(f"unknown form: {name}")
    return forms[name]


# ────────────────────────────────────────────────────────────
# Environment
# ────────────────────────────────────────────────────────────
def search_url_from_env() -> str:
    return os.getenv("CLI_SEARCH_URL") or DEFAULT_SEARCH_URL


def search_timeout() -> float:
    raw = os.getenv("CLI_SEARCH_TIMEOUT", "")
    try:
        return float(raw) if raw else float(DEFAULT_SEARCH_TIMEOUT)
    except ValueError:
        log.warning("Invalid CLI_SEARCH_TIMEOUT=%r, using %ss", raw, DEFAULT_SEARCH_TIMEOUT)
        return float(DEFAULT_SEARCH_TIMEOUT)


# ────────────────────────────────────────────────────────────
# Debug helpers
# ────────────────────────────────────────────────────────────
def debug_paths() -> None:
    """Print path resolution for debugging."""
    print(f"[D] Config module location: {Path(__file__).resolve()}")
    print(f"[D] State directory: {state_dir()}")
    print(f"[D] Forms file: {forms_file()} (exists: {forms_file().exists()})")


if __name__ == "__main__":
    debug_paths()
    print(f"[D] Forms: {list_forms()}")
