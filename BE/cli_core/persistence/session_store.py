# BE/cli_core/persistence/session_store.py
"""
Session key/value store persisted to session.json after every `set`.
Read failures fall back to an empty session so the CLI keeps working.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

from ..config import session_file
from ..utils.io import read_json, write_json
from ..utils.logging import get_logger

log = get_logger(__name__)


def _path(path: Optional[Path | str]) -> Path:
    return Path(path) if path is not None else session_file()


def _read(path: Optional[Path | str] = None) -> Dict[str, Any]:
    p = _path(path)
    try:
        data = read_json(p, default={})
    except (OSError, json.JSONDecodeError) as e:
        log.error("Error reading session file %s: %s", p, e)
        return {}
    return data if isinstance(data, dict) else {}


def get(key: str, path: Optional[Path | str] = None) -> Any:
    return _read(path).get(key)


def has(key: str, path: Optional[Path | str] = None) -> bool:
    return key in _read(path)


def set(key: str, value: Any, path: Optional[Path | str] = None) -> None:  # noqa: A001
    data = _read(path)
    data[key] = value
    write_json(_path(path), data)
    log.debug("Session key %r saved", key)
