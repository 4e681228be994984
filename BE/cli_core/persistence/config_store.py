# BE/cli_core/persistence/config_store.py
"""
Flat key/value configuration stored as JSON (config.json in the state dir).

    load_config()          -> dict (empty when missing or unreadable)
    save_config(data)      -> atomic write
    get("search_url")      -> value, or ConfigKeyError when missing/empty
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

from ..config import config_file
from ..utils.io import read_json, write_json
from ..utils.logging import get_logger

log = get_logger(__name__)


class ConfigKeyError(KeyError):
    pass


def _path(path: Optional[Path | str]) -> Path:
    return Path(path) if path is not None else config_file()


def load_config(path: Optional[Path | str] = None) -> Dict[str, Any]:
    p = _path(path)
    try:
        data = read_json(p, default={})
    except (OSError, json.JSONDecodeError) as e:
        log.warning("Error reading %s - using an empty configuration (%s)", p, e)
        return {}
    if not isinstance(data, dict):
        log.warning("%s does not hold a JSON object - using an empty configuration", p)
        return {}
    return data


def save_config(data: Dict[str, Any], path: Optional[Path | str] = None) -> Path:
    p = _path(path)
    write_json(p, data)
    log.info("Configuration saved to %s", p)
    return p


def get(key: str, path: Optional[Path | str] = None) -> Any:
    configuration = load_config(path)
    value = configuration.get(key)
    if value is None or value == "":
        raise ConfigKeyError(f"{key} is not defined in {_path(path).name}")
    return value
