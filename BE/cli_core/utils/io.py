# BE/cli_core/utils/io.py
"""
Lightweight file I/O helpers.
- YAML + JSON loaders
- Atomic writes for text/JSON
- Append-only JSONL (one object per line)

No runtime dependency on the rest of the app.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable

import yaml


def ensure_dir(path: Path | str) -> Path:
    p = Path(path)
    p.mkdir(parents=True, exist_ok=True)
    return p


def read_yaml(path: Path | str) -> Dict[str, Any]:
    """
    Load a YAML file into a dict. Returns {} if the file is missing or empty.
    A top-level list is wrapped as {"_": [...]} for callers expecting a mapping.
    """
    p = Path(path)
    if not p.exists():
        return {}
    with p.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if isinstance(data, dict):
        return data
    return {"_": data}


def read_json(path: Path | str, default: Any = None) -> Any:
    """Load JSON from `path`; `default` when the file does not exist.

    Decoding errors propagate (json.JSONDecodeError) so callers can decide
    whether a corrupt file is fatal.
    """
    p = Path(path)
    if not p.exists():
        return default
    with p.open("r", encoding="utf-8") as f:
        return json.load(f)


def atomic_write_text(path: Path | str, content: str) -> None:
    """
    Write text to file atomically (write to temp → replace).
    """
    p = Path(path)
    ensure_dir(p.parent)
    tmp = p.with_suffix(p.suffix + ".tmp")
    with tmp.open("w", encoding="utf-8") as f:
        f.write(content)
    tmp.replace(p)


def write_json(path: Path | str, data: Any, *, indent: int = 2) -> None:
    """
    Serialize to JSON with an atomic write.
    """
    atomic_write_text(path, json.dumps(data, indent=indent, ensure_ascii=False))


def append_jsonl(path: Path | str, obj: Dict[str, Any]) -> None:
    p = Path(path)
    ensure_dir(p.parent)
    with p.open("a", encoding="utf-8") as f:
        f.write(json.dumps(obj, ensure_ascii=False) + "\n")


def iter_jsonl(path: Path | str) -> Iterable[Dict[str, Any]]:
    """Yield each decodable line of a JSONL file; broken lines are skipped."""
    p = Path(path)
    if not p.exists():
        return
    with p.open("r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            try:
                yield json.loads(line)
            except json.JSONDecodeError:
                continue
