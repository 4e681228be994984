# BE/cli_core/utils/logging.py
"""
Unified logger factory for the assistant.
- Colorful, short console output for CLI
- Optional file handler (set CLI_LOG_FILE or pass file_path)
- Levels from CLI_LOG_LEVEL: a global level plus per-module overrides,
  e.g. CLI_LOG_LEVEL="warning,cli_core.prompts=debug"
- set_level() / apply_env_levels() retune loggers that already exist
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Iterator, Optional, Tuple, Union

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "warn": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


class _ConsoleFormatter(logging.Formatter):
    # simple, compact format
    default_fmt = "[%(levelname).1s] %(message)s"
    debug_fmt = "[%(levelname).1s] %(name)s: %(message)s"

    def __init__(self, verbose: bool = False):
        fmt = self.debug_fmt if verbose else self.default_fmt
        super().__init__(fmt)

    # add colors if TTY
    def format(self, record: logging.LogRecord) -> str:  # pragma: no cover - cosmetics
        msg = super().format(record)
        if not os.isatty(1):
            return msg
        level = record.levelno
        if level >= logging.ERROR:
            return f"\033[91m{msg}\033[0m"
        if level >= logging.WARNING:
            return f"\033[93m{msg}\033[0m"
        if level >= logging.INFO:
            return f"\033[92m{msg}\033[0m"
        return f"\033[90m{msg}\033[0m"


# ────────────────────────────────────────────────────────────
# Level parsing
# ────────────────────────────────────────────────────────────
def parse_level(text: Union[str, int, None]) -> Optional[int]:
    """'debug' / 'DEBUG' / '10' / 10 → 10; anything unrecognised → None."""
    if text is None:
        return None
    if isinstance(text, int):
        return text
    text = text.strip().lower()
    if text.isdigit():
        return int(text)
    return LOG_LEVELS.get(text)


def parse_level_spec(spec: str) -> Tuple[Optional[int], Dict[str, int]]:
    """
    Split "warning,cli_core.search=debug" into (WARNING, {"cli_core.search": DEBUG}).
    Bad entries are skipped.
    """
    default: Optional[int] = None
    overrides: Dict[str, int] = {}
    for part in spec.split(","):
        part = part.strip()
        if not part:
            continue
        if "=" in part:
            prefix, _, value = part.partition("=")
            level = parse_level(value)
            if prefix.strip() and level is not None:
                overrides[prefix.strip()] = level
        else:
            level = parse_level(part)
            if level is not None:
                default = level
    return default, overrides


def _matches(name: str, prefix: str) -> bool:
    return not prefix or name == prefix or name.startswith(prefix + ".")


def _env_level(name: str, default: int) -> int:
    env_default, overrides = parse_level_spec(os.getenv("CLI_LOG_LEVEL", ""))
    # longest matching module prefix wins
    best = max((p for p in overrides if _matches(name, p)), key=len, default=None)
    if best is not None:
        return overrides[best]
    return env_default if env_default is not None else default


# ────────────────────────────────────────────────────────────
# Factory
# ────────────────────────────────────────────────────────────
def get_logger(name: str = "cli", *, level: int = logging.INFO, file_path: Optional[str | Path] = None) -> logging.Logger:
    """
    Create/reuse a namespaced logger with console + optional file output.
    Idempotent: calling twice returns the same configured logger.
    """
    logger = logging.getLogger(name)
    if getattr(logger, "_cli_configured", False):
        return logger

    requested = level
    level = _env_level(name, requested)
    logger.setLevel(level)

    # Console
    ch = logging.StreamHandler()
    ch.setLevel(level)
    verbose = os.getenv("CLI_LOG_VERBOSE", "").lower() in {"1", "true", "yes"}
    ch.setFormatter(_ConsoleFormatter(verbose=verbose))
    logger.addHandler(ch)

    # File (opt-in)
    file_env = os.getenv("CLI_LOG_FILE")
    path = file_path or file_env
    if path:
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(p, encoding="utf-8")
        fh.setLevel(level)
        fh.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logger.addHandler(fh)

    logger._cli_configured = True  # type: ignore[attr-defined]
    logger._cli_default_level = requested  # type: ignore[attr-defined]
    return logger


def _configured_loggers() -> Iterator[logging.Logger]:
    for logger in list(logging.Logger.manager.loggerDict.values()):
        if isinstance(logger, logging.Logger) and getattr(logger, "_cli_configured", False):
            yield logger


def _retune(logger: logging.Logger, level: int) -> None:
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)


def set_level(level: Union[str, int], prefix: str = "") -> int:
    """
    Change the level of every logger made by get_logger whose name is
    `prefix` or below it (all of them when prefix is empty). Returns how
    many loggers changed.
    """
    value = parse_level(level)
    if value is None:
        raise ValueError(f"unknown log level: {level!r}")
    count = 0
    for logger in _configured_loggers():
        if _matches(logger.name, prefix):
            _retune(logger, value)
            count += 1
    return count


def apply_env_levels() -> None:
    """Re-read CLI_LOG_LEVEL (e.g. after load_dotenv) for loggers that already exist."""
    for logger in _configured_loggers():
        default = getattr(logger, "_cli_default_level", logging.INFO)
        _retune(logger, _env_level(logger.name, default))
