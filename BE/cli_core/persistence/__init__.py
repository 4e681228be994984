# BE/cli_core/persistence/__init__.py
"""
Flat-file persistence used by the CLI actions:
- config_store: key/value config.json (get raises ConfigKeyError)
- session_store: key/value session.json, persisted on every set
- trade_log: append-only JSONL of logged trades

All paths default to cli_core.config.state_dir(); every function also takes
an explicit `path` for tests and scripts.
"""

from . import config_store, session_store  # noqa: F401
from .config_store import ConfigKeyError, load_config, save_config  # noqa: F401
from .trade_log import TradeRecord, log_trade, load_trades, last_trade  # noqa: F401

__all__ = [
    "config_store",
    "session_store",
    "ConfigKeyError",
    "load_config",
    "save_config",
    "TradeRecord",
    "log_trade",
    "load_trades",
    "last_trade",
]
