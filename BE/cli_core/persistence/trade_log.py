# BE/cli_core/persistence/trade_log.py
from __future__ import annotations

from dataclasses import dataclass, asdict, field
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..config import trades_file
from ..utils.io import append_jsonl, iter_jsonl
from ..utils.logging import get_logger

log = get_logger(__name__)


@dataclass
class TradeRecord:
    ts_utc: str                     # ISO 8601 UTC timestamp
    asset: str                      # free text: "Bitcoin", "AAPL", ...
    amount: float
    meta: Dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def now_utc_iso() -> str:
        return datetime.now(timezone.utc).replace(microsecond=0).isoformat()

    @classmethod
    def from_payload(cls, *, asset: str, amount: float, meta: Optional[Dict[str, Any]] = None) -> "TradeRecord":
        return cls(
            ts_utc=cls.now_utc_iso(),
            asset=asset.strip(),
            amount=float(amount),
            meta=meta or {},
        )


def log_trade(*, asset: str, amount: float, meta: Optional[Dict[str, Any]] = None,
              path: Optional[Path | str] = None) -> TradeRecord:
    """Append one trade to the JSONL trade log and return the stored record."""
    rec = TradeRecord.from_payload(asset=asset, amount=amount, meta=meta)
    target = Path(path) if path is not None else trades_file()
    append_jsonl(target, asdict(rec))
    log.info("Trade logged: %s of %s", rec.amount, rec.asset)
    return rec


def _parse_iso(dt: str) -> Optional[datetime]:
    try:
        return datetime.fromisoformat(dt.replace("Z", "+00:00"))
    except ValueError:
        return None


def load_trades(days: int = 7, path: Optional[Path | str] = None) -> List[Dict[str, Any]]:
    """
    Return trades from the last `days` days (inclusive), newest → oldest.
    Rows with an unreadable timestamp are kept.
    """
    source = Path(path) if path is not None else trades_file()
    cutoff = datetime.now(timezone.utc) - timedelta(days=max(0, days))
    items: List[Dict[str, Any]] = []
    for row in iter_jsonl(source):
        ts = _parse_iso(str(row.get("ts_utc", ""))) or cutoff
        if ts >= cutoff:
            items.append(row)
    items.sort(key=lambda r: r.get("ts_utc", ""), reverse=True)
    return items


def last_trade(path: Optional[Path | str] = None) -> Optional[Dict[str, Any]]:
    for row in load_trades(days=3650, path=path):
        return row
    return None
