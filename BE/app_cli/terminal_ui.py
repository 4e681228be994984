# BE/app_cli/terminal_ui.py
"""
Terminal UI layer for the assistant CLI.

This module handles all user interaction and pretty printing: the main menu,
the TerminalPromptProvider the form engine talks to, and small output helpers.
Ctrl-C / Ctrl-D at a prompt cancels that prompt (returns CANCEL) instead of
killing the program; callers decide what a cancellation means.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union
from zoneinfo import ZoneInfo

import tzlocal

from cli_core.prompts import CANCEL, PromptProvider, is_cancel

# Detect USER's local timezone (fallback to UTC)
try:
    LOCAL_TZ = ZoneInfo(tzlocal.get_localzone_name())
except Exception:
    LOCAL_TZ = ZoneInfo("UTC")


# ────────────────────────────────────────────────────────────────────────────
# Pretty output helpers
# ────────────────────────────────────────────────────────────────────────────

def print_header(title: str) -> None:
    print("\n" + title)
    print("─" * max(12, len(title)))


def print_line() -> None:
    print("—" * 36)


def print_kv(key: str, value) -> None:
    print(f"{key}: {value}")


def print_table(headers: List[str], rows: List[List[object]]) -> None:
    widths = [len(h) for h in headers]
    for r in rows:
        for i, cell in enumerate(r):
            widths[i] = max(widths[i], len(str(cell)))

    def fmt_row(r: List[object]) -> str:
        return "  ".join(str(c).ljust(widths[i]) for i, c in enumerate(r))

    print(fmt_row(headers))
    print(fmt_row(["-" * w for w in widths]))
    for r in rows:
        print(fmt_row(r))


def note(message: str) -> None:
    print(f"ℹ️  {message}")


def outro(message: str) -> None:
    print_line()
    print(message)


def format_local_ts(ts_utc: str) -> str:
    """'2026-10-18T07:00:00+00:00' → '2026-10-18 09:00 CEST' in the user's timezone."""
    try:
        dt = datetime.fromisoformat(ts_utc.replace("Z", "+00:00"))
    except (AttributeError, ValueError):
        return str(ts_utc)
    local = dt.astimezone(LOCAL_TZ)
    return f"{local.strftime('%Y-%m-%d %H:%M')} {local.tzname() or ''}".strip()


def print_trades(rows: List[Dict[str, Any]]) -> None:
    if not rows:
        print("No trades logged yet.")
        return
    print_table(
        ["When", "Asset", "Amount"],
        [[format_local_ts(r.get("ts_utc", "")), r.get("asset", "?"), r.get("amount", "?")] for r in rows],
    )


# ────────────────────────────────────────────────────────────────────────────
# Prompt provider
# ────────────────────────────────────────────────────────────────────────────

class TerminalPromptProvider:
    """
    PromptProvider backed by input()/print().

    `input_fn` defaults to the builtin; tests pass a fake. Confirmations
    default to "no" on a bare Enter so "Add another?" loops end easily.
    """

    def __init__(self, input_fn: Optional[Callable[[str], str]] = None, *, confirm_default: bool = False) -> None:
        self._input = input_fn or input
        self.confirm_default = confirm_default

    def _read(self, prompt: str) -> Union[str, Any]:
        try:
            return self._input(prompt)
        except (EOFError, KeyboardInterrupt):
            print()
            return CANCEL

    def ask_text(self, label: str, placeholder: Optional[str] = None):
        suffix = f" [{placeholder}]" if placeholder else ""
        return self._read(f"{label}{suffix}: ")

    def ask_choice(self, label: str, options: Sequence[str]):
        print(f"\n{label}")
        for i, option in enumerate(options, 1):
            print(f"  {i}) {option}")
        while True:
            ans = self._read("Enter number: ")
            if is_cancel(ans):
                return CANCEL
            ans = ans.strip()
            if ans in options:
                return ans
            try:
                choice_num = int(ans)
            except ValueError:
                choice_num = 0
            if 1 <= choice_num <= len(options):
                return options[choice_num - 1]
            print(f"Please enter a number between 1 and {len(options)}.")

    def ask_confirm(self, label: str):
        hint = "[Y/n]" if self.confirm_default else "[y/N]"
        while True:
            ans = self._read(f"{label} {hint}: ")
            if is_cancel(ans):
                return CANCEL
            ans = ans.strip().lower()
            if ans == "":
                return self.confirm_default
            if ans in {"y", "yes"}:
                return True
            if ans in {"n", "no"}:
                return False
            print("Please enter 'y' for yes or 'n' for no.")

    def warn(self, message: str) -> None:
        print(f"⚠️  {message}")


# ────────────────────────────────────────────────────────────────────────────
# Main menu
# ────────────────────────────────────────────────────────────────────────────

MENU_ACTIONS: List[Tuple[str, str, str]] = [
    ("config", "Configuration", "save key/value settings"),
    ("addUser", "Add User", "search before adding a user"),
    ("trade", "Trade", "log an asset trade"),
    ("form", "Fill Out Form", "answer prompts inferred from an example"),
    ("quit", "Quit", ""),
]


def prompt_main_menu(provider: PromptProvider):
    """Return the chosen action key, or CANCEL."""
    labels = [f"{label} ({hint})" if hint else label for _, label, hint in MENU_ACTIONS]
    choice = provider.ask_choice("What would you like to do?", labels)
    if is_cancel(choice):
        return CANCEL
    return MENU_ACTIONS[labels.index(choice)][0]
