# BE/cli_core/prompts/provider.py
"""
The prompt-provider capability the collector talks to.

Concrete providers live elsewhere: the terminal one in app_cli.terminal_ui,
a scripted one in the test-suite. Every ask_* call either returns an answer or
the CANCEL sentinel when the user aborted that single prompt.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence, Union


class _Cancel:
    _instance: Optional["_Cancel"] = None

    def __new__(cls) -> "_Cancel":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "CANCEL"

    def __bool__(self) -> bool:
        return False


CANCEL = _Cancel()


def is_cancel(value: Any) -> bool:
    return value is CANCEL


class PromptProvider(Protocol):
    def ask_text(self, label: str, placeholder: Optional[str] = None) -> Union[str, _Cancel]:
        ...

    def ask_choice(self, label: str, options: Sequence[str]) -> Union[str, _Cancel]:
        ...

    def ask_confirm(self, label: str) -> Union[bool, _Cancel]:
        ...

    def warn(self, message: str) -> None:
        ...
