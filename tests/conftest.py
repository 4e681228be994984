"""Pytest configuration and shared fixtures for the assistant CLI."""
from typing import Any, List, Optional, Sequence, Tuple

import pytest

from cli_core.prompts import CANCEL


class ScriptedPromptProvider:
    """
    Feeds canned answers to the collector, one per ask_* call, in order.

    Every call is recorded in `calls` as (kind, label, extra) so tests can
    assert on what was asked. Warnings land in `warnings`.
    """

    def __init__(self, answers: Sequence[Any]):
        self.answers: List[Any] = list(answers)
        self.calls: List[Tuple[str, str, Any]] = []
        self.warnings: List[str] = []

    def _next(self, kind: str, label: str, extra: Any) -> Any:
        self.calls.append((kind, label, extra))
        if not self.answers:
            raise AssertionError(f"script exhausted at {kind} {label!r}")
        return self.answers.pop(0)

    def ask_text(self, label: str, placeholder: Optional[str] = None):
        return self._next("text", label, placeholder)

    def ask_choice(self, label: str, options: Sequence[str]):
        return self._next("choice", label, tuple(options))

    def ask_confirm(self, label: str):
        return self._next("confirm", label, None)

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    def labels(self, kind: Optional[str] = None) -> List[str]:
        return [label for k, label, _ in self.calls if kind is None or k == kind]


class AlwaysBlankProvider:
    """Submits empty input everywhere and never asks for more items."""

    def __init__(self):
        self.calls = 0

    def ask_text(self, label, placeholder=None):
        self.calls += 1
        return ""

    def ask_choice(self, label, options):
        self.calls += 1
        return options[0]

    def ask_confirm(self, label):
        self.calls += 1
        return False

    def warn(self, message):
        raise AssertionError(f"unexpected warning: {message}")


@pytest.fixture
def scripted():
    return ScriptedPromptProvider


@pytest.fixture
def blank_provider():
    return AlwaysBlankProvider()


@pytest.fixture
def state_dir(tmp_path, monkeypatch):
    """Point every state file (config/session/trades) at a temp directory."""
    monkeypatch.setenv("CLI_STATE_DIR", str(tmp_path))
    return tmp_path


__all__ = ["ScriptedPromptProvider", "AlwaysBlankProvider", "CANCEL"]
