# ============================================================================
# tests/test_cli.py
# Terminal prompt provider, menu loop and the four CLI actions
# ============================================================================

import json

import pytest

from app_cli import main as cli
from app_cli.terminal_ui import MENU_ACTIONS, TerminalPromptProvider, format_local_ts, prompt_main_menu
from cli_core.config import load_forms
from cli_core.persistence import config_store, session_store
from cli_core.persistence.trade_log import load_trades
from cli_core.prompts import CANCEL, CancelPolicy, collect, infer_schema


def _menu_label(key):
    for k, label, hint in MENU_ACTIONS:
        if k == key:
            return f"{label} ({hint})" if hint else label
    raise KeyError(key)


class FakeInput:
    """Replays lines for input(); an Exception instance is raised instead."""

    def __init__(self, lines):
        self.lines = list(lines)
        self.prompts = []

    def __call__(self, prompt=""):
        self.prompts.append(prompt)
        item = self.lines.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item


# ── terminal provider ───────────────────────────────────────────────────────

def test_ask_text_shows_placeholder():
    fake = FakeInput(["hi", ""])
    provider = TerminalPromptProvider(fake)
    assert provider.ask_text("Name", "Ada") == "hi"
    assert provider.ask_text("Other") == ""
    assert fake.prompts == ["Name [Ada]: ", "Other: "]


@pytest.mark.parametrize("exc", [EOFError(), KeyboardInterrupt()])
def test_interrupt_at_prompt_is_a_cancel(exc):
    provider = TerminalPromptProvider(FakeInput([exc]))
    assert provider.ask_text("Name") is CANCEL


def test_ask_choice_by_number_or_text(capsys):
    provider = TerminalPromptProvider(FakeInput(["abc", "9", "2", "buy"]))
    assert provider.ask_choice("Side", ["buy", "sell"]) == "sell"
    assert provider.ask_choice("Side", ("buy", "sell")) == "buy"
    assert capsys.readouterr().out.count("Please enter a number between 1 and 2.") == 2


def test_ask_confirm_default_and_retry(capsys):
    provider = TerminalPromptProvider(FakeInput(["", "maybe", "YES", EOFError()]))
    assert provider.ask_confirm("More?") is False
    assert provider.ask_confirm("More?") is True
    assert provider.ask_confirm("More?") is CANCEL
    assert "Please enter 'y' for yes or 'n' for no." in capsys.readouterr().out


def test_confirm_default_yes():
    provider = TerminalPromptProvider(FakeInput([""]), confirm_default=True)
    assert provider.ask_confirm("More?") is True


def test_terminal_provider_drives_collector(capsys):
    fake = FakeInput(["abc", "3", "", "a", "y", "b", ""])
    provider = TerminalPromptProvider(fake)
    result = collect(infer_schema({"qty": 1, "flag": True, "tags": [""]}), provider)
    assert result == {"qty": 3, "flag": True, "tags": ["a", "b"]}
    assert "⚠️  Invalid integer: abc" in capsys.readouterr().out
    assert fake.prompts[0] == "Qty [1]: "


def test_main_menu_maps_labels_to_keys(scripted):
    assert prompt_main_menu(scripted([_menu_label("trade")])) == "trade"
    assert prompt_main_menu(scripted([CANCEL])) is CANCEL


def test_format_local_ts_handles_garbage():
    assert format_local_ts("not a date") == "not a date"
    assert format_local_ts("2026-01-01T00:00:00+00:00").startswith("20")


# ── configure ───────────────────────────────────────────────────────────────

def test_configure_adds_and_keeps_values(state_dir, scripted):
    config_store.save_config({"apiKey": "old"})
    provider = scripted(["apiKey", "", "url", "http://s", ""])
    result = cli.on_configure(provider)

    assert result == {"apiKey": "old", "url": "http://s"}
    assert config_store.load_config() == result
    assert provider.calls[1] == ("text", 'Enter a value for "apiKey"', "old")


def test_configure_cancel_value_still_saves_earlier_keys(state_dir, scripted, capsys):
    provider = scripted(["a", "1", "b", CANCEL])
    cli.on_configure(provider)
    assert config_store.load_config() == {"a": "1"}
    assert "Configuration canceled." in capsys.readouterr().out


# ── add user ────────────────────────────────────────────────────────────────

class _StubSearch:
    def __init__(self, result=None, error=None):
        self.result, self.error, self.queries = result, error, []

    def search(self, query):
        self.queries.append(query)
        if self.error:
            raise self.error
        return self.result


def test_add_user_prints_results(scripted, capsys):
    from cli_core.search import SearchResult

    stub = _StubSearch(SearchResult("q", "http://x?q=q", 200, "text/html", "<p>found</p>"))
    assert cli.on_add_user(scripted(["scala vs kotlin"]), client=stub) is stub.result
    out = capsys.readouterr().out
    assert "<p>found</p>" in out
    assert "User added successfully!" in out
    assert stub.queries == ["scala vs kotlin"]


def test_add_user_cancel_and_failure(scripted, capsys):
    from cli_core.search import SearchHTTPError

    assert cli.on_add_user(scripted([CANCEL]), client=_StubSearch()) is None
    assert "Operation canceled." in capsys.readouterr().out

    failing = _StubSearch(error=SearchHTTPError("HTTP 500"))
    assert cli.on_add_user(scripted(["q"]), client=failing) is None
    assert "Search failed" in capsys.readouterr().out


# ── trade ───────────────────────────────────────────────────────────────────

def test_trade_reasks_bad_amount_and_logs(state_dir, scripted, capsys):
    provider = scripted(["Bitcoin", "lots", "", "0.5"])
    trade = cli.on_trade(provider)

    assert trade["asset"] == "Bitcoin"
    assert trade["amount"] == 0.5
    assert provider.warnings == ["Invalid float: lots"]
    assert [r["asset"] for r in load_trades()] == ["Bitcoin"]
    out = capsys.readouterr().out
    assert "Trade successfully logged: 0.5 of Bitcoin" in out
    assert "Recent trades" in out


@pytest.mark.parametrize("answers", [[CANCEL], ["  "], ["ETH", CANCEL]])
def test_trade_cancel_logs_nothing(state_dir, scripted, answers):
    assert cli.on_trade(scripted(answers)) is None
    assert not (state_dir / "trades.jsonl").exists()


# ── fill out form ───────────────────────────────────────────────────────────

def test_fill_out_named_form(state_dir, scripted, capsys):
    provider = scripted(["", "widget", "", False])
    data = cli.on_fill_out_form(provider, "objects")

    assert data == {"foo": {"objects": [{"innerName": "widget", "innerAmount": 4.5}]}}
    assert session_store.get("form:objects") == data
    out = capsys.readouterr().out
    assert '"field_name": "foo.objects"' in out
    assert json.dumps(data, indent=2) in out


def test_fill_out_form_chosen_from_menu(state_dir, scripted):
    forms = load_forms()
    label = f"user – {forms['user']['description']}"
    provider = scripted([label, "Ada", "", "", "owner", "", "admin", False])
    data = cli.on_fill_out_form(provider)

    assert data == {"name": "Ada", "role": "owner", "admin": False, "tags": ["admin"]}
    assert provider.calls[0][0] == "choice"


def test_fill_out_form_strict_cancel_saves_nothing(state_dir, scripted, capsys):
    provider = scripted([CANCEL])
    assert cli.on_fill_out_form(provider, "objects", cancel_policy=CancelPolicy.ABORT) is None
    assert session_store.has("form:objects") is False
    assert "Form canceled at 'innerName'" in capsys.readouterr().out


def test_fill_out_unknown_form(state_dir, scripted, capsys):
    assert cli.on_fill_out_form(scripted([]), "nope") is None
    assert "Unknown form 'nope'" in capsys.readouterr().out


# ── menu loop & entry point ─────────────────────────────────────────────────

def test_run_menu_dispatches_until_quit(state_dir, scripted):
    provider = scripted([_menu_label("trade"), "ETH", "2", _menu_label("quit")])
    assert cli.run_menu(provider) == ["trade"]
    assert load_trades()[0]["amount"] == 2.0


def test_run_menu_exits_on_cancel(scripted, capsys):
    assert cli.run_menu(scripted([CANCEL])) == []
    assert "Exiting..." in capsys.readouterr().out


def test_run_menu_survives_failing_action(scripted, monkeypatch, capsys):
    def boom(provider):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(cli, "on_configure", boom)
    provider = scripted([_menu_label("config"), _menu_label("quit")])
    assert cli.run_menu(provider) == ["config"]
    assert "config failed: disk on fire" in capsys.readouterr().out


def test_main_fills_form_from_flag(state_dir, monkeypatch):
    monkeypatch.setattr("builtins.input", FakeInput(["", "w", "", ""]))
    assert cli.main(["--form", "objects"]) == 0
    assert session_store.get("form:objects") == {"foo": {"objects": [{"innerName": "w", "innerAmount": 4.5}]}}


def test_main_strict_flag_aborts_form(state_dir, monkeypatch):
    monkeypatch.setattr("builtins.input", FakeInput([EOFError()]))
    assert cli.main(["--form", "objects", "--strict"]) == 1
    assert session_store.get("form:objects") is None
