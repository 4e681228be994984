# BE/app_cli/main.py
"""
Terminal assistant CLI.

Menu loop over four actions:
1. Configuration  – edit key/value pairs in config.json
2. Add User       – run a web search for the user-to-be and show the result
3. Trade          – log an asset trade to the JSONL trade log
4. Fill Out Form  – infer prompts from an example value (forms.yml), ask them,
                    print the assembled answer and keep it in session.json

Every action takes the prompt provider as its first argument so the same
flows run against the terminal or a scripted provider.
"""

from __future__ import annotations

import argparse
import json
from typing import Any, Callable, Dict, List, Optional

from dotenv import load_dotenv

from .terminal_ui import (
    TerminalPromptProvider,
    note,
    outro,
    print_header,
    print_kv,
    print_trades,
    prompt_main_menu,
)

from cli_core.config import config_file, load_forms, state_dir
from cli_core.persistence import config_store, session_store
from cli_core.persistence.trade_log import load_trades, log_trade
from cli_core.prompts import (
    CancelPolicy,
    FieldDescriptor,
    FormCancelled,
    PromptProvider,
    TypeHint,
    collect,
    customize_schema,
    describe_schema,
    infer_schema,
    is_cancel,
)
from cli_core.search import SearchClient, SearchHTTPError, SearchResult
from cli_core.utils.logging import apply_env_levels, get_logger, set_level

log = get_logger(__name__)


def _blank(answer: Any) -> bool:
    return is_cancel(answer) or not str(answer).strip()


# ────────────────────────────────────────────────────────────────────────────
# Configuration
# ────────────────────────────────────────────────────────────────────────────

def on_configure(provider: PromptProvider) -> Dict[str, Any]:
    """Prompt for key/value pairs until a blank key, then save config.json."""
    print_header("Configure your application")
    print("Enter key-value pairs:")

    path = config_file()
    config = config_store.load_config(path)

    while True:
        key = provider.ask_text("Enter a key (or leave blank to quit)")
        if _blank(key):
            break
        key = key.strip()

        existing = config.get(key) or ""
        value = provider.ask_text(f'Enter a value for "{key}"', str(existing) if existing else None)
        if is_cancel(value):
            note("Configuration canceled.")
            break

        config[key] = value or existing

    try:
        config_store.save_config(config, path)
        outro(f"Configuration saved to {path}")
    except OSError as e:
        log.error("Failed to save configuration: %s", e)
    return config


# ────────────────────────────────────────────────────────────────────────────
# Add user (search)
# ────────────────────────────────────────────────────────────────────────────

def on_add_user(provider: PromptProvider, client: Optional[SearchClient] = None) -> Optional[SearchResult]:
    print_header("Add a new user")

    query = provider.ask_text("Enter a search query (e.g. scala vs kotlin)")
    if _blank(query):
        note("Operation canceled.")
        return None

    print("Performing search...")
    client = client or SearchClient()
    try:
        result = client.search(query)
    except SearchHTTPError as e:
        log.error("Error performing search: %s", e)
        print(f"❌ Search failed: {e}")
        return None

    print_kv("URL", result.url)
    print_kv("Status", result.status_code)
    print("Search Results:")
    print(result.excerpt())
    outro("User added successfully!")
    return result


# ────────────────────────────────────────────────────────────────────────────
# Trade
# ────────────────────────────────────────────────────────────────────────────

def on_trade(provider: PromptProvider) -> Optional[Dict[str, Any]]:
    print_header("Trade an Asset")

    asset = provider.ask_text("Enter the asset to trade (e.g. Bitcoin, Ethereum, Apple Stock)")
    if _blank(asset):
        note("Operation canceled.")
        return None
    asset = asset.strip()

    amount_field = FieldDescriptor(
        path=("amount",),
        label=f"Enter the trade amount for {asset}",
        required=True,
        type_hint=TypeHint.FLOAT,
    )
    try:
        answer = collect((amount_field,), provider, cancel_policy=CancelPolicy.ABORT)
    except FormCancelled:
        note("Operation canceled.")
        return None
    amount = answer["amount"]

    print(f"Trading {amount} of {asset}...")
    try:
        record = log_trade(asset=asset, amount=amount)
    except OSError as e:
        log.error("Error saving the trade: %s", e)
        return None

    outro(f"Trade successfully logged: {amount} of {asset}")
    print_header("Recent trades")
    print_trades(load_trades(days=7)[:5])
    return {"asset": record.asset, "amount": record.amount, "ts_utc": record.ts_utc}


# ────────────────────────────────────────────────────────────────────────────
# Fill out form
# ────────────────────────────────────────────────────────────────────────────

def _choose_form(provider: PromptProvider, forms: Dict[str, Dict[str, Any]]) -> Optional[str]:
    names = list(forms)
    labels = [f"{n} – {forms[n]['description']}" if forms[n]["description"] else n for n in names]
    choice = provider.ask_choice("Which form would you like to fill out?", labels)
    if is_cancel(choice):
        return None
    return names[labels.index(choice)]


def on_fill_out_form(
    provider: PromptProvider,
    form_name: Optional[str] = None,
    *,
    cancel_policy: CancelPolicy = CancelPolicy.CONTINUE,
) -> Optional[Any]:
    forms = load_forms()
    if not forms:
        note("No forms configured (see CLI_FORMS_FILE).")
        return None

    if form_name is None:
        form_name = _choose_form(provider, forms)
        if form_name is None:
            note("Operation canceled.")
            return None
    if form_name not in forms:
        print(f"❌ Unknown form '{form_name}'. Available: {', '.join(forms)}")
        return None

    form = forms[form_name]
    schema = infer_schema(form["example"])
    if form["fields"]:
        schema = customize_schema(schema, form["fields"])

    print_header(f"Prompts for '{form_name}'")
    print(json.dumps(describe_schema(schema), indent=2))

    try:
        data = collect(schema, provider, cancel_policy=cancel_policy)
    except FormCancelled as e:
        note(f"Form canceled at '{e.field_name}'. Nothing was saved.")
        print(json.dumps(e.partial, indent=2, ensure_ascii=False))
        return None

    print_header("Answers")
    print(json.dumps(data, indent=2, ensure_ascii=False))
    session_store.set(f"form:{form_name}", data)
    outro(f"Form '{form_name}' saved to session.")
    return data


# ────────────────────────────────────────────────────────────────────────────
# Menu loop & entry point
# ────────────────────────────────────────────────────────────────────────────

def run_menu(provider: PromptProvider, *, cancel_policy: CancelPolicy = CancelPolicy.CONTINUE) -> List[str]:
    """
    Dispatch menu choices until Quit or a cancelled menu prompt.
    Returns the actions that ran, in order.
    """
    handlers: Dict[str, Callable[[PromptProvider], Any]] = {
        "config": on_configure,
        "addUser": on_add_user,
        "trade": on_trade,
        "form": lambda p: on_fill_out_form(p, cancel_policy=cancel_policy),
    }
    ran: List[str] = []

    while True:
        action = prompt_main_menu(provider)
        if is_cancel(action):
            outro("Exiting...")
            return ran
        if action == "quit":
            outro("Goodbye!")
            return ran

        handler = handlers.get(action)
        if handler is None:
            print("Unknown action!")
            continue
        ran.append(action)
        try:
            handler(provider)
        except Exception as e:
            log.exception("Action %r failed", action)
            print(f"\n❌ {action} failed: {e}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Terminal assistant: configure, add user, trade, fill out forms")
    parser.add_argument("--form", help="Fill out this form from forms.yml and exit")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Abandon a form on the first cancelled prompt instead of skipping ahead",
    )
    parser.add_argument(
        "--log-level",
        metavar="LEVEL",
        help="Log level for every module (overrides CLI_LOG_LEVEL), e.g. debug",
    )
    args = parser.parse_args(argv)

    # .env may set CLI_STATE_DIR, CLI_FORMS_FILE, CLI_SEARCH_URL, ...
    load_dotenv()
    apply_env_levels()
    if args.log_level:
        try:
            set_level(args.log_level)
        except ValueError as e:
            parser.error(str(e))
    log.debug("State directory: %s", state_dir())

    policy = CancelPolicy.ABORT if args.strict else CancelPolicy.CONTINUE
    provider = TerminalPromptProvider()

    try:
        if args.form:
            data = on_fill_out_form(provider, args.form, cancel_policy=policy)
            return 0 if data is not None else 1
        print_header("Welcome to the CLI!")
        run_menu(provider, cancel_policy=policy)
    except KeyboardInterrupt:
        print("\n\n👋 Bye!")
    return 0


if __name__ == "__main__":
    import sys
    sys.exit(main())
