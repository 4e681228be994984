"""
CLI entrypoints for the terminal assistant.

This package wires the terminal UX (menus/prompts) to the reusable
logic in `cli_core`. Nothing here should know how forms are inferred or
how files are laid out; keep that inside cli_core.

Modules
-------
- main.py
    The executable entry-point: menu loop plus the four actions
    (configure, add user, trade, fill out form).

- terminal_ui.py
    All input/output routines for the terminal: the TerminalPromptProvider
    used by the form engine, the main menu, pretty printing helpers.

Conventions
-----------
- Actions receive a PromptProvider; they never call input() directly.
- Environment variables (state dir, forms file, search URL) are read by
  `cli_core.config`; `.env` is loaded once in main().

Run
---
`python -m app_cli.main` or the `ta-cli` console script.

"""
__all__ = ["main", "terminal_ui"]
