"""CLI layer for cmd-box.

Usage:
    cmd-box run script.json --context '{"x": 1}'
    cmd-box exec '["incr", "x", 2]' '["undo"]'
    cmd-box repl
"""

from cmd_box.cli.app import app, main
from cmd_box.cli.context import create_interpreter
from cmd_box.cli.options import (
    ContextOption,
    FormatOption,
    ModuleOption,
    VerboseOption,
)

__all__ = [
    # App
    "app",
    "main",
    # Context
    "create_interpreter",
    # Options
    "ContextOption",
    "FormatOption",
    "ModuleOption",
    "VerboseOption",
]
