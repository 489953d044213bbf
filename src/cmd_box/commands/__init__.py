"""Command implementations for cmd-box.

This module provides the command pattern infrastructure: the
:class:`Command` base class, command specs and the per-interpreter
registry, plus the commands every interpreter ships with.

Usage:
    from cmd_box.commands import Command, define_command

    # Define a command as a class
    class AddToX(Command):
        name = "add_to_x"

        def setup(self, n: int) -> None:
            self.original = self.interp.get("x")
            self.n = n

        def execute(self) -> None:
            self.interp.set("x", self.original + self.n)

        def undo(self) -> None:
            self.interp.set("x", self.original)

    # Or from functions
    spec = define_command("shout", execute=lambda cmd: cmd.interp.stdout("!"))

    interp.register([AddToX, spec])
"""

from cmd_box.commands.base import (
    Command,
    CommandResult,
    DispatchStatus,
    FunctionCommand,
)
from cmd_box.commands.builtin import BUILTIN_COMMANDS, GroupCommand, ProcCommand
from cmd_box.commands.context_ops import CONTEXT_COMMANDS
from cmd_box.commands.registry import CommandRegistry, CommandSpec, define_command

__all__ = [
    # Base classes
    "Command",
    "CommandResult",
    "DispatchStatus",
    "FunctionCommand",
    # Registry
    "CommandRegistry",
    "CommandSpec",
    "define_command",
    # Commands
    "BUILTIN_COMMANDS",
    "CONTEXT_COMMANDS",
    "GroupCommand",
    "ProcCommand",
]
