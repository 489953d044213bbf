"""Generic commands over the execution context.

These let scripts and the CLI do useful work without host-specific
commands: ``set``, ``incr``, ``append``, ``echo`` and ``get``.
"""

import copy
from typing import Any

from cmd_box.commands.base import Command
from cmd_box.exceptions import CommandExecutionError

_MISSING = object()


class _ContextCommand(Command):
    """Write one context key, remembering its previous value for undo.

    The previous value is captured when the command executes rather than
    when it is built, so commands constructed together (as in a group) each
    see the effect of the ones before them.
    """

    key: str
    previous: Any = _MISSING

    def execute(self) -> None:
        current = self.interp.context.get(self.key, _MISSING)
        # the sentinel must survive by identity
        self.previous = current if current is _MISSING else copy.deepcopy(current)
        self.interp.set(self.key, self.compute(self.previous))

    def compute(self, current: Any) -> Any:
        raise NotImplementedError

    def undo(self) -> None:
        if self.previous is _MISSING:
            self.interp.context.delete(self.key)
        else:
            self.interp.set(self.key, copy.deepcopy(self.previous))


class SetCommand(_ContextCommand):
    """Set a context key to a value."""

    name = "set"

    def setup(self, key: str, value: Any) -> None:
        self.key = key
        self.value = value

    def compute(self, current: Any) -> Any:
        return copy.deepcopy(self.value)


class IncrCommand(_ContextCommand):
    """Add a number to a numeric context key (missing keys count as 0)."""

    name = "incr"

    def setup(self, key: str, amount: int | float = 1) -> None:
        self.key = key
        self.amount = amount

    def compute(self, current: Any) -> Any:
        if current is _MISSING:
            current = 0
        if not isinstance(current, (int, float)) or isinstance(current, bool):
            raise CommandExecutionError(
                f"Cannot increment '{self.key}': value {current!r} is not a number"
            )
        return current + self.amount


class AppendCommand(_ContextCommand):
    """Append a value to a list stored under a context key."""

    name = "append"

    def setup(self, key: str, value: Any) -> None:
        self.key = key
        self.value = value

    def compute(self, current: Any) -> Any:
        if current is _MISSING:
            current = []
        if not isinstance(current, list):
            raise CommandExecutionError(
                f"Cannot append to '{self.key}': value {current!r} is not a list"
            )
        return [*current, copy.deepcopy(self.value)]


class EchoCommand(Command):
    """Write the arguments to stdout."""

    name = "echo"

    def execute(self) -> None:
        self.interp.stdout(" ".join(str(arg) for arg in self.args))


class GetCommand(Command):
    """Store the value of a context key as the last result."""

    name = "get"

    def setup(self, key: str) -> None:
        self.key = key

    def execute(self) -> None:
        self.interp.result(self.interp.get(self.key))


CONTEXT_COMMANDS: list[type[Command]] = [
    SetCommand,
    IncrCommand,
    AppendCommand,
    EchoCommand,
    GetCommand,
]
