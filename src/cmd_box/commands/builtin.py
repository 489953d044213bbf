"""Composite commands every interpreter provides: ``proc`` and ``group``."""

from typing import Any

from cmd_box.commands.base import Command
from cmd_box.commands.registry import CommandSpec
from cmd_box.exceptions import (
    InvalidGroupError,
    MalformedInvocationError,
    UnknownCommandError,
)
from cmd_box.invocation import RESERVED_NAMES, check_invocation
from cmd_box.utils.logging import get_logger

logger = get_logger(__name__)


class ProcCommand(Command):
    """Dispatch each sub-invocation in order."""

    name = "proc"

    def setup(self, *invocations: Any) -> None:
        self.invocations = list(invocations)

    def execute(self) -> None:
        # Each entry goes through the full dispatcher and lands on the undo
        # stack on its own; proc itself is never recorded.
        for invocation in self.invocations:
            self.interp.dispatch(invocation)


class GroupCommand(Command):
    """Bundle undoable sub-invocations into a single undo stack entry.

    Every sub-invocation must be well formed, registered and undoable. If
    any is not, the group is built empty and does nothing, unless the
    interpreter runs with ``strict_groups``, in which case construction
    raises :class:`InvalidGroupError`.

    Sub-commands are all constructed up front, before any of them runs.
    """

    name = "group"

    def setup(self, *invocations: Any) -> None:
        self.commands: list[Command] = []
        try:
            specs = [self._resolve(invocation) for invocation in invocations]
        except InvalidGroupError as e:
            if self.interp.config.engine.strict_groups:
                raise
            logger.warning("Building empty group: %s", e)
            return

        for spec, invocation in zip(specs, invocations):
            self.commands.append(spec.build(self.interp, list(invocation[1:])))

    def _resolve(self, invocation: Any) -> CommandSpec:
        try:
            name, _ = check_invocation(invocation)
        except MalformedInvocationError as e:
            raise InvalidGroupError(str(e)) from e
        if name in RESERVED_NAMES:
            raise InvalidGroupError(f"'{name}' cannot be grouped")
        spec = self.interp.registry.resolve(name)
        if spec is None:
            raise InvalidGroupError(str(UnknownCommandError(name)))
        if not spec.undoable:
            raise InvalidGroupError(f"Command '{name}' is not undoable")
        return spec

    @property
    def empty(self) -> bool:
        return not self.commands

    def execute(self) -> None:
        for command in self.commands:
            command.execute()

    def undo(self) -> None:
        for command in reversed(self.commands):
            command.undo()

    def redo(self) -> None:
        for command in self.commands:
            command.redo()


BUILTIN_COMMANDS: list[type[Command]] = [ProcCommand, GroupCommand]
