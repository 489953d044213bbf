"""Command registry mapping names to command factories."""

import inspect
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Union

from cmd_box.commands.base import Command, CommandHook, FunctionCommand
from cmd_box.utils.logging import get_logger

if TYPE_CHECKING:
    from cmd_box.engine.interpreter import Interpreter

logger = get_logger(__name__)

CommandFactory = Callable[["Interpreter", list[Any]], Command]


@dataclass(frozen=True)
class CommandSpec:
    """Everything the dispatcher needs to build and route one command.

    Attributes:
        name: The name invocations use.
        factory: Called with (interpreter, args) to build an instance.
        undoable: Whether instances may be recorded on the undo stack.
        description: One-line help text.
    """

    name: str
    factory: CommandFactory
    undoable: bool = False
    description: str = ""

    def build(self, interp: "Interpreter", args: list[Any]) -> Command:
        """Construct a command instance; the constructor hook runs here."""
        command = self.factory(interp, list(args))
        command.name = self.name
        return command

    @classmethod
    def from_class(
        cls, command_class: type[Command], name: str | None = None
    ) -> "CommandSpec":
        """Create a spec for a :class:`Command` subclass."""
        # Own docstring only, never the base class one
        description = command_class.description or _first_line(
            command_class.__doc__
        )
        return cls(
            name=name if name is not None else command_class.name,
            factory=command_class,
            undoable=command_class.is_undoable(),
            description=description,
        )


def define_command(
    name: str,
    execute: CommandHook,
    undo: CommandHook | None = None,
    redo: CommandHook | None = None,
    setup: CommandHook | None = None,
    description: str = "",
) -> CommandSpec:
    """Build a spec from plain functions.

    Every hook receives the :class:`FunctionCommand` instance; ``setup``
    runs at construction and is where undo state should be captured.

    Example:
        spec = define_command(
            "add_to_x",
            setup=lambda cmd: setattr(cmd, "original", cmd.interp.get("x")),
            execute=lambda cmd: cmd.interp.set("x", cmd.original + cmd.args[0]),
            undo=lambda cmd: cmd.interp.set("x", cmd.original),
        )
    """
    if not callable(execute):
        raise TypeError(f"Command '{name}' needs a callable execute")

    def factory(interp: "Interpreter", args: list[Any]) -> Command:
        return FunctionCommand(
            interp,
            args,
            name=name,
            execute=execute,
            undo=undo,
            redo=redo,
            setup=setup,
        )

    return CommandSpec(
        name=name,
        factory=factory,
        undoable=undo is not None,
        description=description or _first_line(inspect.getdoc(execute)),
    )


Registrable = Union[CommandSpec, type[Command]]


class CommandRegistry:
    """Per-interpreter mapping of command names to :class:`CommandSpec`.

    Registering a name that already exists replaces the previous entry.
    Commands already built from the old entry keep their behaviour.

    Usage:
        registry = CommandRegistry()

        # Register a class, directly or as a decorator
        @registry.register
        class AddToX(Command):
            name = "add_to_x"
            ...

        # Or several specs at once
        registry.register([define_command("noop", execute=lambda cmd: None)])

        spec = registry.resolve("add_to_x")
    """

    def __init__(self) -> None:
        self._commands: dict[str, CommandSpec] = {}

    def register(self, item: Registrable | Iterable[Registrable]) -> Any:
        """Register one command, or an ordered sequence of commands.

        Returns the argument unchanged so this works as a class decorator.
        """
        if isinstance(item, CommandSpec) or inspect.isclass(item):
            self._register_one(item)
        else:
            for entry in item:
                self._register_one(entry)
        return item

    def _register_one(self, item: Registrable) -> None:
        if isinstance(item, CommandSpec):
            spec = item
        elif inspect.isclass(item) and issubclass(item, Command):
            spec = CommandSpec.from_class(item)
        else:
            raise TypeError(
                f"Expected a CommandSpec or Command subclass, got {item!r}"
            )

        if not isinstance(spec.name, str) or not spec.name:
            # Nothing can dispatch to it, but it is not an error either
            logger.warning("Ignoring command without a name: %r", spec)
            return

        if spec.name in self._commands:
            logger.debug("Replacing command '%s'", spec.name)
        self._commands[spec.name] = spec

    def resolve(self, name: str) -> CommandSpec | None:
        """Get a command spec by name, or None if not found."""
        return self._commands.get(name)

    def unregister(self, name: str) -> bool:
        """Unregister a command by name.

        Returns:
            True if unregistered, False if not found.
        """
        if name not in self._commands:
            return False
        del self._commands[name]
        return True

    def is_registered(self, name: str) -> bool:
        return name in self._commands

    def list_names(self) -> list[str]:
        """List command names in registration order."""
        return list(self._commands.keys())

    def clear(self) -> None:
        """Remove every command (mainly for testing)."""
        self._commands.clear()

    def get_command_info(self) -> list[dict[str, Any]]:
        """Name, description and undoability for each registered command."""
        return [
            {
                "name": spec.name,
                "description": spec.description,
                "undoable": spec.undoable,
            }
            for spec in self._commands.values()
        ]

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def __len__(self) -> int:
        return len(self._commands)


def _first_line(text: str | None) -> str:
    if not text:
        return ""
    return text.strip().splitlines()[0]
