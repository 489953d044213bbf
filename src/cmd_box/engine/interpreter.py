"""The interpreter: registry, undo stack and dispatcher in one object.

Usage:
    interp = Interpreter({"x": 1})
    interp.register(define_command(
        "add_to_x",
        setup=lambda cmd: setattr(cmd, "original", cmd.interp.get("x")),
        execute=lambda cmd: cmd.interp.set("x", cmd.original + cmd.args[0]),
        undo=lambda cmd: cmd.interp.set("x", cmd.original),
    ))

    interp.dispatch(["add_to_x", 3])
    interp.dispatch(["undo"])
    interp.parse('["redo"]')
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass
from typing import Any

from cmd_box.commands.base import Command, CommandResult, DispatchStatus
from cmd_box.commands.builtin import BUILTIN_COMMANDS
from cmd_box.commands.context_ops import CONTEXT_COMMANDS
from cmd_box.commands.registry import CommandRegistry, Registrable
from cmd_box.config import get_config
from cmd_box.config.schema import CmdBoxConfig
from cmd_box.engine import events
from cmd_box.engine.context import ExecutionContext
from cmd_box.engine.events import EventEmitter, Listener
from cmd_box.engine.stack import UndoStack
from cmd_box.exceptions import (
    MalformedInvocationError,
    UnknownCommandError,
)
from cmd_box.invocation import (
    REDO,
    UNDO,
    check_invocation,
    format_invocation,
    is_valid_invocation,
    parse_invocation,
)
from cmd_box.utils.logging import get_logger, log_with_context

logger = get_logger(__name__)

_UNSET: Any = object()

# Optional command sets enabled through EngineConfig.builtins
COMMAND_SETS: dict[str, list[type[Command]]] = {
    "context": CONTEXT_COMMANDS,
}


@dataclass(frozen=True)
class EngineState:
    """Snapshot of the undo stack, as returned by :meth:`Interpreter.get_state`."""

    stack_size: int
    stack_position: int
    save_position: int
    can_undo: bool
    can_redo: bool
    dirty: bool

    def as_dict(self) -> dict[str, Any]:
        """The public camelCase form used by hosts and the JSON output."""
        data = asdict(self)
        return {
            "stackSize": data["stack_size"],
            "stackPosition": data["stack_position"],
            "savePosition": data["save_position"],
            "canUndo": data["can_undo"],
            "canRedo": data["can_redo"],
            "dirty": data["dirty"],
        }


class Interpreter(EventEmitter):
    """Dispatch ``[name, *args]`` invocations and keep their undo history.

    Args:
        context: Initial context values, or a ready :class:`ExecutionContext`.
        config: Configuration. If None, uses the global config.
        listeners: Event listeners to attach before ``initialized`` fires.

    Notifications (see :mod:`cmd_box.engine.events`): ``initialized``,
    ``command``, ``stackChanged``, ``beforeUndo``/``afterUndo``,
    ``beforeRedo``/``afterRedo``, ``stdout`` and ``error``.
    """

    def __init__(
        self,
        context: Mapping[str, Any] | ExecutionContext | None = None,
        *,
        config: CmdBoxConfig | None = None,
        listeners: Mapping[str, Listener] | None = None,
    ) -> None:
        super().__init__()
        self.config = config if config is not None else get_config()
        if isinstance(context, ExecutionContext):
            self.context = context
        else:
            self.context = ExecutionContext(context)

        self.registry = CommandRegistry()
        self._history: list[Any] = []
        self._last_status: DispatchStatus | None = None
        self._last_result: Any = None
        self._stack = self._new_stack()

        self.registry.register(BUILTIN_COMMANDS)
        for set_name in self.config.engine.builtins:
            command_set = COMMAND_SETS.get(set_name)
            if command_set is None:
                logger.warning("Unknown builtin command set '%s'", set_name)
                continue
            self.registry.register(command_set)

        for event, callback in (listeners or {}).items():
            self.on(event, callback)

        self.emit(events.INITIALIZED)

    # --- registry ---

    def register(self, item: Registrable | Iterable[Registrable]) -> Any:
        """Register one command or a sequence of commands.

        Returns the argument, so this doubles as a class decorator.
        """
        return self.registry.register(item)

    add_command = register

    def unregister(self, name: str) -> bool:
        return self.registry.unregister(name)

    remove_command = unregister

    def list_commands(self) -> list[str]:
        return self.registry.list_names()

    # --- context ---

    def get(self, key: str, default: Any = None) -> Any:
        return self.context.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self.context.set(key, value)

    # --- dispatch ---

    def dispatch(self, invocation: Any, undoable: bool | None = None) -> CommandResult:
        """Run one invocation.

        Rejected invocations (malformed or unknown) never raise; they come
        back as a non-success :class:`CommandResult`. Exceptions raised by
        the command itself propagate after the ``command`` notification.

        Args:
            invocation: ``[name, *args]``.
            undoable: Record undoable commands on the stack. Defaults to
                ``config.engine.default_undoable``. When False the command
                runs once and can never be undone.

        Returns:
            The dispatch result.
        """
        if undoable is None:
            undoable = self.config.engine.default_undoable

        self._history.append(invocation)
        result: CommandResult | None = None
        try:
            result = self._dispatch(invocation, bool(undoable))
        except Exception as e:
            result = CommandResult.fail(DispatchStatus.FAILED, invocation, str(e))
            logger.debug("Command %s raised %r", format_invocation(invocation), e)
            raise
        finally:
            self._last_status = result.status if result else DispatchStatus.FAILED
            self.emit(events.COMMAND, invocation, result)
        return result

    execute = dispatch
    exec = dispatch

    def _dispatch(self, invocation: Any, undoable: bool) -> CommandResult:
        try:
            name, args = check_invocation(invocation)
        except MalformedInvocationError as e:
            return self._reject(DispatchStatus.MALFORMED, invocation, e)

        if name == UNDO:
            return self._undo(invocation)
        if name == REDO:
            return self._redo(invocation)

        spec = self.registry.resolve(name)
        if spec is None:
            return self._reject(
                DispatchStatus.UNKNOWN_COMMAND, invocation, UnknownCommandError(name)
            )

        command = spec.build(self, args)
        if spec.undoable and undoable:
            self._stack.execute(command)
            recorded = True
        else:
            command.execute()
            recorded = False

        log_with_context(
            logger,
            logging.DEBUG,
            f"Executed {name}",
            command=name,
            args=args,
            recorded=recorded,
        )
        return CommandResult.done(invocation, undoable=recorded)

    def _reject(
        self, status: DispatchStatus, invocation: Any, error: Exception
    ) -> CommandResult:
        logger.error("Rejected %s: %s", format_invocation(invocation), error)
        return CommandResult.fail(status, invocation, str(error))

    def parse(self, text: str) -> CommandResult:
        """Decode a JSON invocation and dispatch it.

        Text that is not valid JSON is rejected as malformed and still
        recorded in the history.
        """
        try:
            invocation = parse_invocation(text)
        except MalformedInvocationError as e:
            logger.error("Rejected %r: %s", text, e)
            self._history.append(text)
            self._last_status = DispatchStatus.MALFORMED
            result = CommandResult.fail(DispatchStatus.MALFORMED, text, str(e))
            self.emit(events.COMMAND, text, result)
            return result
        return self.dispatch(invocation)

    def validate_command(self, invocation: Any) -> bool:
        """Whether ``invocation`` would be accepted by :meth:`dispatch`."""
        if not is_valid_invocation(invocation):
            return False
        return invocation[0] in (UNDO, REDO) or invocation[0] in self.registry

    # --- undo / redo ---

    def _undo(self, invocation: Any) -> CommandResult:
        self.emit(events.BEFORE_UNDO)
        try:
            command = self._stack.peek_undo()
            if command is None:
                logger.info("No further undo information")
                return CommandResult.fail(DispatchStatus.NOTHING_TO_UNDO, invocation)
            self._stack.undo()
            logger.info("Undo %s", command.name)
            return CommandResult.done(invocation)
        finally:
            self.emit(events.AFTER_UNDO)

    def _redo(self, invocation: Any) -> CommandResult:
        self.emit(events.BEFORE_REDO)
        try:
            command = self._stack.peek_redo()
            if command is None:
                logger.info("Can not redo anymore")
                return CommandResult.fail(DispatchStatus.NOTHING_TO_REDO, invocation)
            self._stack.redo()
            logger.info("Redo %s", command.name)
            return CommandResult.done(invocation)
        finally:
            self.emit(events.AFTER_REDO)

    def undo(self) -> CommandResult:
        """Shorthand for ``dispatch(["undo"])``."""
        return self.dispatch([UNDO])

    def redo(self) -> CommandResult:
        """Shorthand for ``dispatch(["redo"])``."""
        return self.dispatch([REDO])

    # --- stack ---

    @property
    def stack(self) -> UndoStack:
        return self._stack

    def save(self) -> None:
        """Mark the current stack position as saved."""
        self._stack.save()

    def reset(self) -> "Interpreter":
        """Undo everything, then start over with an empty stack.

        Every recorded command is undone in reverse order, so the context
        returns to its state before the first undoable command.
        """
        while self._stack.can_undo():
            self._stack.undo()
        self._stack.off()
        self._stack = self._new_stack()
        logger.debug("Stack reset")
        self.emit(events.STACK_CHANGED)
        return self

    def get_state(self) -> EngineState:
        return EngineState(
            stack_size=len(self._stack),
            stack_position=self._stack.position,
            save_position=self._stack.save_position,
            can_undo=self._stack.can_undo(),
            can_redo=self._stack.can_redo(),
            dirty=self._stack.dirty(),
        )

    def _new_stack(self) -> UndoStack:
        stack = UndoStack()
        stack.on(events.CHANGED, lambda: self.emit(events.STACK_CHANGED))
        return stack

    # --- history and results ---

    @property
    def history(self) -> list[Any]:
        """Every invocation dispatched so far, including rejected ones."""
        return list(self._history)

    def last_command(self) -> Any:
        return self._history[-1] if self._history else None

    @property
    def last_status(self) -> DispatchStatus | None:
        return self._last_status

    def result(self, value: Any = _UNSET) -> Any:
        """Get the last result, or set it when called with a value."""
        if value is _UNSET:
            return self._last_result
        self._last_result = value
        return value

    # --- output ---

    def stdout(self, text: str) -> None:
        """Surface free text to the host. Empty strings are ignored."""
        if isinstance(text, str) and text:
            self.emit(events.STDOUT, text)

    def error(self, message: str) -> None:
        """Surface an error message to the host. Empty strings are ignored."""
        if isinstance(message, str) and message:
            self.emit(events.ERROR, message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(commands={len(self.registry)}, stack={self._stack!r})"
