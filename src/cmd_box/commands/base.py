"""Base command pattern implementation.

This module provides the :class:`Command` capability set every command
implements (``execute``, optional ``undo``, optional ``redo``), the
function-backed :class:`FunctionCommand`, and :class:`CommandResult`, the
status returned for every dispatch.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from cmd_box.engine.interpreter import Interpreter


class Command(ABC):
    """Abstract base class for commands run by an :class:`Interpreter`.

    A command instance is built once per invocation. ``__init__`` stores the
    owning interpreter and the positional arguments, then calls
    :meth:`setup` with those arguments unpacked. Anything ``undo`` needs
    must be captured in ``setup`` or ``execute``.

    A command is undoable when its class overrides :meth:`undo`. Only
    undoable commands are recorded on the undo stack.

    Example:
        class AddToX(Command):
            \"\"\"Add n to x.\"\"\"

            name = "add_to_x"

            def setup(self, n: int) -> None:
                self.original = self.interp.get("x")
                self.n = n

            def execute(self) -> None:
                self.interp.set("x", self.original + self.n)

            def undo(self) -> None:
                self.interp.set("x", self.original)
    """

    name: str = ""
    description: str = ""

    def __init__(self, interp: "Interpreter", args: list[Any]) -> None:
        self.interp = interp
        self.args = list(args)
        self.setup(*self.args)

    def setup(self, *args: Any) -> None:
        """Constructor hook, called with the invocation's arguments."""

    @abstractmethod
    def execute(self) -> None:
        """Perform the command's effect."""

    def undo(self) -> None:
        """Reverse the effect of :meth:`execute`."""
        raise NotImplementedError(f"Command '{self.name}' cannot be undone")

    def redo(self) -> None:
        """Re-apply the command after an undo. Defaults to :meth:`execute`."""
        self.execute()

    @classmethod
    def is_undoable(cls) -> bool:
        """Whether the class provides a real ``undo``."""
        return cls.undo is not Command.undo

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, args={self.args!r})"


CommandHook = Callable[["FunctionCommand"], Any]


class FunctionCommand(Command):
    """Command assembled from plain functions by :func:`define_command`.

    Each hook receives the instance, which doubles as an attribute bag for
    snapshot state (``cmd.original = cmd.interp.get("x")``).
    """

    def __init__(
        self,
        interp: "Interpreter",
        args: list[Any],
        *,
        name: str,
        execute: CommandHook,
        undo: CommandHook | None = None,
        redo: CommandHook | None = None,
        setup: CommandHook | None = None,
    ) -> None:
        self.name = name
        self._execute = execute
        self._undo = undo
        self._redo = redo
        self._setup = setup
        super().__init__(interp, args)

    def setup(self, *args: Any) -> None:
        if self._setup is not None:
            self._setup(self)

    def execute(self) -> None:
        self._execute(self)

    def undo(self) -> None:
        if self._undo is None:
            super().undo()
            return
        self._undo(self)

    def redo(self) -> None:
        if self._redo is None:
            self.execute()
            return
        self._redo(self)


class DispatchStatus(int, Enum):
    """Outcome of a single dispatch."""

    SUCCESS = 0
    FAILED = 1
    MALFORMED = 2
    UNKNOWN_COMMAND = 3
    NOTHING_TO_UNDO = 4
    NOTHING_TO_REDO = 5


@dataclass
class CommandResult:
    """Result of a dispatch.

    Attributes:
        status: What happened.
        invocation: The invocation as submitted.
        error: Message for rejected invocations.
        undoable: Whether the command was recorded on the undo stack.
    """

    status: DispatchStatus
    invocation: Any = None
    error: str | None = None
    undoable: bool = False

    @property
    def success(self) -> bool:
        """True only when a command (or undo/redo) actually ran."""
        return self.status is DispatchStatus.SUCCESS

    @property
    def ok(self) -> bool:
        """True unless the invocation was rejected or the command failed.

        Undo/redo at a stack boundary is informational, not an error.
        """
        return self.status in (
            DispatchStatus.SUCCESS,
            DispatchStatus.NOTHING_TO_UNDO,
            DispatchStatus.NOTHING_TO_REDO,
        )

    @classmethod
    def done(cls, invocation: Any, undoable: bool = False) -> "CommandResult":
        """Create a successful result."""
        return cls(status=DispatchStatus.SUCCESS, invocation=invocation, undoable=undoable)

    @classmethod
    def fail(
        cls,
        status: DispatchStatus,
        invocation: Any,
        error: str | None = None,
    ) -> "CommandResult":
        """Create a non-success result."""
        return cls(status=status, invocation=invocation, error=error)
