"""Linear undo/redo history with a save point."""

from cmd_box.commands.base import Command
from cmd_box.engine.events import CHANGED, EventEmitter
from cmd_box.utils.logging import get_logger

logger = get_logger(__name__)


class UndoStack(EventEmitter):
    """Ordered history of executed commands and a cursor into it.

    ``position`` is the index of the most recently applied command, -1 when
    the stack is empty or fully undone. ``save_position`` marks the last
    saved state. Executing a new command discards everything after
    ``position``; branching history is not kept.

    Every mutation emits ``changed``.
    """

    def __init__(self) -> None:
        super().__init__()
        self.commands: list[Command] = []
        self.position = -1
        self.save_position = -1

    def execute(self, command: Command) -> None:
        """Run ``command`` and record it as the newest entry.

        The redo tail is dropped first. If ``execute`` raises, the command
        is not recorded and the exception propagates.
        """
        self._clear_redo()
        command.execute()
        self.commands.append(command)
        self.position += 1
        logger.debug("Executed %s, position %d", command.name, self.position)
        self.changed()

    def undo(self) -> bool:
        """Undo the command at ``position``.

        Returns:
            False when there is nothing to undo, True otherwise.
        """
        if not self.can_undo():
            return False
        self.commands[self.position].undo()
        self.position -= 1
        self.changed()
        return True

    def redo(self) -> bool:
        """Redo the command after ``position``.

        Returns:
            False when there is nothing to redo, True otherwise.
        """
        if not self.can_redo():
            return False
        self.commands[self.position + 1].redo()
        self.position += 1
        self.changed()
        return True

    def can_undo(self) -> bool:
        return self.position >= 0

    def can_redo(self) -> bool:
        return self.position < len(self.commands) - 1

    def peek_undo(self) -> Command | None:
        """The command the next undo would reverse."""
        return self.commands[self.position] if self.can_undo() else None

    def peek_redo(self) -> Command | None:
        """The command the next redo would re-apply."""
        return self.commands[self.position + 1] if self.can_redo() else None

    def save(self) -> None:
        """Mark the current position as persisted."""
        self.save_position = self.position
        self.changed()

    def dirty(self) -> bool:
        return self.position != self.save_position

    def changed(self) -> None:
        self.emit(CHANGED)

    def _clear_redo(self) -> None:
        del self.commands[self.position + 1 :]

    def __len__(self) -> int:
        return len(self.commands)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(size={len(self.commands)}, "
            f"position={self.position}, save_position={self.save_position})"
        )
