"""cmd-box: a command-pattern interpreter with undo/redo history."""

__version__ = "0.1.0"

from cmd_box.commands import Command, CommandResult, DispatchStatus, define_command
from cmd_box.engine import EngineState, ExecutionContext, Interpreter

__all__ = [
    "Command",
    "CommandResult",
    "DispatchStatus",
    "EngineState",
    "ExecutionContext",
    "Interpreter",
    "__version__",
    "define_command",
]
