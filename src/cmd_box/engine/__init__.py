"""Interpreter engine: undo stack, dispatcher, context and notifications."""

from cmd_box.engine.context import ExecutionContext
from cmd_box.engine.events import EventEmitter, Subscription
from cmd_box.engine.interpreter import EngineState, Interpreter
from cmd_box.engine.stack import UndoStack
from cmd_box.invocation import check_invocation, parse_invocation

__all__ = [
    "EngineState",
    "EventEmitter",
    "ExecutionContext",
    "Interpreter",
    "Subscription",
    "UndoStack",
    "check_invocation",
    "parse_invocation",
]
