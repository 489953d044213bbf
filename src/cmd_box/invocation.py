"""Validation and parsing of ``[name, *args]`` invocations."""

import json
from collections.abc import Sequence
from typing import Any

from cmd_box.exceptions import MalformedInvocationError

Invocation = Sequence[Any]

UNDO = "undo"
REDO = "redo"
RESERVED_NAMES = frozenset({UNDO, REDO})


def check_invocation(invocation: Any) -> tuple[str, list[Any]]:
    """Check the shape of an invocation and split it into name and arguments.

    An invocation must be a non-empty list or tuple whose first element is a
    string, and the whole value must be JSON-serializable so it can be logged
    and replayed. Nested lists (the arguments of ``proc`` and ``group``) are
    allowed; live objects, cycles and NaN are not.

    Args:
        invocation: The candidate invocation.

    Returns:
        Tuple of (command name, positional arguments).

    Raises:
        MalformedInvocationError: If the invocation is rejected.
    """
    if not isinstance(invocation, (list, tuple)) or not invocation:
        raise MalformedInvocationError(
            f"Invocation must be a non-empty array, got {type(invocation).__name__}"
        )
    name = invocation[0]
    if not isinstance(name, str):
        raise MalformedInvocationError(
            f"Invocation must start with a command name, got {name!r}"
        )
    try:
        json.dumps(invocation, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise MalformedInvocationError(
            f"Invocation of '{name}' is not serializable: {e}"
        ) from e
    return name, list(invocation[1:])


def is_valid_invocation(invocation: Any) -> bool:
    """Shape-only check, without raising."""
    try:
        check_invocation(invocation)
    except MalformedInvocationError:
        return False
    return True


def parse_invocation(text: str) -> Any:
    """Decode a JSON-encoded invocation.

    Only the JSON decoding happens here; the result still goes through
    :func:`check_invocation` when dispatched.

    Raises:
        MalformedInvocationError: If ``text`` is not a string or not JSON.
    """
    if not isinstance(text, str):
        raise MalformedInvocationError(
            f"Invocation text must be a string, got {type(text).__name__}"
        )
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedInvocationError(f"Invocation is not valid JSON: {e}") from e


def format_invocation(invocation: Any) -> str:
    """Compact one-line rendering used in logs and the CLI."""
    try:
        return json.dumps(invocation, separators=(",", ":"))
    except (TypeError, ValueError):
        return repr(invocation)
