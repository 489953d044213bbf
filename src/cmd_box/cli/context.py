"""Factories that turn CLI options into a ready interpreter."""

import importlib
import json
from pathlib import Path
from typing import Any

from cmd_box.config import get_config
from cmd_box.config.schema import CmdBoxConfig
from cmd_box.engine import Interpreter, events
from cmd_box.exceptions import ModuleLoadError, ScriptError
from cmd_box.output import get_formatter
from cmd_box.output.base import OutputFormat, OutputFormatter
from cmd_box.utils.logging import get_logger

logger = get_logger(__name__)


def create_formatter(
    output_format: OutputFormat | None = None,
    verbose: bool = False,
    config: CmdBoxConfig | None = None,
) -> OutputFormatter:
    """Create an output formatter from configuration.

    Args:
        output_format: The --format choice; None uses the config default.
        verbose: Whether to enable verbose output.
        config: Configuration to use. If None, uses global config.
    """
    if config is None:
        config = get_config()

    if output_format is None:
        output_format = OutputFormat(config.output.default_format)
    if output_format is OutputFormat.RICH:
        return get_formatter(output_format, verbose=verbose, color=config.output.color)
    return get_formatter(output_format, verbose=verbose)


def load_json_value(value: str) -> Any:
    """Decode ``value`` as JSON, or read and decode the file it names."""
    text = value
    path = Path(value)
    if not value.lstrip().startswith(("{", "[")) and path.is_file():
        try:
            text = path.read_text()
        except OSError as e:
            raise ScriptError(f"Cannot read {path}: {e}") from e
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ScriptError(f"Invalid JSON in {value!r}: {e}") from e


def load_script(path: Path) -> list[Any]:
    """Load a JSON file holding a list of invocations."""
    try:
        data = json.loads(path.read_text())
    except OSError as e:
        raise ScriptError(f"Cannot read script {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ScriptError(f"Script {path} is not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise ScriptError(f"Script {path} must contain a JSON array of invocations")
    return data


def load_modules(interp: Interpreter, modules: list[str]) -> None:
    """Import each module and call its ``register(interp)`` hook."""
    for name in modules:
        try:
            module = importlib.import_module(name)
        except ImportError as e:
            raise ModuleLoadError(f"Cannot import module '{name}': {e}") from e
        register = getattr(module, "register", None)
        if not callable(register):
            raise ModuleLoadError(f"Module '{name}' has no register(interp) function")
        register(interp)
        logger.debug("Loaded commands from %s", name)


def create_interpreter(
    *,
    context: str | None = None,
    modules: list[str] | None = None,
    formatter: OutputFormatter | None = None,
    config: CmdBoxConfig | None = None,
) -> Interpreter:
    """Build an interpreter wired to print ``stdout`` and ``error`` events.

    Args:
        context: JSON object or path to a JSON file with the initial context.
        modules: Host modules exposing ``register(interp)``.
        formatter: Where command output goes. None leaves events unwired.
        config: Configuration to use. If None, uses global config.
    """
    initial: dict[str, Any] = {}
    if context:
        initial = load_json_value(context)
        if not isinstance(initial, dict):
            raise ScriptError("The initial context must be a JSON object")

    interp = Interpreter(initial, config=config)
    if formatter is not None:
        interp.on(events.STDOUT, formatter.print_text)
        interp.on(events.ERROR, formatter.print_error)
    load_modules(interp, modules or [])
    return interp
