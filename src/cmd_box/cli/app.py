"""Main CLI application for cmd-box."""

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape

from cmd_box import __version__
from cmd_box.cli.context import create_formatter, create_interpreter, load_script
from cmd_box.cli.options import (
    ContextOption,
    FormatOption,
    ModuleOption,
    VerboseOption,
)
from cmd_box.config import get_config
from cmd_box.engine import Interpreter
from cmd_box.exceptions import CmdBoxError
from cmd_box.invocation import format_invocation
from cmd_box.output.base import OutputData, OutputFormatter
from cmd_box.utils.logging import setup_logging

app = typer.Typer(
    name="cmd-box",
    help="Run undoable command scripts",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)

REPL_EXIT = ("quit", "exit")


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"cmd-box version {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Run undoable command scripts."""


def _configure_logging(verbose: bool) -> None:
    config = get_config()
    level = "DEBUG" if verbose else config.logging.level
    setup_logging(
        level=level,
        log_file=config.logging.file,
        json_format=config.logging.json_format,
        use_color=config.output.color,
    )


def _run_invocations(
    interp: Interpreter,
    invocations: Iterable[Any],
    formatter: OutputFormatter,
) -> int:
    """Dispatch each invocation; returns the number of rejected ones."""
    rejected = 0
    for invocation in invocations:
        if isinstance(invocation, str):
            result = interp.parse(invocation)
        else:
            result = interp.dispatch(invocation)
        if not result.ok:
            rejected += 1
            formatter.print_error(result.error or result.status.name, title="rejected")
        elif not result.success and formatter.verbose:
            formatter.print_content(
                result.status.name.lower(), title=format_invocation(invocation)
            )
    return rejected


def _print_summary(interp: Interpreter, formatter: OutputFormatter) -> None:
    config = get_config()
    formatter.print(OutputData.from_content(interp.get_state().as_dict(), title="State"))
    if config.output.show_context:
        formatter.print(OutputData.from_content(interp.context.snapshot(), title="Context"))
    last = interp.result()
    if last is not None:
        formatter.print(OutputData.from_content(last, title="Result"))


def _fail(error: Exception) -> typer.Exit:
    """Report an error and build the matching exit."""
    if isinstance(error, CmdBoxError):
        err_console.print(f"[red]Error:[/red] {escape(str(error))}")
        return typer.Exit(error.exit_code)
    err_console.print(f"[red]Command failed:[/red] {escape(repr(error))}")
    return typer.Exit(1)


@app.command()
def run(
    script: Path = typer.Argument(..., help="JSON file holding a list of invocations."),
    context: ContextOption = None,
    module: ModuleOption = None,
    format: FormatOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Dispatch every invocation of a script, then print state and context."""
    _configure_logging(verbose)
    formatter = create_formatter(format, verbose)
    try:
        invocations = load_script(script)
        interp = create_interpreter(context=context, modules=module, formatter=formatter)
        rejected = _run_invocations(interp, invocations, formatter)
    except Exception as e:
        raise _fail(e) from None

    _print_summary(interp, formatter)
    if rejected:
        raise typer.Exit(1)


@app.command("exec")
def exec_cmd(
    invocations: list[str] = typer.Argument(
        ..., help='JSON invocations, e.g. \'["incr", "x", 2]\'.'
    ),
    context: ContextOption = None,
    module: ModuleOption = None,
    format: FormatOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Dispatch one or more JSON invocations given on the command line."""
    _configure_logging(verbose)
    formatter = create_formatter(format, verbose)
    try:
        interp = create_interpreter(context=context, modules=module, formatter=formatter)
        rejected = _run_invocations(interp, invocations, formatter)
    except Exception as e:
        raise _fail(e) from None

    _print_summary(interp, formatter)
    if rejected:
        raise typer.Exit(1)


@app.command()
def repl(
    context: ContextOption = None,
    module: ModuleOption = None,
    format: FormatOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Read JSON invocations line by line until EOF or 'quit'."""
    _configure_logging(verbose)
    formatter = create_formatter(format, verbose)
    try:
        interp = create_interpreter(context=context, modules=module, formatter=formatter)
    except CmdBoxError as e:
        raise _fail(e) from None

    while True:
        try:
            line = input("cmd> ")
        except EOFError:
            break
        line = line.strip()
        if not line:
            continue
        if line in REPL_EXIT:
            break
        if line == "state":
            _print_summary(interp, formatter)
            continue
        try:
            _run_invocations(interp, [line], formatter)
        except Exception as e:
            # A failing command should not end the session
            formatter.print_error(str(e) or repr(e), title="failed")

    _print_summary(interp, formatter)


@app.command()
def commands(
    module: ModuleOption = None,
    format: FormatOption = None,
) -> None:
    """List the commands available to scripts."""
    formatter = create_formatter(format)
    try:
        interp = create_interpreter(modules=module)
    except CmdBoxError as e:
        raise _fail(e) from None

    rows = [
        {
            "name": info["name"],
            "undoable": "yes" if info["undoable"] else "no",
            "description": info["description"],
        }
        for info in interp.registry.get_command_info()
    ]
    formatter.print_text(formatter.format_table(rows, title="Commands"))


@app.command("config")
def config_cmd(
    show_path: bool = typer.Option(
        False,
        "--path",
        "-p",
        help="Show config file path.",
    ),
) -> None:
    """Show current configuration."""
    from cmd_box.config.defaults import get_config_path

    if show_path:
        console.print(str(get_config_path()))
        return

    config = get_config()
    console.print("[bold]cmd-box configuration[/bold]\n")
    console.print(f"Config file: {get_config_path()}")
    console.print_json(json.dumps(config.model_dump(mode="json")))


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
