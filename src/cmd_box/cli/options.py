"""Options shared by the cmd-box subcommands."""

from typing import Annotated

import typer

from cmd_box.output.base import OutputFormat

FormatOption = Annotated[
    OutputFormat | None,
    typer.Option(
        "--format",
        "-f",
        help="Output format. Defaults to output.default_format from the config.",
        case_sensitive=False,
    ),
]

VerboseOption = Annotated[
    bool,
    typer.Option(
        "--verbose",
        "-v",
        help="Debug logging and boundary undo/redo notices.",
    ),
]

ContextOption = Annotated[
    str | None,
    typer.Option(
        "--context",
        "-c",
        help="Initial context: a JSON object, or a path to a JSON file.",
    ),
]

ModuleOption = Annotated[
    list[str] | None,
    typer.Option(
        "--module",
        "-m",
        help="Import MODULE and call its register(interp) hook. Repeatable.",
    ),
]
