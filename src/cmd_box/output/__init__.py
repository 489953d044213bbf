"""Rendering of engine state, context and results for the CLI.

Usage:
    from cmd_box.output import OutputData, get_formatter

    formatter = get_formatter("plain")
    formatter.print(OutputData.from_content({"x": 8}, title="Context"))
"""

from typing import Any

from cmd_box.output.base import OutputData, OutputFormat, OutputFormatter
from cmd_box.output.json_fmt import JSONFormatter
from cmd_box.output.plain import PlainFormatter
from cmd_box.output.rich_fmt import RichFormatter

__all__ = [
    "JSONFormatter",
    "OutputData",
    "OutputFormat",
    "OutputFormatter",
    "PlainFormatter",
    "RichFormatter",
    "get_formatter",
]

FORMATTERS: dict[OutputFormat, type[OutputFormatter]] = {
    OutputFormat.PLAIN: PlainFormatter,
    OutputFormat.JSON: JSONFormatter,
    OutputFormat.RICH: RichFormatter,
}


def get_formatter(
    format_type: OutputFormat | str,
    verbose: bool = False,
    **kwargs: Any,
) -> OutputFormatter:
    """Build the formatter for ``format_type``; extra options go to its constructor.

    Raises:
        ValueError: If the format is unknown.
    """
    output_format = OutputFormat(format_type.lower()) if isinstance(format_type, str) else format_type
    return FORMATTERS[output_format](verbose=verbose, **kwargs)
