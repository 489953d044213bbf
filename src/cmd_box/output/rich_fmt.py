"""Rich terminal output formatter."""

import json
from io import StringIO
from typing import Any, TextIO

from rich.console import Console, RenderableType
from rich.panel import Panel
from rich.pretty import Pretty
from rich.table import Table
from rich.text import Text

from cmd_box.output.base import OutputData, OutputFormat, OutputFormatter


class RichFormatter(OutputFormatter):
    """Rich terminal output formatter.

    Renders panels and tables with the Rich library. Output is rendered to
    a string first so it can be captured like the other formatters.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        error_stream: TextIO | None = None,
        verbose: bool = False,
        width: int | None = None,
        color: bool = True,
    ) -> None:
        """Initialize rich formatter.

        Args:
            stream: Output stream.
            error_stream: Error stream.
            verbose: Whether to show verbose output.
            width: Console width (None for auto-detect).
            color: Whether to emit ANSI styles.
        """
        super().__init__(stream, error_stream, verbose)
        self._width = width
        self._color = color

    @property
    def format_type(self) -> OutputFormat:
        return OutputFormat.RICH

    def _render(self, renderable: RenderableType) -> str:
        buffer = StringIO()
        console = Console(
            file=buffer,
            width=self._width,
            force_terminal=self._color,
            no_color=not self._color,
        )
        console.print(renderable)
        return buffer.getvalue().rstrip()

    def format(self, data: OutputData) -> str:
        """Format output data with Rich formatting."""
        if not data.success and data.error:
            error_text = Text(f"Error: {data.error}", style="bold red")
            if data.title:
                return self._render(Panel(error_text, title=data.title, border_style="red"))
            return self._render(error_text)

        content: RenderableType
        if isinstance(data.content, dict):
            table = Table(show_header=False, box=None, padding=(0, 1))
            table.add_column("Key", style="bold cyan")
            table.add_column("Value")
            for key, value in data.content.items():
                table.add_row(Text(str(key)), Pretty(value))
            content = table
        elif isinstance(data.content, list):
            table = Table(show_header=False, box=None)
            table.add_column("Item")
            for item in data.content:
                table.add_row(Text(_compact(item)))
            content = table
        else:
            content = Text(str(data.content))

        if self._verbose and data.metadata:
            meta = "  ".join(f"{k}={v}" for k, v in data.metadata.items())
            subtitle = f"[dim]{meta}[/dim]"
        else:
            subtitle = None

        if data.title:
            return self._render(Panel(content, title=data.title, subtitle=subtitle))
        return self._render(content)

    def format_table(
        self,
        rows: list[dict[str, Any]],
        columns: list[str] | None = None,
        title: str | None = None,
    ) -> str:
        if not rows:
            return ""
        if columns is None:
            columns = list(rows[0].keys())

        table = Table(title=title, header_style="bold magenta")
        for col in columns:
            table.add_column(col)
        for row in rows:
            table.add_row(*(Text(_compact(row.get(col, ""))) for col in columns))
        return self._render(table)


def _compact(value: Any) -> str:
    if isinstance(value, (list, dict)):
        return json.dumps(value, default=str)
    return str(value)
