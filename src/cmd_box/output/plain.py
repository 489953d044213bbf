"""Plain text formatter, for pipes and log files."""

import json
from typing import Any, TextIO

from cmd_box.output.base import OutputData, OutputFormat, OutputFormatter


class PlainFormatter(OutputFormatter):
    """Undecorated text.

    Dicts render as ``key: value`` lines, lists one item per line, and
    nested containers as compact JSON so they stay on one line.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        error_stream: TextIO | None = None,
        verbose: bool = False,
        show_metadata: bool = False,
    ) -> None:
        super().__init__(stream, error_stream, verbose)
        self._show_metadata = show_metadata

    @property
    def format_type(self) -> OutputFormat:
        return OutputFormat.PLAIN

    def format(self, data: OutputData) -> str:
        lines = _heading(data.title)

        if not data.success and data.error:
            return "\n".join([*lines, f"Error: {data.error}"])

        content = data.content
        if isinstance(content, dict):
            lines.extend(f"{key}: {_plain(value)}" for key, value in content.items())
        elif isinstance(content, list):
            lines.extend(_plain(item) for item in content)
        else:
            lines.append(_plain(content))

        if data.metadata and (self._verbose or self._show_metadata):
            lines.append("---")
            lines.extend(f"{key}: {_plain(value)}" for key, value in data.metadata.items())
        return "\n".join(lines)

    def format_table(
        self,
        rows: list[dict[str, Any]],
        columns: list[str] | None = None,
        title: str | None = None,
    ) -> str:
        """Left-aligned columns separated by two spaces."""
        if not rows:
            return ""
        columns = columns or list(rows[0])

        cells = [[_plain(row.get(col, "")) for col in columns] for row in rows]
        widths = [
            max(len(col), *(len(line[i]) for line in cells))
            for i, col in enumerate(columns)
        ]

        def render(values: list[str]) -> str:
            return "  ".join(value.ljust(width) for value, width in zip(values, widths)).rstrip()

        lines = [title, ""] if title else []
        lines.append(render(columns))
        lines.append(render(["-" * width for width in widths]))
        lines.extend(render(line) for line in cells)
        return "\n".join(lines)


def _heading(title: str | None) -> list[str]:
    return [title, "-" * len(title)] if title else []


def _plain(value: Any) -> str:
    if isinstance(value, (list, dict)):
        return json.dumps(value, default=str)
    return str(value)
