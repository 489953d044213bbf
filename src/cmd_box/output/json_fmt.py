"""JSON formatter, for scripts that consume cmd-box output."""

import json
from typing import Any, TextIO

from cmd_box.output.base import OutputData, OutputFormat, OutputFormatter


class JSONFormatter(OutputFormatter):
    """Each block becomes one JSON document.

    Successful blocks carry ``content``, failed ones ``error``; both carry
    ``success`` and, when set, ``title``. Values that JSON cannot encode are
    written with ``str()``.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        error_stream: TextIO | None = None,
        verbose: bool = False,
        indent: int | None = 2,
        ensure_ascii: bool = False,
    ) -> None:
        super().__init__(stream, error_stream, verbose)
        self._dump_options: dict[str, Any] = {
            "indent": indent,
            "ensure_ascii": ensure_ascii,
            "default": str,
        }

    @property
    def format_type(self) -> OutputFormat:
        return OutputFormat.JSON

    def dumps(self, value: Any) -> str:
        return json.dumps(value, **self._dump_options)

    def format(self, data: OutputData) -> str:
        document: dict[str, Any] = {"success": data.success}
        if data.title:
            document["title"] = data.title
        if data.success:
            document["content"] = data.content
        else:
            document["error"] = data.error
        if data.metadata and self._verbose:
            document["metadata"] = data.metadata
        return self.dumps(document)

    def format_table(
        self,
        rows: list[dict[str, Any]],
        columns: list[str] | None = None,
        title: str | None = None,
    ) -> str:
        if columns is not None:
            rows = [{col: row.get(col) for col in columns} for row in rows]
        document: dict[str, Any] = {"rows": rows, "count": len(rows)}
        if title:
            document["title"] = title
        return self.dumps(document)
