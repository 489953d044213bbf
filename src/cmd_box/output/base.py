"""Formatter base class and the data it renders."""

import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TextIO


class OutputFormat(str, Enum):
    """Supported output formats."""

    PLAIN = "plain"
    JSON = "json"
    RICH = "rich"


@dataclass
class OutputData:
    """One block of CLI output: engine state, context, a result or an error.

    Attributes:
        content: Value to render (scalars, lists and dicts are supported).
        title: Block heading, e.g. ``"State"`` or ``"Context"``.
        metadata: Extra key/values shown in verbose mode.
        error: Error message; set together with ``success=False``.
        success: False routes the block to the error stream.
    """

    content: Any
    title: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    error: str | None = None
    success: bool = True

    @classmethod
    def from_error(cls, error: str, title: str | None = None) -> "OutputData":
        return cls(content="", title=title, error=error, success=False)

    @classmethod
    def from_content(cls, content: Any, title: str | None = None, **metadata: Any) -> "OutputData":
        return cls(content=content, title=title, metadata=metadata)


class OutputFormatter(ABC):
    """Render :class:`OutputData` blocks and tables to text streams.

    Subclasses only turn data into strings; writing to ``stream`` (or
    ``error_stream`` for failures) is handled here.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        error_stream: TextIO | None = None,
        verbose: bool = False,
    ) -> None:
        self._stream = stream or sys.stdout
        self._error_stream = error_stream or sys.stderr
        self._verbose = verbose

    @property
    def stream(self) -> TextIO:
        return self._stream

    @property
    def error_stream(self) -> TextIO:
        return self._error_stream

    @property
    def verbose(self) -> bool:
        return self._verbose

    @property
    @abstractmethod
    def format_type(self) -> OutputFormat:
        """The format this formatter produces."""

    @abstractmethod
    def format(self, data: OutputData) -> str:
        """Render one block."""

    @abstractmethod
    def format_table(
        self,
        rows: list[dict[str, Any]],
        columns: list[str] | None = None,
        title: str | None = None,
    ) -> str:
        """Render rows of dicts; ``columns`` defaults to the first row's keys."""

    def print(self, data: OutputData) -> None:
        stream = self._stream if data.success else self._error_stream
        print(self.format(data), file=stream)

    def print_error(self, message: str, title: str | None = None) -> None:
        self.print(OutputData.from_error(message, title))

    def print_content(self, content: Any, title: str | None = None, **metadata: Any) -> None:
        self.print(OutputData.from_content(content, title, **metadata))

    def print_text(self, text: str) -> None:
        """Write pre-rendered text such as a table or ``stdout`` output."""
        if text:
            print(text, file=self._stream)
