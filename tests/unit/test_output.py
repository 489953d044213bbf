"""Unit tests for output formatters."""

import json
from io import StringIO

import pytest

from cmd_box.output import (
    JSONFormatter,
    OutputData,
    OutputFormat,
    PlainFormatter,
    RichFormatter,
    get_formatter,
)


class TestOutputData:
    """Tests for OutputData dataclass."""

    def test_create_output_data(self) -> None:
        data = OutputData(content={"x": 1})
        assert data.title is None
        assert data.metadata == {}
        assert data.error is None
        assert data.success is True

    def test_from_error(self) -> None:
        """Test creating error output data."""
        data = OutputData.from_error("Command 'x' does not exist", title="rejected")
        assert data.success is False
        assert data.error == "Command 'x' does not exist"
        assert data.title == "rejected"
        assert data.content == ""

    def test_from_content(self) -> None:
        data = OutputData.from_content({"stackSize": 2}, title="State", source="run")
        assert data.success is True
        assert data.metadata == {"source": "run"}


class TestPlainFormatter:
    """Tests for PlainFormatter."""

    def test_format_dict(self) -> None:
        """Test dict content renders key: value lines, containers as JSON."""
        formatter = PlainFormatter()
        data = OutputData.from_content({"x": 8, "items": ["a", "b"]}, title="Context")

        assert formatter.format(data) == 'Context\n-------\nx: 8\nitems: ["a", "b"]'

    def test_format_error(self) -> None:
        formatter = PlainFormatter()
        assert formatter.format(OutputData.from_error("boom")) == "Error: boom"

    def test_metadata_only_when_verbose(self) -> None:
        data = OutputData.from_content("hi", source="run")
        assert "source" not in PlainFormatter().format(data)
        assert "source: run" in PlainFormatter(verbose=True).format(data)

    def test_format_table(self) -> None:
        formatter = PlainFormatter()
        rows = [
            {"name": "proc", "undoable": "no"},
            {"name": "group", "undoable": "yes"},
        ]

        lines = formatter.format_table(rows, title="Commands").splitlines()

        assert lines[0] == "Commands"
        assert lines[2].split() == ["name", "undoable"]
        assert lines[4].split() == ["proc", "no"]
        assert formatter.format_table([]) == ""

    def test_print_routes_errors(self) -> None:
        """Test failures go to the error stream."""
        out, err = StringIO(), StringIO()
        formatter = PlainFormatter(stream=out, error_stream=err)

        formatter.print_content("fine")
        formatter.print_error("bad")
        formatter.print_text("")

        assert out.getvalue() == "fine\n"
        assert err.getvalue() == "Error: bad\n"


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_format_success(self) -> None:
        formatter = JSONFormatter()
        output = json.loads(formatter.format(OutputData.from_content({"x": 3}, title="Context")))

        assert output == {"success": True, "title": "Context", "content": {"x": 3}}

    def test_format_error(self) -> None:
        output = json.loads(JSONFormatter().format(OutputData.from_error("nope")))
        assert output == {"success": False, "error": "nope"}

    def test_non_serializable_content(self) -> None:
        output = json.loads(JSONFormatter().format(OutputData.from_content({"o": object()})))
        assert output["content"]["o"].startswith("<object")

    def test_format_table_columns(self) -> None:
        rows = [{"name": "set", "undoable": "yes", "description": "Set a key"}]
        output = json.loads(JSONFormatter().format_table(rows, columns=["name"]))
        assert output == {"rows": [{"name": "set"}], "count": 1}


class TestRichFormatter:
    """Tests for RichFormatter."""

    def test_format_dict_without_color(self) -> None:
        formatter = RichFormatter(width=60, color=False)
        text = formatter.format(OutputData.from_content({"stackSize": 2}, title="State"))

        assert "State" in text
        assert "stackSize" in text
        assert "\x1b[" not in text

    def test_format_error(self) -> None:
        text = RichFormatter(width=60, color=False).format(OutputData.from_error("boom"))
        assert "Error: boom" in text

    def test_format_table(self) -> None:
        text = RichFormatter(width=80, color=False).format_table(
            [{"name": "group", "undoable": "yes"}], title="Commands"
        )
        assert "group" in text
        assert "Commands" in text


class TestGetFormatter:
    """Tests for get_formatter."""

    @pytest.mark.parametrize(
        "name,expected",
        [("plain", PlainFormatter), ("JSON", JSONFormatter), (OutputFormat.RICH, RichFormatter)],
    )
    def test_by_name(self, name: str, expected: type) -> None:
        assert isinstance(get_formatter(name), expected)

    def test_unknown(self) -> None:
        with pytest.raises(ValueError):
            get_formatter("xml")

    def test_verbose_passed(self) -> None:
        assert get_formatter("plain", verbose=True).verbose is True
