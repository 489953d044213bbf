"""Tests for the execution context."""

import pytest

from cmd_box.engine import ExecutionContext
from cmd_box.exceptions import CommandError, ContextKeyError


class TestExecutionContext:
    """Tests for ExecutionContext."""

    def test_get_set(self) -> None:
        ctx = ExecutionContext({"x": 1})

        ctx.set("y", [1])

        assert ctx.get("x") == 1
        assert ctx.get("y") == [1]
        assert ctx.get("z") is None
        assert ctx.get("z", 0) == 0
        assert "y" in ctx
        assert sorted(ctx) == ["x", "y"]
        assert len(ctx) == 2

    def test_open_by_default(self) -> None:
        assert ExecutionContext().keys is None

    def test_declared_keys(self) -> None:
        """Test writes outside the declared keys are refused."""
        ctx = ExecutionContext({"x": 1}, keys=["x", "y"])
        ctx.set("y", 2)

        with pytest.raises(ContextKeyError, match="'z' is not declared"):
            ctx.set("z", 3)
        with pytest.raises(ContextKeyError):
            ctx.delete("z")
        assert ctx.keys == frozenset({"x", "y"})

    def test_initial_data_checked(self) -> None:
        with pytest.raises(ContextKeyError):
            ExecutionContext({"x": 1}, keys=["y"])

    def test_key_error_is_catchable_both_ways(self) -> None:
        ctx = ExecutionContext(keys=[])
        with pytest.raises(KeyError):
            ctx.set("x", 1)
        with pytest.raises(CommandError):
            ctx.set("x", 1)

    def test_delete(self) -> None:
        ctx = ExecutionContext({"x": 1})
        ctx.delete("x")
        ctx.delete("x")
        assert "x" not in ctx

    def test_snapshot_is_deep(self) -> None:
        """Test mutating a snapshot leaves the context alone."""
        ctx = ExecutionContext({"items": [1, 2]})

        snap = ctx.snapshot()
        snap["items"].append(3)

        assert ctx.get("items") == [1, 2]

    def test_values_not_typed(self) -> None:
        ctx = ExecutionContext({"x": 1})
        ctx.set("x", "one")
        assert ctx.get("x") == "one"
