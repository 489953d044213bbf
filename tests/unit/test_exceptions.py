"""Tests for exception hierarchy."""

import pytest

from cmd_box.exceptions import (
    CmdBoxError,
    CommandError,
    CommandExecutionError,
    ConfigError,
    ConfigValidationError,
    ContextKeyError,
    InvalidGroupError,
    InvocationError,
    MalformedInvocationError,
    ModuleLoadError,
    ScriptError,
    UnknownCommandError,
)


class TestCmdBoxError:
    """Tests for base CmdBoxError."""

    def test_default_message(self) -> None:
        """Test default error message."""
        error = CmdBoxError()
        assert str(error) == "An error occurred"
        assert error.user_message == "An error occurred"
        assert error.exit_code == 1

    def test_custom_message(self) -> None:
        """Test custom error message."""
        error = CmdBoxError("Custom error")
        assert str(error) == "Custom error"

    def test_custom_user_message(self) -> None:
        """Test custom user message."""
        error = CmdBoxError("Internal", user_message="User-friendly message")
        assert error.user_message == "User-friendly message"


class TestInvocationErrors:
    """Tests for invocation-related errors."""

    def test_malformed(self) -> None:
        error = MalformedInvocationError("bad")
        assert isinstance(error, InvocationError)
        assert error.exit_code == 3
        assert "array" in error.user_message

    def test_unknown_command(self) -> None:
        """Test the name is kept and appears in the message."""
        error = UnknownCommandError("frobnicate")
        assert error.name == "frobnicate"
        assert str(error) == "Command 'frobnicate' does not exist"
        assert error.exit_code == 4


class TestCommandErrors:
    """Tests for command-related errors."""

    def test_execution_error(self) -> None:
        assert issubclass(CommandExecutionError, CommandError)
        assert CommandExecutionError().exit_code == 11

    def test_invalid_group(self) -> None:
        error = InvalidGroupError("Command 'echo' is not undoable")
        assert "group" in error.user_message.lower()
        assert error.exit_code == 12

    def test_context_key_error_message(self) -> None:
        """Test str() is not the quoted KeyError form."""
        error = ContextKeyError("Context key 'z' is not declared")
        assert str(error) == "Context key 'z' is not declared"
        assert isinstance(error, KeyError)


class TestConfigAndScriptErrors:
    """Tests for config and script errors."""

    @pytest.mark.parametrize(
        "error_class,exit_code",
        [
            (ConfigError, 20),
            (ConfigValidationError, 22),
            (ScriptError, 30),
            (ModuleLoadError, 31),
        ],
    )
    def test_exit_codes(self, error_class: type[CmdBoxError], exit_code: int) -> None:
        assert error_class().exit_code == exit_code

    def test_hierarchy(self) -> None:
        assert issubclass(ConfigValidationError, ConfigError)
        assert issubclass(ModuleLoadError, ScriptError)


class TestExceptionCatching:
    """Tests for catching exceptions by base class."""

    def test_catch_all(self) -> None:
        """Test every error is a CmdBoxError."""
        for error in (
            MalformedInvocationError(),
            UnknownCommandError("x"),
            InvalidGroupError(),
            ContextKeyError("k"),
            ConfigValidationError(),
            ModuleLoadError(),
        ):
            with pytest.raises(CmdBoxError):
                raise error
