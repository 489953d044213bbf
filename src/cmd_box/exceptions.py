"""Exception hierarchy for cmd-box."""


class CmdBoxError(Exception):
    """Base exception for all cmd-box errors."""

    exit_code: int = 1
    user_message: str = "An error occurred"

    def __init__(
        self,
        message: str | None = None,
        *,
        user_message: str | None = None,
    ) -> None:
        super().__init__(message or self.user_message)
        if user_message:
            self.user_message = user_message


# Invocation Errors
class InvocationError(CmdBoxError):
    """An invocation was rejected before any command ran."""

    exit_code = 2
    user_message = "Invocation rejected"


class MalformedInvocationError(InvocationError):
    """Invocation is not a non-empty, serializable [name, *args] sequence."""

    exit_code = 3
    user_message = (
        "Invocations must be a serializable array with a command name first. "
        "If the command has one argument, wrap it as [name, arg]."
    )


class UnknownCommandError(InvocationError):
    """No command is registered under the requested name."""

    exit_code = 4
    user_message = "Command does not exist"

    def __init__(self, name: str, **kwargs: str | None) -> None:
        super().__init__(f"Command '{name}' does not exist", **kwargs)
        self.name = name


# Command Errors
class CommandError(CmdBoxError):
    """Errors raised by or about command implementations."""

    exit_code = 10
    user_message = "Command error"


class CommandExecutionError(CommandError):
    """A command failed while executing, undoing or redoing."""

    exit_code = 11
    user_message = "Command failed"


class InvalidGroupError(CommandError):
    """A group contains a sub-invocation that cannot be undone atomically."""

    exit_code = 12
    user_message = "Invalid command group"


class ContextKeyError(CommandError, KeyError):
    """A command wrote a key the host did not declare on the context."""

    exit_code = 13
    user_message = "Unknown context key"

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else self.user_message


# Config Errors
class ConfigError(CmdBoxError):
    """Configuration errors."""

    exit_code = 20
    user_message = "Configuration error"


class ConfigValidationError(ConfigError):
    """Configuration validation failed."""

    exit_code = 22
    user_message = "Invalid configuration"


# Script Errors
class ScriptError(CmdBoxError):
    """A script of invocations could not be loaded."""

    exit_code = 30
    user_message = "Script error"


class ModuleLoadError(ScriptError):
    """A host module could not be imported or has no register() hook."""

    exit_code = 31
    user_message = "Failed to load command module"
