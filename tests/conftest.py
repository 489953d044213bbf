"""Pytest fixtures for cmd-box tests."""

import logging
import tempfile
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest

from cmd_box.commands import Command, define_command
from cmd_box.commands.registry import CommandSpec
from cmd_box.config import reset_config
from cmd_box.config.schema import CmdBoxConfig
from cmd_box.engine import Interpreter


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def reset_config_fixture(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> Generator[None, None, None]:
    """Isolate tests from any user config file and reset the singleton."""
    monkeypatch.setenv("CMDBOX_CONFIG", str(tmp_path / "missing-config.toml"))
    for var in ("CMDBOX_LOG_LEVEL", "CMDBOX_STRICT_GROUPS", "CMDBOX_FORMAT"):
        monkeypatch.delenv(var, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Drop handlers installed by setup_logging during a test."""
    yield
    logger = logging.getLogger("cmd_box")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def default_config() -> CmdBoxConfig:
    """Get default configuration."""
    return CmdBoxConfig()


@pytest.fixture
def config_file(temp_dir: Path) -> Path:
    """Create a test config file."""
    config_path = temp_dir / "config.toml"
    config_path.write_text("""
[engine]
strict_groups = true

[output]
default_format = "plain"
show_context = false

[logging]
level = "DEBUG"
""")
    return config_path


# --- Sample commands ---


class AddToX(Command):
    """Add n to x."""

    name = "add_to_x"

    def setup(self, n: int) -> None:
        self.original = self.interp.get("x")
        self.n = n

    def execute(self) -> None:
        self.interp.set("x", self.original + self.n)

    def undo(self) -> None:
        self.interp.set("x", self.original)


class Push(Command):
    """Append a value to 'items' and journal every call."""

    name = "push"

    def setup(self, value: Any) -> None:
        self.value = value

    def execute(self) -> None:
        self.interp.get("items").append(self.value)
        self.interp.get("journal").append(f"do:{self.value}")

    def undo(self) -> None:
        self.interp.get("items").pop()
        self.interp.get("journal").append(f"undo:{self.value}")


class Shout(Command):
    """Write to stdout; cannot be undone."""

    name = "shout"

    def execute(self) -> None:
        self.interp.stdout(" ".join(str(a) for a in self.args).upper())


class Explode(Command):
    """Always fails."""

    name = "explode"

    def execute(self) -> None:
        raise RuntimeError("boom")

    def undo(self) -> None:
        pass


@pytest.fixture
def add_to_x() -> CommandSpec:
    """Function-style twin of AddToX."""
    return define_command(
        "add_to_x",
        setup=lambda cmd: setattr(cmd, "original", cmd.interp.get("x")),
        execute=lambda cmd: cmd.interp.set("x", cmd.original + cmd.args[0]),
        undo=lambda cmd: cmd.interp.set("x", cmd.original),
    )


@pytest.fixture
def interp(default_config: CmdBoxConfig) -> Interpreter:
    """Interpreter with the sample commands and x=1."""
    interp = Interpreter(
        {"x": 1, "items": [], "journal": []},
        config=default_config,
    )
    interp.register([AddToX, Push, Shout, Explode])
    return interp
