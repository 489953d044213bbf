"""Default configuration values and paths."""

import os
from pathlib import Path
from typing import Final

# Default directories
DEFAULT_CONFIG_DIR: Final[Path] = Path.home() / ".config" / "cmd-box"

# Default file paths
DEFAULT_CONFIG_FILE: Final[Path] = DEFAULT_CONFIG_DIR / "config.toml"

# Environment variable names
ENV_CONFIG_PATH: Final[str] = "CMDBOX_CONFIG"
ENV_LOG_LEVEL: Final[str] = "CMDBOX_LOG_LEVEL"
ENV_STRICT_GROUPS: Final[str] = "CMDBOX_STRICT_GROUPS"
ENV_FORMAT: Final[str] = "CMDBOX_FORMAT"

# Default config content (TOML)
DEFAULT_CONFIG_TOML: Final[str] = """\
# cmd-box configuration

[engine]
default_undoable = true
strict_groups = false
builtins = ["context"]

[output]
default_format = "rich"
color = true
show_context = true

[logging]
level = "WARNING"
json_format = false
"""


def ensure_directories() -> None:
    """Ensure all default directories exist."""
    DEFAULT_CONFIG_DIR.mkdir(parents=True, exist_ok=True)


def get_config_path() -> Path:
    """Get the configuration file path."""
    env_path = os.environ.get(ENV_CONFIG_PATH)
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_FILE
