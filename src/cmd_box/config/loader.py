"""Configuration loading: TOML file first, then ``CMDBOX_*`` overrides."""

import os
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

from cmd_box.config.defaults import (
    DEFAULT_CONFIG_TOML,
    ENV_FORMAT,
    ENV_LOG_LEVEL,
    ENV_STRICT_GROUPS,
    ensure_directories,
    get_config_path,
)
from cmd_box.config.schema import CmdBoxConfig, OutputFormat
from cmd_box.exceptions import ConfigError, ConfigValidationError
from cmd_box.utils.logging import get_logger

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = get_logger(__name__)

# Global config instance (singleton)
_config: CmdBoxConfig | None = None


def _flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


# env var -> (section, field, converter); a converter raising ValueError
# leaves the configured value in place
_ENV_OVERRIDES: dict[str, tuple[str, str, Callable[[str], Any]]] = {
    ENV_LOG_LEVEL: ("logging", "level", str.upper),
    ENV_STRICT_GROUPS: ("engine", "strict_groups", _flag),
    ENV_FORMAT: ("output", "default_format", lambda v: OutputFormat(v.lower()).value),
}


def load_config(
    config_path: Path | None = None,
    *,
    create_if_missing: bool = False,
) -> CmdBoxConfig:
    """Load configuration from a TOML file and the environment.

    A missing file is not an error: defaults are used, unless
    ``create_if_missing`` asks for the default file to be written first.

    Args:
        config_path: Config file. Defaults to ``CMDBOX_CONFIG`` or
            ``~/.config/cmd-box/config.toml``.
        create_if_missing: Write the default config when the file is absent.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
        ConfigValidationError: If the values do not match the schema.
    """
    path = config_path or get_config_path()

    if not path.exists():
        if not create_if_missing:
            return _apply_env_overrides(CmdBoxConfig())
        if config_path is None:
            ensure_directories()
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(DEFAULT_CONFIG_TOML)
        logger.info("Wrote default config to %s", path)

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Failed to load config from {path}: {e}") from e

    try:
        config = CmdBoxConfig.model_validate(data)
    except ValueError as e:
        raise ConfigValidationError(f"Invalid configuration in {path}: {e}") from e

    return _apply_env_overrides(config)


def _apply_env_overrides(config: CmdBoxConfig) -> CmdBoxConfig:
    for env_var, (section, name, convert) in _ENV_OVERRIDES.items():
        raw = os.environ.get(env_var)
        if not raw:
            continue
        try:
            value = convert(raw)
        except ValueError:
            logger.warning("Ignoring %s=%r", env_var, raw)
            continue
        setattr(getattr(config, section), name, value)
    return config


def get_config() -> CmdBoxConfig:
    """Get the current configuration, loading it on first access."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config(config_path: Path | None = None) -> CmdBoxConfig:
    """Re-read the configuration and replace the cached instance."""
    global _config
    _config = load_config(config_path)
    return _config


def reset_config() -> None:
    """Forget the cached configuration (mainly for testing)."""
    global _config
    _config = None
