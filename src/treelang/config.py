"""Interpreter configuration loaded from YAML files.

Search order (first existing file wins):
    1. Explicit path passed to load_config() (CLI ``--config``)
    2. File named by the TREELANG_CONFIG environment variable
    3. User config file (~/.config/treelang/config.yaml, or
       %APPDATA%/treelang/config.yaml on Windows)

When no file is found the defaults are used.

Example config.yaml:
    log_level: INFO
    output_format: json
    echo_prints: false
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

__all__ = [
    "TREELANG_CONFIG",
    "OUTPUT_FORMATS",
    "ConfigError",
    "InterpreterConfig",
    "find_config_file",
    "load_config",
]

logger = logging.getLogger(__name__)

# Environment variable naming a config file
TREELANG_CONFIG = "TREELANG_CONFIG"

OUTPUT_FORMATS = ("text", "json", "yaml")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(ValueError):
    """Invalid configuration file contents."""


@dataclass
class InterpreterConfig:
    """Settings for the command-line front end."""
    log_level: str = "WARNING"
    output_format: str = "text"
    echo_prints: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any], source: str = "<dict>") -> "InterpreterConfig":
        """Create from a dictionary, validating keys and values."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown config key(s) in {source}: {', '.join(unknown)}")

        config = cls(**data)
        config.validate(source)
        return config

    def validate(self, source: str = "<config>") -> None:
        if not isinstance(self.log_level, str) or self.log_level.upper() not in LOG_LEVELS:
            raise ConfigError(
                f"Invalid log_level {self.log_level!r} in {source}. "
                f"Expected one of {', '.join(LOG_LEVELS)}"
            )
        self.log_level = self.log_level.upper()

        if self.output_format not in OUTPUT_FORMATS:
            raise ConfigError(
                f"Invalid output_format {self.output_format!r} in {source}. "
                f"Expected one of {', '.join(OUTPUT_FORMATS)}"
            )

        if not isinstance(self.echo_prints, bool):
            raise ConfigError(f"echo_prints must be true or false in {source}")


def _user_config_path() -> Path:
    if sys.platform == "win32":
        config_base = Path(os.environ.get("APPDATA", "~")).expanduser()
    else:
        config_base = Path.home() / ".config"
    return config_base / "treelang" / "config.yaml"


def find_config_file(explicit: Optional[Path] = None) -> Optional[Path]:
    """Return the config file to use, in priority order, or None.

    Raises:
        FileNotFoundError: if an explicit path is given but does not exist
    """
    if explicit is not None:
        path = Path(explicit).expanduser()
        if not path.is_file():
            raise FileNotFoundError(f"Config file not found: {path}")
        return path

    env_path = os.environ.get(TREELANG_CONFIG)
    if env_path:
        path = Path(env_path).expanduser()
        if path.is_file():
            return path
        logger.debug("%s points at missing file %s, ignoring", TREELANG_CONFIG, path)

    user_config = _user_config_path()
    if user_config.is_file():
        return user_config

    return None


def _load_yaml(path: Path) -> Dict[str, Any]:
    """Load a YAML config file; an empty file means all defaults."""
    with open(path, 'r', encoding='utf-8') as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid config format in {path}: expected mapping at root")
    return data


def load_config(path: Optional[Path] = None) -> InterpreterConfig:
    """Load configuration, falling back to defaults when no file is found.

    Args:
        path: Optional explicit config file

    Returns:
        InterpreterConfig

    Raises:
        FileNotFoundError: If an explicit path does not exist
        ConfigError: If the file has unknown keys or invalid values
    """
    config_path = find_config_file(path)
    if config_path is None:
        return InterpreterConfig()

    logger.debug("loading config from %s", config_path)
    return InterpreterConfig.from_dict(_load_yaml(config_path), str(config_path))
