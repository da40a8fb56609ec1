"""Configuration parser for the command interpreter.

Parses and validates an optional YAML settings file.
"""

from __future__ import annotations

import yaml
from pathlib import Path
from typing import Any, Dict, Optional, Union
from pydantic import BaseModel, Field, field_validator

DEFAULT_PROMPT = "Enter command(s) (use ';' to separate multiple commands): "
DEFAULT_FAREWELL = "Exiting program... Thank you for using our command line interpreter!"


class ShellConfig(BaseModel):
    """Interpreter settings."""
    prompt: str = DEFAULT_PROMPT
    exit_keyword: str = "exit"
    farewell: str = DEFAULT_FAREWELL
    rm_executable: str = "rm"
    dir_mode: int = 0o777
    file_mode: int = 0o666
    history_file: Optional[Path] = None
    history_length: int = Field(default=1000, ge=-1)
    start_dir: Optional[Path] = None

    @field_validator('dir_mode', 'file_mode', mode='before')
    @classmethod
    def parse_mode(cls, v: Any) -> int:
        """Accept octal strings (e.g., "0755" or "0o755") as well as ints."""
        if isinstance(v, str):
            return int(v, 8)
        return v

    @field_validator('dir_mode', 'file_mode')
    @classmethod
    def validate_mode(cls, v: int) -> int:
        """Ensure mode fits in permission bits."""
        if not 0 <= v <= 0o7777:
            raise ValueError(f"Mode must be between 0 and 0o7777, got {oct(v)}")
        return v

    @field_validator('exit_keyword', 'rm_executable')
    @classmethod
    def not_blank(cls, v: str) -> str:
        """Ensure value is not blank."""
        if not v.strip():
            raise ValueError("Value must not be blank")
        return v

    @field_validator('history_file', 'start_dir', mode='before')
    @classmethod
    def expand_user(cls, v: Any) -> Any:
        """Expand ~ in paths."""
        if isinstance(v, str):
            return Path(v).expanduser()
        return v


class ConfigParser:
    """Parse and validate interpreter configuration."""

    def __init__(self, config_path: Union[str, Path]):
        """Initialize parser with config file path.

        Args:
            config_path: Path to YAML settings file
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        self.config: Optional[ShellConfig] = None
        self._raw_config: Optional[Dict[str, Any]] = None

    def parse(self) -> ShellConfig:
        """Parse and validate configuration.

        An empty file yields the defaults.

        Returns:
            Validated configuration object

        Raises:
            yaml.YAMLError: If YAML parsing fails
            pydantic.ValidationError: If validation fails
        """
        with open(self.config_path) as f:
            self._raw_config = yaml.safe_load(f) or {}

        if not isinstance(self._raw_config, dict):
            raise ValueError(
                f"Configuration must be a mapping, got {type(self._raw_config).__name__}"
            )

        self.config = ShellConfig(**self._raw_config)
        return self.config


def load_config(config_path: Union[str, Path, None] = None) -> ShellConfig:
    """Load interpreter configuration.

    Args:
        config_path: Path to YAML file, or None for defaults

    Returns:
        Validated configuration

    Example:
        >>> config = load_config("cmdinterp.yaml")
        >>> config.exit_keyword
        'exit'
    """
    if config_path is None:
        return ShellConfig()
    return ConfigParser(config_path).parse()
