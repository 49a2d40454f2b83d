"""Configuration loading for gitstamp."""

from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import ConfigError

# Configuration file picked up from the current directory when present
DEFAULT_CONFIG_FILENAME = ".gitstamp.yaml"

VALID_LOG_LEVELS = {"debug", "info", "warn", "warning", "error"}


class GitstampSettings(BaseModel):
    """Runtime settings for the gitstamp CLI and provider."""

    cwd: Optional[Path] = Field(
        None, description="Working directory (default: current directory)"
    )
    git_executable: str = Field(default="git", description="Git executable to run")
    log_level: str = Field(default="info", description="Logging level")
    output_format: Literal["json", "yaml"] = Field(
        default="json", description="Output format for the show command"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level and map warn to warning."""
        level = v.lower()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log level: {v}. Must be debug, info, warn, or error."
            )
        # Map WARN to WARNING for Python logging
        if level == "warn":
            level = "warning"
        return level

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "GitstampSettings":
        """
        Build settings from a YAML string.

        Args:
            yaml_str: YAML mapping of setting names to values

        Returns:
            GitstampSettings instance

        Raises:
            ConfigError: If the YAML is malformed or fails validation
        """
        try:
            data = yaml.safe_load(yaml_str)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML configuration: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError("Configuration must be a YAML mapping")

        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e


def load_settings(path: Optional[Path] = None) -> GitstampSettings:
    """
    Load settings from a YAML file.

    Args:
        path: Config file to read. When None, `.gitstamp.yaml` in the current
            directory is used if it exists, otherwise defaults apply.

    Returns:
        GitstampSettings instance

    Raises:
        ConfigError: If an explicit path is missing, or the file is invalid
    """
    if path is None:
        default_path = Path.cwd() / DEFAULT_CONFIG_FILENAME
        if not default_path.exists():
            return GitstampSettings()
        path = default_path

    try:
        text = Path(path).read_text()
    except OSError as e:
        raise ConfigError(f"Cannot read configuration file {path}: {e}") from e

    return GitstampSettings.from_yaml(text)
