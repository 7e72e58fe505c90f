"""Configuration management for nsemitter."""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict
import yaml

from nsemitter.core.exceptions import ConfigurationError

ENV_PREFIX = "NSEMITTER_"


class EmitterConfig(BaseSettings):
    """
    Configuration for nsemitter.

    Can be loaded from:
    - Environment variables (prefix: NSEMITTER_)
    - YAML file
    - Direct initialization

    Example:
        >>> config = EmitterConfig(enable_floats=True)
        >>> config = EmitterConfig.from_yaml("nsemitter.yaml")
        >>> config = EmitterConfig()
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        extra="ignore",
        validate_default=True,
    )

    enable_floats: bool = Field(
        default=False,
        description="Record dispatch markers in the float controller",
    )
    max_floats: int = Field(
        default=10000,
        ge=0,
        description="Max floats to keep in memory (0=unlimited)",
    )
    log_dispatch: bool = Field(
        default=True,
        description="Log each emit at DEBUG level",
    )

    @classmethod
    def find_config_yaml(cls) -> Path | None:
        """
        Search for a config file in standard locations.

        Search order:
        1. ./nsemitter.yaml
        2. ~/.nsemitter/config.yaml

        Returns:
            Path to the config file if found, None otherwise
        """
        search_paths = [
            Path.cwd() / "nsemitter.yaml",
            Path.home() / ".nsemitter" / "config.yaml",
        ]

        for path in search_paths:
            if path.exists():
                return path

        return None

    @classmethod
    def from_yaml(cls, path: Path | str | None = None) -> EmitterConfig:
        """
        Load configuration from YAML file.

        Environment variables take precedence over keys found in the file.

        Args:
            path: Path to YAML configuration file. If None, searches standard locations.

        Returns:
            EmitterConfig instance

        Raises:
            ConfigurationError: If no file is found or the file is not a mapping
        """
        if path is None:
            path = cls.find_config_yaml()
            if path is None:
                raise ConfigurationError(
                    "Config file not found. Searched:\n"
                    "  1. ./nsemitter.yaml\n"
                    "  2. ~/.nsemitter/config.yaml"
                )
        else:
            path = Path(path)
            if not path.exists():
                raise ConfigurationError(f"Config file not found: {path}")

        with open(path, encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f) or {}

        if not isinstance(yaml_data, dict):
            raise ConfigurationError(f"Config file must contain a mapping: {path}")

        result_data = {}

        for key, value in yaml_data.items():
            env_key = f"{ENV_PREFIX}{str(key).upper()}"
            if env_key in os.environ:
                continue
            result_data[key] = value

        return cls(**result_data)

    def to_yaml(self, path: Path | str) -> None:
        """
        Save configuration to YAML file.

        Args:
            path: Path to save YAML configuration
        """
        path = Path(path)
        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(
                self.model_dump(mode="json"),
                f,
                default_flow_style=False,
                sort_keys=False,
            )

    def __repr__(self) -> str:
        return (
            f"EmitterConfig(enable_floats={self.enable_floats}, "
            f"max_floats={self.max_floats}, log_dispatch={self.log_dispatch})"
        )


_global_config: EmitterConfig | None = None


def get_config() -> EmitterConfig:
    """
    Get the global EmitterConfig instance.

    Created from the environment on first call.
    Can be overridden for testing via set_config().

    Raises:
        ConfigurationError: If an NSEMITTER_* variable holds an invalid value
    """
    global _global_config
    if _global_config is None:
        try:
            _global_config = EmitterConfig()
        except ValidationError as e:
            raise ConfigurationError(f"Invalid {ENV_PREFIX}* environment: {e}") from e
    return _global_config


def set_config(config: EmitterConfig | None) -> None:
    """
    Set the global EmitterConfig instance.

    Passing None drops the current instance so the next get_config()
    rebuilds it from the environment.
    """
    global _global_config
    _global_config = config


__all__ = [
    "EmitterConfig",
    "get_config",
    "set_config",
]
