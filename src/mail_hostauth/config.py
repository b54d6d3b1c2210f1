"""Configuration settings for mail-hostauth using pydantic-settings."""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_core import ValidationError
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from mail_hostauth.exceptions import ConfigError, DecodeError
from mail_hostauth.uri import decode

APP_NAME = "mail-hostauth"


class ConnectionConfig(BaseModel):
    """A named connection string.

    Attributes:
        id: Unique identifier for the connection (e.g., "work-imap").
        connection: Connection string, e.g. "imap+ssl+://user@mail.example.com".
            The password may be left out and supplied by a credential backend.
        password_env: Environment variable holding the password, replacing the
            default variable names searched by the environment backend.
    """

    id: str = Field(
        ...,
        min_length=1,
        pattern=r"^[a-zA-Z][a-zA-Z0-9_-]*$",
        description="Unique connection identifier (alphanumeric, hyphens, underscores)",
    )
    connection: str = Field(..., min_length=1, description="Connection string")
    password_env: str | None = Field(
        None,
        pattern=r"^[A-Za-z_][A-Za-z0-9_]*$",
        description="Environment variable holding the password",
    )

    @field_validator("connection")
    @classmethod
    def validate_connection(cls, v: str) -> str:
        """Validate that the connection string can be decoded."""
        try:
            decode(v)
        except DecodeError as e:
            raise ValueError(e.reason) from e
        return v


class YamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Settings source that loads configuration from a YAML file.

    Looks for config file in the following order:
    1. HOSTAUTH_CONFIG_FILE environment variable
    2. ./hostauth.yaml (current directory)
    3. $XDG_CONFIG_HOME/mail-hostauth/config.yaml (defaults to ~/.config)
    """

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Get field value from YAML config."""
        yaml_data = self._load_yaml_config()
        field_value = yaml_data.get(field_name)
        return field_value, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return all settings from YAML config."""
        return self._load_yaml_config()

    def _load_yaml_config(self) -> dict[str, Any]:
        """Load and cache YAML config file."""
        if not hasattr(self, "_yaml_data"):
            self._yaml_data = self._read_yaml_file()
        return self._yaml_data

    def _read_yaml_file(self) -> dict[str, Any]:
        """Read YAML config from the first config file that exists."""
        xdg_config = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
        config_paths = [
            os.environ.get("HOSTAUTH_CONFIG_FILE"),
            Path.cwd() / "hostauth.yaml",
            Path(xdg_config) / APP_NAME / "config.yaml",
        ]

        for path in config_paths:
            if not path:
                continue
            path_obj = Path(path)
            if not path_obj.exists():
                continue
            try:
                with open(path_obj) as f:
                    data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                mark = getattr(e, "problem_mark", None)
                problem = getattr(e, "problem", None) or str(e)
                raise ConfigError(
                    _format_location(
                        f"Invalid YAML syntax: {problem}",
                        str(path_obj),
                        mark.line + 1 if mark else None,
                        mark.column + 1 if mark else None,
                    )
                ) from e
            except OSError as e:
                raise ConfigError(
                    _format_location(f"Cannot read config file: {e}", str(path_obj))
                ) from e
            if data is None:
                return {}
            if not isinstance(data, dict):
                raise ConfigError(
                    _format_location("Top level must be a mapping", str(path_obj))
                )
            return data

        return {}


def _format_location(
    message: str, file_path: str, line: int | None = None, col: int | None = None
) -> str:
    location = f" in {file_path}"
    if line is not None:
        location += f" at line {line}"
        if col is not None:
            location += f", column {col}"
    return f"Configuration error{location}: {message}"


def _parse_validation_error(error: ValidationError) -> str:
    """Convert Pydantic ValidationError to user-friendly message."""
    for err in error.errors():
        loc = err.get("loc", ())
        msg = err.get("msg", "")
        error_type = err.get("type", "")

        if error_type == "missing" and loc:
            field_name = loc[-1]
            if "connections" in loc:
                return (
                    f"Connection is missing required field '{field_name}'. "
                    "Required fields for connections: id, connection"
                )
            return f"Missing required field '{field_name}'"

        if error_type == "string_pattern_mismatch" and loc and loc[-1] == "id":
            return (
                "Connection ID must start with a letter and contain only letters, "
                "numbers, hyphens, and underscores (e.g., 'work', 'work-imap')"
            )

        if loc:
            field_name = ".".join(str(part) for part in loc)
            return f"Invalid value for '{field_name}': {msg}"

    return str(error)


class Settings(BaseSettings):
    """Application settings loaded from environment variables with HOSTAUTH_ prefix.

    Named connections are configured in the YAML file:
        connections:
          - id: "work-imap"
            connection: "imap+ssl+://user@mail.company.com"

    Passwords left out of connection strings are retrieved via credential
    backends (e.g., HOSTAUTH_CONNECTION_WORK_IMAP_PASSWORD).
    """

    model_config = SettingsConfigDict(env_prefix="HOSTAUTH_")

    connections: list[ConnectionConfig] = []
    log_level: str = "WARNING"

    @field_validator("connections")
    @classmethod
    def _validate_unique_ids(cls, v: list[ConnectionConfig]) -> list[ConnectionConfig]:
        seen: set[str] = set()
        for connection in v:
            if connection.id in seen:
                raise ValueError(f"duplicate connection id '{connection.id}'")
            seen.add(connection.id)
        return v

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level '{v}'")
        return level

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to include YAML config."""
        return (
            init_settings,
            env_settings,
            YamlConfigSettingsSource(settings_cls),
            dotenv_settings,
            file_secret_settings,
        )


def get_settings_eager() -> Settings:
    """Load settings, failing fast with a readable message if they are invalid.

    Raises:
        ConfigError: If the config file or its contents are invalid.
    """
    try:
        return Settings()
    except ValidationError as e:
        raise ConfigError(_parse_validation_error(e)) from e
