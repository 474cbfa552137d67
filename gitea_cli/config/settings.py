"""
Configuration for gitea-cli using pydantic-settings.

Settings are read once at startup from the environment and passed
explicitly into ``gitea_cli.main.create_cli``; nothing reads the
environment again afterwards.

Environment variables:
    GITEA_URL: Default Gitea server URL for ``--gitea-url``
    GITEA_CLI_LOG_LEVEL: Logging level (default WARNING)
    GITEA_CLI_TIMEOUT: HTTP timeout in seconds (default 30)
"""

from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from gitea_cli.exceptions import ConfigurationError

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class CliSettings(BaseSettings):
    """Process-wide defaults for the command-line interface."""

    model_config = SettingsConfigDict(
        env_prefix="GITEA_CLI_",
        case_sensitive=False,
        extra="ignore",
    )

    gitea_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GITEA_URL", "gitea_url"),
        description="Default Gitea server URL",
    )
    log_level: LogLevel = Field(default="WARNING", description="Logging level")
    timeout: float = Field(default=30.0, gt=0, description="HTTP timeout in seconds")
    default_remote: str = Field(default="origin", min_length=1)
    default_branch: str = Field(default="main", min_length=1)

    @field_validator("gitea_url")
    @classmethod
    def empty_url_is_unset(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return v.strip()

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: object) -> object:
        return v.upper() if isinstance(v, str) else v

    @classmethod
    def load(cls) -> CliSettings:
        """Read settings from the environment.

        Raises:
            ConfigurationError: If an environment value is invalid
        """
        try:
            return cls()
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e
