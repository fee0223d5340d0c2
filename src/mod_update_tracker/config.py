"""Configuration management service with Pydantic Settings.

This module provides centralized configuration management for the
Mod Update Tracker, loading and validating environment variables at
startup.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SUPPORTED_DATABASE_SCHEMES = ("postgresql://", "postgresql+asyncpg://", "sqlite+aiosqlite://")


class DatabaseSettings(BaseSettings):
    """Database connection settings."""

    model_config = SettingsConfigDict(env_prefix="")

    url: str = Field(
        alias="DATABASE_URL",
        description="PostgreSQL or SQLite (aiosqlite) connection string",
    )

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate database URL format."""
        if not v.startswith(SUPPORTED_DATABASE_SCHEMES):
            raise ValueError(
                "DATABASE_URL must be a PostgreSQL or sqlite+aiosqlite connection string"
            )
        return v


class DiscordSettings(BaseSettings):
    """Discord bot settings."""

    model_config = SettingsConfigDict(env_prefix="DISCORD_")

    token: SecretStr | None = Field(
        default=None,
        alias="DISCORD_TOKEN",
        description="Discord bot token",
    )

    @property
    def enabled(self) -> bool:
        """Check if the bot can log in to Discord."""
        return self.token is not None


class CurseForgeSettings(BaseSettings):
    """CurseForge API settings."""

    model_config = SettingsConfigDict(env_prefix="CURSEFORGE_")

    api_key: SecretStr | None = Field(
        default=None,
        alias="CURSEFORGE_API_KEY",
        description="CurseForge Core API key",
    )
    base_url: str = Field(
        default="https://api.curseforge.com",
        alias="CURSEFORGE_BASE_URL",
        description="CurseForge Core API base URL",
    )
    timeout: float = Field(
        default=10.0,
        alias="CURSEFORGE_TIMEOUT",
        description="Request timeout in seconds",
        gt=0,
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Validate API URL format."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("CurseForge base URL must be an HTTP(S) endpoint")
        return v.rstrip("/")


class ModrinthSettings(BaseSettings):
    """Modrinth API settings."""

    model_config = SettingsConfigDict(env_prefix="MODRINTH_")

    base_url: str = Field(
        default="https://api.modrinth.com/v2",
        alias="MODRINTH_BASE_URL",
        description="Modrinth Labrinth API base URL",
    )
    user_agent: str = Field(
        default="mod-update-tracker/0.1.0",
        alias="MODRINTH_USER_AGENT",
        description="User-Agent header sent to Modrinth",
    )
    timeout: float = Field(
        default=10.0,
        alias="MODRINTH_TIMEOUT",
        description="Request timeout in seconds",
        gt=0,
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Validate API URL format."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("Modrinth base URL must be an HTTP(S) endpoint")
        return v.rstrip("/")


class Settings(BaseSettings):
    """Main application settings.

    Loads configuration from environment variables with support for
    .env files via python-dotenv.

    Example:
        ```python
        from mod_update_tracker.config import get_settings

        settings = get_settings()
        print(settings.database.url)
        print(settings.log_level)
        ```
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Nested configuration groups
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    discord: DiscordSettings = Field(default_factory=DiscordSettings)
    curseforge: CurseForgeSettings = Field(default_factory=CurseForgeSettings)
    modrinth: ModrinthSettings = Field(default_factory=ModrinthSettings)

    # Application settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Logging level",
    )
    default_changelog_max_length: int = Field(
        default=4000,
        alias="DEFAULT_CHANGELOG_MAX_LENGTH",
        description="Changelog length used when a guild has no settings row",
        ge=10,
        le=4000,
    )

    def get_logging_level(self) -> int:
        """Get the numeric logging level."""
        level: int = getattr(logging, self.log_level)
        return level

    def redacted_summary(self) -> dict[str, str | dict[str, str]]:
        """Get a summary of settings with secrets redacted.

        Returns:
            Dictionary of settings with sensitive values masked.
        """
        return {
            "database_url": self._redact_url(self.database.url),
            "curseforge": {
                "base_url": self.curseforge.base_url,
                "api_key": "(set)" if self.curseforge.api_key else "(not set)",
            },
            "modrinth": {
                "base_url": self.modrinth.base_url,
                "user_agent": self.modrinth.user_agent,
            },
            "discord_enabled": str(self.discord.enabled),
            "log_level": self.log_level,
            "default_changelog_max_length": str(self.default_changelog_max_length),
        }

    @staticmethod
    def _redact_url(url: str) -> str:
        """Redact password from URL if present."""
        if "@" in url and "://" in url:
            protocol_end = url.index("://") + 3
            at_pos = url.index("@")
            creds_part = url[protocol_end:at_pos]
            if ":" in creds_part:
                username = creds_part.split(":")[0]
                return f"{url[:protocol_end]}{username}:***@{url[at_pos + 1 :]}"
        return url


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The Settings instance.

    Raises:
        ValidationError: If required environment variables are missing
            or have invalid values.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache.

    Useful for testing when you need to reload settings with
    different environment variables.
    """
    get_settings.cache_clear()
