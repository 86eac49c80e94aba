"""Configuration management for the trait sheet core.

This module provides centralized configuration using pydantic-settings,
supporting environment variables, .env files, and runtime overrides.

Example:
    >>> from trait_sheet.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.rules.skill_pool
    28

Environment Variables:
    TRAIT_SHEET_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    TRAIT_SHEET_NOTATION_MAX_NOTATION_LENGTH: Longest accepted notation string
    TRAIT_SHEET_RULES_SKILL_POOL: Maximum total of skill values
    TRAIT_SHEET_RULES_ATTRIBUTE_POOL: Maximum total of drive values
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from trait_sheet.core import constants
from trait_sheet.core.exceptions import ConfigurationError


class NotationSettings(BaseSettings):
    """Configuration for the notation parser.

    Attributes:
        max_notation_length: Longest string handed to the pattern engine.
    """

    model_config = SettingsConfigDict(
        env_prefix="TRAIT_SHEET_NOTATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    max_notation_length: int = Field(
        default=constants.MAX_NOTATION_LENGTH,
        ge=16,
        le=65536,
        description="Longest notation string accepted by the parser",
    )


class RulesSettings(BaseSettings):
    """Configuration for the skill and drive rules.

    Attributes:
        skill_minimum: Smallest skill value.
        skill_maximum: Largest skill value.
        skill_default: Initial skill value of a new character.
        skill_pool: Maximum total of all skill values.
        attribute_minimum: Smallest drive value.
        attribute_maximum: Largest drive value.
        attribute_default: Initial drive value of a new character.
        attribute_pool: Maximum total of all drive values.
        drive_statement_minimum: Smallest drive value carrying a statement.
    """

    model_config = SettingsConfigDict(
        env_prefix="TRAIT_SHEET_RULES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    skill_minimum: int = Field(default=constants.SKILL_MINIMUM, ge=0)
    skill_maximum: int = Field(default=constants.SKILL_MAXIMUM, ge=0)
    skill_default: int = Field(default=constants.SKILL_MINIMUM, ge=0)
    skill_pool: int = Field(default=constants.SKILL_POOL, ge=0)
    attribute_minimum: int = Field(default=constants.ATTRIBUTE_MINIMUM, ge=0)
    attribute_maximum: int = Field(default=constants.ATTRIBUTE_MAXIMUM, ge=0)
    attribute_default: int = Field(default=constants.ATTRIBUTE_MINIMUM, ge=0)
    attribute_pool: int = Field(default=constants.ATTRIBUTE_POOL, ge=0)
    drive_statement_minimum: int = Field(default=constants.DRIVE_STATEMENT_MINIMUM, ge=0)

    @model_validator(mode="after")
    def validate_bounds(self) -> "RulesSettings":
        """Ensure every default lies within its bounds.

        Returns:
            Self if validation passes.

        Raises:
            ConfigurationError: If a minimum exceeds its maximum, or a
                default lies outside its range.
        """
        for prefix in ("skill", "attribute"):
            minimum = getattr(self, f"{prefix}_minimum")
            maximum = getattr(self, f"{prefix}_maximum")
            default = getattr(self, f"{prefix}_default")
            if minimum > maximum:
                raise ConfigurationError(
                    f"{prefix}_minimum ({minimum}) must not exceed "
                    f"{prefix}_maximum ({maximum})",
                    config_key=f"{prefix}_minimum",
                )
            if not minimum <= default <= maximum:
                raise ConfigurationError(
                    f"{prefix}_default ({default}) must lie within "
                    f"[{minimum}, {maximum}]",
                    config_key=f"{prefix}_default",
                )
        return self


class Settings(BaseSettings):
    """Main settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        json_logs: Render log entries as JSON.
        log_file: Optional file receiving JSON log entries.
        notation: Notation parser settings.
        rules: Skill and drive rule settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="TRAIT_SHEET_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="Trait Sheet",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(
        default=False,
        description="Render log entries as JSON",
    )
    log_file: str | None = Field(
        default=None,
        description="Optional file receiving JSON log entries",
    )

    notation: NotationSettings = Field(default_factory=NotationSettings)
    rules: RulesSettings = Field(default_factory=RulesSettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If the configuration is missing or invalid.
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "NotationSettings",
    "RulesSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
