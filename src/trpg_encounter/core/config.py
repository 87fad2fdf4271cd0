"""Configuration management for the TRPG Encounter Tracker.

This module provides centralized configuration management using
pydantic-settings, supporting environment variables, .env files, and
runtime configuration overrides.

Example:
    >>> from trpg_encounter.core.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.app_name)
    'TRPG Encounter Tracker'

Environment Variables:
    TRPG_ENCOUNTER_DATABASE_PATH: Path to the SQLite database file
    TRPG_ENCOUNTER_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    TRPG_ENCOUNTER_SOUND_ENABLED: Enable or mute sound cues
    TRPG_ENCOUNTER_SOUND_ASSET_PATH: Directory holding the cue audio files
    TRPG_ENCOUNTER_COMBAT_INITIATIVE_DICE: Dice expression rolled for initiative
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from trpg_encounter.core.exceptions import ConfigurationError


class StorageSettings(BaseSettings):
    """Configuration for the local record store.

    Attributes:
        database_path: Path to the SQLite database file.
    """

    model_config = SettingsConfigDict(
        env_prefix="TRPG_ENCOUNTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    database_path: Path = Field(
        default=Path.home() / ".trpg_encounter" / "trpg_encounter.db",
        description="Path to SQLite database",
    )


class SoundSettings(BaseSettings):
    """Configuration for sound cue playback.

    Attributes:
        enabled: Whether cues are dispatched at all.
        asset_path: Directory containing one audio file per cue.
        file_extension: Extension of the cue audio files.
    """

    model_config = SettingsConfigDict(
        env_prefix="TRPG_ENCOUNTER_SOUND_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    enabled: bool = Field(default=True, description="Play sound cues")
    asset_path: Path = Field(
        default=Path("data/sounds"),
        description="Directory for cue audio files",
    )
    file_extension: str = Field(
        default="mp3",
        min_length=1,
        max_length=10,
        description="Cue audio file extension",
    )

    @field_validator("file_extension", mode="after")
    @classmethod
    def strip_leading_dot(cls, value: str) -> str:
        """Accept both '.mp3' and 'mp3'."""
        return value.lstrip(".")


class CombatSettings(BaseSettings):
    """Configuration for combat engine behavior.

    Attributes:
        initiative_dice: Dice expression rolled once per participant at start.
        reset_monster_hp: Restore every monster to full HP when combat starts.
    """

    model_config = SettingsConfigDict(
        env_prefix="TRPG_ENCOUNTER_COMBAT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    initiative_dice: str = Field(
        default="1d20",
        description="Initiative dice expression",
    )
    reset_monster_hp: bool = Field(
        default=True,
        description="Heal monsters to full at combat start",
    )

    @field_validator("initiative_dice", mode="after")
    @classmethod
    def validate_initiative_dice(cls, value: str) -> str:
        """Ensure the initiative expression rolls a single d20.

        Raises:
            ConfigurationError: If the expression is not a d20 roll.
        """
        normalized = value.strip().lower()
        if normalized not in {"1d20", "d20"}:
            raise ConfigurationError(
                f"initiative_dice must be a single d20 roll, got {value!r}",
                config_key="initiative_dice",
            )
        return "1d20"


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        log_json: Emit JSON log lines instead of console output.
        storage: Record store settings.
        sound: Sound cue settings.
        combat: Combat engine settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="TRPG_ENCOUNTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    # Application metadata
    app_name: str = Field(
        default="TRPG Encounter Tracker",
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
    log_json: bool = Field(
        default=False,
        description="Render logs as JSON",
    )

    storage: StorageSettings = Field(default_factory=StorageSettings)
    sound: SoundSettings = Field(default_factory=SoundSettings)
    combat: CombatSettings = Field(default_factory=CombatSettings)

    @property
    def is_production(self) -> bool:
        """Check if running in production mode.

        Returns:
            True if not in debug mode.
        """
        return not self.debug


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
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
    """Clear the settings cache, forcing a reload on next access.

    This is primarily useful for testing or when environment variables
    have changed at runtime.
    """
    get_settings.cache_clear()


__all__ = [
    "StorageSettings",
    "SoundSettings",
    "CombatSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
