"""Core module providing configuration, logging, constants and exceptions.

Exports:
    Exceptions:
        TrpgEncounterError: Base exception for all application errors.
        CombatError, InvalidGameStateError, DiceRollError: Engine errors.
        StorageError: Persistence failures.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
        unbind_context: Remove keys from the logging context.
"""

from __future__ import annotations

from trpg_encounter.core.config import (
    CombatSettings,
    Settings,
    SoundSettings,
    StorageSettings,
    clear_settings_cache,
    get_settings,
)
from trpg_encounter.core.exceptions import (
    CombatError,
    ConfigurationError,
    DiceRollError,
    GameEngineError,
    InvalidGameStateError,
    SoundCueError,
    StorageError,
    TrpgEncounterError,
    ValidationError,
)
from trpg_encounter.core.logging import (
    bind_context,
    clear_context,
    unbind_context,
    configure_from_settings,
    configure_logging,
    get_logger,
)


__all__ = [
    # Base exception
    "TrpgEncounterError",
    # Configuration exceptions
    "ConfigurationError",
    "ValidationError",
    # Game engine exceptions
    "GameEngineError",
    "InvalidGameStateError",
    "CombatError",
    "DiceRollError",
    # Storage / sound exceptions
    "StorageError",
    "SoundCueError",
    # Configuration
    "Settings",
    "StorageSettings",
    "SoundSettings",
    "CombatSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    "bind_context",
    "clear_context",
    "unbind_context",
]
