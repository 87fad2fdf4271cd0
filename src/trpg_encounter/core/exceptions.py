"""Custom exception hierarchy for the TRPG Encounter Tracker.

All exceptions inherit from TrpgEncounterError, enabling unified error
handling at the application boundary while preserving domain-specific
context. Entity validation never raises: invalid input is normalized by
clamping or defaulting, so the classes below cover engine misuse, storage
failures and configuration problems.

Example:
    >>> from trpg_encounter.core.exceptions import CombatError
    >>> raise CombatError("No participant at index", participant_index=4)
"""

from __future__ import annotations

from typing import Any


class TrpgEncounterError(Exception):
    """Base exception for all TRPG Encounter Tracker errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Game Engine Domain Exceptions
# =============================================================================


class GameEngineError(TrpgEncounterError):
    """Base exception for all combat engine errors."""


class InvalidGameStateError(GameEngineError):
    """Raised when an operation is not valid in the current session state.

    For example, applying damage while no combat is running.
    """

    def __init__(
        self,
        message: str,
        *,
        current_state: str | None = None,
        expected_states: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize invalid game state error with state context.

        Args:
            message: Human-readable error description.
            current_state: The current state identifier.
            expected_states: List of valid states that were expected.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if current_state:
            combined_details["current_state"] = current_state
        if expected_states:
            combined_details["expected_states"] = expected_states
        super().__init__(message, details=combined_details)


class CombatError(GameEngineError):
    """Raised when a combat command cannot be carried out.

    This includes out-of-range participant indices and adding a character
    that is already fighting.
    """

    def __init__(
        self,
        message: str,
        *,
        participant_index: int | None = None,
        round_number: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize combat error with combat context.

        Args:
            message: Human-readable error description.
            participant_index: Index of the participant involved.
            round_number: Current combat round when error occurred.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if participant_index is not None:
            combined_details["participant_index"] = participant_index
        if round_number is not None:
            combined_details["round_number"] = round_number
        super().__init__(message, details=combined_details)


class DiceRollError(GameEngineError):
    """Raised when dice rolling fails, usually because of bad notation."""

    def __init__(
        self,
        message: str,
        *,
        expression: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if expression:
            combined_details["expression"] = expression
        super().__init__(message, details=combined_details)


# =============================================================================
# Storage Exceptions
# =============================================================================


class StorageError(TrpgEncounterError):
    """Raised when the persistence layer fails.

    Initialization failures are fatal at startup; the application has no
    fallback store.
    """

    def __init__(
        self,
        message: str,
        *,
        record_type: str | None = None,
        record_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize storage error with record context.

        Args:
            message: Human-readable error description.
            record_type: Kind of record involved (campaign, monster, ...).
            record_id: Identifier of the record involved.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if record_type:
            combined_details["record_type"] = record_type
        if record_id:
            combined_details["record_id"] = record_id
        super().__init__(message, details=combined_details)


# =============================================================================
# Sound Cue Exceptions
# =============================================================================


class SoundCueError(TrpgEncounterError):
    """Raised inside the sound service when a cue cannot be played.

    Never propagates out of SoundPlayer.play; it is logged and dropped.
    """

    def __init__(
        self,
        message: str,
        *,
        cue: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if cue:
            combined_details["cue"] = cue
        super().__init__(message, details=combined_details)


# =============================================================================
# Configuration & Validation Exceptions
# =============================================================================


class ConfigurationError(TrpgEncounterError):
    """Raised when application configuration is invalid."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


class ValidationError(TrpgEncounterError):
    """Raised when stored or external data cannot be turned into entities.

    User input is never rejected with this error; it is clamped instead.
    """

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        if invalid_value is not None:
            combined_details["invalid_value"] = invalid_value
        super().__init__(message, details=combined_details)


__all__ = [
    # Base exception
    "TrpgEncounterError",
    # Game engine exceptions
    "GameEngineError",
    "InvalidGameStateError",
    "CombatError",
    "DiceRollError",
    # Storage exceptions
    "StorageError",
    # Sound exceptions
    "SoundCueError",
    # Configuration exceptions
    "ConfigurationError",
    "ValidationError",
]
