"""Tests for the exception hierarchy."""

from __future__ import annotations

import pytest

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


class TestTrpgEncounterError:
    """Tests for the base TrpgEncounterError exception."""

    def test_basic_message(self) -> None:
        exc = TrpgEncounterError("Test error message")
        assert exc.message == "Test error message"
        assert exc.details == {}
        assert str(exc) == "Test error message"

    def test_with_details(self) -> None:
        exc = TrpgEncounterError("Test error", details={"key": "value", "count": 42})
        assert "key='value'" in str(exc)
        assert "count=42" in str(exc)

    def test_repr(self) -> None:
        repr_str = repr(TrpgEncounterError("Test", details={"x": 1}))
        assert "TrpgEncounterError" in repr_str
        assert "Test" in repr_str


class TestGameEngineExceptions:
    """Tests for combat engine exceptions."""

    def test_combat_error_context(self) -> None:
        exc = CombatError("Bad index", participant_index=7, round_number=2)
        assert exc.details == {"participant_index": 7, "round_number": 2}

    def test_combat_error_index_zero_kept(self) -> None:
        exc = CombatError("Bad index", participant_index=0)
        assert exc.details["participant_index"] == 0

    def test_invalid_state_context(self) -> None:
        exc = InvalidGameStateError("No combat", current_state="idle", expected_states=["combat"])
        assert exc.details["current_state"] == "idle"
        assert exc.details["expected_states"] == ["combat"]

    def test_dice_roll_error_expression(self) -> None:
        assert DiceRollError("Bad", expression="1dx").details["expression"] == "1dx"

    @pytest.mark.parametrize("exc_class", [CombatError, InvalidGameStateError, DiceRollError])
    def test_inherit_from_game_engine_error(self, exc_class: type[GameEngineError]) -> None:
        with pytest.raises(GameEngineError):
            raise exc_class("boom")


class TestOtherExceptions:
    """Tests for storage, sound, configuration and validation errors."""

    def test_storage_error_record(self) -> None:
        exc = StorageError("Missing", record_type="campaign", record_id="abc")
        assert exc.details == {"record_type": "campaign", "record_id": "abc"}

    def test_sound_cue_error(self) -> None:
        assert SoundCueError("Missing", cue="heal").details["cue"] == "heal"

    def test_configuration_error_key(self) -> None:
        assert ConfigurationError("Bad", config_key="log_level").details["config_key"] == "log_level"

    def test_validation_error_value(self) -> None:
        exc = ValidationError("Bad row", field_name="max_hp", invalid_value="lots")
        assert exc.details == {"field_name": "max_hp", "invalid_value": "lots"}

    @pytest.mark.parametrize(
        "exc_class",
        [StorageError, SoundCueError, ConfigurationError, ValidationError, GameEngineError],
    )
    def test_inherit_from_base(self, exc_class: type[TrpgEncounterError]) -> None:
        assert issubclass(exc_class, TrpgEncounterError)
