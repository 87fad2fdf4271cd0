"""Tests for configuration management."""

from __future__ import annotations

from pathlib import Path

import pytest

from trpg_encounter.core.config import (
    CombatSettings,
    Settings,
    SoundSettings,
    StorageSettings,
    clear_settings_cache,
    get_settings,
)
from trpg_encounter.core.exceptions import ConfigurationError


class TestStorageSettings:
    """Tests for StorageSettings configuration."""

    def test_default_path(self) -> None:
        """Test the database lives under the user's home by default."""
        settings = StorageSettings()

        assert settings.database_path.name == "trpg_encounter.db"
        assert settings.database_path.parent.name == ".trpg_encounter"

    def test_env_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test database path from environment."""
        monkeypatch.setenv("TRPG_ENCOUNTER_DATABASE_PATH", str(tmp_path / "x.db"))

        assert StorageSettings().database_path == tmp_path / "x.db"


class TestSoundSettings:
    """Tests for SoundSettings configuration."""

    def test_default_values(self) -> None:
        settings = SoundSettings()

        assert settings.enabled is True
        assert settings.asset_path == Path("data/sounds")
        assert settings.file_extension == "mp3"

    def test_extension_leading_dot_stripped(self) -> None:
        assert SoundSettings(file_extension=".wav").file_extension == "wav"

    def test_disabled_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TRPG_ENCOUNTER_SOUND_ENABLED", "false")

        assert SoundSettings().enabled is False


class TestCombatSettings:
    """Tests for CombatSettings configuration."""

    def test_default_values(self) -> None:
        settings = CombatSettings()

        assert settings.initiative_dice == "1d20"
        assert settings.reset_monster_hp is True

    def test_short_d20_normalized(self) -> None:
        assert CombatSettings(initiative_dice="D20").initiative_dice == "1d20"

    def test_non_d20_rejected(self) -> None:
        """Test that initiative must be a single d20."""
        with pytest.raises(ConfigurationError) as exc_info:
            CombatSettings(initiative_dice="2d6")

        assert exc_info.value.details["config_key"] == "initiative_dice"


class TestSettings:
    """Tests for main Settings configuration."""

    def test_default_settings(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test default settings initialization."""
        monkeypatch.chdir(tmp_path)

        settings = Settings()

        assert settings.app_name == "TRPG Encounter Tracker"
        assert settings.app_version == "0.1.0"
        assert settings.debug is False
        assert settings.log_level == "INFO"
        assert settings.is_production is True

    def test_env_vars(
        self,
        mock_env_vars: dict[str, str],
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test nested settings pick up their own prefixes."""
        monkeypatch.chdir(tmp_path)

        settings = Settings()

        assert settings.debug is True
        assert settings.is_production is False
        assert settings.log_level == "DEBUG"
        assert settings.storage.database_path == Path(mock_env_vars["TRPG_ENCOUNTER_DATABASE_PATH"])
        assert settings.sound.enabled is False
        assert settings.combat.reset_monster_hp is False


class TestGetSettings:
    """Tests for get_settings singleton function."""

    def test_caching(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that settings are cached."""
        monkeypatch.chdir(tmp_path)

        assert get_settings() is get_settings()

    def test_cache_clear(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that cache can be cleared."""
        monkeypatch.chdir(tmp_path)

        settings1 = get_settings()
        clear_settings_cache()
        settings2 = get_settings()

        assert settings1 is not settings2

    def test_invalid_config_raises(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that bad environment values surface as ConfigurationError."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("TRPG_ENCOUNTER_LOG_LEVEL", "LOUD")

        with pytest.raises(ConfigurationError):
            get_settings()
