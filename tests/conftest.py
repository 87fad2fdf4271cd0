"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the TRPG Encounter Tracker test suite.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from trpg_encounter.models.campaign import Campaign, Encounter
from trpg_encounter.models.characters import Adventurer, Monster
from trpg_encounter.models.combat import Combatant, CombatParticipant
from trpg_encounter.services.sound import SoundCue


if TYPE_CHECKING:
    from collections.abc import Generator

    from trpg_encounter.engine.combat_tracker import CombatTracker
    from trpg_encounter.storage.database import Database


# =============================================================================
# Test Doubles
# =============================================================================


class ScriptedRoller:
    """Initiative roller returning a fixed sequence of d20 faces."""

    def __init__(self, rolls: Iterable[int]) -> None:
        self._rolls = list(rolls)
        self.calls = 0

    def roll_d20(self) -> int:
        value = self._rolls[self.calls % len(self._rolls)]
        self.calls += 1
        return value


class RecordingSoundPlayer:
    """Sound cue player that remembers every cue it was asked to play."""

    def __init__(self) -> None:
        self.cues: list[SoundCue] = []

    def play(self, cue: SoundCue) -> None:
        self.cues.append(SoundCue(cue))


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from trpg_encounter.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture(autouse=True)
def reset_log_context() -> Generator[None, None, None]:
    """Drop any log context bound by a test."""
    from trpg_encounter.core.logging import clear_context

    yield
    clear_context()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "TRPG_ENCOUNTER_DEBUG": "true",
        "TRPG_ENCOUNTER_LOG_LEVEL": "DEBUG",
        "TRPG_ENCOUNTER_DATABASE_PATH": str(tmp_path / "env.db"),
        "TRPG_ENCOUNTER_SOUND_ENABLED": "false",
        "TRPG_ENCOUNTER_COMBAT_RESET_MONSTER_HP": "false",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


# =============================================================================
# Model Fixtures
# =============================================================================


@pytest.fixture
def sample_adventurer() -> Adventurer:
    """Create a sample Adventurer at full health."""
    return Adventurer(name="Thorin", initiative=2, max_hp=30, armor_class=18, portrait="shield.fill")


@pytest.fixture
def sample_monster() -> Monster:
    """Create a sample Monster at full health."""
    return Monster(name="Goblin", initiative=1, max_hp=7, armor_class=15)


@pytest.fixture
def sample_campaign() -> Campaign:
    """Create a campaign with two adventurers, two monsters and one encounter.

    The encounter roster holds everyone, adventurers first.
    """
    campaign = Campaign(name="Lost Mines")
    thorin = campaign.add_adventurer("Thorin", initiative=2, max_hp=30, armor_class=18)
    elara = campaign.add_adventurer("Elara", initiative=4, max_hp=22, armor_class=14)
    goblin = campaign.add_monster("Goblin", initiative=1, max_hp=7, armor_class=15)
    boss = campaign.add_monster("Goblin Boss", initiative=3, max_hp=21, armor_class=17)

    ambush = campaign.add_encounter("Goblin Ambush")
    ambush.set_adventurers([thorin, elara])
    ambush.set_monsters([goblin, boss])
    return campaign


@pytest.fixture
def sample_encounter(sample_campaign: Campaign) -> Encounter:
    """The roster-complete encounter of sample_campaign."""
    return sample_campaign.encounters[0]


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def sound_player() -> RecordingSoundPlayer:
    return RecordingSoundPlayer()


@pytest.fixture
def make_roller() -> type[ScriptedRoller]:
    """Factory for rollers with fixed d20 faces, e.g. ``make_roller([3, 7])``."""
    return ScriptedRoller


@pytest.fixture
def make_participant():
    """Build a participant from name, base initiative and roll."""

    def _make(
        name: str,
        initiative: int = 0,
        roll: int = 10,
        *,
        max_hp: int = 10,
        monster: bool = False,
    ) -> CombatParticipant:
        cls = Monster if monster else Adventurer
        character = cls(name=name, initiative=initiative, max_hp=max_hp)
        return CombatParticipant(combatant=Combatant.of(character), dice_roll=roll)

    return _make


@pytest.fixture
def tracker(sound_player: RecordingSoundPlayer, make_participant) -> CombatTracker:
    """A tracker with three participants (Alice, Bob, Cara) in that order."""
    from trpg_encounter.engine.combat_tracker import CombatTracker

    tracker = CombatTracker(sound=sound_player)
    tracker.begin(
        [
            make_participant("Alice", 5),
            make_participant("Bob", 3),
            make_participant("Cara", 1, monster=True),
        ]
    )
    return tracker


# =============================================================================
# Storage Fixtures
# =============================================================================


@pytest.fixture
def database(tmp_path: Path) -> Database:
    """Create a Database in a temporary directory."""
    from trpg_encounter.storage.database import Database

    return Database(tmp_path / "trpg" / "test.db")
