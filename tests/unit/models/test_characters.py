"""Tests for Adventurer and Monster models."""

from __future__ import annotations

import pytest

from trpg_encounter.core.constants import AVAILABLE_PORTRAITS, DEFAULT_PORTRAIT
from trpg_encounter.models.characters import Adventurer, Monster, clamp


class TestClamp:
    """Tests for the clamp helper."""

    @pytest.mark.parametrize(
        ("value", "lower", "upper", "expected"),
        [
            (5, 0, 10, 5),
            (-3, 0, 10, 0),
            (42, 0, 10, 10),
            (1000, 1, None, 1000),
            (-5, 1, None, 1),
        ],
    )
    def test_clamp(self, value: int, lower: int, upper: int | None, expected: int) -> None:
        assert clamp(value, lower, upper) == expected


class TestCharacterDefaults:
    """Tests for construction defaults and name handling."""

    def test_adventurer_defaults(self) -> None:
        adventurer = Adventurer()

        assert adventurer.name == "Unnamed Adventurer"
        assert adventurer.initiative == 3
        assert adventurer.max_hp == 10
        assert adventurer.current_hp == 10
        assert adventurer.armor_class == 10
        assert adventurer.portrait == DEFAULT_PORTRAIT

    def test_monster_unnamed(self) -> None:
        assert Monster(name="   ").name == "Unnamed Monster"

    def test_monster_name_defaults_when_omitted(self) -> None:
        assert Monster().name == "Unnamed Monster"

    def test_name_trimmed(self) -> None:
        assert Monster(name="  Ogre \n").name == "Ogre"

    def test_current_hp_defaults_to_max(self) -> None:
        assert Monster(max_hp=25).current_hp == 25

    def test_ids_unique(self) -> None:
        assert Monster().id != Monster().id


class TestClamping:
    """Tests that numeric fields are normalized rather than rejected."""

    @pytest.mark.parametrize(("given", "expected"), [(-10, -5), (25, 20), (7, 7)])
    def test_initiative_clamped(self, given: int, expected: int) -> None:
        assert Adventurer(initiative=given).initiative == expected

    @pytest.mark.parametrize(("given", "expected"), [(0, 1), (-4, 1), (30, 30)])
    def test_max_hp_floor(self, given: int, expected: int) -> None:
        assert Monster(max_hp=given).max_hp == expected

    @pytest.mark.parametrize(("given", "expected"), [(0, 1), (31, 30), (15, 15)])
    def test_armor_class_clamped(self, given: int, expected: int) -> None:
        assert Monster(armor_class=given).armor_class == expected

    def test_current_hp_clamped_on_construction(self) -> None:
        assert Monster(max_hp=10, current_hp=50).current_hp == 10
        assert Monster(max_hp=10, current_hp=-3).current_hp == 0

    def test_current_hp_clamped_on_assignment(self) -> None:
        monster = Monster(max_hp=10)

        monster.current_hp = 99
        assert monster.current_hp == 10

        monster.current_hp = -99
        assert monster.current_hp == 0

    def test_assignment_clamps(self) -> None:
        adventurer = Adventurer()

        adventurer.initiative = 100
        adventurer.armor_class = -1
        adventurer.max_hp = 0

        assert adventurer.initiative == 20
        assert adventurer.armor_class == 1
        assert adventurer.max_hp == 1

    def test_lowering_max_hp_drags_current_hp(self) -> None:
        monster = Monster(max_hp=20)

        monster.max_hp = 8

        assert monster.max_hp == 8
        assert monster.current_hp == 8

    def test_raising_max_hp_keeps_current_hp(self) -> None:
        monster = Monster(max_hp=20, current_hp=5)

        monster.max_hp = 40

        assert monster.current_hp == 5


class TestAdventurerPortrait:
    """Tests for portrait handling."""

    def test_portrait_set_has_35_icons(self) -> None:
        assert len(AVAILABLE_PORTRAITS) == 35
        assert DEFAULT_PORTRAIT in AVAILABLE_PORTRAITS

    def test_unknown_portrait_falls_back(self) -> None:
        assert Adventurer(portrait="not.an.icon").portrait == DEFAULT_PORTRAIT

    def test_known_portrait_kept(self) -> None:
        icon = AVAILABLE_PORTRAITS[-1]
        assert Adventurer(portrait=icon).portrait == icon


class TestIsAlive:
    """Tests for the is_alive computed field."""

    def test_alive_above_zero(self) -> None:
        assert Monster(max_hp=5, current_hp=1).is_alive is True

    def test_dead_at_zero(self) -> None:
        assert Monster(max_hp=5, current_hp=0).is_alive is False

    def test_serialized_and_ignored_on_load(self) -> None:
        """Test that is_alive round-trips through model_dump without errors."""
        monster = Monster(name="Ghoul", max_hp=5, current_hp=0)
        data = monster.model_dump()

        assert data["is_alive"] is False
        assert Monster.model_validate(data) == monster


class TestUpdateStats:
    """Tests for applying an edit form."""

    def test_max_applied_before_current(self) -> None:
        """Raising max and current together is not capped by the old max."""
        adventurer = Adventurer(max_hp=10)

        adventurer.update_stats(max_hp=30, current_hp=25)

        assert adventurer.max_hp == 30
        assert adventurer.current_hp == 25

    def test_partial_update(self) -> None:
        adventurer = Adventurer(name="Thorin", initiative=2)

        adventurer.update_stats(name="  Thorin II ", portrait="crown.fill")

        assert adventurer.name == "Thorin II"
        assert adventurer.initiative == 2

    def test_update_clamps(self) -> None:
        monster = Monster()

        monster.update_stats(initiative=-50, armor_class=99)

        assert monster.initiative == -5
        assert monster.armor_class == 30


class TestDuplicate:
    """Tests for character copies."""

    def test_adventurer_copy(self, sample_adventurer: Adventurer) -> None:
        copy = sample_adventurer.duplicate()

        assert copy.id != sample_adventurer.id
        assert copy.name == "Thorin (Copy)"
        assert copy.max_hp == sample_adventurer.max_hp
        assert copy.portrait == sample_adventurer.portrait

    def test_monster_copy_keeps_wounds(self) -> None:
        monster = Monster(name="Troll", max_hp=84, current_hp=40)

        copy = monster.duplicate()

        assert copy.current_hp == 40
        assert copy.name == "Troll (Copy)"

    def test_copy_without_rename(self, sample_monster: Monster) -> None:
        assert sample_monster.duplicate(rename=False).name == sample_monster.name
