"""Tests for initiative computation at combat start."""

from __future__ import annotations

from trpg_encounter.engine.initiative import roll_initiative, sort_by_initiative
from trpg_encounter.models.characters import Adventurer, Monster


class TestSortByInitiative:
    """Tests for turn ordering."""

    def test_total_then_base_then_roll(self, make_participant) -> None:
        """Base [10, 10, 5] with rolls [3, 7, 20] orders P3, P2, P1."""
        p1 = make_participant("P1", 10, 3)
        p2 = make_participant("P2", 10, 7)
        p3 = make_participant("P3", 5, 20)

        ordered = sort_by_initiative([p1, p2, p3])

        assert [p.combatant.name for p in ordered] == ["P3", "P2", "P1"]

    def test_base_breaks_total_tie(self, make_participant) -> None:
        low_base = make_participant("Lucky", 2, 15)
        high_base = make_participant("Quick", 12, 5)

        ordered = sort_by_initiative([low_base, high_base])

        assert [p.combatant.name for p in ordered] == ["Quick", "Lucky"]

    def test_full_tie_keeps_input_order(self, make_participant) -> None:
        a = make_participant("A", 3, 10)
        b = make_participant("B", 3, 10)

        assert sort_by_initiative([a, b]) == [a, b]
        assert sort_by_initiative([b, a]) == [b, a]

    def test_ordering_is_non_increasing(self, make_participant) -> None:
        participants = [make_participant(f"P{i}", i % 7 - 3, (i * 7) % 20 + 1) for i in range(12)]

        ordered = sort_by_initiative(participants)
        keys = [p.sort_key for p in ordered]

        assert keys == sorted(keys, reverse=True)


class TestRollInitiative:
    """Tests for roll_initiative."""

    def test_one_roll_per_participant(self, make_roller) -> None:
        roller = make_roller([4, 9, 16])
        heroes = [Adventurer(name="A"), Adventurer(name="B")]
        monsters = [Monster(name="M")]

        result = roll_initiative(heroes, monsters, roller)

        assert roller.calls == 3
        assert len(result.participants) == 3
        assert all(1 <= p.dice_roll <= 20 for p in result.participants)

    def test_monsters_healed_adventurers_not(self, make_roller) -> None:
        hero = Adventurer(name="Hero", max_hp=20, current_hp=5)
        orc = Monster(name="Orc", max_hp=15, current_hp=2)

        roll_initiative([hero], [orc], make_roller([10]))

        assert hero.current_hp == 5
        assert orc.current_hp == 15

    def test_monster_reset_can_be_disabled(self, make_roller) -> None:
        orc = Monster(name="Orc", max_hp=15, current_hp=2)

        roll_initiative([], [orc], make_roller([10]), reset_monster_hp=False)

        assert orc.current_hp == 2

    def test_adventurers_roll_first(self, make_roller) -> None:
        hero = Adventurer(name="Hero", initiative=0)
        orc = Monster(name="Orc", initiative=0)

        result = roll_initiative([hero], [orc], make_roller([1, 20]))

        rolls = {p.combatant.name: p.dice_roll for p in result.participants}
        assert rolls == {"Hero": 1, "Orc": 20}
        assert [p.combatant.name for p in result.participants] == ["Orc", "Hero"]

    def test_log_in_roster_order_then_round_marker(self, make_roller) -> None:
        hero = Adventurer(name="Hero", initiative=0)
        orc = Monster(name="Orc", initiative=0)

        result = roll_initiative([hero], [orc], make_roller([1, 20]))

        assert [entry.description for entry in result.log] == [
            "Hero rolled for initiative: 1 (0 base + 1 roll)",
            "Orc rolled for initiative: 20 (0 base + 20 roll)",
            "Round 1 begins",
        ]
        assert all(entry.round == 1 for entry in result.log)

    def test_empty_roster(self, make_roller) -> None:
        result = roll_initiative([], [], make_roller([10]))

        assert result.participants == []
        assert [e.description for e in result.log] == ["Round 1 begins"]
