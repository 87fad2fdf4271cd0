"""Pydantic V2 schemas for campaigns and encounters.

A campaign owns its adventurers, monsters and encounters. Encounter rosters
reference characters by id only, the same way the campaign's characters
are referenced from anywhere else, so deleting a character from the
campaign also drops it from every roster.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

from trpg_encounter.core.constants import (
    COPY_SUFFIX,
    DEFAULT_ARMOR_CLASS,
    DEFAULT_INITIATIVE,
    DEFAULT_MAX_HP,
    DEFAULT_PORTRAIT,
    UNNAMED_CAMPAIGN,
    UNNAMED_ENCOUNTER,
)
from trpg_encounter.core.logging import get_logger
from trpg_encounter.models.characters import Adventurer, Monster, normalize_name
from trpg_encounter.models.ordering import (
    move_items,
    next_sort_order,
    renumber,
    sorted_by_order,
)


logger = get_logger(__name__)


def _unique(ids: Iterable[UUID]) -> list[UUID]:
    seen: set[UUID] = set()
    result: list[UUID] = []
    for uid in ids:
        if uid not in seen:
            seen.add(uid)
            result.append(uid)
    return result


class Encounter(BaseModel):
    """A planned fight and the characters assigned to it.

    Attributes:
        id: Unique encounter identifier.
        name: Encounter name.
        sort_order: Position among the campaign's encounters.
        campaign_id: Owning campaign.
        adventurer_ids: Roster of adventurers, ordered and duplicate-free.
        monster_ids: Roster of monsters, ordered and duplicate-free.
    """

    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid",
    )

    id: UUID = Field(default_factory=uuid4, description="Unique encounter ID")
    name: str = Field(default="", validate_default=True, description="Encounter name")
    sort_order: int = Field(default=0, description="Sibling sort position")
    campaign_id: UUID | None = Field(default=None, description="Owning campaign")
    adventurer_ids: list[UUID] = Field(default_factory=list, description="Adventurer roster")
    monster_ids: list[UUID] = Field(default_factory=list, description="Monster roster")

    @field_validator("name", mode="before")
    @classmethod
    def default_empty_name(cls, value: Any) -> str:
        return normalize_name(value, UNNAMED_ENCOUNTER)

    @field_validator("adventurer_ids", "monster_ids", mode="after")
    @classmethod
    def drop_duplicates(cls, value: list[UUID]) -> list[UUID]:
        return _unique(value)

    def has_adventurer(self, adventurer: Adventurer) -> bool:
        return adventurer.id in self.adventurer_ids

    def has_monster(self, monster: Monster) -> bool:
        return monster.id in self.monster_ids

    def add_adventurer(self, adventurer: Adventurer) -> bool:
        """Add an adventurer to the roster.

        Returns:
            False if the adventurer was already on the roster.
        """
        if self.has_adventurer(adventurer):
            return False
        self.adventurer_ids = [*self.adventurer_ids, adventurer.id]
        return True

    def add_monster(self, monster: Monster) -> bool:
        """Add a monster to the roster.

        Returns:
            False if the monster was already on the roster.
        """
        if self.has_monster(monster):
            return False
        self.monster_ids = [*self.monster_ids, monster.id]
        return True

    def remove_adventurer(self, adventurer_id: UUID) -> bool:
        if adventurer_id not in self.adventurer_ids:
            return False
        self.adventurer_ids = [uid for uid in self.adventurer_ids if uid != adventurer_id]
        return True

    def remove_monster(self, monster_id: UUID) -> bool:
        if monster_id not in self.monster_ids:
            return False
        self.monster_ids = [uid for uid in self.monster_ids if uid != monster_id]
        return True

    def set_adventurers(self, adventurers: Iterable[Adventurer]) -> None:
        """Replace the adventurer roster ("Add All")."""
        self.adventurer_ids = [adventurer.id for adventurer in adventurers]

    def set_monsters(self, monsters: Iterable[Monster]) -> None:
        """Replace the monster roster ("Add All")."""
        self.monster_ids = [monster.id for monster in monsters]

    def duplicate(self, *, keep_roster: bool = True, rename: bool = True) -> "Encounter":
        """Return a copy with a fresh id.

        Args:
            keep_roster: Share the same roster members as this encounter.
            rename: Append ' (Copy)' to the name.
        """
        return Encounter(
            name=f"{self.name}{COPY_SUFFIX}" if rename else self.name,
            sort_order=self.sort_order,
            campaign_id=self.campaign_id,
            adventurer_ids=list(self.adventurer_ids) if keep_roster else [],
            monster_ids=list(self.monster_ids) if keep_roster else [],
        )


class Campaign(BaseModel):
    """A campaign and everything it owns.

    Attributes:
        id: Unique campaign identifier.
        name: Campaign name.
        created_at: When the campaign was created.
        sort_order: Position in the campaign list.
        adventurers: Owned adventurers.
        monsters: Owned monsters.
        encounters: Owned encounters.
    """

    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid",
    )

    id: UUID = Field(default_factory=uuid4, description="Unique campaign ID")
    name: str = Field(default="", validate_default=True, description="Campaign name")
    created_at: datetime = Field(default_factory=datetime.now, description="Creation time")
    sort_order: int = Field(default=0, description="Sibling sort position")
    adventurers: list[Adventurer] = Field(default_factory=list, description="Adventurers")
    monsters: list[Monster] = Field(default_factory=list, description="Monsters")
    encounters: list[Encounter] = Field(default_factory=list, description="Encounters")

    @field_validator("name", mode="before")
    @classmethod
    def default_empty_name(cls, value: Any) -> str:
        return normalize_name(value, UNNAMED_CAMPAIGN)

    # =========================================================================
    # Sorted views
    # =========================================================================

    @property
    def sorted_adventurers(self) -> list[Adventurer]:
        return sorted_by_order(self.adventurers)

    @property
    def sorted_monsters(self) -> list[Monster]:
        return sorted_by_order(self.monsters)

    @property
    def sorted_encounters(self) -> list[Encounter]:
        return sorted_by_order(self.encounters)

    # =========================================================================
    # Lookup
    # =========================================================================

    def get_adventurer(self, adventurer_id: UUID) -> Adventurer | None:
        return next((a for a in self.adventurers if a.id == adventurer_id), None)

    def get_monster(self, monster_id: UUID) -> Monster | None:
        return next((m for m in self.monsters if m.id == monster_id), None)

    def get_encounter(self, encounter_id: UUID) -> Encounter | None:
        return next((e for e in self.encounters if e.id == encounter_id), None)

    def roster_adventurers(self, encounter: Encounter) -> list[Adventurer]:
        """Resolve an encounter's adventurer roster, in roster order."""
        by_id = {adventurer.id: adventurer for adventurer in self.adventurers}
        return [by_id[uid] for uid in encounter.adventurer_ids if uid in by_id]

    def roster_monsters(self, encounter: Encounter) -> list[Monster]:
        """Resolve an encounter's monster roster, in roster order."""
        by_id = {monster.id: monster for monster in self.monsters}
        return [by_id[uid] for uid in encounter.monster_ids if uid in by_id]

    # =========================================================================
    # Adventurers
    # =========================================================================

    def add_adventurer(
        self,
        name: str,
        *,
        initiative: int = DEFAULT_INITIATIVE,
        max_hp: int = DEFAULT_MAX_HP,
        armor_class: int = DEFAULT_ARMOR_CLASS,
        portrait: str = DEFAULT_PORTRAIT,
    ) -> Adventurer:
        """Create an adventurer at full health at the end of the list."""
        adventurer = Adventurer(
            name=name,
            initiative=initiative,
            max_hp=max_hp,
            armor_class=armor_class,
            portrait=portrait,
            sort_order=next_sort_order(self.adventurers),
        )
        self.adventurers.append(adventurer)
        logger.info("Adventurer added", campaign=self.name, adventurer=adventurer.name)
        return adventurer

    def copy_adventurer(self, adventurer: Adventurer) -> Adventurer:
        duplicate = adventurer.duplicate()
        duplicate.sort_order = next_sort_order(self.adventurers)
        self.adventurers.append(duplicate)
        return duplicate

    def delete_adventurer(self, adventurer_id: UUID) -> bool:
        """Delete an adventurer and drop it from every encounter roster."""
        before = len(self.adventurers)
        self.adventurers = [a for a in self.adventurers if a.id != adventurer_id]
        if len(self.adventurers) == before:
            return False
        for encounter in self.encounters:
            encounter.remove_adventurer(adventurer_id)
        logger.info("Adventurer deleted", campaign=self.name, adventurer_id=str(adventurer_id))
        return True

    def move_adventurers(self, source: Iterable[int], destination: int) -> None:
        renumber(move_items(self.sorted_adventurers, source, destination))

    # =========================================================================
    # Monsters
    # =========================================================================

    def add_monster(
        self,
        name: str,
        *,
        initiative: int = DEFAULT_INITIATIVE,
        max_hp: int = DEFAULT_MAX_HP,
        armor_class: int = DEFAULT_ARMOR_CLASS,
    ) -> Monster:
        """Create a monster at full health at the end of the list."""
        monster = Monster(
            name=name,
            initiative=initiative,
            max_hp=max_hp,
            armor_class=armor_class,
            sort_order=next_sort_order(self.monsters),
        )
        self.monsters.append(monster)
        logger.info("Monster added", campaign=self.name, monster=monster.name)
        return monster

    def copy_monster(self, monster: Monster) -> Monster:
        duplicate = monster.duplicate()
        duplicate.sort_order = next_sort_order(self.monsters)
        self.monsters.append(duplicate)
        return duplicate

    def delete_monster(self, monster_id: UUID) -> bool:
        """Delete a monster and drop it from every encounter roster."""
        before = len(self.monsters)
        self.monsters = [m for m in self.monsters if m.id != monster_id]
        if len(self.monsters) == before:
            return False
        for encounter in self.encounters:
            encounter.remove_monster(monster_id)
        logger.info("Monster deleted", campaign=self.name, monster_id=str(monster_id))
        return True

    def move_monsters(self, source: Iterable[int], destination: int) -> None:
        renumber(move_items(self.sorted_monsters, source, destination))

    # =========================================================================
    # Encounters
    # =========================================================================

    def add_encounter(self, name: str) -> Encounter:
        encounter = Encounter(
            name=name,
            campaign_id=self.id,
            sort_order=next_sort_order(self.encounters),
        )
        self.encounters.append(encounter)
        logger.info("Encounter added", campaign=self.name, encounter=encounter.name)
        return encounter

    def copy_encounter(self, encounter: Encounter) -> Encounter:
        """Copy an encounter, keeping the same roster members."""
        duplicate = encounter.duplicate()
        duplicate.campaign_id = self.id
        duplicate.sort_order = next_sort_order(self.encounters)
        self.encounters.append(duplicate)
        return duplicate

    def delete_encounter(self, encounter_id: UUID) -> bool:
        before = len(self.encounters)
        self.encounters = [e for e in self.encounters if e.id != encounter_id]
        return len(self.encounters) < before

    def move_encounters(self, source: Iterable[int], destination: int) -> None:
        renumber(move_items(self.sorted_encounters, source, destination))

    # =========================================================================
    # Whole-campaign copy
    # =========================================================================

    def duplicate(self) -> "Campaign":
        """Copy the campaign with its characters.

        Copied characters keep their names. Encounters are copied empty:
        their rosters would otherwise point at the original campaign's
        characters. The copy keeps this campaign's sort order until it is
        placed; ``Database.duplicate_campaign`` appends it to the list.
        """
        copy = Campaign(name=f"{self.name}{COPY_SUFFIX}", sort_order=self.sort_order)
        copy.adventurers = [a.duplicate(rename=False) for a in self.adventurers]
        copy.monsters = [m.duplicate(rename=False) for m in self.monsters]
        copy.encounters = [
            Encounter(name=e.name, sort_order=e.sort_order, campaign_id=copy.id)
            for e in self.encounters
        ]
        return copy


__all__ = [
    "Encounter",
    "Campaign",
]
