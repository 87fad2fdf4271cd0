"""Domain models for the TRPG Encounter Tracker.

Submodules:
    characters: Adventurer and Monster with clamped stats.
    campaign: Campaign and Encounter, rosters and sibling ordering.
    combat: Combatant, CombatParticipant and CombatLogEntry.
    ordering: Dense sort-order helpers.
"""

from __future__ import annotations

from trpg_encounter.models.campaign import Campaign, Encounter
from trpg_encounter.models.characters import (
    Adventurer,
    Character,
    CharacterBase,
    Monster,
    clamp,
)
from trpg_encounter.models.combat import (
    Combatant,
    CombatantKind,
    CombatLogEntry,
    CombatParticipant,
    HPChangeType,
)
from trpg_encounter.models.ordering import (
    move_items,
    next_sort_order,
    renumber,
    sorted_by_order,
)


__all__ = [
    # Characters
    "Adventurer",
    "Monster",
    "Character",
    "CharacterBase",
    "clamp",
    # Campaign
    "Campaign",
    "Encounter",
    # Combat
    "Combatant",
    "CombatantKind",
    "CombatParticipant",
    "CombatLogEntry",
    "HPChangeType",
    # Ordering
    "move_items",
    "next_sort_order",
    "renumber",
    "sorted_by_order",
]
