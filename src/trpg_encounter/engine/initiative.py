"""Initiative computation at the start of combat.

Monsters are healed to full, every roster member rolls a d20, and the
participants are ordered by total initiative (base + roll), with base
initiative and then the raw roll breaking ties. Any remaining tie keeps
roster order because the sort is stable.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from trpg_encounter.core.constants import STARTING_ROUND
from trpg_encounter.core.logging import get_logger
from trpg_encounter.engine.dice import InitiativeRoller
from trpg_encounter.models.characters import Adventurer, Monster
from trpg_encounter.models.combat import Combatant, CombatLogEntry, CombatParticipant


logger = get_logger(__name__)


@dataclass
class InitiativeResult:
    """Outcome of rolling initiative for a roster.

    Attributes:
        participants: Participants in turn order.
        log: Opening log entries: one roll per participant in roster
            order, then 'Round 1 begins'.
    """

    participants: list[CombatParticipant] = field(default_factory=list)
    log: list[CombatLogEntry] = field(default_factory=list)


def sort_by_initiative(participants: Iterable[CombatParticipant]) -> list[CombatParticipant]:
    """Order participants highest initiative first."""
    return sorted(participants, key=lambda p: p.sort_key, reverse=True)


def restore_monsters(monsters: Iterable[Monster]) -> None:
    """Heal every monster to its max HP. Adventurers keep their wounds."""
    for monster in monsters:
        monster.current_hp = monster.max_hp


def roll_initiative(
    adventurers: Sequence[Adventurer],
    monsters: Sequence[Monster],
    roller: InitiativeRoller,
    *,
    reset_monster_hp: bool = True,
) -> InitiativeResult:
    """Roll initiative for an encounter roster.

    Args:
        adventurers: Roster adventurers, in roster order.
        monsters: Roster monsters, in roster order.
        roller: Source of d20 rolls; one roll per character.
        reset_monster_hp: Heal monsters to full before rolling.

    Returns:
        Sorted participants and the opening combat log.
    """
    if reset_monster_hp:
        restore_monsters(monsters)

    combatants = [Combatant.of(a) for a in adventurers] + [Combatant.of(m) for m in monsters]
    rolled = [CombatParticipant(combatant=c, dice_roll=roller.roll_d20()) for c in combatants]

    log = [CombatLogEntry.initiative_rolled(p, STARTING_ROUND) for p in rolled]
    log.append(CombatLogEntry.round_begins(STARTING_ROUND))

    ordered = sort_by_initiative(rolled)
    for position, participant in enumerate(ordered):
        logger.debug(
            "Initiative order",
            position=position,
            combatant=participant.combatant.name,
            total=participant.total_initiative,
            base=participant.base_initiative,
            roll=participant.dice_roll,
        )

    return InitiativeResult(participants=ordered, log=log)


__all__ = [
    "InitiativeResult",
    "sort_by_initiative",
    "restore_monsters",
    "roll_initiative",
]
