"""Combat engine: dice, initiative, turn tracking and encounter sessions."""

from trpg_encounter.engine.combat_tracker import CombatTracker
from trpg_encounter.engine.dice import DiceExpression, DiceRoller, InitiativeRoller
from trpg_encounter.engine.encounter_session import EncounterSession, SessionState
from trpg_encounter.engine.initiative import (
    InitiativeResult,
    restore_monsters,
    roll_initiative,
    sort_by_initiative,
)

__all__ = [
    # Dice
    "DiceExpression",
    "DiceRoller",
    "InitiativeRoller",
    # Initiative
    "InitiativeResult",
    "restore_monsters",
    "roll_initiative",
    "sort_by_initiative",
    # Turn tracking
    "CombatTracker",
    # Sessions
    "EncounterSession",
    "SessionState",
]
