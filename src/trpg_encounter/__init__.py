"""TRPG Encounter Tracker.

Campaign, character and encounter management with an in-memory turn-based
combat engine for tabletop role-playing games.

Example:
    >>> from trpg_encounter import Campaign, EncounterSession
    >>>
    >>> campaign = Campaign(name="Lost Mines")
    >>> hero = campaign.add_adventurer("Thorin", initiative=2, max_hp=30)
    >>> goblin = campaign.add_monster("Goblin", initiative=1, max_hp=7)
    >>> ambush = campaign.add_encounter("Goblin Ambush")
    >>> ambush.set_adventurers([hero])
    >>> ambush.set_monsters([goblin])
    >>>
    >>> session = EncounterSession(campaign, ambush)
    >>> session.start_combat()
    >>> session.damage(1, 5)
    >>> session.advance_turn()

Modules:
    core: Configuration, logging, constants and base exceptions.
    models: Pydantic V2 schemas for campaigns and characters, combat models.
    engine: Dice, initiative, turn tracking and encounter sessions.
    services: Sound cue playback.
    storage: SQLite persistence.
"""

from __future__ import annotations

# Core
from trpg_encounter.core.config import Settings, get_settings
from trpg_encounter.core.exceptions import TrpgEncounterError
from trpg_encounter.core.logging import configure_logging, get_logger

# Models
from trpg_encounter.models import (
    Adventurer,
    Campaign,
    Combatant,
    CombatLogEntry,
    CombatParticipant,
    Encounter,
    HPChangeType,
    Monster,
)

# Engine
from trpg_encounter.engine import (
    CombatTracker,
    DiceRoller,
    EncounterSession,
    roll_initiative,
)

# Services & storage
from trpg_encounter.services import SoundCue, SoundPlayer
from trpg_encounter.storage import Database


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "TrpgEncounterError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Models
    "Adventurer",
    "Monster",
    "Campaign",
    "Encounter",
    "Combatant",
    "CombatParticipant",
    "CombatLogEntry",
    "HPChangeType",
    # Engine
    "CombatTracker",
    "DiceRoller",
    "EncounterSession",
    "roll_initiative",
    # Services & storage
    "SoundCue",
    "SoundPlayer",
    "Database",
]
