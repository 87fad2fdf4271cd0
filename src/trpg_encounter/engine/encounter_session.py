"""Encounter orchestration.

An EncounterSession ties one encounter of a campaign to a CombatTracker:
it rolls initiative from the roster, hands the result to the tracker and
gates every combat command on combat actually running.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING
from uuid import UUID

from trpg_encounter.core.exceptions import CombatError, InvalidGameStateError
from trpg_encounter.core.logging import bind_context, get_logger, unbind_context
from trpg_encounter.engine.combat_tracker import CombatTracker
from trpg_encounter.engine.dice import DiceRoller, InitiativeRoller
from trpg_encounter.engine.initiative import roll_initiative
from trpg_encounter.models.characters import Adventurer, Character, Monster
from trpg_encounter.models.combat import (
    Combatant,
    CombatLogEntry,
    CombatParticipant,
    HPChangeType,
)
from trpg_encounter.services.sound import SoundCue


if TYPE_CHECKING:
    from trpg_encounter.core.config import CombatSettings
    from trpg_encounter.models.campaign import Campaign, Encounter
    from trpg_encounter.services.sound import SoundCuePlayer

logger = get_logger(__name__)


class SessionState(StrEnum):
    """Lifecycle of an encounter session."""

    IDLE = "idle"
    COMBAT = "combat"


class EncounterSession:
    """Start, run and end combat for one encounter.

    Attributes:
        campaign: Campaign owning the encounter and its characters.
        encounter: Encounter whose roster fights.
        tracker: Turn engine for the running combat.
    """

    def __init__(
        self,
        campaign: Campaign,
        encounter: Encounter,
        *,
        dice_roller: InitiativeRoller | None = None,
        sound: SoundCuePlayer | None = None,
        settings: CombatSettings | None = None,
    ) -> None:
        """Initialize an idle session.

        Args:
            campaign: Campaign owning the encounter.
            encounter: The encounter to run.
            dice_roller: Source of initiative rolls. Defaults to a d20 roller.
            sound: Optional sound cue player.
            settings: Combat settings. Defaults to monster HP reset on start.
        """
        self.campaign = campaign
        self.encounter = encounter
        self._settings = settings
        self._dice_roller = dice_roller or DiceRoller(
            expression=settings.initiative_dice if settings else "1d20"
        )
        self._sound = sound
        self.tracker = CombatTracker(sound=sound)
        self._state = SessionState.IDLE

    # =========================================================================
    # State
    # =========================================================================

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_combat_active(self) -> bool:
        return self._state == SessionState.COMBAT

    @property
    def title(self) -> str:
        """Heading for the session, e.g. 'Goblin Ambush - Round 2'."""
        if not self.is_combat_active:
            return self.encounter.name
        return f"{self.encounter.name} - Round {self.tracker.round}"

    @property
    def participants(self) -> list[CombatParticipant]:
        return self.tracker.participants

    @property
    def log(self) -> list[CombatLogEntry]:
        return self.tracker.log

    @property
    def current_participant(self) -> CombatParticipant | None:
        return self.tracker.current_participant

    @property
    def can_retreat(self) -> bool:
        return self.is_combat_active and self.tracker.can_retreat

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def start_combat(self) -> list[CombatParticipant]:
        """Roll initiative for the encounter roster and begin round 1.

        Returns:
            Participants in turn order.

        Raises:
            InvalidGameStateError: If combat is already running.
        """
        if self.is_combat_active:
            raise InvalidGameStateError(
                "Combat already in progress",
                current_state=self._state.value,
                expected_states=[SessionState.IDLE.value],
            )

        reset_monster_hp = self._settings.reset_monster_hp if self._settings else True
        result = roll_initiative(
            self.campaign.roster_adventurers(self.encounter),
            self.campaign.roster_monsters(self.encounter),
            self._dice_roller,
            reset_monster_hp=reset_monster_hp,
        )

        bind_context(encounter_id=str(self.encounter.id))
        self.tracker.begin(result.participants, result.log)
        self._state = SessionState.COMBAT
        if self._sound is not None:
            self._sound.play(SoundCue.ROLL)

        logger.info(
            "Encounter combat started",
            encounter=self.encounter.name,
            participants=len(result.participants),
        )
        return self.tracker.participants

    def end_combat(self) -> None:
        """Discard the combat session. Nothing is archived.

        Raises:
            InvalidGameStateError: If combat is not running.
        """
        self._require_combat()
        self.tracker.reset()
        self._state = SessionState.IDLE
        logger.info("Encounter combat ended", encounter=self.encounter.name)
        unbind_context("encounter_id")

    # =========================================================================
    # Roster
    # =========================================================================

    def _fighting_ids(self) -> set[UUID]:
        return {p.combatant.id for p in self.tracker.participants}

    def is_participating(self, character: Character) -> bool:
        return character.id in self._fighting_ids()

    def available_adventurers(self) -> list[Adventurer]:
        """Campaign adventurers not currently in the fight."""
        fighting = self._fighting_ids()
        return [a for a in self.campaign.sorted_adventurers if a.id not in fighting]

    def available_monsters(self) -> list[Monster]:
        """Campaign monsters not currently in the fight."""
        fighting = self._fighting_ids()
        return [m for m in self.campaign.sorted_monsters if m.id not in fighting]

    def add_participant(self, character: Character) -> CombatParticipant:
        """Bring a character into the running combat at the end of the order.

        Raises:
            InvalidGameStateError: If combat is not running.
            CombatError: If the character is already fighting.
        """
        self._require_combat()
        if self.is_participating(character):
            raise CombatError(
                f"{character.name} is already in combat",
                round_number=self.tracker.round,
                details={"character_id": str(character.id)},
            )
        return self.tracker.add_participant(Combatant.of(character))

    def remove_participant(self, index: int) -> CombatParticipant:
        self._require_combat()
        return self.tracker.remove_participant(index)

    # =========================================================================
    # Turn commands
    # =========================================================================

    def advance_turn(self) -> CombatParticipant | None:
        self._require_combat()
        return self.tracker.advance_turn()

    def retreat_turn(self) -> CombatParticipant | None:
        self._require_combat()
        return self.tracker.retreat_turn()

    def damage(self, target_index: int, amount: int) -> None:
        self._require_combat()
        self.tracker.apply_hp_change(target_index, amount, HPChangeType.DAMAGE)

    def heal(self, target_index: int, amount: int) -> None:
        self._require_combat()
        self.tracker.apply_hp_change(target_index, amount, HPChangeType.HEALING)

    def _require_combat(self) -> None:
        if not self.is_combat_active:
            raise InvalidGameStateError(
                "No combat in progress",
                current_state=self._state.value,
                expected_states=[SessionState.COMBAT.value],
            )


__all__ = [
    "SessionState",
    "EncounterSession",
]
