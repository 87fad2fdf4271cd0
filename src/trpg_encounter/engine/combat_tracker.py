"""Turn tracking for a running combat.

The tracker owns the participant list, the current-turn pointer, the round
counter and the append-only combat log. It is driven by discrete user
commands and every operation completes synchronously.
"""

from __future__ import annotations

from collections.abc import Iterable

from trpg_encounter.core.constants import (
    ACTION_DEALT,
    ACTION_HEALED,
    MID_COMBAT_DICE_ROLL,
    SELF_TARGET,
    STARTING_ROUND,
    UNKNOWN_ACTOR,
)
from trpg_encounter.core.exceptions import CombatError
from trpg_encounter.core.logging import get_logger
from trpg_encounter.models.combat import (
    Combatant,
    CombatLogEntry,
    CombatParticipant,
    HPChangeType,
)
from trpg_encounter.services.sound import SoundCue, SoundCuePlayer


logger = get_logger(__name__)


class CombatTracker:
    """Track turn order, rounds, HP changes and the combat log.

    Example:
        >>> tracker = CombatTracker()
        >>> tracker.begin(result.participants, result.log)
        >>> tracker.apply_hp_change(1, 6, HPChangeType.DAMAGE)
        >>> tracker.advance_turn()
    """

    def __init__(self, *, sound: SoundCuePlayer | None = None) -> None:
        """Initialize an empty tracker.

        Args:
            sound: Optional sound cue player notified of damage, healing and deaths.
        """
        self._participants: list[CombatParticipant] = []
        self._log: list[CombatLogEntry] = []
        self._current_index: int = 0
        self._round: int = STARTING_ROUND
        self._sound = sound

    # =========================================================================
    # State
    # =========================================================================

    @property
    def participants(self) -> list[CombatParticipant]:
        """Participants in turn order (a copy)."""
        return list(self._participants)

    @property
    def log(self) -> list[CombatLogEntry]:
        """Combat log in chronological order (a copy)."""
        return list(self._log)

    @property
    def current_turn_index(self) -> int:
        return self._current_index

    @property
    def round(self) -> int:
        return self._round

    @property
    def current_participant(self) -> CombatParticipant | None:
        """Participant whose turn it is, or None if there is none."""
        if 0 <= self._current_index < len(self._participants):
            return self._participants[self._current_index]
        return None

    @property
    def can_retreat(self) -> bool:
        """Whether stepping back would change anything visible."""
        return self._round > STARTING_ROUND or self._current_index > 0

    def __len__(self) -> int:
        return len(self._participants)

    # =========================================================================
    # Session lifecycle
    # =========================================================================

    def begin(
        self,
        participants: Iterable[CombatParticipant],
        log: Iterable[CombatLogEntry] = (),
    ) -> None:
        """Load a freshly rolled combat: round 1, first participant acting."""
        self._participants = list(participants)
        self._log = list(log)
        self._current_index = 0
        self._round = STARTING_ROUND
        logger.info("Combat started", participants=len(self._participants), round=self._round)

    def reset(self) -> None:
        """Discard the whole session."""
        self._participants.clear()
        self._log.clear()
        self._current_index = 0
        self._round = STARTING_ROUND
        logger.info("Combat tracker reset")

    # =========================================================================
    # Turn navigation
    # =========================================================================

    def advance_turn(self) -> CombatParticipant | None:
        """Move to the next participant, starting a new round after the last.

        Returns:
            The participant now acting, or None if nobody is fighting.
        """
        if not self._participants:
            return None

        self._current_index += 1
        if self._current_index >= len(self._participants):
            self._current_index = 0
            self._round += 1
            self._log.append(CombatLogEntry.round_begins(self._round))
            logger.info("New round started", round=self._round)

        current = self.current_participant
        if current:
            logger.debug("Next turn", combatant=current.combatant.name, round=self._round)
        return current

    def retreat_turn(self) -> CombatParticipant | None:
        """Step back to the previous participant.

        Wrapping past the first participant goes to the last one of the
        previous round; the round never drops below 1. No log entry is
        written.

        Returns:
            The participant now acting, or None if nobody is fighting.
        """
        if not self._participants:
            return None

        self._current_index -= 1
        if self._current_index < 0:
            self._current_index = len(self._participants) - 1
            self._round = max(STARTING_ROUND, self._round - 1)

        logger.debug("Previous turn", turn_index=self._current_index, round=self._round)
        return self.current_participant

    # =========================================================================
    # HP changes
    # =========================================================================

    def apply_hp_change(self, target_index: int, amount: int, kind: HPChangeType) -> None:
        """Damage or heal the participant at ``target_index``.

        The actor recorded in the log is whoever holds the current turn.
        The logged amount is the amount requested, not the HP actually
        gained or lost after clamping.

        Args:
            target_index: Position of the target in turn order.
            amount: HP to remove or restore.
            kind: Damage or healing.

        Raises:
            CombatError: If no participant is at ``target_index``.
        """
        target = self._participant_at(target_index)
        combatant = target.combatant
        old_hp = combatant.current_hp

        if kind is HPChangeType.DAMAGE:
            combatant.current_hp = old_hp - amount
        else:
            combatant.current_hp = min(combatant.max_hp, old_hp + amount)

        current = self.current_participant
        actor = current.combatant.name if current else UNKNOWN_ACTOR
        target_name = combatant.name

        self._log.append(
            CombatLogEntry(
                round=self._round,
                actor=actor,
                target=SELF_TARGET if target_name == actor else target_name,
                action=ACTION_DEALT if kind is HPChangeType.DAMAGE else ACTION_HEALED,
                amount=amount,
            )
        )
        logger.info(
            "HP changed",
            kind=str(kind),
            actor=actor,
            target=target_name,
            amount=amount,
            hp_before=old_hp,
            hp_after=combatant.current_hp,
        )

        if kind is HPChangeType.HEALING:
            self._cue(SoundCue.HEAL)
        elif old_hp > 0 and combatant.current_hp <= 0:
            self._log.append(CombatLogEntry.died(target_name, self._round))
            logger.info("Combatant died", combatant=target_name, round=self._round)
            self._cue(SoundCue.DEATH)
        else:
            self._cue(SoundCue.DAMAGE)

    # =========================================================================
    # Roster changes
    # =========================================================================

    def remove_participant(self, index: int) -> CombatParticipant:
        """Remove a participant, keeping the turn pointer on the same slot.

        Returns:
            The removed participant.

        Raises:
            CombatError: If no participant is at ``index``.
        """
        removed = self._participant_at(index)
        del self._participants[index]

        if not self._participants:
            self._current_index = 0
        elif index < self._current_index:
            self._current_index -= 1
        elif self._current_index >= len(self._participants):
            self._current_index = len(self._participants) - 1

        self._log.append(CombatLogEntry.left(removed.combatant.name, self._round))
        logger.info(
            "Participant removed",
            combatant=removed.combatant.name,
            turn_index=self._current_index,
        )
        return removed

    def add_participant(self, combatant: Combatant) -> CombatParticipant:
        """Append a late joiner at the end of the turn order, without rolling."""
        participant = CombatParticipant(combatant=combatant, dice_roll=MID_COMBAT_DICE_ROLL)
        self._participants.append(participant)
        self._log.append(CombatLogEntry.joined(combatant.name, self._round))
        logger.info("Participant joined", combatant=combatant.name, round=self._round)
        return participant

    def index_of(self, participant_id: object) -> int | None:
        """Position of the participant with this id (participant or character id)."""
        for index, participant in enumerate(self._participants):
            if participant_id in (participant.id, participant.combatant.id):
                return index
        return None

    # =========================================================================
    # Helpers
    # =========================================================================

    def _participant_at(self, index: int) -> CombatParticipant:
        if not 0 <= index < len(self._participants):
            raise CombatError(
                f"No participant at index {index}",
                participant_index=index,
                round_number=self._round,
                details={"participant_count": len(self._participants)},
            )
        return self._participants[index]

    def _cue(self, cue: SoundCue) -> None:
        if self._sound is not None:
            self._sound.play(cue)


__all__ = [
    "CombatTracker",
]
