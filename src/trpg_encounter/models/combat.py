"""Combat-session models.

Nothing in this module is persisted. A Combatant is a uniform view over an
adventurer or a monster; writing its HP writes straight through to the
character, which applies its own clamping. Participants and log entries
live only as long as one combat session.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from trpg_encounter.core.constants import (
    ACTION_DIED,
    ACTION_JOINED,
    ACTION_LEFT,
    INITIATIVE_ACTION_PREFIX,
    MID_COMBAT_DICE_ROLL,
)
from trpg_encounter.models.characters import Adventurer, Character, Monster


class CombatantKind(StrEnum):
    """Which kind of character a combatant wraps."""

    ADVENTURER = "adventurer"
    MONSTER = "monster"


class HPChangeType(StrEnum):
    """Direction of an HP change."""

    DAMAGE = "damage"
    HEALING = "healing"


@dataclass
class Combatant:
    """Tagged union over Adventurer and Monster.

    Attributes:
        kind: The variant tag.
        character: The wrapped entity (not owned).
    """

    kind: CombatantKind
    character: Character

    @classmethod
    def of(cls, character: Character) -> "Combatant":
        """Wrap a character, tagging it by its type."""
        if isinstance(character, Adventurer):
            return cls(CombatantKind.ADVENTURER, character)
        if isinstance(character, Monster):
            return cls(CombatantKind.MONSTER, character)
        raise TypeError(f"Cannot fight with {type(character).__name__}")

    @property
    def id(self) -> UUID:
        return self.character.id

    @property
    def name(self) -> str:
        return self.character.name

    @property
    def initiative(self) -> int:
        return self.character.initiative

    @property
    def max_hp(self) -> int:
        return self.character.max_hp

    @property
    def current_hp(self) -> int:
        return self.character.current_hp

    @current_hp.setter
    def current_hp(self, value: int) -> None:
        self.character.current_hp = value

    @property
    def armor_class(self) -> int:
        return self.character.armor_class

    @property
    def is_alive(self) -> bool:
        return self.character.current_hp > 0

    @property
    def portrait(self) -> str | None:
        """Portrait icon for adventurers, None for monsters."""
        if self.kind is CombatantKind.ADVENTURER:
            return self.character.portrait  # type: ignore[union-attr]
        return None


@dataclass
class CombatParticipant:
    """A combatant plus its initiative roll for one combat session.

    Attributes:
        combatant: The fighting character.
        dice_roll: The d20 rolled at combat start, 0 for late joiners.
        id: Session-scoped identifier.
    """

    combatant: Combatant
    dice_roll: int = MID_COMBAT_DICE_ROLL
    id: UUID = field(default_factory=uuid4)

    @property
    def base_initiative(self) -> int:
        return self.combatant.initiative

    @property
    def total_initiative(self) -> int:
        return self.base_initiative + self.dice_roll

    @property
    def sort_key(self) -> tuple[int, int, int]:
        """Initiative ordering key: total, then base, then the raw roll."""
        return (self.total_initiative, self.base_initiative, self.dice_roll)


class CombatLogEntry(BaseModel):
    """One immutable line of the combat log.

    Attributes:
        id: Unique entry identifier.
        round: Round in which the event happened.
        actor: Name of the acting character, or empty.
        target: Name of the target, or empty.
        action: Free-text action description.
        amount: HP amount involved, 0 when not applicable.
        timestamp: When the entry was created.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    id: UUID = Field(default_factory=uuid4, description="Unique entry ID")
    round: int = Field(description="Combat round")
    actor: str = Field(default="", description="Acting character")
    target: str = Field(default="", description="Target character")
    action: str = Field(description="Action description")
    amount: int = Field(default=0, description="HP amount")
    timestamp: datetime = Field(default_factory=datetime.now, description="Creation time")

    @property
    def is_round_marker(self) -> bool:
        return not self.actor and self.action.startswith("Round ") and self.action.endswith(" begins")

    @property
    def description(self) -> str:
        """Render the entry as a sentence for display."""
        if self.action.startswith(INITIATIVE_ACTION_PREFIX) or self.action == ACTION_DIED:
            return f"{self.actor} {self.action}"
        if self.is_round_marker:
            return self.action
        if self.amount == 0:
            return " ".join(part for part in (self.actor, self.action, self.target) if part)
        return f"{self.actor} {self.action} {self.amount} HP to {self.target}"

    # Factories for the fixed entry shapes

    @classmethod
    def round_begins(cls, round_number: int) -> "CombatLogEntry":
        return cls(round=round_number, action=f"Round {round_number} begins")

    @classmethod
    def initiative_rolled(cls, participant: CombatParticipant, round_number: int) -> "CombatLogEntry":
        return cls(
            round=round_number,
            actor=participant.combatant.name,
            action=(
                f"{INITIATIVE_ACTION_PREFIX}: {participant.total_initiative} "
                f"({participant.base_initiative} base + {participant.dice_roll} roll)"
            ),
        )

    @classmethod
    def died(cls, name: str, round_number: int) -> "CombatLogEntry":
        return cls(round=round_number, actor=name, action=ACTION_DIED)

    @classmethod
    def left(cls, name: str, round_number: int) -> "CombatLogEntry":
        return cls(round=round_number, actor=name, action=ACTION_LEFT)

    @classmethod
    def joined(cls, name: str, round_number: int) -> "CombatLogEntry":
        return cls(round=round_number, actor=name, action=ACTION_JOINED)

    def __str__(self) -> str:
        return self.description


__all__ = [
    "CombatantKind",
    "HPChangeType",
    "Combatant",
    "CombatParticipant",
    "CombatLogEntry",
]
