"""Pydantic V2 schemas for adventurers and monsters.

Every numeric field is clamped into its valid range on construction and on
every assignment, so callers never see a validation error for out-of-range
input. The one cross-field rule is that current HP can never exceed max HP:
lowering max HP drags current HP down with it in the same assignment.
"""

from __future__ import annotations

from typing import Any, ClassVar
from uuid import UUID, uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    computed_field,
    field_validator,
    model_validator,
)

from trpg_encounter.core.constants import (
    AVAILABLE_PORTRAITS,
    COPY_SUFFIX,
    DEFAULT_ARMOR_CLASS,
    DEFAULT_INITIATIVE,
    DEFAULT_MAX_HP,
    DEFAULT_PORTRAIT,
    MAX_ARMOR_CLASS,
    MAX_INITIATIVE,
    MIN_ARMOR_CLASS,
    MIN_INITIATIVE,
    MIN_MAX_HP,
    UNNAMED_ADVENTURER,
    UNNAMED_MONSTER,
)


def clamp(value: int, lower: int, upper: int | None = None) -> int:
    """Clamp an integer into ``[lower, upper]`` (no upper bound if None)."""
    if upper is not None:
        value = min(upper, value)
    return max(lower, value)


def normalize_name(value: Any, fallback: str) -> str:
    """Trim a display name, falling back when nothing is left."""
    text = "" if value is None else str(value).strip()
    return text or fallback


class CharacterBase(BaseModel):
    """Fields and clamping rules shared by adventurers and monsters.

    Attributes:
        id: Unique character identifier.
        name: Display name, trimmed.
        initiative: Base initiative in [-5, 20].
        max_hp: Maximum hit points, at least 1.
        current_hp: Current hit points in [0, max_hp]. Defaults to max_hp.
        armor_class: Armor class in [1, 30].
        sort_order: Position among siblings in the owning campaign.
    """

    model_config = ConfigDict(
        validate_assignment=True,
        extra="ignore",  # Ignore computed fields when deserializing
    )

    unnamed: ClassVar[str] = "Unnamed Character"

    id: UUID = Field(default_factory=uuid4, description="Unique character ID")
    name: str = Field(default="", validate_default=True, description="Display name")
    initiative: int = Field(default=DEFAULT_INITIATIVE, description="Base initiative")
    max_hp: int = Field(default=DEFAULT_MAX_HP, description="Maximum HP")
    current_hp: int = Field(
        default=None,
        validate_default=True,
        description="Current HP",
    )
    armor_class: int = Field(default=DEFAULT_ARMOR_CLASS, description="Armor class")
    sort_order: int = Field(default=0, description="Sibling sort position")

    @field_validator("name", mode="before")
    @classmethod
    def default_empty_name(cls, value: Any) -> str:
        return normalize_name(value, cls.unnamed)

    @field_validator("initiative", mode="before")
    @classmethod
    def clamp_initiative(cls, value: Any) -> int:
        return clamp(int(value), MIN_INITIATIVE, MAX_INITIATIVE)

    @field_validator("max_hp", mode="before")
    @classmethod
    def clamp_max_hp(cls, value: Any) -> int:
        return clamp(int(value), MIN_MAX_HP)

    @field_validator("current_hp", mode="before")
    @classmethod
    def clamp_current_hp(cls, value: Any, info: ValidationInfo) -> int:
        """Clamp current HP into [0, max_hp].

        A missing value means "full health". ``max_hp`` is declared before
        this field, so it is already in ``info.data`` both at construction
        and on assignment.
        """
        max_hp = info.data.get("max_hp")
        if value is None:
            return max_hp if max_hp is not None else DEFAULT_MAX_HP
        return clamp(int(value), 0, max_hp)

    @field_validator("armor_class", mode="before")
    @classmethod
    def clamp_armor_class(cls, value: Any) -> int:
        return clamp(int(value), MIN_ARMOR_CLASS, MAX_ARMOR_CLASS)

    @model_validator(mode="after")
    def cap_current_hp(self) -> "CharacterBase":
        """Pull current HP down when max HP is lowered beneath it."""
        if self.current_hp > self.max_hp:
            self.current_hp = self.max_hp
        return self

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_alive(self) -> bool:
        """True while current HP is above zero."""
        return self.current_hp > 0

    def update_stats(
        self,
        *,
        name: str | None = None,
        initiative: int | None = None,
        max_hp: int | None = None,
        current_hp: int | None = None,
        armor_class: int | None = None,
    ) -> None:
        """Apply an edit form in one step.

        Max HP is written before current HP so that raising both in the
        same edit is not cut short by the old ceiling.

        Args:
            name: New display name.
            initiative: New base initiative.
            max_hp: New maximum HP.
            current_hp: New current HP.
            armor_class: New armor class.
        """
        if name is not None:
            self.name = name
        if initiative is not None:
            self.initiative = initiative
        if max_hp is not None:
            self.max_hp = max_hp
        if current_hp is not None:
            self.current_hp = current_hp
        if armor_class is not None:
            self.armor_class = armor_class

    def _duplicate_fields(self, rename: bool) -> dict[str, Any]:
        return {
            "name": f"{self.name}{COPY_SUFFIX}" if rename else self.name,
            "initiative": self.initiative,
            "max_hp": self.max_hp,
            "current_hp": self.current_hp,
            "armor_class": self.armor_class,
            "sort_order": self.sort_order,
        }


class Adventurer(CharacterBase):
    """A player character.

    Attributes:
        portrait: Icon identifier from AVAILABLE_PORTRAITS.
    """

    unnamed: ClassVar[str] = UNNAMED_ADVENTURER

    portrait: str = Field(default=DEFAULT_PORTRAIT, description="Portrait icon")

    @field_validator("portrait", mode="before")
    @classmethod
    def fallback_portrait(cls, value: Any) -> str:
        return value if value in AVAILABLE_PORTRAITS else DEFAULT_PORTRAIT

    def update_stats(
        self,
        *,
        name: str | None = None,
        initiative: int | None = None,
        max_hp: int | None = None,
        current_hp: int | None = None,
        armor_class: int | None = None,
        portrait: str | None = None,
    ) -> None:
        super().update_stats(
            name=name,
            initiative=initiative,
            max_hp=max_hp,
            current_hp=current_hp,
            armor_class=armor_class,
        )
        if portrait is not None:
            self.portrait = portrait

    def duplicate(self, *, rename: bool = True) -> "Adventurer":
        """Return a copy with a fresh id, named '<name> (Copy)' by default."""
        return Adventurer(**self._duplicate_fields(rename), portrait=self.portrait)


class Monster(CharacterBase):
    """A monster or other non-player combatant."""

    unnamed: ClassVar[str] = UNNAMED_MONSTER

    def duplicate(self, *, rename: bool = True) -> "Monster":
        """Return a copy with a fresh id, named '<name> (Copy)' by default."""
        return Monster(**self._duplicate_fields(rename))


Character = Adventurer | Monster


__all__ = [
    "clamp",
    "normalize_name",
    "CharacterBase",
    "Adventurer",
    "Monster",
    "Character",
]
