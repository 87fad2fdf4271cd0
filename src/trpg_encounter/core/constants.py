"""Application-wide constants for the TRPG Encounter Tracker.

Bounds used by entity clamping, the portrait catalogue, and the fixed
texts written into the combat log.
"""

from __future__ import annotations

# =============================================================================
# Character Bounds
# =============================================================================

MIN_INITIATIVE = -5
"""Lowest base initiative a character can have."""

MAX_INITIATIVE = 20
"""Highest base initiative a character can have."""

MIN_MAX_HP = 1
"""Maximum HP never drops below this."""

MIN_ARMOR_CLASS = 1
"""Lowest armor class."""

MAX_ARMOR_CLASS = 30
"""Highest armor class."""

DEFAULT_INITIATIVE = 3
DEFAULT_MAX_HP = 10
DEFAULT_ARMOR_CLASS = 10

# =============================================================================
# Default Names
# =============================================================================

UNNAMED_ADVENTURER = "Unnamed Adventurer"
UNNAMED_MONSTER = "Unnamed Monster"
UNNAMED_ENCOUNTER = "Unnamed Encounter"
UNNAMED_CAMPAIGN = "New Campaign"
COPY_SUFFIX = " (Copy)"

# =============================================================================
# Adventurer Portraits
# =============================================================================

DEFAULT_PORTRAIT = "person.fill"

AVAILABLE_PORTRAITS: tuple[str, ...] = (
    "person.fill",
    "person.crop.circle.fill",
    "figure.walk",
    "figure.run",
    "figure.archery",
    "figure.fencing",
    "shield.fill",
    "hammer.fill",
    "bolt.fill",
    "flame.fill",
    "sparkles",
    "star.fill",
    "crown.fill",
    "diamond.fill",
    "diamond",
    "wand.and.stars",
    "wand.and.rays",
    "scroll.fill",
    "book.fill",
    "cross.fill",
    "heart.fill",
    "eye.fill",
    "hand.raised.fill",
    "moon.fill",
    "sun.max.fill",
    "tornado",
    "snowflake",
    "leaf.fill",
    "tree.fill",
    "mountain.2.fill",
    "pawprint.fill",
    "hare.fill",
    "bird.fill",
    "lizard.fill",
    "ant.fill",
)
"""Icon identifiers an adventurer portrait may take."""

# =============================================================================
# Combat
# =============================================================================

STARTING_ROUND = 1
"""Round number at combat start; rounds never go below this."""

MID_COMBAT_DICE_ROLL = 0
"""Dice roll recorded for participants who join after the start."""

UNKNOWN_ACTOR = "Unknown"
SELF_TARGET = "themselves"

ACTION_DEALT = "dealt"
ACTION_HEALED = "healed"
ACTION_DIED = "died from damage"
ACTION_LEFT = "left the combat"
ACTION_JOINED = "joined the combat"
INITIATIVE_ACTION_PREFIX = "rolled for initiative"


__all__ = [
    "MIN_INITIATIVE",
    "MAX_INITIATIVE",
    "MIN_MAX_HP",
    "MIN_ARMOR_CLASS",
    "MAX_ARMOR_CLASS",
    "DEFAULT_INITIATIVE",
    "DEFAULT_MAX_HP",
    "DEFAULT_ARMOR_CLASS",
    "UNNAMED_ADVENTURER",
    "UNNAMED_MONSTER",
    "UNNAMED_ENCOUNTER",
    "UNNAMED_CAMPAIGN",
    "COPY_SUFFIX",
    "DEFAULT_PORTRAIT",
    "AVAILABLE_PORTRAITS",
    "STARTING_ROUND",
    "MID_COMBAT_DICE_ROLL",
    "UNKNOWN_ACTOR",
    "SELF_TARGET",
    "ACTION_DEALT",
    "ACTION_HEALED",
    "ACTION_DIED",
    "ACTION_LEFT",
    "ACTION_JOINED",
    "INITIATIVE_ACTION_PREFIX",
]
