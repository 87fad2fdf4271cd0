"""Services the combat engine talks to but does not own."""

from trpg_encounter.services.sound import (
    PlaybackBackend,
    SoundCue,
    SoundCuePlayer,
    SoundPlayer,
)

__all__ = [
    "PlaybackBackend",
    "SoundCue",
    "SoundCuePlayer",
    "SoundPlayer",
]
