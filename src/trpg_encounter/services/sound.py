"""Fire-and-forget sound cues.

The combat engine announces events by cue name (``roll``, ``damage``,
``heal``, ``death``). Playback happens on a daemon thread through an
injected backend callable; a missing asset or a failing backend is logged
and never reaches the caller.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from trpg_encounter.core.exceptions import SoundCueError
from trpg_encounter.core.logging import get_logger


if TYPE_CHECKING:
    from trpg_encounter.core.config import SoundSettings


logger = get_logger(__name__)

PlaybackBackend = Callable[[Path], None]
"""Plays one audio file. May block; it always runs off the caller's thread."""


class SoundCue(StrEnum):
    """Symbolic cue names."""

    ROLL = "roll"
    DAMAGE = "damage"
    HEAL = "heal"
    DEATH = "death"


class SoundCuePlayer(Protocol):
    """What the combat engine needs from a sound service."""

    def play(self, cue: SoundCue) -> None: ...


class SoundPlayer:
    """Resolve cue names to audio files and play them in the background.

    Example:
        >>> player = SoundPlayer(Path("data/sounds"), backend=my_backend)
        >>> player.play(SoundCue.HEAL)   # returns immediately
    """

    def __init__(
        self,
        asset_path: Path,
        *,
        file_extension: str = "mp3",
        backend: PlaybackBackend | None = None,
        enabled: bool = True,
        blocking: bool = False,
    ) -> None:
        """Initialize the player.

        Args:
            asset_path: Directory holding one file per cue.
            file_extension: Extension of the cue files, without the dot.
            backend: Callable that plays a file. Without one, cues are only logged.
            enabled: When False every cue is ignored.
            blocking: Run the backend on the calling thread (used in tests).
        """
        self.asset_path = Path(asset_path)
        self.file_extension = file_extension.lstrip(".")
        self.enabled = enabled
        self._backend = backend
        self._blocking = blocking

    @classmethod
    def from_settings(
        cls,
        settings: SoundSettings,
        *,
        backend: PlaybackBackend | None = None,
    ) -> "SoundPlayer":
        return cls(
            settings.asset_path,
            file_extension=settings.file_extension,
            backend=backend,
            enabled=settings.enabled,
        )

    def resolve(self, cue: SoundCue | str) -> Path:
        """Find the audio file for a cue.

        Raises:
            SoundCueError: If the cue is unknown or its file does not exist.
        """
        try:
            name = SoundCue(cue)
        except ValueError as exc:
            raise SoundCueError(f"Unknown sound cue: {cue!r}", cue=str(cue)) from exc

        path = self.asset_path / f"{name.value}.{self.file_extension}"
        if not path.is_file():
            raise SoundCueError(
                f"Audio file '{path.name}' not found",
                cue=name.value,
                details={"path": str(path)},
            )
        return path

    def play(self, cue: SoundCue | str) -> None:
        """Play a cue without waiting for it. Never raises."""
        if not self.enabled:
            return

        try:
            path = self.resolve(cue)
        except SoundCueError as exc:
            logger.warning("Sound cue skipped", cue=str(cue), reason=exc.message)
            return

        if self._backend is None:
            logger.debug("Sound cue (no playback backend)", cue=str(cue), path=str(path))
            return

        if self._blocking:
            self._run(str(cue), path)
            return

        thread = threading.Thread(
            target=self._run,
            args=(str(cue), path),
            name=f"sound-cue-{cue}",
            daemon=True,
        )
        thread.start()

    def _run(self, cue: str, path: Path) -> None:
        try:
            self._backend(path)  # type: ignore[misc]
        except Exception as exc:  # noqa: BLE001
            logger.warning("Could not play sound cue", cue=cue, path=str(path), error=str(exc))


__all__ = [
    "PlaybackBackend",
    "SoundCue",
    "SoundCuePlayer",
    "SoundPlayer",
]
