"""Background music playback through ``pygame.mixer``.

Music has no influence on the game: the front-end forwards mute and track
commands here and pauses the music together with the game.  When the mixer
cannot be opened (no audio device, missing codec) the manager logs a warning
and stays silent.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence
import logging

import pygame

from .commands import Command


LOGGER = logging.getLogger(__name__)

MUSIC_EXTENSIONS = (".ogg", ".mp3", ".wav", ".mid", ".midi")
DEFAULT_VOLUME = 0.5


def discover_tracks(directory: Optional[Path]) -> List[Path]:
    """Return playable files under ``directory`` sorted by name."""

    if directory is None or not directory.is_dir():
        return []
    return sorted(p for p in directory.iterdir() if p.suffix.lower() in MUSIC_EXTENSIONS)


class MusicManager:
    """Loop one track at a time and cycle through a playlist."""

    def __init__(self, tracks: Sequence[Path] = (), *, volume: float = DEFAULT_VOLUME) -> None:
        self.tracks: List[Path] = list(tracks)
        self.volume = volume
        self.track = 0
        self.muted = False
        self.paused = False
        self.enabled = False

    def init(self) -> bool:
        """Open the mixer; returns whether music is available."""

        if not self.tracks:
            LOGGER.info("No music tracks configured")
            return False
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
        except pygame.error as exc:
            LOGGER.warning("Audio unavailable: %s", exc)
            return False
        self.enabled = True
        return True

    @property
    def current(self) -> Optional[Path]:
        if not self.tracks:
            return None
        return self.tracks[self.track % len(self.tracks)]

    def _effective_volume(self) -> float:
        return 0.0 if self.muted else self.volume

    def play(self) -> None:
        """Start the current track from the beginning, looping forever."""

        path = self.current
        if not self.enabled or path is None:
            return
        try:
            pygame.mixer.music.load(str(path))
            pygame.mixer.music.set_volume(self._effective_volume())
            pygame.mixer.music.play(-1)
        except pygame.error as exc:
            LOGGER.warning("Cannot play %s: %s", path.name, exc)
            return
        self.paused = False
        LOGGER.info("Playing %s", path.name)

    def next_track(self) -> None:
        if not self.tracks:
            return
        self.track = (self.track + 1) % len(self.tracks)
        self.play()

    def toggle_mute(self) -> None:
        self.muted = not self.muted
        if self.enabled:
            pygame.mixer.music.set_volume(self._effective_volume())
        LOGGER.info("Music %s", "muted" if self.muted else "unmuted")

    def pause(self) -> None:
        if self.enabled and not self.paused:
            pygame.mixer.music.pause()
            self.paused = True

    def resume(self) -> None:
        if self.enabled and self.paused:
            pygame.mixer.music.unpause()
            self.paused = False

    def stop(self) -> None:
        if self.enabled:
            pygame.mixer.music.stop()
        self.paused = False

    def handle(self, command: Command) -> bool:
        if command is Command.MUTE_TOGGLE:
            self.toggle_mute()
            return True
        if command is Command.CHANGE_TRACK:
            self.next_track()
            return True
        return False


__all__ = ["MusicManager", "discover_tracks"]
