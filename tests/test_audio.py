from __future__ import annotations

import logging
from pathlib import Path

import pygame
import pytest

from quadris import audio
from quadris.audio import MusicManager, discover_tracks
from quadris.commands import Command


class FakeMusic:
    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.volume = None

    def load(self, path: str) -> None:
        self.calls.append(("load", Path(path).name))

    def set_volume(self, volume: float) -> None:
        self.volume = volume

    def play(self, loops: int = 0) -> None:
        self.calls.append(("play", loops))

    def pause(self) -> None:
        self.calls.append(("pause",))

    def unpause(self) -> None:
        self.calls.append(("unpause",))

    def stop(self) -> None:
        self.calls.append(("stop",))


@pytest.fixture
def fake_music(monkeypatch) -> FakeMusic:
    fake = FakeMusic()
    monkeypatch.setattr(audio.pygame.mixer, "music", fake)
    monkeypatch.setattr(audio.pygame.mixer, "get_init", lambda: True)
    return fake


def _manager(fake_music: FakeMusic) -> MusicManager:
    manager = MusicManager([Path("a.ogg"), Path("b.ogg")])
    assert manager.init()
    return manager


def test_play_loops_current_track(fake_music) -> None:
    manager = _manager(fake_music)
    manager.play()
    assert fake_music.calls == [("load", "a.ogg"), ("play", -1)]
    assert fake_music.volume == pytest.approx(0.5)


def test_change_track_cycles(fake_music) -> None:
    manager = _manager(fake_music)
    assert manager.handle(Command.CHANGE_TRACK)
    assert manager.current == Path("b.ogg")
    manager.handle(Command.CHANGE_TRACK)
    assert manager.current == Path("a.ogg")
    assert ("load", "b.ogg") in fake_music.calls


def test_mute_toggle_sets_volume(fake_music) -> None:
    manager = _manager(fake_music)
    assert manager.handle(Command.MUTE_TOGGLE)
    assert manager.muted
    assert fake_music.volume == 0.0
    manager.handle(Command.MUTE_TOGGLE)
    assert fake_music.volume == pytest.approx(0.5)


def test_pause_and_resume_once(fake_music) -> None:
    manager = _manager(fake_music)
    manager.pause()
    manager.pause()
    manager.resume()
    assert fake_music.calls == [("pause",), ("unpause",)]


def test_game_commands_are_not_handled(fake_music) -> None:
    manager = _manager(fake_music)
    assert not manager.handle(Command.HARD_DROP)
    assert fake_music.calls == []


def test_mixer_failure_disables_music(monkeypatch, caplog) -> None:
    def broken_init() -> None:
        raise pygame.error("no audio device")

    monkeypatch.setattr(audio.pygame.mixer, "get_init", lambda: False)
    monkeypatch.setattr(audio.pygame.mixer, "init", broken_init)
    manager = MusicManager([Path("a.ogg")])

    with caplog.at_level(logging.WARNING, logger="quadris.audio"):
        assert not manager.init()

    assert not manager.enabled
    assert "Audio unavailable" in "".join(caplog.messages)
    manager.play()
    manager.toggle_mute()
    assert manager.muted


def test_no_tracks_means_no_music() -> None:
    manager = MusicManager()
    assert not manager.init()
    assert manager.current is None
    manager.next_track()


def test_discover_tracks(tmp_path) -> None:
    for name in ("b.ogg", "a.mp3", "notes.txt"):
        (tmp_path / name).write_bytes(b"")
    assert [p.name for p in discover_tracks(tmp_path)] == ["a.mp3", "b.ogg"]
    assert discover_tracks(None) == []
    assert discover_tracks(tmp_path / "missing") == []
