"""Discrete commands delivered by the input layer."""

from __future__ import annotations

from enum import Enum


class Command(str, Enum):
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    SOFT_DROP_START = "soft_drop_start"
    SOFT_DROP_STOP = "soft_drop_stop"
    HARD_DROP = "hard_drop"
    ROTATE_CW = "rotate_cw"
    ROTATE_CCW = "rotate_ccw"
    HOLD = "hold"
    PAUSE_TOGGLE = "pause_toggle"
    START_NEW_GAME = "start_new_game"
    # Audio commands never reach the game state.
    MUTE_TOGGLE = "mute_toggle"
    CHANGE_TRACK = "change_track"


AUDIO_COMMANDS = frozenset({Command.MUTE_TOGGLE, Command.CHANGE_TRACK})
