"""Falling-block puzzle game engine with a pygame front-end."""

from .board import Board
from .tetromino import Tetromino, TetrominoType, shape_blocks, spawn_position
from .commands import Command
from .config import GameConfig
from .controller import PieceController
from .generator import BagGenerator, PieceGenerator, UniformGenerator, make_generator
from .game_state import GameState, Phase
from .utils import can_move, gravity_interval_ms, render_grid

__all__ = [
    "Board",
    "Tetromino",
    "TetrominoType",
    "Command",
    "GameConfig",
    "PieceController",
    "PieceGenerator",
    "BagGenerator",
    "UniformGenerator",
    "make_generator",
    "GameState",
    "Phase",
    "can_move",
    "gravity_interval_ms",
    "render_grid",
    "shape_blocks",
    "spawn_position",
]
