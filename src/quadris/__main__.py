"""Command line entry point.

Run with: `python -m quadris` (or the installed `quadris` script).

``--ascii`` skips the window and prints a single frame composed of the board
plus the active tetromino, useful as a smoke test on machines without a
display.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence
import argparse
import logging

from .config import GameConfig
from .game_state import GameState
from .generator import GENERATORS
from .utils import render_grid


def _print_grid(grid: List[List[int]]) -> None:
    for row in grid:
        print("".join("#" if cell else "." for cell in row))


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="quadris", description="Falling-block puzzle game.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the piece randomizer.")
    parser.add_argument(
        "--randomizer",
        choices=sorted(GENERATORS),
        default="bag",
        help="Piece sequence policy.",
    )
    parser.add_argument("--level", type=int, default=0, help="Starting level.")
    parser.add_argument("--music", type=Path, default=None, help="Directory of music tracks.")
    parser.add_argument(
        "--no-bonus",
        dest="bonus_squares",
        action="store_false",
        help="Disable gold/silver bonus squares.",
    )
    parser.add_argument("--ascii", action="store_true", help="Print one frame and exit.")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> GameConfig:
    return GameConfig(
        start_level=args.level,
        randomizer=args.randomizer,
        seed=args.seed,
        bonus_squares=args.bonus_squares,
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(levelname)s %(name)s: %(message)s",
    )
    config = build_config(args)

    if args.ascii:
        gs = GameState(config)
        gs.start()
        _print_grid(render_grid(gs.board, gs.active))
        return

    # Imported lazily so --ascii works without a display.
    from .audio import MusicManager, discover_tracks
    from .run_pygame import main as run_window

    run_window(config, MusicManager(discover_tracks(args.music)))


if __name__ == "__main__":
    main()
