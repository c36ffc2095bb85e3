"""pygame front-end for the game engine.

The runner owns the window, the clock and the music.  Each frame it turns key
events into :class:`~quadris.commands.Command` values, hands game commands to
:class:`~quadris.game_state.GameState` and audio commands to
:class:`~quadris.audio.MusicManager`, advances gravity once and redraws from
the state's read-only queries.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple
import logging

import pygame

from .audio import MusicManager
from .board import BONUS_GOLD, BONUS_SILVER, PIECE_VALUES
from .commands import AUDIO_COMMANDS, Command
from .config import GameConfig
from .game_state import GameState, Phase
from .tetromino import TetrominoType, shape_blocks


LOGGER = logging.getLogger(__name__)

# Size of a single board cell in pixels
CELL_SIZE = 30
# Size of a cell in the next/hold previews
PREVIEW_CELL = 18
# Width of the side panel in pixels
PANEL_WIDTH = 190
MARGIN = 20
# Frames per second to run the game loop at
FPS = 60

BACKGROUND = (0, 0, 0)
GRID_LINE = (50, 50, 50)
TEXT_COLOR = (230, 230, 230)
DANGER_COLOR = (200, 30, 30)

# Colours for each tetromino type
SHAPE_COLORS = {
    TetrominoType.I: (0, 255, 255),
    TetrominoType.O: (255, 255, 0),
    TetrominoType.T: (170, 0, 255),
    TetrominoType.S: (0, 255, 0),
    TetrominoType.Z: (255, 0, 0),
    TetrominoType.J: (0, 0, 255),
    TetrominoType.L: (255, 85, 0),
}

# Mapping from the integer stored in the board grid to a colour
CELL_COLORS = {0: (25, 25, 25), BONUS_GOLD: (255, 214, 0), BONUS_SILVER: (192, 192, 192)}
for shape, value in PIECE_VALUES.items():
    CELL_COLORS[value] = SHAPE_COLORS[shape]

KEY_COMMANDS = {
    pygame.K_LEFT: Command.MOVE_LEFT,
    pygame.K_RIGHT: Command.MOVE_RIGHT,
    pygame.K_DOWN: Command.SOFT_DROP_START,
    pygame.K_SPACE: Command.HARD_DROP,
    pygame.K_UP: Command.ROTATE_CW,
    pygame.K_x: Command.ROTATE_CW,
    pygame.K_z: Command.ROTATE_CCW,
    pygame.K_c: Command.HOLD,
    pygame.K_RETURN: Command.PAUSE_TOGGLE,
    pygame.K_p: Command.PAUSE_TOGGLE,
    pygame.K_r: Command.START_NEW_GAME,
    pygame.K_m: Command.MUTE_TOGGLE,
    pygame.K_n: Command.CHANGE_TRACK,
}


def handle_key(event: pygame.event.Event, phase: Phase) -> Optional[Command]:
    """Translate a keyboard event into a command.

    Enter starts a new game when none is in progress.  Releasing Down ends the
    soft drop; every other key acts on press only.
    """

    if event.type == pygame.KEYUP:
        return Command.SOFT_DROP_STOP if event.key == pygame.K_DOWN else None
    if event.type != pygame.KEYDOWN:
        return None
    if event.key == pygame.K_RETURN and phase in (Phase.NOT_STARTED, Phase.GAME_OVER):
        return Command.START_NEW_GAME
    return KEY_COMMANDS.get(event.key)


def _cell_rect(x0: int, y0: int, row: int, col: int, size: int) -> pygame.Rect:
    return pygame.Rect(x0 + col * size, y0 + row * size, size, size)


def draw_board(screen: pygame.Surface, state: GameState) -> None:
    """Render the locked cells."""

    board = state.board
    for r in range(board.height):
        for c in range(board.width):
            rect = _cell_rect(MARGIN, MARGIN, r, c, CELL_SIZE)
            pygame.draw.rect(screen, CELL_COLORS[int(board.grid[r, c])], rect)
            pygame.draw.rect(screen, GRID_LINE, rect, 1)


def draw_tetromino(screen: pygame.Surface, state: GameState) -> None:
    """Render the landing ghost and the active tetromino."""

    if not state.active:
        return
    color = SHAPE_COLORS[state.active.shape]
    for r, c in state.ghost_blocks():
        if r >= 0:
            pygame.draw.rect(screen, color, _cell_rect(MARGIN, MARGIN, r, c, CELL_SIZE), 2)
    for r, c in state.active_blocks():
        if r < 0:
            continue
        rect = _cell_rect(MARGIN, MARGIN, r, c, CELL_SIZE)
        pygame.draw.rect(screen, color, rect)
        pygame.draw.rect(screen, GRID_LINE, rect, 1)


def draw_preview(screen: pygame.Surface, shape: TetrominoType, x: int, y: int) -> None:
    for r, c in shape_blocks(shape, 0):
        rect = _cell_rect(x, y, r, c, PREVIEW_CELL)
        pygame.draw.rect(screen, SHAPE_COLORS[shape], rect)
        pygame.draw.rect(screen, GRID_LINE, rect, 1)


def status_lines(state: GameState) -> List[str]:
    return [
        f"Score: {state.score}",
        f"Level: {state.level}",
        f"Lines: {state.lines}",
        f"High: {state.high_score}",
    ]


def banner_text(phase: Phase) -> Optional[str]:
    if phase is Phase.NOT_STARTED:
        return "Press Enter"
    if phase is Phase.PAUSED:
        return "Paused"
    if phase is Phase.GAME_OVER:
        return "Game over - Enter"
    return None


class GameRunner:
    """Manage the window and the frame loop."""

    def __init__(self, config: Optional[GameConfig] = None, music: Optional[MusicManager] = None) -> None:
        self.state = GameState(config or GameConfig())
        self.music = music or MusicManager()
        self._running = False
        self._screen: Optional[pygame.Surface] = None
        self._font: Optional[pygame.font.Font] = None
        self._clock: Optional[pygame.time.Clock] = None

    @property
    def running(self) -> bool:
        return self._running

    @property
    def window_size(self) -> Tuple[int, int]:
        board = self.state.board
        width = MARGIN * 3 + board.width * CELL_SIZE + PANEL_WIDTH
        height = MARGIN * 2 + board.height * CELL_SIZE
        return width, height

    def dispatch(self, commands: Iterable[Command]) -> None:
        """Route commands to the music manager or the game state."""

        for command in commands:
            if command in AUDIO_COMMANDS:
                self.music.handle(command)
                continue
            before = self.state.phase
            changed = self.state.handle(command)
            if command is Command.START_NEW_GAME and changed:
                # A new game always starts its track from the top, even from pause.
                self.music.play()
            else:
                self._sync_music(before, self.state.phase)

    def _sync_music(self, before: Phase, after: Phase) -> None:
        if before is after:
            return
        if after is Phase.PAUSED:
            self.music.pause()
        elif before is Phase.PAUSED and after is Phase.RUNNING:
            self.music.resume()
        elif after is Phase.RUNNING:
            self.music.play()
        elif after is Phase.GAME_OVER:
            self.music.stop()

    def process_events(self, events: Iterable[pygame.event.Event]) -> None:
        commands: List[Command] = []
        for event in events:
            if event.type == pygame.QUIT:
                self._running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                self._running = False
            else:
                command = handle_key(event, self.state.phase)
                if command is not None:
                    commands.append(command)
        self.dispatch(commands)

    def update(self, dt: float) -> None:
        before = self.state.phase
        self.state.advance(dt)
        self._sync_music(before, self.state.phase)

    def draw(self) -> None:
        if self._screen is None or self._font is None:
            return
        screen = self._screen
        state = self.state
        screen.fill(BACKGROUND)
        draw_board(screen, state)
        draw_tetromino(screen, state)

        if state.in_danger:
            frame = pygame.Rect(
                MARGIN - 3, MARGIN - 3, state.board.width * CELL_SIZE + 6, state.board.height * CELL_SIZE + 6
            )
            pygame.draw.rect(screen, DANGER_COLOR, frame, 3)

        x = MARGIN * 2 + state.board.width * CELL_SIZE
        y = MARGIN
        screen.blit(self._font.render("Next", True, TEXT_COLOR), (x, y))
        y += 26
        for shape in state.preview():
            draw_preview(screen, shape, x, y)
            y += PREVIEW_CELL * 3
        screen.blit(self._font.render("Hold", True, TEXT_COLOR), (x, y))
        y += 26
        if state.held is not None:
            draw_preview(screen, state.held, x, y)
        y += PREVIEW_CELL * 3
        for line in status_lines(state):
            screen.blit(self._font.render(line, True, TEXT_COLOR), (x, y))
            y += 26

        banner = banner_text(state.phase)
        if banner:
            text = self._font.render(banner, True, TEXT_COLOR)
            center = (MARGIN + state.board.width * CELL_SIZE // 2, MARGIN + state.board.height * CELL_SIZE // 2)
            screen.blit(text, text.get_rect(center=center))
        pygame.display.flip()

    def run(self) -> None:
        pygame.init()
        self._screen = pygame.display.set_mode(self.window_size)
        pygame.display.set_caption("Quadris")
        self._font = pygame.font.Font(None, 28)
        self._clock = pygame.time.Clock()
        self.music.init()
        LOGGER.info("Window opened")

        self._running = True
        try:
            while self._running:
                dt = self._clock.tick(FPS)
                self.process_events(pygame.event.get())
                self.update(dt)
                self.draw()
        finally:
            self.music.stop()
            pygame.quit()
            LOGGER.info("Window closed")

    def stop(self) -> None:
        self._running = False


def main(config: Optional[GameConfig] = None, music: Optional[MusicManager] = None) -> None:
    GameRunner(config, music).run()


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
