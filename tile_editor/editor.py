#!/usr/bin/env python3
"""
Tile Editor - window, input polling and the redraw loop.

The editor core (grid, controller, renderer, serializer) never touches
pygame; this module adapts pygame events into InputState snapshots and
presents the rendered RGBA frame.
"""

import logging
import sys
import traceback
from typing import Tuple

import pygame
from rich.logging import RichHandler

from .config import EditorConfig
from .input_handler import InputState, PaintController
from .models import Direction, Layer
from .renderer import Renderer
from .world import World
from . import serializer

logger = logging.getLogger(__name__)

CRASH_LOG = "editor_debug.log"
BACKDROP = (255, 255, 255)

ARROW_KEYS = {
    Direction.RIGHT: pygame.K_RIGHT,
    Direction.LEFT: pygame.K_LEFT,
    Direction.UP: pygame.K_UP,
    Direction.DOWN: pygame.K_DOWN,
}

# pygame numbers mouse buttons from 1: left, middle, right
SECONDARY_BUTTON = 3
TERTIARY_BUTTON = 2


class PygameInputSource:
    def __init__(self, config: EditorConfig):
        self.logical_size = (config.screen_width, config.screen_height)

    def to_logical(self, pos: Tuple[int, int]) -> Tuple[int, int]:
        """Map a window position to the fixed logical screen."""
        win_w, win_h = pygame.display.get_surface().get_size()
        w, h = self.logical_size
        x = pos[0] * w // max(win_w, 1)
        y = pos[1] * h // max(win_h, 1)
        return (min(max(x, 0), w - 1), min(max(y, 0), h - 1))

    def poll(self) -> InputState:
        state = InputState()
        digits = []
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                state.quit = True
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    state.quit = True
                elif event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                    state.confirm_pressed = True
                elif pygame.K_0 <= event.key <= pygame.K_9:
                    digits.append(event.key - pygame.K_0)
            elif event.type == pygame.MOUSEBUTTONDOWN:
                if event.button == SECONDARY_BUTTON:
                    state.secondary_pressed = True
                elif event.button == TERTIARY_BUTTON:
                    state.tertiary_pressed = True
            elif event.type == pygame.VIDEORESIZE:
                state.resized = event.size

        keys = pygame.key.get_pressed()
        state.directions_held = frozenset(d for d, k in ARROW_KEYS.items() if keys[k])
        state.digits_pressed = tuple(digits)
        state.primary_held = pygame.mouse.get_pressed(3)[0]
        if pygame.mouse.get_focused():
            state.pointer = self.to_logical(pygame.mouse.get_pos())
        return state


class TileEditor:
    def __init__(self, config: EditorConfig):
        self.config = config
        self.world = World(config)
        if config.resume:
            serializer.load(self.world)
        self.controller = PaintController(self.world)
        self.renderer = Renderer(config)
        self.input_source = PygameInputSource(config)

        self.frame = bytearray(config.frame_size)
        self.window = None
        self.clock = None
        self._caption = ""

    def setup_window(self):
        pygame.init()
        size = (self.config.screen_width, self.config.screen_height)
        self.window = pygame.display.set_mode(size, pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.update_caption()

    def update_caption(self):
        layer = "FG" if self.world.layer_mode is Layer.FOREGROUND else "BG"
        row, col = self.world.cursor
        caption = (
            f"{self.config.window_title} | LYR: {layer} | "
            f"TILE: {self.world.active_tile.name} | POS: {col},{row}"
        )
        if caption != self._caption:
            pygame.display.set_caption(caption)
            self._caption = caption

    def present(self):
        size = (self.config.screen_width, self.config.screen_height)
        image = pygame.image.frombuffer(self.frame, size, "RGBA")
        window_size = self.window.get_size()
        if window_size != size:
            image = pygame.transform.scale(image, window_size)
        self.window.fill(BACKDROP)
        self.window.blit(image, (0, 0))
        pygame.display.flip()

    def run(self) -> int:
        """Run until quit. Returns the process exit status."""
        self.setup_window()
        try:
            while self.controller.running:
                state = self.input_source.poll()
                if state.quit:
                    break
                if state.resized:
                    self.window = pygame.display.get_surface()

                self.controller.handle(state)
                self.renderer.draw(self.world, self.frame)
                try:
                    self.present()
                except pygame.error as e:
                    logger.error("Presenting frame failed: %s", e)
                    return 1
                self.update_caption()
                self.clock.tick(self.config.target_fps)
            return 0
        finally:
            pygame.quit()


def setup_logging(level: int = logging.INFO):
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True)],
    )


def main(config_path: str = "editor.toml") -> int:
    """Entry point for the editor."""
    setup_logging()
    try:
        config = EditorConfig.load_from_toml(config_path)
        return TileEditor(config).run()
    except KeyboardInterrupt:
        logger.info("Editor interrupted by user.")
        return 0
    except Exception as e:
        logger.critical("Editor crashed: %s", e)
        with open(CRASH_LOG, "w") as f:
            f.write(f"CRASH REPORT:\n{str(e)}\n\n{traceback.format_exc()}")
        logger.critical("See %s for details.", CRASH_LOG)
        return 1


if __name__ == "__main__":
    sys.exit(main())
