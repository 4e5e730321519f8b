"""
Input handling logic for the tile editor.
Turns one frame of input into World mutations.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, FrozenSet, Optional, Tuple

from .models import CODE_TO_TILE, Direction, first_held
from .world import World
from . import serializer

logger = logging.getLogger(__name__)


@dataclass
class InputState:
    """Snapshot of one update cycle from the input source."""

    pointer: Optional[Tuple[int, int]] = None  # (x, y) in screen pixels
    primary_held: bool = False
    secondary_pressed: bool = False
    tertiary_pressed: bool = False
    directions_held: FrozenSet[Direction] = field(default_factory=frozenset)
    digits_pressed: Tuple[int, ...] = ()
    confirm_pressed: bool = False
    quit: bool = False
    resized: Optional[Tuple[int, int]] = None


class PaintController:
    def __init__(self, world: World, exporter: Optional[Callable[[World], None]] = None):
        self.world = world
        self.exporter = exporter or serializer.export
        # Quitting is decided by the event loop, never here
        self.running = True

    def handle(self, state: InputState):
        """Apply one frame of input. Sanitizes by clamping, never fails on input."""
        self.scroll(state.directions_held)
        if state.pointer is not None:
            self.world.pointer = state.pointer
        self.update_cursor()

        if state.primary_held:
            self.imprint()
        if state.secondary_pressed:
            self.place_spawn()
        if state.tertiary_pressed:
            self.toggle_layer()
        for digit in state.digits_pressed:
            self.select_tile(digit)
        if state.confirm_pressed:
            self.exporter(self.world)

    def scroll(self, held):
        direction = first_held(held)
        if direction is not None:
            self.world.grid.scroll(direction)

    def update_cursor(self):
        if self.world.pointer is None:
            return
        x, y = self.world.pointer
        self.world.cursor = self.world.grid.cell_at(x, y)

    def imprint(self):
        row, col = self.world.cursor
        self.world.grid.paint(self.world.layer_mode, row, col, self.world.active_tile)

    def place_spawn(self):
        self.world.set_spawn(*self.world.cursor)
        logger.debug("Spawn set to %s", self.world.spawn)

    def toggle_layer(self):
        self.world.layer_mode = self.world.layer_mode.toggled()
        logger.debug("Editing %s layer", self.world.layer_mode.name.lower())

    def select_tile(self, digit: int):
        if 0 <= digit < len(CODE_TO_TILE):
            self.world.active_tile = CODE_TO_TILE[digit]
            logger.debug("Active tile: %s", self.world.active_tile.name)
