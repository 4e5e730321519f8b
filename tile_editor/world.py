"""
Editor world state: the grid plus the transient editing state around it.
One World is created at startup and threaded through input handling,
rendering and export.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from .config import EditorConfig
from .grid import Grid
from .models import Layer, TileType


@dataclass
class World:
    config: EditorConfig
    grid: Optional[Grid] = None
    cursor: Tuple[int, int] = (0, 0)
    spawn: Tuple[int, int] = (0, 0)
    active_tile: TileType = TileType.DIRT
    layer_mode: Layer = Layer.FOREGROUND
    # Last pointer position in screen pixels, if any
    pointer: Optional[Tuple[int, int]] = None

    def __post_init__(self):
        if self.grid is None:
            self.grid = Grid(self.config)

    def snap_to_block(self, row: int, col: int) -> Tuple[int, int]:
        block = self.config.spawn_block
        return (row // block * block, col // block * block)

    def set_spawn(self, row: int, col: int):
        self.spawn = self.snap_to_block(row, col)

    def reset(self):
        self.grid.clear()
        self.cursor = (0, 0)
        self.spawn = (0, 0)
        self.active_tile = TileType.DIRT
        self.layer_mode = Layer.FOREGROUND
        self.pointer = None
