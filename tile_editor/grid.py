"""
Dual-layer tile grid for the editor.
Both layers live in one contiguous numpy buffer of storage codes,
indexed [layer, row, col]. The grid also owns the viewport offset.
"""

import logging
from typing import Optional, Tuple
import numpy as np

from .config import EditorConfig
from .models import (
    CODE_TO_TILE,
    PASSTHROUGH_TILES,
    Direction,
    Layer,
    TileType,
    decode_tile,
    encode_tile,
)

logger = logging.getLogger(__name__)

_PASSTHROUGH_CODES = np.array(sorted(encode_tile(t) for t in PASSTHROUGH_TILES))


class Grid:
    def __init__(self, config: EditorConfig):
        self.rows = config.rows
        self.cols = config.cols
        self.tile_size = config.tile_size
        self.max_offset = (config.max_offset_y, config.max_offset_x)

        self.layers = np.zeros((len(Layer), self.rows, self.cols), dtype=np.uint8)
        # Top-left world pixel on screen, as (y, x)
        self.offset: Tuple[int, int] = (0, 0)

    def _check(self, row: int, col: int):
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(
                f"cell ({row}, {col}) outside {self.rows}x{self.cols} grid"
            )

    def clamp_cell(self, row: int, col: int) -> Tuple[int, int]:
        return (
            min(max(row, 0), self.rows - 1),
            min(max(col, 0), self.cols - 1),
        )

    def cell_at(self, x: int, y: int) -> Tuple[int, int]:
        """World cell under a screen pixel, clamped to the grid."""
        oy, ox = self.offset
        return self.clamp_cell((y + oy) // self.tile_size, (x + ox) // self.tile_size)

    def get_tile(self, layer: Layer, row: int, col: int) -> TileType:
        self._check(row, col)
        return CODE_TO_TILE[self.layers[layer.value, row, col]]

    def occludes(self, row: int, col: int) -> bool:
        """True when the foreground tile hides the background at this cell."""
        self._check(row, col)
        return self.get_tile(Layer.FOREGROUND, row, col) not in PASSTHROUGH_TILES

    def occlusion_mask(self) -> np.ndarray:
        """Boolean (rows, cols) array of occluding foreground cells."""
        return ~np.isin(self.layers[Layer.FOREGROUND.value], _PASSTHROUGH_CODES)

    def paint(self, layer: Layer, row: int, col: int, tile: TileType) -> bool:
        """
        Stamp a tile. Background writes under an occluding foreground tile
        are dropped. Returns whether the cell was written.
        """
        self._check(row, col)
        if layer is Layer.BACKGROUND and self.occludes(row, col):
            return False
        self.layers[layer.value, row, col] = encode_tile(tile)
        return True

    def scroll(self, direction: Direction, step: Optional[int] = None):
        step = self.tile_size if step is None else step
        oy, ox = self.offset
        oy += direction.dy * step
        ox += direction.dx * step
        self.offset = (
            min(max(oy, 0), self.max_offset[0]),
            min(max(ox, 0), self.max_offset[1]),
        )

    def layer_codes(self, layer: Layer) -> np.ndarray:
        return self.layers[layer.value]

    def load_codes(self, layer: Layer, rows):
        """
        Fill a layer from rows of code characters. Cells past the grid are
        ignored, missing cells become Air, unknown codes decode to Air.
        """
        target = self.layers[layer.value]
        target.fill(encode_tile(TileType.AIR))
        for r, line in enumerate(rows):
            if r >= self.rows:
                logger.debug("Ignoring %s rows past the grid", layer.name.lower())
                break
            for c, ch in enumerate(line[: self.cols]):
                target[r, c] = encode_tile(decode_tile(ch))

    def clear(self):
        self.layers.fill(encode_tile(TileType.AIR))
        self.offset = (0, 0)
