"""
Core models and data structures for the tile editor.
"""

from enum import Enum
from typing import Dict, Iterable, Optional, Tuple


class TileType(Enum):
    AIR = "air"
    DIRT = "dirt"
    GRASS = "grass"
    CHECKPOINT = "checkpoint"
    SPIKES = "spikes"
    TALL_GRASS = "tall_grass"
    STONE = "stone"
    PLANKS = "planks"
    CRACKED_STONE = "cracked_stone"


# Storage codes, index == code
CODE_TO_TILE: Tuple[TileType, ...] = (
    TileType.AIR,
    TileType.DIRT,
    TileType.GRASS,
    TileType.CHECKPOINT,
    TileType.SPIKES,
    TileType.TALL_GRASS,
    TileType.STONE,
    TileType.PLANKS,
    TileType.CRACKED_STONE,
)
TILE_TO_CODE: Dict[TileType, int] = {t: code for code, t in enumerate(CODE_TO_TILE)}

# Foreground tiles that never hide the background beneath them
PASSTHROUGH_TILES = frozenset(
    {TileType.AIR, TileType.CHECKPOINT, TileType.SPIKES, TileType.TALL_GRASS}
)


def encode_tile(tile: TileType) -> int:
    return TILE_TO_CODE[tile]


def decode_tile(code) -> TileType:
    """
    Map a storage code (int or single digit character) to a tile.
    Anything that is not a known code decodes to Air.
    """
    if isinstance(code, str):
        # ASCII digits only, str.isdigit() also admits other scripts
        if len(code) != 1 or not "0" <= code <= "9":
            return TileType.AIR
        code = ord(code) - ord("0")
    if 0 <= code < len(CODE_TO_TILE):
        return CODE_TO_TILE[code]
    return TileType.AIR


class Layer(Enum):
    FOREGROUND = 0
    BACKGROUND = 1

    def toggled(self) -> "Layer":
        return Layer.BACKGROUND if self is Layer.FOREGROUND else Layer.FOREGROUND


class Direction(Enum):
    RIGHT = (0, 1)
    LEFT = (0, -1)
    UP = (-1, 0)
    DOWN = (1, 0)

    @property
    def dy(self) -> int:
        return self.value[0]

    @property
    def dx(self) -> int:
        return self.value[1]


# Only one direction scrolls per update; earlier entries win
SCROLL_PRIORITY: Tuple[Direction, ...] = (
    Direction.RIGHT,
    Direction.LEFT,
    Direction.UP,
    Direction.DOWN,
)


def first_held(held: Iterable[Direction]) -> Optional[Direction]:
    held = set(held)
    for direction in SCROLL_PRIORITY:
        if direction in held:
            return direction
    return None
