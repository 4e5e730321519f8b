"""
Tile catalog for the editor.
Maps every tile type to a square RGBA pixel pattern and to its storage code.
Patterns are generated procedurally with numpy so any tile size works.
"""

from typing import Callable, Dict
import numpy as np

from .models import CODE_TO_TILE, TileType, decode_tile, encode_tile

WHITE = (0xFF, 0xFF, 0xFF, 0xFF)
RED = (0xFF, 0x00, 0x00, 0xFF)
CLEAR = (0xFF, 0xFF, 0xFF, 0x00)


def _solid(n: int, rgba) -> np.ndarray:
    img = np.empty((n, n, 4), dtype=np.uint8)
    img[...] = rgba
    return img


def _coords(n: int):
    return np.mgrid[0:n, 0:n]


def _air(n: int) -> np.ndarray:
    return _solid(n, WHITE)


def _dirt(n: int) -> np.ndarray:
    img = _solid(n, (134, 96, 67, 255))
    yy, xx = _coords(n)
    img[(yy * 7 + xx * 13) % 11 == 0] = (101, 67, 33, 255)
    return img


def _grass(n: int) -> np.ndarray:
    img = _dirt(n)
    yy, xx = _coords(n)
    edge = n // 4 + ((xx // 3) % 2) * 2
    img[yy < edge] = (86, 170, 48, 255)
    return img


def _checkpoint(n: int) -> np.ndarray:
    img = _solid(n, CLEAR)
    yy, xx = _coords(n)
    pole = n // 4
    img[(xx >= pole) & (xx < pole + 2) & (yy >= 2)] = (90, 90, 90, 255)
    # Pennant: triangle narrowing to the right of the pole
    top, bottom = 3, n // 2
    mid = (top + bottom) / 2
    reach = (bottom - top) / 2
    flag = (xx >= pole + 2) & (yy >= top) & (yy < bottom)
    flag &= (xx - pole - 2) < (reach - np.abs(yy - mid)) * 2
    img[flag] = (220, 40, 40, 255)
    return img


def _spikes(n: int) -> np.ndarray:
    img = _solid(n, CLEAR)
    yy, xx = _coords(n)
    width = max(n // 4, 2)
    half = width / 2
    centre = (xx // width) * width + half - 0.5
    base = n // 2
    rise = (yy - base) * half / max(n - base, 1)
    img[(yy >= base) & (np.abs(xx - centre) <= rise)] = (192, 192, 200, 255)
    return img


def _tall_grass(n: int) -> np.ndarray:
    img = _solid(n, CLEAR)
    yy, xx = _coords(n)
    blades = (xx % 6 == 1) | (xx % 6 == 2)
    height = n // 3 + ((xx * 5) % 7) * 2
    img[blades & (yy >= height)] = (60, 150, 40, 255)
    return img


def _stone(n: int) -> np.ndarray:
    img = _solid(n, (128, 128, 128, 255))
    yy, xx = _coords(n)
    course = max(n // 2, 1)
    stagger = ((yy // course) % 2) * (n // 4)
    mortar = (yy % course == 0) | ((xx + stagger) % course == 0)
    img[mortar] = (96, 96, 96, 255)
    return img


def _planks(n: int) -> np.ndarray:
    img = _solid(n, (160, 110, 60, 255))
    yy, xx = _coords(n)
    board = max(n // 4, 1)
    img[yy % board == board - 1] = (110, 70, 35, 255)
    nails = (yy % board == board // 2) & ((xx == 2) | (xx == n - 3))
    img[nails] = (60, 60, 60, 255)
    return img


def _cracked_stone(n: int) -> np.ndarray:
    img = _stone(n)
    yy, xx = _coords(n)
    crack = np.where(yy < n // 2, xx == yy, xx == n - 1 - yy)
    img[crack & (yy > 0)] = (60, 60, 60, 255)
    return img


def spawn_marker(n: int) -> np.ndarray:
    img = _solid(n, CLEAR)
    yy, xx = _coords(n)
    c = (n - 1) / 2
    dist = np.hypot(yy - c, xx - c)
    img[(dist >= n * 0.3) & (dist <= n * 0.4)] = (0, 120, 255, 255)
    img[dist <= n * 0.1] = (0, 120, 255, 255)
    return img


def hidden_marker(n: int) -> np.ndarray:
    img = _solid(n, CLEAR)
    yy, xx = _coords(n)
    cross = (np.abs(xx - yy) <= 1) | (np.abs(xx + yy - (n - 1)) <= 1)
    img[cross] = RED
    return img


PATTERN_BUILDERS: Dict[TileType, Callable[[int], np.ndarray]] = {
    TileType.AIR: _air,
    TileType.DIRT: _dirt,
    TileType.GRASS: _grass,
    TileType.CHECKPOINT: _checkpoint,
    TileType.SPIKES: _spikes,
    TileType.TALL_GRASS: _tall_grass,
    TileType.STONE: _stone,
    TileType.PLANKS: _planks,
    TileType.CRACKED_STONE: _cracked_stone,
}


class TileCatalog:
    def __init__(self, tile_size: int = 32):
        self.tile_size = tile_size
        # atlas[code] is the pattern stored under that code
        self.atlas = np.stack(
            [PATTERN_BUILDERS[t](tile_size) for t in CODE_TO_TILE]
        )
        self.spawn_marker = spawn_marker(tile_size)
        self.hidden_marker = hidden_marker(tile_size)
        for arr in (self.atlas, self.spawn_marker, self.hidden_marker):
            arr.setflags(write=False)

    def pattern(self, tile: TileType) -> np.ndarray:
        return self.atlas[encode_tile(tile)]

    def preview(self, tile: TileType, alpha: int) -> np.ndarray:
        img = self.pattern(tile).copy()
        img[..., 3] = alpha
        return img

    @staticmethod
    def encode(tile: TileType) -> int:
        return encode_tile(tile)

    @staticmethod
    def decode(code) -> TileType:
        return decode_tile(code)

    def __len__(self) -> int:
        return len(CODE_TO_TILE)
