"""
Frame rendering for the tile editor.
Composes the visible layer, cursor preview, spawn marker and hidden-tile
indicator into a flat RGBA8 buffer, fully recomputed every frame.
Uses numpy fancy indexing over the whole screen at once.
"""

from typing import Optional

import numpy as np

from .config import EditorConfig
from .models import Layer
from .palette import TileCatalog
from .world import World


class Renderer:
    def __init__(self, config: EditorConfig, catalog: Optional[TileCatalog] = None):
        self.config = config
        self.catalog = catalog or TileCatalog(config.tile_size)
        self.width = config.screen_width
        self.height = config.screen_height

        # Reused between frames
        self.frame = np.zeros((self.height, self.width, 4), dtype=np.uint8)

    def render(self, world: World) -> np.ndarray:
        """Return a fresh (height, width, 4) frame for the world."""
        ts = self.config.tile_size
        grid = world.grid
        oy, ox = grid.offset

        # World pixel coordinates of every screen row / column
        ys = np.arange(self.height) + oy
        xs = np.arange(self.width) + ox
        cell_r, sub_r = ys // ts, ys % ts
        cell_c, sub_c = xs // ts, xs % ts
        R, C = cell_r[:, None], cell_c[None, :]
        SR, SC = sub_r[:, None], sub_c[None, :]

        # Base: one pattern pixel per screen pixel, Air is opaque white
        codes = grid.layer_codes(world.layer_mode)[R, C]
        frame = self.catalog.atlas[codes, SR, SC]

        # Cursor preview
        cur_r, cur_c = world.cursor
        cursor = (R == cur_r) & (C == cur_c)
        if cursor.any():
            preview = self.catalog.preview(world.active_tile, self.config.preview_alpha)[SR, SC]
            frame[cursor] = preview[cursor]

        # Spawn marker on the block's anchor cell
        spawn_r, spawn_c = world.spawn
        marker = self.catalog.spawn_marker[SR, SC]
        at_spawn = (R == spawn_r) & (C == spawn_c)
        mask = at_spawn & (marker[..., 3] != 0)
        frame[mask] = marker[mask]

        # Background view flags cells hidden by the foreground
        if world.layer_mode is Layer.BACKGROUND:
            hidden = self.catalog.hidden_marker[SR, SC]
            mask = grid.occlusion_mask()[R, C] & (hidden[..., 3] != 0)
            frame[mask] = hidden[mask]

        return frame

    def draw(self, world: World, out=None) -> np.ndarray:
        """
        Render into a caller-owned RGBA buffer of screen_width*screen_height*4
        bytes (e.g. a presentation surface frame), or into the renderer's own
        frame when none is given. Returns the written array.
        """
        if out is None:
            target = self.frame
        else:
            target = np.frombuffer(out, dtype=np.uint8)
            if target.size != self.config.frame_size:
                raise ValueError(
                    f"frame buffer has {target.size} bytes, expected {self.config.frame_size}"
                )
            target = target.reshape(self.height, self.width, 4)
        target[...] = self.render(world)
        return target
