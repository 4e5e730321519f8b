"""
Map export and import for the tile editor.

Three artifacts are produced on export:
  map.txt     foreground, one digit code per cell, one line per row
  map_bg.txt  background, cells under an occluding foreground written as 0
  map.json    spawn record {"x": col, "y": row, "depth": <constant>}

Any OSError while writing is left to propagate; a failed export is fatal.
"""

import json
import logging
import os
from typing import Dict, List

import numpy as np

from .models import Layer, TileType, encode_tile
from .world import World

logger = logging.getLogger(__name__)


def format_layer(codes: np.ndarray) -> str:
    return "".join("".join(str(int(c)) for c in row) + "\n" for row in codes)


def foreground_text(world: World) -> str:
    return format_layer(world.grid.layer_codes(Layer.FOREGROUND))


def background_text(world: World) -> str:
    grid = world.grid
    codes = np.where(
        grid.occlusion_mask(),
        encode_tile(TileType.AIR),
        grid.layer_codes(Layer.BACKGROUND),
    )
    return format_layer(codes)


def spawn_record(world: World) -> Dict[str, int]:
    row, col = world.spawn
    return {"x": col, "y": row, "depth": world.config.spawn_depth}


def _replace(path: str, text: str):
    if os.path.exists(path):
        os.remove(path)
    with open(path, "w", newline="\n") as f:
        f.write(text)


def export(world: World) -> List[str]:
    """Write all three artifacts, overwriting existing ones. Returns the paths."""
    cfg = world.config
    os.makedirs(cfg.export_dir, exist_ok=True)

    paths = [
        cfg.export_path(cfg.map_file),
        cfg.export_path(cfg.background_file),
        cfg.export_path(cfg.spawn_file),
    ]
    _replace(paths[0], foreground_text(world))
    _replace(paths[1], background_text(world))
    _replace(paths[2], json.dumps(spawn_record(world), indent="\t") + "\n")

    logger.info("Exported map to %s", ", ".join(paths))
    return paths


def _read_lines(path: str) -> List[str]:
    # Bytes outside ASCII become U+FFFD, which decodes to Air
    with open(path, "r", encoding="ascii", errors="replace") as f:
        return f.read().splitlines()


def load(world: World) -> bool:
    """
    Read a previous export back into a freshly reset world. Missing files
    are skipped; unknown codes become Air. Returns True if anything was loaded.
    """
    cfg = world.config
    world.reset()
    grid = world.grid
    loaded = False

    for layer, name in (
        (Layer.FOREGROUND, cfg.map_file),
        (Layer.BACKGROUND, cfg.background_file),
    ):
        path = cfg.export_path(name)
        if os.path.exists(path):
            grid.load_codes(layer, _read_lines(path))
            loaded = True

    path = cfg.export_path(cfg.spawn_file)
    if os.path.exists(path):
        try:
            with open(path, "r") as f:
                record = json.load(f)
            row, col = grid.clamp_cell(int(record.get("y", 0)), int(record.get("x", 0)))
            world.set_spawn(row, col)
            loaded = True
        except (ValueError, TypeError, AttributeError) as e:
            logger.warning("Ignoring malformed spawn record %s: %s", path, e)

    if loaded:
        logger.info("Loaded map from %s", cfg.export_dir)
    return loaded
