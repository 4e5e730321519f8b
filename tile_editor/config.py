"""
Configuration settings for the tile editor.
"""

from pydantic import BaseModel, ConfigDict, model_validator
import logging
import toml
import os

logger = logging.getLogger(__name__)


class EditorConfig(BaseModel):
    """Configuration settings for the editor."""

    # Window
    window_title: str = "Tile Editor"
    target_fps: int = 60

    # Presentation surface (logical size, independent of the window size)
    screen_width: int = 960
    screen_height: int = 736

    # World settings
    tile_size: int = 32
    sim_width: int = 1280
    sim_height: int = 960

    # Spawn marker
    spawn_block: int = 16
    spawn_depth: int = 750

    # Alpha of the tile preview under the cursor
    preview_alpha: int = 0x64

    # Load the previous export on startup
    resume: bool = False

    # Paths
    export_dir: str = "."
    map_file: str = "map.txt"
    background_file: str = "map_bg.txt"
    spawn_file: str = "map.json"

    model_config = ConfigDict(extra="ignore", frozen=True)

    @model_validator(mode="after")
    def _check_dimensions(self) -> "EditorConfig":
        if self.tile_size <= 0 or self.spawn_block <= 0:
            raise ValueError("tile_size and spawn_block must be positive")
        for name in ("screen_width", "screen_height", "sim_width", "sim_height"):
            value = getattr(self, name)
            if value <= 0 or value % self.tile_size:
                raise ValueError(f"{name} must be a positive multiple of tile_size")
        if self.screen_width > self.sim_width or self.screen_height > self.sim_height:
            raise ValueError("screen must not be larger than the world")
        if not 0 <= self.preview_alpha <= 0xFF:
            raise ValueError("preview_alpha must be within 0..255")
        return self

    @property
    def rows(self) -> int:
        return self.sim_height // self.tile_size

    @property
    def cols(self) -> int:
        return self.sim_width // self.tile_size

    @property
    def max_offset_y(self) -> int:
        return self.sim_height - self.screen_height

    @property
    def max_offset_x(self) -> int:
        return self.sim_width - self.screen_width

    @property
    def frame_size(self) -> int:
        """Length in bytes of one RGBA frame."""
        return self.screen_width * self.screen_height * 4

    def export_path(self, name: str) -> str:
        return os.path.join(self.export_dir, name)

    @classmethod
    def load_from_toml(cls, path: str = "editor.toml") -> "EditorConfig":
        """Load configuration from a TOML file."""
        if not os.path.exists(path):
            logger.warning("Config file %s not found. Using defaults.", path)
            return cls()

        try:
            with open(path, "r") as f:
                data = toml.load(f)
        except (OSError, toml.TomlDecodeError) as e:
            logger.error("Error loading config %s: %s", path, e)
            return cls()

        # Flatten both sections into the model
        settings = dict(data.get("editor", {}))
        settings.update(data.get("paths", {}))
        return cls(**settings)
