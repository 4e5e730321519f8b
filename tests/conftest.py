"""
Pytest configuration and shared fixtures for the tile editor tests.
"""

import pytest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from tile_editor.config import EditorConfig
from tile_editor.input_handler import PaintController
from tile_editor.palette import TileCatalog
from tile_editor.renderer import Renderer
from tile_editor.world import World


@pytest.fixture
def config(tmp_path):
    """Default configuration exporting into a temporary directory."""
    return EditorConfig(export_dir=str(tmp_path))


@pytest.fixture
def world(config):
    """A fresh world with default state."""
    return World(config)


@pytest.fixture
def grid(world):
    return world.grid


@pytest.fixture(scope="session")
def catalog():
    """Tile catalog at the default tile size."""
    return TileCatalog(32)


@pytest.fixture
def exports():
    """Records worlds handed to the exporter."""
    return []


@pytest.fixture
def controller(world, exports):
    """Controller whose export trigger only records the call."""
    return PaintController(world, exporter=exports.append)


@pytest.fixture
def renderer(config, catalog):
    return Renderer(config, catalog)
