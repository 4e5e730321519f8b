"""
Two-layer tile map editor: paint tiles, place a spawn point, export the map.
"""

__version__ = "0.1.0"
