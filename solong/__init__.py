"""Tile-based puzzle game: map validation, game rules, XPM textures and a pygame front end."""

__version__ = "0.1.0"