"""Thumbnail mosaic generator for video files."""

__version__ = "0.1.0"
