"""Package for mosaic tiling and caption overlay."""

from .caption import OverlayError, build_caption, build_drawtext_filter, escape_drawtext, overlay_caption
from .tiler import CompositeError, compose_mosaic

__all__ = [
    "CompositeError",
    "OverlayError",
    "build_caption",
    "build_drawtext_filter",
    "compose_mosaic",
    "escape_drawtext",
    "overlay_caption",
]
