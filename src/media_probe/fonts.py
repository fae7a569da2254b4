"""Locate a system font file for ffmpeg's drawtext filter."""

from __future__ import annotations

import logging
import os
from typing import Callable, Iterable

from .tool import MediaToolError

logger = logging.getLogger(__name__)

DEFAULT_FONT_CANDIDATES = (
    # Linux
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/freefont/FreeSans.ttf",
    # macOS
    "/System/Library/Fonts/SFNSDisplay.ttf",
    "/Library/Fonts/Arial.ttf",
    # Windows
    "C:/Windows/Fonts/arial.ttf",
    "C:/Windows/Fonts/segoeui.ttf",
)


class NoFontFound(MediaToolError):
    pass


def find_default_font(
    candidates: Iterable[str] = DEFAULT_FONT_CANDIDATES,
    exists: Callable[[str], bool] = os.path.exists,
) -> str:
    """Return the first candidate path for which ``exists`` is true."""

    checked = []
    for path in candidates:
        checked.append(path)
        if exists(path):
            return path
    raise NoFontFound(
        "No usable system font found for drawtext (checked: " + ", ".join(checked) + ")"
    )


def resolve_font(
    preferred: str | None = None,
    candidates: Iterable[str] | None = None,
    exists: Callable[[str], bool] = os.path.exists,
) -> str:
    """Try ``preferred`` first, then the platform defaults."""

    if candidates is None:
        candidates = DEFAULT_FONT_CANDIDATES
    if preferred:
        if exists(preferred):
            return preferred
        logger.warning("Font %s not found; falling back to system fonts", preferred)
    return find_default_font(candidates, exists=exists)
