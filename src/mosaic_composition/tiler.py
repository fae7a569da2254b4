"""Tile sampled frames into a single mosaic image with ffmpeg."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from PIL import Image

from frame_sampling.sampler import FRAME_PATTERN
from media_probe.tool import MediaToolError, ToolRunner

logger = logging.getLogger(__name__)


class CompositeError(MediaToolError):
    pass


def _numbered_frames(frames_dir: Path) -> List[Path]:
    return sorted(frames_dir.glob("thumb_*.jpg"))


def _check_uniform_size(frames: List[Path]) -> None:
    """The tile filter needs every cell to share the first frame's size."""

    expected = None
    for path in frames:
        try:
            with Image.open(path) as img:
                size = img.size
        except OSError as exc:
            raise CompositeError(f"Unreadable frame {path.name}") from exc
        if expected is None:
            expected = size
        elif size != expected:
            raise CompositeError(
                f"Frame {path.name} is {size[0]}x{size[1]}, expected {expected[0]}x{expected[1]}"
            )


def compose_mosaic(
    frames_dir: Path,
    rows: int,
    cols: int,
    output: Path,
    runner: ToolRunner,
) -> Path:
    """Compose ``thumb_000.jpg``.. into a ``cols`` x ``rows`` grid, row-major.

    Returns:
        Path to the raw mosaic image.
    """

    needed = rows * cols
    frames = _numbered_frames(frames_dir)
    if len(frames) < needed:
        raise CompositeError(f"Need {needed} frames for a {cols}x{rows} mosaic, found {len(frames)}")
    _check_uniform_size(frames[:needed])

    args = [
        "-f",
        "image2",
        "-i",
        str(frames_dir / FRAME_PATTERN),
        "-filter_complex",
        f"tile={cols}x{rows}",
        "-frames:v",
        "1",
        "-y",
        str(output),
    ]
    try:
        result = runner.run(args)
    except MediaToolError as exc:
        raise CompositeError("Failed to create mosaic with ffmpeg") from exc
    if not result.ok:
        raise CompositeError(
            f"Failed to create mosaic with ffmpeg (exit {result.returncode}): {result.stderr.strip()[-300:]}"
        )
    if not output.exists():
        raise CompositeError(f"ffmpeg did not write {output}")
    logger.debug("mosaic %dx%d -> %s", cols, rows, output)
    return output
