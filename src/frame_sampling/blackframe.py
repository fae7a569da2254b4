"""Black-frame detection using ffmpeg's blackframe filter."""

from __future__ import annotations

import logging
from pathlib import Path

from media_probe.tool import MediaToolError, ToolRunner

logger = logging.getLogger(__name__)

BLACKFRAME_AMOUNT = 99
BLACKFRAME_THRESHOLD = 32
# The filter only logs frames that fall under the thresholds.
BLACKFRAME_MARKER = "Parsed_blackframe"


class ExtractError(MediaToolError):
    pass


def blackframe_args(video_path: Path, timestamp: float) -> list[str]:
    return [
        "-hide_banner",
        "-ss",
        f"{timestamp:.3f}",
        "-i",
        str(video_path),
        "-t",
        "1",
        "-vf",
        f"blackframe={BLACKFRAME_AMOUNT}:{BLACKFRAME_THRESHOLD}",
        "-an",
        "-f",
        "null",
        "-",
    ]


def is_black_frame(video_path: Path, timestamp: float, runner: ToolRunner) -> bool:
    """Return True if the second of video starting at ``timestamp`` is black."""

    try:
        result = runner.run(blackframe_args(video_path, timestamp))
    except MediaToolError as exc:
        raise ExtractError(f"Black-frame check failed at {timestamp:.3f}s") from exc
    if not result.ok:
        raise ExtractError(
            f"Black-frame check failed at {timestamp:.3f}s (exit {result.returncode}): "
            f"{result.stderr.strip()[-300:]}"
        )
    black = BLACKFRAME_MARKER in result.stderr
    logger.debug("blackframe %s @ %.3fs -> %s", video_path, timestamp, black)
    return black
