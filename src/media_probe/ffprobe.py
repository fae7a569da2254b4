"""Duration, resolution and size probes for a video file."""

from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

from .tool import MediaToolError, ToolRunner


class ProbeError(MediaToolError):
    pass


@dataclass(frozen=True)
class VideoSource:
    path: Path
    duration: float
    size_mb: float
    width: int
    height: int

    @property
    def resolution(self) -> str:
        return f"{self.width}x{self.height}"

    @property
    def name(self) -> str:
        return self.path.name


def get_video_duration(video_path: Path, runner: ToolRunner) -> float:
    """Return the container duration in seconds.

    Zero, negative and non-finite durations are rejected: every sample
    timestamp is derived from this value.
    """

    try:
        output = runner.probe(
            [
                "-v",
                "error",
                "-show_entries",
                "format=duration",
                "-of",
                "default=noprint_wrappers=1:nokey=1",
                str(video_path),
            ]
        )
    except MediaToolError as exc:
        raise ProbeError(f"Failed to get video duration for {video_path}") from exc

    text = output.strip()
    if not text:
        raise ProbeError(f"ffprobe reported no duration for {video_path}")
    try:
        duration = float(text.splitlines()[0])
    except ValueError as exc:
        raise ProbeError(f"Failed to parse video duration: {text!r}") from exc

    if not math.isfinite(duration) or duration <= 0:
        raise ProbeError(f"Unusable video duration {text!r} for {video_path}")
    return duration


def get_video_resolution(video_path: Path, runner: ToolRunner) -> Tuple[int, int]:
    """Return ``(width, height)`` of the first video stream."""

    try:
        output = runner.probe(
            [
                "-v",
                "error",
                "-select_streams",
                "v:0",
                "-show_entries",
                "stream=width,height",
                "-of",
                "csv=s=x:p=0",
                str(video_path),
            ]
        )
    except MediaToolError as exc:
        raise ProbeError(f"Failed to run ffprobe for resolution of {video_path}") from exc

    lines = output.strip().splitlines()
    # Some containers append side data, leaving a trailing separator.
    text = lines[0].strip().rstrip("x") if lines else ""
    parts = text.split("x")
    if len(parts) != 2:
        raise ProbeError(f"Failed to parse video resolution: {output.strip()!r}")
    try:
        width, height = int(parts[0]), int(parts[1])
    except ValueError as exc:
        raise ProbeError(f"Failed to parse video resolution: {output.strip()!r}") from exc
    return width, height


def get_filesize_mb(path: Path) -> float:
    try:
        size_bytes = Path(path).stat().st_size
    except OSError as exc:
        raise ProbeError(f"Cannot read file size of {path}") from exc
    return size_bytes / 1_000_000


def probe_video(video_path: Path, runner: ToolRunner) -> VideoSource:
    video_path = Path(video_path)
    duration = get_video_duration(video_path, runner)
    width, height = get_video_resolution(video_path, runner)
    return VideoSource(
        path=video_path,
        duration=duration,
        size_mb=get_filesize_mb(video_path),
        width=width,
        height=height,
    )
