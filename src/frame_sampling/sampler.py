"""Frame sampling utilities using ffmpeg."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List

from media_probe.tool import MediaToolError, ToolRunner

from .blackframe import ExtractError, is_black_frame

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 5
RETRY_STEP_S = 2.0
FRAME_PATTERN = "thumb_%03d.jpg"


@dataclass(frozen=True)
class SampleSpec:
    rows: int
    cols: int

    def __post_init__(self) -> None:
        if self.rows < 1 or self.cols < 1:
            raise ValueError(f"Grid must be at least 1x1, got {self.cols}x{self.rows}")

    @property
    def total_frames(self) -> int:
        return self.rows * self.cols

    def interval(self, duration: float) -> float:
        return max(0.0, duration) / self.total_frames

    def timestamps(self, duration: float) -> List[float]:
        return sample_timestamps(duration, self.total_frames)


@dataclass
class SampleAttempt:
    index: int
    base_timestamp: float
    timestamp: float
    path: Path
    attempts: int = 0
    is_black: bool = False


def sample_timestamps(duration: float, total_frames: int) -> List[float]:
    """Evenly spaced timestamps ``interval * i`` across ``[0, duration)``."""

    if total_frames < 1:
        raise ValueError("total_frames must be >= 1")
    interval = max(0.0, duration) / total_frames
    return [interval * i for i in range(total_frames)]


def frame_path(out_dir: Path, index: int) -> Path:
    return out_dir / (FRAME_PATTERN % index)


def extract_frame(video_path: Path, timestamp: float, output: Path, runner: ToolRunner, quality: int = 2) -> Path:
    """Extract a single frame at ``timestamp``, overwriting ``output``."""

    ts_str = f"{timestamp:.3f}"
    args = [
        "-ss",
        ts_str,
        "-i",
        str(video_path),
        "-frames:v",
        "1",
        "-q:v",
        str(quality),
        "-y",
        str(output),
    ]
    try:
        result = runner.run(args)
    except MediaToolError as exc:
        raise ExtractError(f"Failed to extract thumbnail at {ts_str}s") from exc
    if not result.ok:
        raise ExtractError(
            f"Failed to extract thumbnail at {ts_str}s (exit {result.returncode}): "
            f"{result.stderr.strip()[-300:]}"
        )
    if not output.exists() or output.stat().st_size == 0:
        raise ExtractError(f"ffmpeg wrote no frame at {ts_str}s")
    return output


def sample_frame(
    video_path: Path,
    index: int,
    base_timestamp: float,
    out_dir: Path,
    runner: ToolRunner,
    *,
    duration: float | None = None,
    max_attempts: int = MAX_ATTEMPTS,
    retry_step: float = RETRY_STEP_S,
) -> SampleAttempt:
    """Extract frame ``index``, moving ``retry_step`` seconds later while it is black.

    After ``max_attempts`` retries the last frame is kept even if black. A
    retry that would seek at or past ``duration`` is not attempted.
    """

    attempt = SampleAttempt(
        index=index,
        base_timestamp=base_timestamp,
        timestamp=base_timestamp,
        path=frame_path(out_dir, index),
    )
    while True:
        extract_frame(video_path, attempt.timestamp, attempt.path, runner)
        attempt.is_black = is_black_frame(video_path, attempt.timestamp, runner)
        if not attempt.is_black:
            return attempt

        if attempt.attempts >= max_attempts:
            logger.warning(
                "Frame %d still black after %d retries; keeping %.3fs",
                index,
                attempt.attempts,
                attempt.timestamp,
            )
            return attempt

        next_ts = base_timestamp + retry_step * (attempt.attempts + 1)
        if duration is not None and next_ts >= duration:
            logger.warning(
                "Frame %d is black and %.3fs is past the end; keeping %.3fs",
                index,
                next_ts,
                attempt.timestamp,
            )
            return attempt

        attempt.attempts += 1
        logger.info("Frame %d black at %.3fs, retrying at %.3fs", index, attempt.timestamp, next_ts)
        attempt.timestamp = next_ts


def sample_frames(
    video_path: Path,
    duration: float,
    spec: SampleSpec,
    out_dir: Path,
    runner: ToolRunner,
    *,
    max_attempts: int = MAX_ATTEMPTS,
    retry_step: float = RETRY_STEP_S,
) -> List[SampleAttempt]:
    """Extract ``spec.total_frames`` evenly spaced frames, in index order."""

    out_dir.mkdir(parents=True, exist_ok=True)
    samples: List[SampleAttempt] = []
    for i, ts in enumerate(spec.timestamps(duration)):
        sample = sample_frame(
            video_path,
            i,
            ts,
            out_dir,
            runner,
            duration=duration,
            max_attempts=max_attempts,
            retry_step=retry_step,
        )
        logger.debug("Frame %d at %.3fs -> %s", i, sample.timestamp, sample.path.name)
        samples.append(sample)
    return samples
