"""Run the mosaic pipeline over every video in a directory."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple

from media_probe import ToolRunner

from .config import MosaicSettings
from .pipeline import create_thumbnail_mosaic, output_path_for, runner_from_settings

logger = logging.getLogger(__name__)

VIDEO_EXTENSIONS = frozenset(
    {"mp4", "mov", "avi", "mkv", "webm", "m4v", "wmv", "mpg", "mpeg", "ts"}
)


@dataclass
class BatchReport:
    succeeded: List[Path] = field(default_factory=list)
    failed: List[Tuple[Path, Exception]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


def is_video_file(path: Path) -> bool:
    return path.is_file() and path.suffix.lower().lstrip(".") in VIDEO_EXTENSIONS


def find_videos(directory: Path) -> List[Path]:
    """Immediate children of ``directory`` with an allow-listed extension."""

    return sorted(p for p in Path(directory).iterdir() if is_video_file(p))


def run_batch(
    directory: Path,
    settings: MosaicSettings | None = None,
    runner: ToolRunner | None = None,
) -> BatchReport:
    settings = settings or MosaicSettings()
    runner = runner or runner_from_settings(settings)
    report = BatchReport()

    videos = find_videos(directory)
    logger.info("Found %d video(s) in %s", len(videos), directory)
    for video in videos:
        try:
            out = create_thumbnail_mosaic(video, output_path_for(video, batch=True), settings, runner)
        except Exception as exc:  # noqa: BLE001
            print(f"Error processing {video}: {exc}", file=sys.stderr)
            report.failed.append((video, exc))
            continue
        print(f"Mosaic created: {out}")
        report.succeeded.append(out)
    return report
