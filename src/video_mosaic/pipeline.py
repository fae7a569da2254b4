"""Single-video pipeline: probe -> sample -> compose -> caption."""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

from frame_sampling import SampleSpec, sample_frames
from media_probe import SubprocessRunner, ToolRunner, probe_video, resolve_font
from media_probe.tool import MediaToolError
from mosaic_composition import build_caption, compose_mosaic, overlay_caption

from .config import MosaicSettings

logger = logging.getLogger(__name__)


class InvalidInputPath(MediaToolError):
    pass


def output_path_for(video_path: Path, batch: bool = False) -> Path:
    """``<input>_tn.jpg`` for a single file, ``<stem>.jpg`` in batch mode."""

    video_path = Path(video_path)
    if batch:
        return video_path.with_suffix(".jpg")
    return video_path.with_name(f"{video_path.name}_tn.jpg")


def runner_from_settings(settings: MosaicSettings) -> SubprocessRunner:
    return SubprocessRunner(ffmpeg=settings.ffmpeg, ffprobe=settings.ffprobe, timeout=settings.timeout)


def create_thumbnail_mosaic(
    video_path: Path,
    output_image: Path,
    settings: MosaicSettings | None = None,
    runner: ToolRunner | None = None,
) -> Path:
    """Create a captioned mosaic for one video and return the output path.

    Intermediate frames and the raw mosaic live in a temporary directory
    that is removed however this function exits.
    """

    settings = settings or MosaicSettings()
    runner = runner or runner_from_settings(settings)
    video_path = Path(video_path)
    output_image = Path(output_image)
    spec = SampleSpec(rows=settings.rows, cols=settings.cols)

    source = probe_video(video_path, runner)
    print(f"[probe] {source.name}: {source.duration:.3f}s, {source.resolution}, {source.size_mb:.2f} MB")
    font_path = resolve_font(settings.font_path)

    with tempfile.TemporaryDirectory(prefix="vidmosaic_") as tmp:
        work_dir = Path(tmp)

        print(f"[sample] {spec.total_frames} frames every {spec.interval(source.duration):.3f}s")
        samples = sample_frames(
            video_path,
            source.duration,
            spec,
            work_dir,
            runner,
            max_attempts=settings.max_attempts,
            retry_step=settings.retry_step,
        )
        black = [s.index for s in samples if s.is_black]
        if black:
            logger.warning("Kept black frames at indices %s", black)

        print(f"[compose] {spec.cols}x{spec.rows} grid")
        mosaic = compose_mosaic(work_dir, spec.rows, spec.cols, work_dir / "mosaic_raw.jpg", runner)

        caption = build_caption(source.name, source.size_mb, source.resolution)
        print(f"[caption] {caption}")
        overlay_caption(mosaic, output_image, font_path, caption, runner)

    return output_image
