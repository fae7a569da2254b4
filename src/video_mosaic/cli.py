"""CLI entry point for the video mosaic generator."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from media_probe.tool import MediaToolError

from . import __version__
from .batch import run_batch
from .config import load_env_file, load_settings
from .pipeline import InvalidInputPath, create_thumbnail_mosaic, output_path_for


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Create a thumbnail mosaic with a metadata caption for a video or a folder of videos",
    )
    parser.add_argument("path", nargs="?", type=Path, help="Video file or directory of videos")
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit",
    )
    parser.add_argument("--rows", type=int, default=None, help="Grid rows (default: 3)")
    parser.add_argument("--cols", type=int, default=None, help="Grid columns (default: 3)")
    parser.add_argument(
        "--max-attempts",
        type=int,
        default=None,
        help="Black-frame retries per cell before keeping the frame (default: 5)",
    )
    parser.add_argument("--font", default=None, help="Font file for the caption (tried first)")
    parser.add_argument(
        "--timeout", type=float, default=None, help="Seconds before an ffmpeg/ffprobe call is aborted"
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output image for a single file (default: <video>_tn.jpg)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every tool invocation")
    return parser


def format_error_chain(exc: BaseException) -> str:
    lines = [f"Error: {exc}"]
    seen = {id(exc)}
    cause = exc.__cause__ or exc.__context__
    while cause is not None and id(cause) not in seen:
        seen.add(id(cause))
        lines.append(f"  caused by: {cause}")
        cause = cause.__cause__ or cause.__context__
    return "\n".join(lines)


def main(argv: Sequence[str] | None = None) -> int:
    # Load .env if present (ignored if values already in env)
    load_env_file()

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return 0

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    if args.path is None:
        print("Please provide a file name.", file=sys.stderr)
        return 1

    try:
        settings = load_settings().with_overrides(
            rows=args.rows,
            cols=args.cols,
            max_attempts=args.max_attempts,
            font_path=args.font,
            timeout=args.timeout,
        )
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    path: Path = args.path
    if path.is_dir():
        report = run_batch(path, settings)
        if report.failed:
            print(
                f"{len(report.failed)} of {len(report.failed) + len(report.succeeded)} video(s) failed",
                file=sys.stderr,
            )
        return 0

    try:
        if not path.is_file():
            raise InvalidInputPath(f"{path} is neither a file nor a directory")
        output = create_thumbnail_mosaic(path, args.output or output_path_for(path), settings)
    except (MediaToolError, OSError) as exc:
        print(format_error_chain(exc), file=sys.stderr)
        return 1

    print(f"Mosaic created: {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
