"""Build and burn the metadata caption onto a mosaic."""

from __future__ import annotations

from pathlib import Path

from media_probe.tool import MediaToolError, ToolRunner

CAPTION_X = 10
CAPTION_Y = 10
FONT_SIZE = 96


class OverlayError(MediaToolError):
    pass


def escape_drawtext(text: str) -> str:
    """Backslash-escape ``\\``, ``:``, ``(`` and ``)`` for drawtext."""

    return (
        text.replace("\\", "\\\\")
        .replace(":", "\\:")
        .replace("(", "\\(")
        .replace(")", "\\)")
    )


def quote_option(value: str) -> str:
    """Escape ``value`` and wrap it in single quotes for the filtergraph.

    A quote cannot appear inside a quoted span, so each ``'`` closes the
    span, is emitted as ``\\\\\\'`` and reopens it.
    """

    return "'" + escape_drawtext(value).replace("'", "'\\\\\\''") + "'"


def build_caption(name: str, size_mb: float, resolution: str) -> str:
    return f"File:{name} Size:{size_mb:.2f} MB Resolution:({resolution})"


def build_drawtext_filter(font_path: str, caption: str) -> str:
    # expansion=none keeps a literal % in file names from being expanded
    return (
        f"drawtext=fontfile={quote_option(font_path)}"
        f":text={quote_option(caption)}:expansion=none"
        f":x={CAPTION_X}:y={CAPTION_Y}:fontsize={FONT_SIZE}"
        ":fontcolor=white:box=1:boxcolor=black@0.5"
    )


def overlay_caption(
    mosaic: Path,
    output: Path,
    font_path: str,
    caption: str,
    runner: ToolRunner,
) -> Path:
    args = [
        "-i",
        str(mosaic),
        "-vf",
        build_drawtext_filter(font_path, caption),
        "-y",
        str(output),
    ]
    try:
        result = runner.run(args)
    except MediaToolError as exc:
        raise OverlayError("Failed to overlay text on mosaic") from exc
    if not result.ok:
        raise OverlayError(
            f"Failed to overlay text on mosaic (exit {result.returncode}): {result.stderr.strip()[-300:]}"
        )
    return output
