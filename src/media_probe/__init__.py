"""Package for ffprobe metadata queries and tool plumbing."""

from .ffprobe import ProbeError, VideoSource, get_filesize_mb, get_video_duration, get_video_resolution, probe_video
from .fonts import DEFAULT_FONT_CANDIDATES, NoFontFound, find_default_font, resolve_font
from .tool import MediaToolError, SubprocessRunner, ToolResult, ToolRunner

__all__ = [
    "DEFAULT_FONT_CANDIDATES",
    "MediaToolError",
    "NoFontFound",
    "ProbeError",
    "SubprocessRunner",
    "ToolResult",
    "ToolRunner",
    "VideoSource",
    "find_default_font",
    "get_filesize_mb",
    "get_video_duration",
    "get_video_resolution",
    "probe_video",
    "resolve_font",
]
