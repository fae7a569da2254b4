"""Thin process wrapper around the ffmpeg/ffprobe binaries."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import Protocol, Sequence

logger = logging.getLogger(__name__)


class MediaToolError(RuntimeError):
    pass


@dataclass(frozen=True)
class ToolResult:
    returncode: int
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class ToolRunner(Protocol):
    """Anything that can run ffprobe (``probe``) and ffmpeg (``run``)."""

    def probe(self, args: Sequence[str]) -> str: ...

    def run(self, args: Sequence[str]) -> ToolResult: ...


class SubprocessRunner:
    """Run the real binaries, blocking until each one exits."""

    def __init__(
        self,
        ffmpeg: str = "ffmpeg",
        ffprobe: str = "ffprobe",
        timeout: float | None = None,
    ) -> None:
        self.ffmpeg = ffmpeg
        self.ffprobe = ffprobe
        self.timeout = timeout

    def _exec(self, cmd: list[str]) -> subprocess.CompletedProcess:
        logger.debug("exec: %s", " ".join(cmd))
        try:
            return subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
            )
        except FileNotFoundError as exc:
            raise MediaToolError(f"{cmd[0]} not found on PATH") from exc
        except subprocess.TimeoutExpired as exc:
            raise MediaToolError(f"{cmd[0]} timed out after {self.timeout}s") from exc
        except OSError as exc:
            raise MediaToolError(f"Failed to start {cmd[0]}: {exc}") from exc

    def probe(self, args: Sequence[str]) -> str:
        result = self._exec([self.ffprobe, *args])
        return result.stdout or ""

    def run(self, args: Sequence[str]) -> ToolResult:
        result = self._exec([self.ffmpeg, *args])
        return ToolResult(returncode=result.returncode, stderr=result.stderr or "")
