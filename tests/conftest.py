from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Sequence

import pytest
from PIL import Image

from media_probe.tool import ToolResult
from video_mosaic.config import MosaicSettings

BLACK_STDERR = "[Parsed_blackframe_0 @ 0x5581] frame:0 pblack:100 pts:0 t:0.000000 type:I last_keyframe:0\n"


class FakeRunner:
    """Stand-in for ffmpeg/ffprobe that records every argument vector.

    Extract, composite and overlay commands write real (tiny) JPEGs so the
    pipeline's file checks see what ffmpeg would leave behind.
    """

    def __init__(
        self,
        duration: str = "9.000000\n",
        resolution: str = "640x480\n",
        black: Callable[[float], bool] | None = None,
        fail: str | None = None,
        silent: str | None = None,
        frame_size: tuple[int, int] = (32, 24),
    ) -> None:
        self.duration = duration
        self.resolution = resolution
        self.black = black or (lambda ts: False)
        self.fail = fail
        self.silent = silent
        self.frame_size = frame_size
        self.probe_calls: List[List[str]] = []
        self.run_calls: List[List[str]] = []

    # capability interface

    def probe(self, args: Sequence[str]) -> str:
        args = list(args)
        self.probe_calls.append(args)
        if "format=duration" in args:
            return self.duration
        return self.resolution

    def run(self, args: Sequence[str]) -> ToolResult:
        args = list(args)
        self.run_calls.append(args)
        kind = self.kind(args)
        if kind == self.fail:
            return ToolResult(returncode=1, stderr=f"{kind} exploded")
        if kind == self.silent:
            return ToolResult(returncode=0)
        if kind == "blackframe":
            ts = float(args[args.index("-ss") + 1])
            return ToolResult(returncode=0, stderr=BLACK_STDERR if self.black(ts) else "")

        out = Path(args[-1])
        if kind == "composite":
            cols, rows = (int(n) for n in args[args.index("-filter_complex") + 1][5:].split("x"))
            size = (self.frame_size[0] * cols, self.frame_size[1] * rows)
        else:
            size = self.frame_size
        Image.new("RGB", size, (120, 40, 200)).save(out, format="JPEG")
        return ToolResult(returncode=0)

    # helpers

    @staticmethod
    def kind(args: Sequence[str]) -> str:
        if any(a.startswith("blackframe=") for a in args):
            return "blackframe"
        if "-filter_complex" in args:
            return "composite"
        if "-vf" in args:
            return "overlay"
        return "extract"

    def calls(self, kind: str) -> List[List[str]]:
        return [c for c in self.run_calls if self.kind(c) == kind]

    def extract_timestamps(self) -> List[float]:
        return [float(c[c.index("-ss") + 1]) for c in self.calls("extract")]


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def video_file(tmp_path: Path) -> Path:
    path = tmp_path / "clip.mp4"
    path.write_bytes(b"\0" * 1_000_000)
    return path


@pytest.fixture
def font_file(tmp_path: Path) -> Path:
    path = tmp_path / "Fake Sans.ttf"
    path.write_bytes(b"font")
    return path


@pytest.fixture
def settings(font_file: Path) -> MosaicSettings:
    return MosaicSettings(font_path=str(font_file))
