from __future__ import annotations

from pathlib import Path

import pytest

from video_mosaic.batch import find_videos, run_batch
from video_mosaic.config import MosaicSettings

from conftest import FakeRunner


class FlakyRunner(FakeRunner):
    """Reports an unparseable duration for one named video."""

    def __init__(self, bad_name: str) -> None:
        super().__init__()
        self.bad_name = bad_name

    def probe(self, args):
        if "format=duration" in args and args[-1].endswith(self.bad_name):
            self.probe_calls.append(list(args))
            return "N/A\n"
        return super().probe(args)


def _touch(path: Path, size: int = 2_000_000) -> Path:
    path.write_bytes(b"\0" * size)
    return path


def test_find_videos_filters_extensions(tmp_path: Path) -> None:
    for name in ["a.mp4", "B.MOV", "c.txt", "d.ts", "e.Mkv", "notes.md", "f.mpeg"]:
        _touch(tmp_path / name, 1)
    (tmp_path / "sub").mkdir()
    _touch(tmp_path / "sub" / "nested.mp4", 1)
    (tmp_path / "dir.mp4").mkdir()

    assert [p.name for p in find_videos(tmp_path)] == ["B.MOV", "a.mp4", "d.ts", "e.Mkv", "f.mpeg"]


def test_batch_continues_after_failure(tmp_path: Path, settings: MosaicSettings) -> None:
    videos = tmp_path / "videos"
    videos.mkdir()
    _touch(videos / "a.mp4")
    _touch(videos / "b.mkv")
    _touch(videos / "readme.txt")

    runner = FlakyRunner("a.mp4")
    report = run_batch(videos, settings, runner)

    assert [v.name for v, _ in report.failed] == ["a.mp4"]
    assert report.succeeded == [videos / "b.jpg"]
    assert (videos / "b.jpg").exists()
    assert not (videos / "a.jpg").exists()
    assert not report.ok
    assert [c[-1] for c in runner.probe_calls if "format=duration" in c] == [
        str(videos / "a.mp4"),
        str(videos / "b.mkv"),
    ]


def test_batch_caption_uses_each_file(tmp_path: Path, settings: MosaicSettings) -> None:
    _touch(tmp_path / "one.webm", 3_456_000)
    runner = FakeRunner()
    report = run_batch(tmp_path, settings, runner)
    assert report.ok
    overlay = runner.calls("overlay")[0]
    assert "File\\:one.webm Size\\:3.46 MB" in overlay[overlay.index("-vf") + 1]


class UndecodableRunner(FakeRunner):
    """Raises a non-tool error while extracting frames from one named video."""

    def __init__(self, bad_name: str) -> None:
        super().__init__()
        self.bad_name = bad_name

    def run(self, args):
        if self.kind(args) == "extract" and args[args.index("-i") + 1].endswith(self.bad_name):
            raise UnicodeDecodeError("utf-8", b"title : Caf\xe9", 10, 11, "invalid continuation byte")
        return super().run(args)


def test_batch_continues_after_unexpected_error(
    tmp_path: Path, settings: MosaicSettings, capsys: pytest.CaptureFixture
) -> None:
    _touch(tmp_path / "a_latin1_tags.avi")
    _touch(tmp_path / "b.mp4")

    report = run_batch(tmp_path, settings, UndecodableRunner("a_latin1_tags.avi"))

    assert [v.name for v, _ in report.failed] == ["a_latin1_tags.avi"]
    assert isinstance(report.failed[0][1], UnicodeDecodeError)
    assert report.succeeded == [tmp_path / "b.jpg"]
    assert "Error processing" in capsys.readouterr().err
