"""Settings for the mosaic pipeline, read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Iterable, Mapping

ENV_PREFIX = "VIDMOSAIC_"


@dataclass(frozen=True)
class MosaicSettings:
    rows: int = 3
    cols: int = 3
    max_attempts: int = 5
    retry_step: float = 2.0
    ffmpeg: str = "ffmpeg"
    ffprobe: str = "ffprobe"
    font_path: str | None = None
    timeout: float | None = None

    def __post_init__(self) -> None:
        if self.rows < 1 or self.cols < 1:
            raise ValueError(f"rows and cols must be >= 1 (got {self.rows}x{self.cols})")
        if self.max_attempts < 0:
            raise ValueError("max_attempts must be >= 0")
        if self.retry_step <= 0:
            raise ValueError("retry_step must be > 0")
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be > 0")

    def with_overrides(self, **overrides) -> "MosaicSettings":
        """Return a copy with every non-None override applied."""

        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def load_env_file(candidates: Iterable[Path] | None = None) -> None:
    """Best-effort load ``KEY=VALUE`` pairs from .env files.

    Checks the project root .env, cwd .env and HOME/.env. Values already in
    the environment are never overwritten.
    """

    if candidates is None:
        candidates = [
            Path(__file__).resolve().parents[2] / ".env",  # this repo root
            Path.cwd() / ".env",
            Path.home() / ".env",
        ]

    for path in candidates:
        if not path.exists():
            continue
        for line in path.read_text().splitlines():
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            key = key.strip()
            if key in os.environ:
                continue
            os.environ[key] = value.strip().strip("'\"")


def _env(env: Mapping[str, str], name: str) -> str | None:
    value = env.get(ENV_PREFIX + name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _parse(env: Mapping[str, str], name: str, cast):
    raw = _env(env, name)
    if raw is None:
        return None
    try:
        return cast(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid {ENV_PREFIX}{name}={raw!r}") from exc


def load_settings(env: Mapping[str, str] | None = None) -> MosaicSettings:
    env = os.environ if env is None else env
    return MosaicSettings().with_overrides(
        rows=_parse(env, "ROWS", int),
        cols=_parse(env, "COLS", int),
        max_attempts=_parse(env, "MAX_ATTEMPTS", int),
        retry_step=_parse(env, "RETRY_STEP", float),
        ffmpeg=_env(env, "FFMPEG"),
        ffprobe=_env(env, "FFPROBE"),
        font_path=_env(env, "FONT"),
        timeout=_parse(env, "TIMEOUT", float),
    )
