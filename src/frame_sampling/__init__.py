"""Package for sampling evenly spaced, non-black frames."""

from .blackframe import ExtractError, is_black_frame
from .sampler import (
    FRAME_PATTERN,
    MAX_ATTEMPTS,
    RETRY_STEP_S,
    SampleAttempt,
    SampleSpec,
    extract_frame,
    sample_frame,
    sample_frames,
    sample_timestamps,
)

__all__ = [
    "ExtractError",
    "FRAME_PATTERN",
    "MAX_ATTEMPTS",
    "RETRY_STEP_S",
    "SampleAttempt",
    "SampleSpec",
    "extract_frame",
    "is_black_frame",
    "sample_frame",
    "sample_frames",
    "sample_timestamps",
]
