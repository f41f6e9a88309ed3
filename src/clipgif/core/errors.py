"""Error taxonomy for the preview pipeline.

Scope of each error decides how far it travels:

- batch: ``DirectoryReadError`` aborts the whole run.
- per-video: everything else derived from ``PreviewError`` is caught by the
  driver, logged, and the next video is processed.
- per-sample: ``FrameDecodeFailure`` and ``ResizeFailure`` never leave the
  extract step; they are converted into ``SampleFailure`` records.
"""

from __future__ import annotations

from pathlib import Path


class PreviewError(Exception):
    """Base class for all pipeline failures."""


class DirectoryReadError(PreviewError):
    """The input directory could not be listed."""

    def __init__(self, path: Path, cause: Exception | str):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Cannot read videos directory {self.path}: {cause}")


class StepInputError(PreviewError):
    """A step rejected its inputs during validation."""


class DurationUnavailable(PreviewError):
    """The video could not be opened or reports no usable frame rate."""


class DurationZero(PreviewError):
    """The video reports a duration of zero (or less)."""


class SampleError(PreviewError):
    """A single sample could not be produced."""

    kind = "sample"

    def __init__(self, index: int, timestamp: float, cause: str):
        self.index = index
        self.timestamp = timestamp
        self.cause = cause
        super().__init__(f"sample {index} at {timestamp:.3f}s: {cause}")


class FrameDecodeFailure(SampleError):
    kind = "decode"


class ResizeFailure(SampleError):
    kind = "resize"


class EmptyFrameSetError(PreviewError):
    """No sample of a video survived extraction and resize."""


class EncodeFinalizeError(PreviewError):
    """The GIF could not be written or verified at its destination."""
