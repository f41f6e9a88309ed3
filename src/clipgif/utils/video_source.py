"""Decoded video access through OpenCV.

Steps talk to videos through the ``FrameSource`` protocol so tests can feed
in-memory frames. ``read_frame`` is blocking and is always called from a
worker thread.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Protocol

import cv2
import numpy as np

from clipgif.core.contracts import ColorSpace, VideoAsset
from clipgif.core.errors import DurationUnavailable

logger = logging.getLogger(__name__)


class FrameSource(Protocol):
    def probe(self) -> VideoAsset:
        """Read stream metadata. Raises DurationUnavailable."""
        ...

    def read_frame(self, frame_index: int) -> tuple[np.ndarray, ColorSpace]:
        """Decode exactly one frame. Raises OSError on failure."""
        ...


SourceFactory = Callable[[Path], FrameSource]


class OpenCVFrameSource:
    """FrameSource backed by ``cv2.VideoCapture``.

    Capture handles are not thread-safe, so every read opens its own handle;
    the only state shared between concurrent reads is the file path.
    """

    def __init__(self, video_path: Path):
        self.video_path = Path(video_path)

    def _open(self) -> cv2.VideoCapture:
        cap = cv2.VideoCapture(str(self.video_path))
        # Honour rotation metadata the way players display the clip.
        if hasattr(cv2, "CAP_PROP_ORIENTATION_AUTO"):
            cap.set(cv2.CAP_PROP_ORIENTATION_AUTO, 1)
        return cap

    def probe(self) -> VideoAsset:
        if not self.video_path.is_file():
            raise DurationUnavailable(f"Video not found: {self.video_path}")
        cap = self._open()
        try:
            if not cap.isOpened():
                raise DurationUnavailable(f"Cannot open {self.video_path.name}")
            fps = float(cap.get(cv2.CAP_PROP_FPS) or 0.0)
            frame_count = int(cap.get(cv2.CAP_PROP_FRAME_COUNT) or 0)
            width = int(cap.get(cv2.CAP_PROP_FRAME_WIDTH) or 0)
            height = int(cap.get(cv2.CAP_PROP_FRAME_HEIGHT) or 0)
        finally:
            cap.release()

        if fps <= 0:
            raise DurationUnavailable(f"{self.video_path.name} reports no frame rate")
        duration = max(frame_count, 0) / fps
        logger.debug(
            f"{self.video_path.name}: {frame_count} frames @ {fps:.2f} fps, "
            f"{width}x{height}, {duration:.3f}s"
        )
        return VideoAsset(
            video_path=self.video_path,
            duration_s=duration,
            fps=fps,
            frame_count=max(frame_count, 0),
            width=width,
            height=height,
        )

    def read_frame(self, frame_index: int) -> tuple[np.ndarray, ColorSpace]:
        cap = None
        try:
            cap = self._open()
            if not cap.isOpened():
                raise OSError(f"Cannot open {self.video_path.name}")
            # Seek by exact frame number: OpenCV decodes forward from the
            # preceding keyframe instead of returning the keyframe itself.
            if not cap.set(cv2.CAP_PROP_POS_FRAMES, frame_index):
                raise OSError(f"Seek to frame {frame_index} failed")
            ok, frame = cap.read()
        except cv2.error as exc:
            raise OSError(f"Decoder error at frame {frame_index}: {exc}") from exc
        finally:
            if cap is not None:
                cap.release()

        if not ok or frame is None:
            raise OSError(f"No frame decoded at frame {frame_index}")
        if frame.ndim == 2:
            return frame, "GRAY"
        return frame, "BGRA" if frame.shape[2] == 4 else "BGR"


def opencv_source(video_path: Path) -> FrameSource:
    return OpenCVFrameSource(video_path)
