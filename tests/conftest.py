"""Shared pytest fixtures for clipgif tests."""

from __future__ import annotations

import threading
import time
from pathlib import Path

import numpy as np
import pytest

from clipgif.core.contracts import PipelineConfig, VideoAsset
from clipgif.core.errors import DurationUnavailable


class FakeSource:
    """In-memory FrameSource.

    Frame ``n`` is a solid color derived from ``n`` so every frame is
    distinct. Frames in ``failing_frames`` raise OSError like a failed read;
    ``crashing_frames`` raise RuntimeError like a misbehaving decoder.
    Later frames decode faster than earlier ones, which scrambles completion
    order relative to sample order.
    """

    def __init__(
        self,
        video_path: Path,
        duration_s: float = 2.0,
        fps: float = 25.0,
        size: tuple[int, int] = (640, 360),
        failing_frames: set[int] | None = None,
        crashing_frames: set[int] | None = None,
        delay_s: float = 0.002,
    ):
        self.video_path = Path(video_path)
        self.duration_s = duration_s
        self.fps = fps
        self.width, self.height = size
        self.failing_frames = failing_frames or set()
        self.crashing_frames = crashing_frames or set()
        self.delay_s = delay_s
        self.requested: list[int] = []
        self._active = 0
        self.max_active = 0
        self._lock = threading.Lock()

    @property
    def frame_count(self) -> int:
        return int(round(self.duration_s * self.fps))

    def probe(self) -> VideoAsset:
        if self.fps <= 0:
            raise DurationUnavailable(f"{self.video_path.name} reports no frame rate")
        return VideoAsset(
            video_path=self.video_path,
            duration_s=self.frame_count / self.fps,
            fps=self.fps,
            frame_count=self.frame_count,
            width=self.width,
            height=self.height,
        )

    def read_frame(self, frame_index: int):
        with self._lock:
            self.requested.append(frame_index)
            self._active += 1
            self.max_active = max(self.max_active, self._active)
        try:
            time.sleep(self.delay_s * max(1, 30 - frame_index))
            if frame_index in self.failing_frames:
                raise OSError(f"No frame decoded at frame {frame_index}")
            if frame_index in self.crashing_frames:
                raise RuntimeError(f"decoder crashed at frame {frame_index}")
            frame = np.zeros((self.height, self.width, 3), dtype=np.uint8)
            frame[:, :, 0] = (frame_index * 7) % 256
            frame[:, :, 1] = (frame_index * 53) % 256
            frame[:, :, 2] = 255 - (frame_index * 11) % 256
            return frame, "BGR"
        finally:
            with self._lock:
                self._active -= 1


@pytest.fixture
def make_source():
    """Return a factory building FakeSource objects with fixed settings."""

    def _make(**kwargs):
        created: dict[Path, FakeSource] = {}

        def factory(video_path: Path) -> FakeSource:
            created.setdefault(Path(video_path), FakeSource(video_path, **kwargs))
            return created[Path(video_path)]

        factory.created = created
        return factory

    return _make


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create videos/ and an (absent) gifs/ directory under a temp root."""
    (tmp_path / "videos").mkdir()
    return tmp_path


@pytest.fixture
def pipeline_cfg(workspace: Path) -> PipelineConfig:
    return PipelineConfig(videos_dir=workspace / "videos", output_dir=workspace / "gifs")


@pytest.fixture
def write_video():
    """Return a helper that writes an mp4v clip of random-noise frames."""
    cv2 = pytest.importorskip("cv2")

    def _write(
        path: Path, num_frames: int, fps: float = 25.0, size: tuple[int, int] = (160, 120)
    ) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        fourcc = cv2.VideoWriter_fourcc(*"mp4v")
        writer = cv2.VideoWriter(str(path), fourcc, fps, size)
        if not writer.isOpened():
            pytest.skip("OpenCV build cannot write mp4v")
        rng = np.random.default_rng(0)
        width, height = size
        for _ in range(num_frames):
            writer.write(rng.integers(0, 255, (height, width, 3), dtype=np.uint8))
        writer.release()
        return path

    return _write
