"""Tests for S00: Probe video step."""

import asyncio
from pathlib import Path

import pytest

from clipgif.core.errors import DurationUnavailable, DurationZero
from clipgif.steps.s00_probe_video.config import ProbeVideoConfig
from clipgif.steps.s00_probe_video.contracts import ProbeVideoInput
from clipgif.steps.s00_probe_video.step import ProbeVideoStep
from clipgif.utils.video_source import OpenCVFrameSource


class TestProbeVideoStep:
    def test_reports_duration(self, make_source):
        step = ProbeVideoStep(ProbeVideoConfig(), source_factory=make_source(duration_s=2.0, fps=25.0))
        out = asyncio.run(step.execute(ProbeVideoInput(video_path=Path("clip.mp4"))))
        assert out.asset.duration_s == pytest.approx(2.0)
        assert out.asset.frame_count == 50
        assert (out.asset.width, out.asset.height) == (640, 360)

    def test_zero_duration_rejected(self, make_source):
        step = ProbeVideoStep(ProbeVideoConfig(), source_factory=make_source(duration_s=0.0))
        with pytest.raises(DurationZero):
            asyncio.run(step.execute(ProbeVideoInput(video_path=Path("empty.mp4"))))

    def test_missing_frame_rate(self, make_source):
        step = ProbeVideoStep(ProbeVideoConfig(), source_factory=make_source(fps=0.0))
        with pytest.raises(DurationUnavailable):
            asyncio.run(step.execute(ProbeVideoInput(video_path=Path("broken.mp4"))))

    def test_min_duration_threshold(self, make_source):
        step = ProbeVideoStep(
            ProbeVideoConfig(min_duration_s=1.0), source_factory=make_source(duration_s=0.5)
        )
        with pytest.raises(DurationZero):
            asyncio.run(step.execute(ProbeVideoInput(video_path=Path("short.mp4"))))


class TestOpenCVFrameSource:
    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(DurationUnavailable):
            OpenCVFrameSource(tmp_path / "nope.mp4").probe()

    def test_not_a_video(self, tmp_path: Path):
        bogus = tmp_path / "text.mp4"
        bogus.write_text("not a video")
        with pytest.raises(DurationUnavailable):
            OpenCVFrameSource(bogus).probe()

    def test_probe_written_video(self, tmp_path: Path, write_video):
        video = write_video(tmp_path / "clip.mp4", num_frames=50, fps=25.0)
        asset = OpenCVFrameSource(video).probe()
        assert asset.frame_count == 50
        assert asset.duration_s == pytest.approx(2.0, abs=0.05)
        assert (asset.width, asset.height) == (160, 120)

    def test_read_frame(self, tmp_path: Path, write_video):
        video = write_video(tmp_path / "clip.mp4", num_frames=10, fps=25.0)
        pixels, color_space = OpenCVFrameSource(video).read_frame(3)
        assert color_space == "BGR"
        assert pixels.shape == (120, 160, 3)

    def test_read_past_end(self, tmp_path: Path, write_video):
        video = write_video(tmp_path / "clip.mp4", num_frames=10, fps=25.0)
        with pytest.raises(OSError):
            OpenCVFrameSource(video).read_frame(500)
