"""Common Pydantic models shared across pipeline steps."""

from __future__ import annotations

from pathlib import Path
from typing import Literal, Union

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

ColorSpace = Literal["GRAY", "BGR", "BGRA", "RGB", "RGBA"]

# Channel count implied by each color space descriptor.
CHANNELS: dict[str, int] = {"GRAY": 1, "BGR": 3, "BGRA": 4, "RGB": 3, "RGBA": 4}


class VideoAsset(BaseModel):
    """Probed metadata of one input video. Read-only once created."""

    model_config = ConfigDict(frozen=True)

    video_path: Path
    duration_s: float = Field(0.0, description="Duration in seconds (0 if unknown)")
    fps: float = Field(0.0, description="Nominal frames per second")
    frame_count: int = Field(0, description="Number of frames in the stream")
    width: int = 0
    height: int = 0


class RawFrame(BaseModel):
    """A decoded frame tagged with the sample it was requested for."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    index: int = Field(..., ge=0, description="Sample index (0..N-1)")
    timestamp: float = Field(..., ge=0, description="Requested time offset in seconds")
    pixels: np.ndarray
    color_space: ColorSpace = "BGR"
    bit_depth: int = Field(8, description="Bits per channel (8 or 16)")

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])


class ResizedFrame(RawFrame):
    """A RawFrame after aspect-preserving downscale."""

    source_width: int
    source_height: int


class SampleFailure(BaseModel):
    """Why a sample did not produce a frame."""

    index: int = Field(..., ge=0)
    timestamp: float
    kind: Literal["decode", "resize"]
    cause: str


SampleResult = Union[ResizedFrame, SampleFailure]


class OrderedFrameSequence(BaseModel):
    """Successful frames sorted by sample index, plus the dropped samples."""

    frames: list[ResizedFrame] = Field(default_factory=list)
    failures: list[SampleFailure] = Field(default_factory=list)

    @property
    def indices(self) -> list[int]:
        return [f.index for f in self.frames]


class StepEntry(BaseModel):
    """One entry in the per-video step list."""

    name: str
    module: str
    config_file: str | None = Field(None, description="Step YAML config (defaults if omitted)")
    enabled: bool = True


def default_steps() -> list[StepEntry]:
    return [
        StepEntry(name="probe_video", module="clipgif.steps.s00_probe_video"),
        StepEntry(name="sample_times", module="clipgif.steps.s01_sample_times"),
        StepEntry(name="extract_frames", module="clipgif.steps.s02_extract_frames"),
        StepEntry(name="encode_gif", module="clipgif.steps.s03_encode_gif"),
    ]


class PipelineConfig(BaseModel):
    """Top-level configuration loaded from pipeline.yaml."""

    project_name: str = "clipgif"
    videos_dir: Path = Field(Path("videos"), description="Directory scanned for input videos")
    output_dir: Path = Field(Path("gifs"), description="Directory receiving <stem>.gif files")
    video_extension: str = Field(".mp4", description="Only files with this suffix are processed")
    steps: list[StepEntry] = Field(default_factory=default_steps)


class VideoReport(BaseModel):
    """Outcome of one video's pipeline run."""

    video_path: Path
    status: Literal["created", "skipped", "failed"]
    gif_path: Path | None = None
    frame_count: int = 0
    error: str | None = None


class BatchReport(BaseModel):
    videos: list[VideoReport] = Field(default_factory=list)

    @property
    def created(self) -> list[VideoReport]:
        return [v for v in self.videos if v.status == "created"]
