"""I/O contracts for Step 00: Probe video metadata."""

from pathlib import Path

from pydantic import BaseModel, Field

from clipgif.core.contracts import VideoAsset


class ProbeVideoInput(BaseModel):
    video_path: Path = Field(..., description="Path to input video file (.mp4)")


class ProbeVideoOutput(BaseModel):
    asset: VideoAsset = Field(..., description="Probed duration and stream geometry")
