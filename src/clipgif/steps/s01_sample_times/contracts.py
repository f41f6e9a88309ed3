"""I/O contracts for Step 01: Sample timestamps."""

from pydantic import BaseModel, Field

from clipgif.core.contracts import VideoAsset


class SampleTimesInput(BaseModel):
    asset: VideoAsset | None = Field(None, description="Only used for logging")


class SampleTimesOutput(BaseModel):
    timestamps: list[float] = Field(..., description="Sample offsets in seconds, index order")
