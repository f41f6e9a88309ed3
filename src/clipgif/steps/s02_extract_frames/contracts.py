"""I/O contracts for Step 02: Extract and resize frames."""

from pydantic import BaseModel, Field

from clipgif.core.contracts import OrderedFrameSequence, VideoAsset


class ExtractFramesInput(BaseModel):
    asset: VideoAsset = Field(..., description="Probed video to sample")
    timestamps: list[float] = Field(..., min_length=1, description="Sample offsets, index order")


class ExtractFramesOutput(BaseModel):
    sequence: OrderedFrameSequence = Field(..., description="Resized frames in sample order")
