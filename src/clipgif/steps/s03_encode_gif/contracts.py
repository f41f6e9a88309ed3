"""I/O contracts for Step 03: Encode GIF."""

from pathlib import Path

from pydantic import BaseModel, Field

from clipgif.core.contracts import OrderedFrameSequence


class EncodeGifInput(BaseModel):
    sequence: OrderedFrameSequence = Field(..., description="Frames to write, in order")
    output_path: Path = Field(..., description="Destination .gif path")


class EncodeGifOutput(BaseModel):
    gif_path: Path = Field(..., description="Written GIF file")
    frame_count: int = Field(..., description="Frames appended to the GIF")
    delay_s: float = Field(..., description="Per-frame delay written")
    loop: int = Field(..., description="Container loop count (0 = infinite)")
    indices: list[int] = Field(default_factory=list, description="Sample index of each frame")
