"""Configuration for Step 03: Encode GIF."""

from pydantic import BaseModel, Field


class EncodeGifConfig(BaseModel):
    delay_s: float = Field(0.12, gt=0, description="Display time of each frame in seconds")
    loop: int = Field(0, ge=0, description="GIF loop count (0 = loop forever)")
