"""Configuration for Step 02: Extract and resize frames."""

from pydantic import BaseModel, Field


class ExtractFramesConfig(BaseModel):
    max_width: int = Field(500, ge=1, description="Frames wider than this are downscaled")
    max_concurrency: int | None = Field(
        None, ge=1, description="Cap on concurrent decodes per video (None = one task per sample)"
    )
