"""Configuration for Step 01: Sample timestamps."""

from pydantic import BaseModel, Field


class SampleTimesConfig(BaseModel):
    count: int = Field(12, ge=1, description="Number of frames sampled per video")
    interval_s: float = Field(0.08, gt=0, description="Spacing between samples in seconds")
