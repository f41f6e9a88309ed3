"""Configuration for Step 00: Probe video metadata."""

from pydantic import BaseModel, Field


class ProbeVideoConfig(BaseModel):
    min_duration_s: float = Field(
        0.0, ge=0, description="Videos at or below this duration are skipped"
    )
