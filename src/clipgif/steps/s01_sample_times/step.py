"""Step 01: Fixed-interval sample timestamps.

The offsets do not depend on the clip length. On a clip shorter than the
last offset the late samples fail to decode and the GIF simply has fewer
frames.
"""

from __future__ import annotations

import logging
from typing import ClassVar

from clipgif.core.step_base import BaseStep
from .config import SampleTimesConfig
from .contracts import SampleTimesInput, SampleTimesOutput

logger = logging.getLogger(__name__)


def sample_timestamps(count: int = 12, interval_s: float = 0.08) -> list[float]:
    """Return ``[i * interval_s for i in range(count)]`` rounded to microseconds."""
    if count < 1:
        raise ValueError("count must be >= 1")
    if interval_s <= 0:
        raise ValueError("interval_s must be > 0")
    return [round(i * interval_s, 6) for i in range(count)]


class SampleTimesStep(BaseStep[SampleTimesInput, SampleTimesOutput, SampleTimesConfig]):
    name: ClassVar[str] = "sample_times"
    input_type: ClassVar = SampleTimesInput
    output_type: ClassVar = SampleTimesOutput
    config_type: ClassVar = SampleTimesConfig

    async def run(self, inputs: SampleTimesInput) -> SampleTimesOutput:
        timestamps = sample_timestamps(self.config.count, self.config.interval_s)
        if inputs.asset is not None and timestamps[-1] >= inputs.asset.duration_s:
            reachable = sum(1 for t in timestamps if t < inputs.asset.duration_s)
            logger.debug(
                f"{inputs.asset.video_path.name}: only {reachable}/{len(timestamps)} "
                f"samples fall inside {inputs.asset.duration_s:.3f}s"
            )
        return SampleTimesOutput(timestamps=timestamps)
