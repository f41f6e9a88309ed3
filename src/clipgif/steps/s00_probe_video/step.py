"""Step 00: Look up a video's duration before any frame is requested."""

from __future__ import annotations

import asyncio
import logging
from typing import ClassVar

from clipgif.core.errors import DurationZero
from clipgif.core.step_base import BaseStep
from clipgif.utils.video_source import SourceFactory, opencv_source
from .config import ProbeVideoConfig
from .contracts import ProbeVideoInput, ProbeVideoOutput

logger = logging.getLogger(__name__)


class ProbeVideoStep(BaseStep[ProbeVideoInput, ProbeVideoOutput, ProbeVideoConfig]):
    name: ClassVar[str] = "probe_video"
    input_type: ClassVar = ProbeVideoInput
    output_type: ClassVar = ProbeVideoOutput
    config_type: ClassVar = ProbeVideoConfig
    needs_source: ClassVar[bool] = True

    def __init__(self, config: ProbeVideoConfig, source_factory: SourceFactory | None = None):
        super().__init__(config)
        self.source_factory = source_factory or opencv_source

    async def run(self, inputs: ProbeVideoInput) -> ProbeVideoOutput:
        source = self.source_factory(inputs.video_path)
        asset = await asyncio.to_thread(source.probe)

        if asset.duration_s <= self.config.min_duration_s:
            raise DurationZero(
                f"{inputs.video_path.name} has duration {asset.duration_s:.3f}s"
            )
        logger.info(
            f"{inputs.video_path.name}: {asset.duration_s:.2f}s, "
            f"{asset.width}x{asset.height} @ {asset.fps:.2f} fps"
        )
        return ProbeVideoOutput(asset=asset)
