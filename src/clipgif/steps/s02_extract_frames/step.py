"""Step 02: Concurrent frame extraction, resize, and reordering.

One task is launched per sample timestamp. Each task decodes its frame on a
worker thread and downscales it. The step waits for every task, whatever
the outcome, and only then restores sample order.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import ClassVar, Sequence

from clipgif.core.contracts import SampleFailure, SampleResult, VideoAsset
from clipgif.core.errors import SampleError
from clipgif.core.step_base import BaseStep
from clipgif.utils.video_source import FrameSource, SourceFactory, opencv_source
from ._extractor import extract_frame
from ._ordering import order_frames
from ._resize import resize_frame
from .config import ExtractFramesConfig
from .contracts import ExtractFramesInput, ExtractFramesOutput

logger = logging.getLogger(__name__)


async def _sample(
    source: FrameSource,
    asset: VideoAsset,
    index: int,
    timestamp: float,
    max_width: int,
    limiter: asyncio.Semaphore | None,
) -> SampleResult:
    """Decode and resize one sample. Never raises: every error becomes a SampleFailure."""
    stage = "decode"
    try:
        async with limiter or contextlib.nullcontext():
            raw = await extract_frame(source, asset, index, timestamp)
        stage = "resize"
        return await asyncio.to_thread(resize_frame, raw, max_width)
    except SampleError as exc:
        return SampleFailure(index=exc.index, timestamp=exc.timestamp, kind=exc.kind, cause=exc.cause)
    except Exception as exc:
        logger.debug(f"Unexpected {stage} error for sample {index}", exc_info=True)
        return SampleFailure(
            index=index, timestamp=timestamp, kind=stage, cause=f"{type(exc).__name__}: {exc}"
        )


async def extract_all(
    source: FrameSource,
    asset: VideoAsset,
    timestamps: Sequence[float],
    max_width: int = 500,
    max_concurrency: int | None = None,
) -> list[SampleResult]:
    """Fan out one extraction per timestamp and collect every result.

    Results are returned in completion order; each carries its sample index.
    """
    limiter = asyncio.Semaphore(max_concurrency) if max_concurrency else None
    tasks = [
        asyncio.create_task(_sample(source, asset, i, t, max_width, limiter))
        for i, t in enumerate(timestamps)
    ]
    results: list[SampleResult] = []
    for finished in asyncio.as_completed(tasks):
        results.append(await finished)
    return results


class ExtractFramesStep(BaseStep[ExtractFramesInput, ExtractFramesOutput, ExtractFramesConfig]):
    name: ClassVar[str] = "extract_frames"
    input_type: ClassVar = ExtractFramesInput
    output_type: ClassVar = ExtractFramesOutput
    config_type: ClassVar = ExtractFramesConfig
    needs_source: ClassVar[bool] = True

    def __init__(self, config: ExtractFramesConfig, source_factory: SourceFactory | None = None):
        super().__init__(config)
        self.source_factory = source_factory or opencv_source

    async def run(self, inputs: ExtractFramesInput) -> ExtractFramesOutput:
        asset = inputs.asset
        source = self.source_factory(asset.video_path)
        results = await extract_all(
            source,
            asset,
            inputs.timestamps,
            max_width=self.config.max_width,
            max_concurrency=self.config.max_concurrency,
        )

        for result in results:
            if isinstance(result, SampleFailure):
                logger.warning(
                    f"{asset.video_path.name}: dropped sample {result.index} "
                    f"at {result.timestamp:.2f}s ({result.kind}): {result.cause}"
                )

        sequence = order_frames(results)
        logger.info(
            f"{asset.video_path.name}: {len(sequence.frames)}/{len(inputs.timestamps)} frames extracted"
        )
        return ExtractFramesOutput(sequence=sequence)
