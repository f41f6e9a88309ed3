"""Single-frame decode at a requested time offset."""

from __future__ import annotations

import asyncio
import math

import numpy as np

from clipgif.core.contracts import RawFrame, VideoAsset
from clipgif.core.errors import FrameDecodeFailure
from clipgif.utils.video_source import FrameSource

_BIT_DEPTHS = {np.dtype(np.uint8): 8, np.dtype(np.uint16): 16}


def frame_index_for(timestamp: float, fps: float) -> int:
    """Index of the frame whose display interval contains ``timestamp``."""
    # Absorb float error so 0.48 * 25.0 lands on frame 12, not 11.
    return int(math.floor(timestamp * fps + 1e-6))


async def extract_frame(
    source: FrameSource, asset: VideoAsset, index: int, timestamp: float
) -> RawFrame:
    """Decode the frame shown at ``timestamp``.

    Zero tolerance: a timestamp past the last frame is a failure, never the
    last frame. Raises FrameDecodeFailure tagged with the sample index.
    """
    frame_no = frame_index_for(timestamp, asset.fps)
    if frame_no >= asset.frame_count:
        raise FrameDecodeFailure(
            index, timestamp, f"beyond end of stream ({asset.duration_s:.3f}s)"
        )

    try:
        pixels, color_space = await asyncio.to_thread(source.read_frame, frame_no)
    except OSError as exc:
        raise FrameDecodeFailure(index, timestamp, str(exc)) from exc

    bit_depth = _BIT_DEPTHS.get(pixels.dtype)
    if bit_depth is None:
        raise FrameDecodeFailure(index, timestamp, f"unsupported sample type {pixels.dtype}")
    return RawFrame(
        index=index,
        timestamp=timestamp,
        pixels=pixels,
        color_space=color_space,
        bit_depth=bit_depth,
    )
