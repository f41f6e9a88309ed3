"""Aspect-preserving downscale of decoded frames."""

from __future__ import annotations

import cv2
import numpy as np

from clipgif.core.contracts import CHANNELS, RawFrame, ResizedFrame
from clipgif.core.errors import ResizeFailure


def target_size(width: int, height: int, max_width: int) -> tuple[int, int]:
    """Return (width, height) no wider than ``max_width`` with the same aspect ratio."""
    target_w = min(width, max_width)
    target_h = max(1, round(target_w * height / width))
    return target_w, target_h


def resize_frame(raw: RawFrame, max_width: int = 500) -> ResizedFrame:
    """Downscale ``raw`` into a new buffer; the input is left untouched.

    Uses area interpolation, which averages source pixels when shrinking.
    Color space and bit depth carry over unchanged.
    """
    pixels = raw.pixels
    channels = 1 if pixels.ndim == 2 else pixels.shape[2]
    if pixels.ndim not in (2, 3) or CHANNELS.get(raw.color_space) != channels:
        raise ResizeFailure(
            raw.index,
            raw.timestamp,
            f"cannot determine color space ({raw.color_space}, {channels} channels)",
        )
    if raw.width == 0 or raw.height == 0:
        raise ResizeFailure(raw.index, raw.timestamp, "empty frame")

    size = target_size(raw.width, raw.height, max_width)
    try:
        if size == (raw.width, raw.height):
            resized = pixels.copy()
        else:
            resized = cv2.resize(pixels, size, interpolation=cv2.INTER_AREA)
    except (cv2.error, MemoryError) as exc:
        raise ResizeFailure(raw.index, raw.timestamp, f"resample failed: {exc}") from exc

    # cv2 drops a trailing singleton channel axis.
    if pixels.ndim == 3 and resized.ndim == 2:
        resized = resized[:, :, np.newaxis]

    return ResizedFrame(
        index=raw.index,
        timestamp=raw.timestamp,
        pixels=resized,
        color_space=raw.color_space,
        bit_depth=raw.bit_depth,
        source_width=raw.width,
        source_height=raw.height,
    )
