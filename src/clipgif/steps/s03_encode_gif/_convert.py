"""Conversion of decoded frames into 8-bit Pillow images."""

from __future__ import annotations

import numpy as np
from PIL import Image

from clipgif.core.contracts import ResizedFrame

# Reorder OpenCV channel layouts into RGB(A).
_CHANNEL_ORDER = {
    "BGR": [2, 1, 0],
    "BGRA": [2, 1, 0, 3],
}


def to_pil(frame: ResizedFrame) -> Image.Image:
    """Return an 8-bit Pillow image of ``frame``. GIF has no 16-bit mode."""
    pixels = frame.pixels
    if frame.bit_depth == 16:
        pixels = (pixels >> 8).astype(np.uint8)
    if pixels.ndim == 3 and pixels.shape[2] == 1:
        pixels = pixels[:, :, 0]

    order = _CHANNEL_ORDER.get(frame.color_space)
    if order is not None:
        pixels = pixels[:, :, order]
    # Mode follows from the array shape: L, RGB or RGBA.
    return Image.fromarray(np.ascontiguousarray(pixels))
