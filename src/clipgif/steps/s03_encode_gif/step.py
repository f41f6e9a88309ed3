"""Step 03: Write the ordered frames as a looping GIF.

The file is written next to its destination under a temporary name, read
back to check the frame count, and only then moved into place. A failed
encode leaves nothing at the destination path.
"""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path
from typing import ClassVar, Sequence

from PIL import GifImagePlugin, Image

from clipgif.core.contracts import ResizedFrame
from clipgif.core.errors import EmptyFrameSetError, EncodeFinalizeError
from clipgif.core.step_base import BaseStep
from ._convert import to_pil
from .config import EncodeGifConfig
from .contracts import EncodeGifInput, EncodeGifOutput

logger = logging.getLogger(__name__)


def _to_palette(image: Image.Image) -> Image.Image:
    # GIF is indexed color; each frame gets its own adaptive palette.
    return image.convert("RGB").convert("P", palette=Image.Palette.ADAPTIVE)


def _write_gif(images: Sequence[Image.Image], path: Path, duration_ms: int, loop: int) -> None:
    """Write exactly one image block per entry of ``images``.

    ``Image.save(save_all=True)`` folds a frame identical to its predecessor
    into the previous frame's delay. Repeated samples must stay separate
    frames, so the file is assembled from Pillow's GIF header and frame
    encoders instead.
    """
    frames = [_to_palette(im) for im in images]
    header, _ = GifImagePlugin.getheader(frames[0], info={"loop": loop, "duration": duration_ms})
    with open(path, "wb") as fp:
        fp.writelines(header)
        for frame in frames:
            fp.writelines(
                GifImagePlugin.getdata(frame, duration=duration_ms, include_color_table=True)
            )
        fp.write(b";")  # trailer


def _verify(path: Path, expected_frames: int) -> int:
    with Image.open(path) as im:
        written = getattr(im, "n_frames", 1)
    if written != expected_frames:
        raise EncodeFinalizeError(
            f"{path.name}: read back {written} frames, expected {expected_frames}"
        )
    return written


def encode_gif(
    frames: Sequence[ResizedFrame],
    output_path: Path,
    delay_s: float = 0.12,
    loop: int = 0,
) -> Path:
    """Write ``frames`` to ``output_path`` as an animated GIF.

    Every frame is shown for ``delay_s`` seconds, one GIF frame per entry even
    when neighbours are identical; ``loop=0`` repeats forever.
    Raises EncodeFinalizeError if the file cannot be written completely.
    """
    output_path = Path(output_path)
    if not frames:
        raise EmptyFrameSetError(f"No frames to encode for {output_path.name}")

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise EncodeFinalizeError(f"Cannot create {output_path.parent}: {exc}") from exc

    tmp_path = output_path.with_name(f".{output_path.stem}.{os.getpid()}.gif.part")
    try:
        images = [to_pil(f) for f in frames]
        _write_gif(images, tmp_path, round(delay_s * 1000), loop)
        _verify(tmp_path, len(images))
        os.replace(tmp_path, output_path)
    except (OSError, ValueError, KeyError) as exc:
        raise EncodeFinalizeError(f"Failed to write {output_path}: {exc}") from exc
    finally:
        # Gone after a successful replace; a leftover means the encode failed.
        tmp_path.unlink(missing_ok=True)
    return output_path


class EncodeGifStep(BaseStep[EncodeGifInput, EncodeGifOutput, EncodeGifConfig]):
    name: ClassVar[str] = "encode_gif"
    input_type: ClassVar = EncodeGifInput
    output_type: ClassVar = EncodeGifOutput
    config_type: ClassVar = EncodeGifConfig

    def validate_inputs(self, inputs: EncodeGifInput) -> bool:
        if inputs.output_path.suffix.lower() != ".gif":
            logger.error(f"Output path must end in .gif: {inputs.output_path}")
            return False
        return True

    async def run(self, inputs: EncodeGifInput) -> EncodeGifOutput:
        frames = inputs.sequence.frames
        gif_path = await asyncio.to_thread(
            encode_gif, frames, inputs.output_path, self.config.delay_s, self.config.loop
        )
        logger.info(f"GIF created: {gif_path} ({len(frames)} frames)")
        return EncodeGifOutput(
            gif_path=gif_path,
            frame_count=len(frames),
            delay_s=self.config.delay_s,
            loop=self.config.loop,
            indices=inputs.sequence.indices,
        )
