"""Restore sample order after concurrent extraction."""

from __future__ import annotations

from typing import Iterable

from clipgif.core.contracts import OrderedFrameSequence, ResizedFrame, SampleFailure, SampleResult
from clipgif.core.errors import EmptyFrameSetError


def order_frames(results: Iterable[SampleResult]) -> OrderedFrameSequence:
    """Sort successes by sample index and set failures aside.

    Raises EmptyFrameSetError when no sample succeeded.
    """
    frames: list[ResizedFrame] = []
    failures: list[SampleFailure] = []
    seen: set[int] = set()
    for result in results:
        if result.index in seen:
            raise ValueError(f"Duplicate sample index {result.index}")
        seen.add(result.index)
        if isinstance(result, SampleFailure):
            failures.append(result)
        else:
            frames.append(result)

    if not frames:
        raise EmptyFrameSetError(f"All {len(failures)} samples failed")

    frames.sort(key=lambda f: f.index)
    failures.sort(key=lambda f: f.index)
    return OrderedFrameSequence(frames=frames, failures=failures)
