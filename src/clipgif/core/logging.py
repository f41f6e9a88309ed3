"""Logging setup shared by the CLI and the batch driver.

Records go to stdout as single pipe-separated lines. `setup_logging` passes
`force=True` so each CLI command can reconfigure handlers installed by an
earlier call (or by pytest), and it keeps Pillow's per-chunk GIF debug output
at WARNING or above whatever level the command asks for.
"""

from __future__ import annotations

import logging
import sys

# Pillow emits per-chunk DEBUG records while writing GIFs.
_NOISY_LOGGERS = ("PIL",)


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging: one line per record on stdout."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(logging.WARNING, logging.getLogger().level))
