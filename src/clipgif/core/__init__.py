"""clipgif core: batch driver, base step, shared contracts, errors."""

from .step_base import BaseStep
from .contracts import (
    BatchReport,
    OrderedFrameSequence,
    PipelineConfig,
    RawFrame,
    ResizedFrame,
    SampleFailure,
    StepEntry,
    VideoAsset,
    VideoReport,
)
from .errors import PreviewError, DirectoryReadError
from .pipeline_runner import run_batch, run_pipeline, load_pipeline_config
from .logging import setup_logging

__all__ = [
    "BaseStep",
    "BatchReport",
    "OrderedFrameSequence",
    "PipelineConfig",
    "RawFrame",
    "ResizedFrame",
    "SampleFailure",
    "StepEntry",
    "VideoAsset",
    "VideoReport",
    "PreviewError",
    "DirectoryReadError",
    "run_batch",
    "run_pipeline",
    "load_pipeline_config",
    "setup_logging",
]
