"""Batch driver: finds videos and runs the per-video step chain on each.

Videos are processed one at a time; parallelism lives inside a video's
extract step. A failure confined to one video is logged and recorded in the
report, and the batch moves on. Only an unreadable input directory stops it.
"""

from __future__ import annotations

import asyncio
import importlib
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel

from .contracts import BatchReport, PipelineConfig, VideoReport
from .errors import (
    DirectoryReadError,
    DurationUnavailable,
    DurationZero,
    EmptyFrameSetError,
    PreviewError,
)
from .step_base import BaseStep

logger = logging.getLogger(__name__)

# Per-video errors that mean "nothing to make a preview from" rather than a fault.
_SKIP_ERRORS = (DurationUnavailable, DurationZero, EmptyFrameSetError)


def load_pipeline_config(config_path: Path | None = None) -> PipelineConfig:
    """Load and validate pipeline.yaml.

    ``None`` or a path that does not exist gives the built-in defaults.
    """
    if config_path is None:
        return PipelineConfig()
    config_path = Path(config_path)
    if not config_path.exists():
        logger.warning(f"Pipeline config {config_path} not found, using defaults")
        return PipelineConfig()
    with open(config_path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    return PipelineConfig(**raw)


def load_step_config(config_path: Path | None, config_class: type[BaseModel]) -> BaseModel:
    """Load a step-specific YAML config into its Pydantic model."""
    if config_path is None:
        return config_class()
    with open(config_path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    return config_class(**raw)


def import_step_class(module_path: str) -> type[BaseStep]:
    """Dynamically import a step class from its module path.

    Expects module_path like 'clipgif.steps.s01_sample_times'
    and looks for a BaseStep subclass in that module's step.py.
    """
    step_module = importlib.import_module(f"{module_path}.step")
    for attr_name in dir(step_module):
        attr = getattr(step_module, attr_name)
        if isinstance(attr, type) and issubclass(attr, BaseStep) and attr is not BaseStep:
            return attr
    raise ImportError(f"No Step class found in {module_path}.step")


def build_steps(pipeline_cfg: PipelineConfig, source_factory=None) -> list[BaseStep]:
    """Instantiate the enabled steps in configured order."""
    steps: list[BaseStep] = []
    for entry in pipeline_cfg.steps:
        if not entry.enabled:
            continue
        step_cls = import_step_class(entry.module)
        config_file = Path(entry.config_file) if entry.config_file else None
        step_config = load_step_config(config_file, step_cls.config_type)
        kwargs: dict[str, Any] = {}
        if getattr(step_cls, "needs_source", False) and source_factory is not None:
            kwargs["source_factory"] = source_factory
        steps.append(step_cls(config=step_config, **kwargs))
    return steps


def discover_videos(videos_dir: Path, extension: str = ".mp4") -> list[Path]:
    """List files in ``videos_dir`` whose suffix matches ``extension``."""
    videos_dir = Path(videos_dir)
    suffix = extension.lower() if extension.startswith(".") else f".{extension.lower()}"
    try:
        entries = list(videos_dir.iterdir())
    except OSError as exc:
        raise DirectoryReadError(videos_dir, exc) from exc
    return sorted(p for p in entries if p.is_file() and p.suffix.lower() == suffix)


def output_path_for(video_path: Path, output_dir: Path) -> Path:
    return Path(output_dir) / f"{Path(video_path).stem}.gif"


async def process_video(video_path: Path, output_path: Path, steps: list[BaseStep]) -> VideoReport:
    """Run ``steps`` on one video, threading each output into later inputs."""
    payload: dict[str, Any] = {"video_path": video_path, "output_path": output_path}
    try:
        for step in steps:
            fields = {k: payload[k] for k in step.input_type.model_fields if k in payload}
            output = await step.execute(step.input_type(**fields))
            payload.update({k: getattr(output, k) for k in type(output).model_fields})
    except _SKIP_ERRORS as exc:
        logger.warning(f"Skipping {video_path.name}: {exc}")
        return VideoReport(video_path=video_path, status="skipped", error=str(exc))
    except PreviewError as exc:
        logger.error(f"Failed {video_path.name}: {exc}")
        return VideoReport(video_path=video_path, status="failed", error=str(exc))

    if "gif_path" not in payload:
        return VideoReport(video_path=video_path, status="skipped", error="no encode step enabled")
    return VideoReport(
        video_path=video_path,
        status="created",
        gif_path=payload["gif_path"],
        frame_count=payload.get("frame_count", 0),
    )


async def _run_videos(videos: list[Path], output_dir: Path, steps: list[BaseStep]) -> BatchReport:
    report = BatchReport()
    for video in videos:
        logger.info(f"--- Video: {video.name} ---")
        report.videos.append(await process_video(video, output_path_for(video, output_dir), steps))
    return report


def run_batch(pipeline_cfg: PipelineConfig, source_factory=None) -> BatchReport:
    """Convert every video in ``pipeline_cfg.videos_dir``.

    Raises DirectoryReadError if the directory cannot be listed; every other
    failure is contained per video.
    """
    videos = discover_videos(pipeline_cfg.videos_dir, pipeline_cfg.video_extension)
    logger.info(
        f"Pipeline '{pipeline_cfg.project_name}': {len(videos)} video(s) in {pipeline_cfg.videos_dir}"
    )
    try:
        pipeline_cfg.output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.error(f"Cannot create output directory {pipeline_cfg.output_dir}: {exc}")

    steps = build_steps(pipeline_cfg, source_factory)
    report = asyncio.run(_run_videos(videos, pipeline_cfg.output_dir, steps))
    logger.info(f"Batch complete: {len(report.created)}/{len(videos)} GIF(s) created")
    return report


def run_one(video_path: Path, pipeline_cfg: PipelineConfig, source_factory=None) -> VideoReport:
    """Convert a single video into ``pipeline_cfg.output_dir``."""
    steps = build_steps(pipeline_cfg, source_factory)
    output_path = output_path_for(video_path, pipeline_cfg.output_dir)
    return asyncio.run(process_video(Path(video_path), output_path, steps))


def run_pipeline(config_path: Path | None = None) -> BatchReport:
    """Execute the batch from a config file (or defaults)."""
    return run_batch(load_pipeline_config(config_path))
