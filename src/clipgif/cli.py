"""CLI entry point for clipgif.

Usage:
    clipgif run                      # videos/*.mp4 -> gifs/*.gif
    clipgif run --config pipeline.yaml
    clipgif run-one videos/clip.mp4  # convert a single file
    clipgif info                     # show configured steps
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from clipgif.core.contracts import VideoReport
from clipgif.core.errors import DirectoryReadError
from clipgif.core.logging import setup_logging

app = typer.Typer(name="clipgif", help="Looping GIF previews from short video clips")
console = Console()

_STATUS_STYLE = {"created": "green", "skipped": "yellow", "failed": "red"}


def _report_table(reports: list[VideoReport]) -> Table:
    table = Table(title="GIF previews")
    table.add_column("Video", style="cyan")
    table.add_column("Status")
    table.add_column("Frames", justify="right")
    table.add_column("Output / reason", style="dim")
    for r in reports:
        style = _STATUS_STYLE[r.status]
        detail = str(r.gif_path) if r.gif_path else (r.error or "-")
        table.add_row(r.video_path.name, f"[{style}]{r.status}[/{style}]", str(r.frame_count), detail)
    return table


@app.command()
def run(
    config: Optional[Path] = typer.Option(None, help="Pipeline config path (defaults built in)"),
    log_level: str = typer.Option("INFO", help="Logging level"),
) -> None:
    """Convert every video in the configured directory."""
    setup_logging(log_level)
    from clipgif.core.pipeline_runner import load_pipeline_config, run_batch

    pipeline_cfg = load_pipeline_config(config)
    try:
        report = run_batch(pipeline_cfg)
    except DirectoryReadError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)

    if report.videos:
        console.print(_report_table(report.videos))


@app.command()
def run_one(
    video: Path = typer.Argument(..., help="Video file to convert"),
    config: Optional[Path] = typer.Option(None, help="Pipeline config path (defaults built in)"),
    log_level: str = typer.Option("INFO", help="Logging level"),
) -> None:
    """Convert a single video."""
    setup_logging(log_level)
    from clipgif.core.pipeline_runner import load_pipeline_config, run_one as convert

    pipeline_cfg = load_pipeline_config(config)
    report = convert(video, pipeline_cfg)
    console.print(_report_table([report]))
    if report.status != "created":
        raise typer.Exit(1)


@app.command()
def info(config: Optional[Path] = typer.Option(None, help="Pipeline config path")) -> None:
    """Show pipeline steps and their settings."""
    from clipgif.core.pipeline_runner import import_step_class, load_pipeline_config

    pipeline_cfg = load_pipeline_config(config)
    console.print(f"Videos: {pipeline_cfg.videos_dir}/*{pipeline_cfg.video_extension}")
    console.print(f"Output: {pipeline_cfg.output_dir}/")

    table = Table(title=f"Pipeline: {pipeline_cfg.project_name}")
    table.add_column("#", style="dim")
    table.add_column("Step", style="cyan")
    table.add_column("Module", style="green")
    table.add_column("Enabled", style="yellow")
    table.add_column("Settings", style="dim")

    for i, step in enumerate(pipeline_cfg.steps, 1):
        step_cls = import_step_class(step.module)
        settings = ", ".join(step_cls.get_config_schema().get("properties", {}))
        table.add_row(str(i), step.name, step.module, "Y" if step.enabled else "N", settings or "-")
    console.print(table)


if __name__ == "__main__":
    app()
