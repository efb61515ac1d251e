#!/usr/bin/env python3
"""Write chapters from an Audition marker export into a copy of an MP3."""
from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

import typer

from chapter_applier import apply
from errors import PresquileError
from presquile_config import PresquileConfig
from tag_writer import read_tag
from time_code import format_time_code

app = typer.Typer(add_completion=False)
CONFIG_OPTION = typer.Option(
    None,
    "--config",
    "-c",
    help="YAML settings file (default: ./presquile.yaml when present)",
)


def setup_logging(config: PresquileConfig) -> None:
    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
    console = logging.StreamHandler()
    console.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(config.log_level)
    root.handlers.clear()
    root.addHandler(console)

    if config.log_file is not None:
        log_path = config.log_file
        log_path.parent.mkdir(parents=True, exist_ok=True)
        if log_path.exists():
            timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
            log_path.rename(log_path.with_name(f"{log_path.stem}-{timestamp}{log_path.suffix}"))
        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)


def load_config(config_path: Path | None) -> PresquileConfig:
    try:
        return PresquileConfig.load(config_path)
    except RuntimeError as exc:
        typer.echo(f"Error \"{exc}\" occurred")
        raise typer.Exit(code=1)


@app.command("apply")
def apply_command(
    marker_file: Path = typer.Argument(..., help="Audition markers file (tab separated)"),
    audio_file: Path = typer.Argument(..., help="MP3 file to enrich"),
    config_path: Path | None = CONFIG_OPTION,
) -> None:
    """Write chapters to MP3 ID3v2 tags from an Adobe Audition marker file."""
    config = load_config(config_path)
    setup_logging(config)
    try:
        path = apply(marker_file, audio_file, config=config)
    except PresquileError as exc:
        typer.echo(f"Error \"{exc}\" occurred")
        raise typer.Exit(code=1)
    typer.echo(f"Chapters written to {path}")


@app.command()
def show(audio_file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True)) -> None:
    """List the chapters stored in an MP3's ID3v2 tag."""
    tag = read_tag(audio_file)
    if tag is None:
        typer.echo(f"No chapters found in {audio_file}")
        raise typer.Exit(code=1)
    typer.echo(f"{tag.toc.id}: {tag.toc.title} ({', '.join(tag.toc.elements)})")
    for chapter in tag.chapters:
        typer.echo(
            f"{chapter.id}\t{format_time_code(chapter.start_ms)}\t{format_time_code(chapter.end_ms)}\t{chapter.title}"
        )


def main() -> None:
    app()


if __name__ == "__main__":
    main()
