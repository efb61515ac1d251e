#!/usr/bin/env python3
"""Failure kinds raised while applying chapter markers to an MP3."""
from __future__ import annotations

from pathlib import Path


class PresquileError(RuntimeError):
    """Base error for every failure the pipeline reports."""


class AudioFormatInvalid(PresquileError):
    """The audio probe failed or the container is not MP3."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Invalid audio file format {detail}")
        self.detail = detail


class MarkerFileInvalid(PresquileError):
    def __init__(self, path: Path, detail: str = "") -> None:
        message = "Invalid chapter file format"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.path = path
        self.detail = detail


class TimeFormatInvalid(PresquileError):
    def __init__(self, time_code: str) -> None:
        super().__init__(f"Invalid time code {time_code!r}")
        self.time_code = time_code


class EmptyMarkerList(PresquileError):
    def __init__(self) -> None:
        super().__init__("No markers to build chapters from")


class DestinationUnresolvable(PresquileError):
    def __init__(self, path: Path) -> None:
        super().__init__(f"Cannot derive output file name from {path}")
        self.path = path


class CopyFailed(PresquileError):
    def __init__(self, source: Path, destination: Path) -> None:
        super().__init__(f"Error while copying file {source} to {destination}")
        self.source = source
        self.destination = destination


class TagWriteFailed(PresquileError):
    def __init__(self, path: Path, detail: str = "") -> None:
        message = f"Error while writing chapters to {path}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.path = path
        self.detail = detail


class WorkerInterrupted(PresquileError):
    """A parallel step died with something other than a PresquileError."""

    def __init__(self, step: str) -> None:
        super().__init__(f"Thread has been interrupted ({step})")
        self.step = step
