#!/usr/bin/env python3
"""Apply an Audition marker file to an enriched copy of an MP3."""
from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from audio_probe import AudioProbe, MutagenAudioProbe, mp3_duration_ms, probe_for
from chapter_builder import ChapterBuilder, ChapterEnd
from errors import PresquileError, TagWriteFailed, WorkerInterrupted
from marker import MarkerRecord
from marker_loader import MarkerLoader
from output_file_copier import OutputFileCopier
from presquile_config import Mode, PresquileConfig
from tag_assembler import Tag, TagAssembler
from tag_writer import Id3TagWriter
from time_code import TimeCodeStyle

STEP_MARKERS = "markers"
STEP_AUDIO = "audio"
STEP_COPY = "copy"
# Order in which failures are reported when several parallel steps fail.
STEP_PRECEDENCE = (STEP_MARKERS, STEP_AUDIO, STEP_COPY)


@dataclass
class ChapterApplier:
    marker_file: Path
    audio_file: Path
    loader: MarkerLoader = field(default_factory=MarkerLoader)
    probe: AudioProbe = field(default_factory=MutagenAudioProbe)
    copier: OutputFileCopier = field(default_factory=OutputFileCopier)
    assembler: TagAssembler = field(default_factory=TagAssembler)
    writer: Id3TagWriter = field(default_factory=Id3TagWriter)
    time_code_style: TimeCodeStyle = TimeCodeStyle.LENIENT
    chapter_end: ChapterEnd = ChapterEnd.NEXT_START

    @classmethod
    def from_config(cls, marker_file: Path, audio_file: Path, config: PresquileConfig) -> "ChapterApplier":
        return cls(
            marker_file=marker_file,
            audio_file=audio_file,
            probe=probe_for(config.probe),
            time_code_style=config.time_format,
            chapter_end=config.chapter_end,
        )

    def load_markers(self) -> List[MarkerRecord]:
        return self.loader.load(self.marker_file)

    def probe_duration_ms(self) -> int:
        return mp3_duration_ms(self.probe, self.audio_file)

    def copy_audio(self) -> Path:
        return self.copier.copy(self.audio_file)

    def build_tag(self, markers: List[MarkerRecord], duration_ms: int) -> Tag:
        chapters = ChapterBuilder(
            markers=markers,
            total_duration_ms=duration_ms,
            time_code_style=self.time_code_style,
            chapter_end=self.chapter_end,
        ).build()
        return self.assembler.assemble(chapters)

    def commit(self, tag: Tag, destination: Path) -> None:
        """Write the tag to the copy; a copy that could not be tagged is removed."""
        try:
            self.writer.write(tag, destination)
        except TagWriteFailed:
            destination.unlink(missing_ok=True)
            raise

    def apply_sequential(self) -> Path:
        logging.info("Applying %s to %s (sequential)", self.marker_file, self.audio_file)
        markers = self.load_markers()
        duration_ms = self.probe_duration_ms()
        tag = self.build_tag(markers, duration_ms)
        destination = self.copy_audio()
        self.commit(tag, destination)
        return destination

    def apply_parallel(self) -> Path:
        """
        Run the three independent steps on their own threads, wait for all of
        them, then build and write the tag on the calling thread.

        A failing step does not cancel the others, so the copy may be left on
        disk untagged when markers or audio are rejected.
        """
        logging.info("Applying %s to %s (parallel)", self.marker_file, self.audio_file)
        steps = {
            STEP_MARKERS: self.load_markers,
            STEP_AUDIO: self.probe_duration_ms,
            STEP_COPY: self.copy_audio,
        }
        with ThreadPoolExecutor(max_workers=len(steps), thread_name_prefix="presquile") as executor:
            futures = {step: executor.submit(run) for step, run in steps.items()}
            wait(futures.values())
        results = collect_results(futures)

        tag = self.build_tag(results[STEP_MARKERS], results[STEP_AUDIO])
        destination = results[STEP_COPY]
        self.commit(tag, destination)
        return destination


def collect_results(futures: Dict[str, Future]) -> Dict[str, Any]:
    """Return each step's result, or raise the highest-precedence failure."""
    failures = {step: futures[step].exception() for step in STEP_PRECEDENCE}
    for step in STEP_PRECEDENCE:
        if isinstance(failures[step], PresquileError):
            raise failures[step]
    for step in STEP_PRECEDENCE:
        if failures[step] is not None:
            logging.error("%s step died: %r", step, failures[step])
            raise WorkerInterrupted(step) from failures[step]
    return {step: futures[step].result() for step in STEP_PRECEDENCE}


def apply(
    marker_file: Path,
    audio_file: Path,
    mode: Mode | None = None,
    config: PresquileConfig | None = None,
) -> Path:
    """Write chapters from ``marker_file`` into a copy of ``audio_file`` and return the copy."""
    config = config or PresquileConfig.default()
    applier = ChapterApplier.from_config(Path(marker_file), Path(audio_file), config)
    if (mode or config.mode) is Mode.PARALLEL:
        return applier.apply_parallel()
    return applier.apply_sequential()
