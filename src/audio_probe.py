#!/usr/bin/env python3
"""Probe an audio file for its container format and duration."""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import mutagen
from pydub.utils import mediainfo

from errors import AudioFormatInvalid
from time_code import MAX_MS

logger = logging.getLogger(__name__)

MP3_FORMAT = "MP3"

# mutagen FileType class name -> container name
_MUTAGEN_FORMATS = {
    "MP3": "MP3",
    "EasyMP3": "MP3",
    "OggVorbis": "OGG",
    "OggOpus": "OGG",
    "OggFLAC": "OGG",
    "OggSpeex": "OGG",
    "OggTheora": "OGG",
    "FLAC": "FLAC",
    "MP4": "MP4",
    "EasyMP4": "MP4",
    "WAVE": "WAV",
    "AIFF": "AIFF",
    "ASF": "ASF",
}


@dataclass(frozen=True)
class AudioProbeResult:
    container_format: str
    duration_seconds: float


class ProbeBackend(Enum):
    MUTAGEN = "mutagen"
    FFPROBE = "ffprobe"


class AudioProbe(ABC):
    @abstractmethod
    def probe(self, path: Path) -> AudioProbeResult:
        """Return the container format and duration, or raise AudioFormatInvalid."""


class MutagenAudioProbe(AudioProbe):
    def probe(self, path: Path) -> AudioProbeResult:
        try:
            audio = mutagen.File(path)
        except (mutagen.MutagenError, OSError) as exc:
            raise AudioFormatInvalid(str(path)) from exc
        if audio is None or audio.info is None:
            raise AudioFormatInvalid(str(path))
        kind = type(audio).__name__
        container = _MUTAGEN_FORMATS.get(kind, kind.upper())
        logger.debug("mutagen sees %s as %s (%.3fs)", path, container, audio.info.length)
        return AudioProbeResult(container_format=container, duration_seconds=float(audio.info.length))


class FfprobeAudioProbe(AudioProbe):
    """Probe through pydub's ffprobe wrapper; needs ffprobe on PATH."""

    def probe(self, path: Path) -> AudioProbeResult:
        try:
            info = mediainfo(str(path))
        except OSError as exc:
            raise AudioFormatInvalid(str(path)) from exc
        format_name = info.get("format_name", "")
        duration = info.get("duration", "")
        if not format_name or not duration:
            raise AudioFormatInvalid(str(path))
        try:
            seconds = float(duration)
        except ValueError as exc:
            raise AudioFormatInvalid(str(path)) from exc
        container = format_name.split(",")[0].upper()
        logger.debug("ffprobe sees %s as %s (%.3fs)", path, container, seconds)
        return AudioProbeResult(container_format=container, duration_seconds=seconds)


def probe_for(backend: ProbeBackend) -> AudioProbe:
    if backend is ProbeBackend.FFPROBE:
        return FfprobeAudioProbe()
    return MutagenAudioProbe()


def mp3_duration_ms(probe: AudioProbe, path: Path) -> int:
    """Return the track length in ms, rejecting anything that is not MP3."""
    result = probe.probe(path)
    if result.container_format != MP3_FORMAT:
        raise AudioFormatInvalid(result.container_format)
    duration_ms = min(round(result.duration_seconds * 1000), MAX_MS)
    logging.info("Probed %s: %d ms", path, duration_ms)
    return duration_ms
