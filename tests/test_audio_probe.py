from __future__ import annotations

from pathlib import Path

import pytest

import audio_probe
from audio_probe import (
    AudioProbe,
    AudioProbeResult,
    FfprobeAudioProbe,
    MutagenAudioProbe,
    ProbeBackend,
    mp3_duration_ms,
    probe_for,
)
from errors import AudioFormatInvalid
from time_code import MAX_MS


class _FixedProbe(AudioProbe):
    def __init__(self, container_format: str, duration_seconds: float) -> None:
        self.result = AudioProbeResult(container_format, duration_seconds)

    def probe(self, path: Path) -> AudioProbeResult:
        return self.result


def test_mutagen_probe_reads_mp3(mp3_file: Path) -> None:
    result = MutagenAudioProbe().probe(mp3_file)

    assert result.container_format == "MP3"
    assert result.duration_seconds == pytest.approx(4.8, abs=0.05)


def test_mutagen_probe_names_wav(wav_file: Path) -> None:
    assert MutagenAudioProbe().probe(wav_file).container_format == "WAV"


def test_mutagen_probe_rejects_text(text_file: Path) -> None:
    with pytest.raises(AudioFormatInvalid) as info:
        MutagenAudioProbe().probe(text_file)

    assert info.value.detail == str(text_file)


def test_mutagen_probe_rejects_missing_file(tmp_path: Path) -> None:
    with pytest.raises(AudioFormatInvalid):
        MutagenAudioProbe().probe(tmp_path / "missing.mp3")


def test_mp3_duration_ms_rounds() -> None:
    assert mp3_duration_ms(_FixedProbe("MP3", 12.3454), Path("x.mp3")) == 12_345
    assert mp3_duration_ms(_FixedProbe("MP3", 0.0006), Path("x.mp3")) == 1


@pytest.mark.parametrize("container", ["OGG", "WAV", "mp3", "MP4"])
def test_mp3_duration_ms_rejects_other_formats(container: str) -> None:
    with pytest.raises(AudioFormatInvalid) as info:
        mp3_duration_ms(_FixedProbe(container, 1.0), Path("x.ogg"))

    assert info.value.detail == container


def test_ffprobe_probe_uses_mediainfo(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(audio_probe, "mediainfo", lambda path: {"format_name": "mp3", "duration": "2.500000"})

    result = FfprobeAudioProbe().probe(Path("x.mp3"))

    assert result == AudioProbeResult("MP3", 2.5)


def test_ffprobe_probe_takes_first_format_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        audio_probe, "mediainfo", lambda path: {"format_name": "mov,mp4,m4a,3gp,3g2,mj2", "duration": "1.0"}
    )

    assert FfprobeAudioProbe().probe(Path("x.m4a")).container_format == "MOV"


def test_ffprobe_probe_rejects_empty_info(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(audio_probe, "mediainfo", lambda path: {})

    with pytest.raises(AudioFormatInvalid):
        FfprobeAudioProbe().probe(Path("file.txt"))


def test_ffprobe_probe_missing_binary(monkeypatch: pytest.MonkeyPatch) -> None:
    def _no_ffprobe(path):
        raise FileNotFoundError("ffprobe")

    monkeypatch.setattr(audio_probe, "mediainfo", _no_ffprobe)

    with pytest.raises(AudioFormatInvalid):
        FfprobeAudioProbe().probe(Path("x.mp3"))


def test_probe_for_backend() -> None:
    assert isinstance(probe_for(ProbeBackend.MUTAGEN), MutagenAudioProbe)
    assert isinstance(probe_for(ProbeBackend.FFPROBE), FfprobeAudioProbe)


def test_mp3_duration_ms_clamped_to_chapter_field() -> None:
    assert mp3_duration_ms(_FixedProbe("MP3", 5_000_000.0), Path("x.mp3")) == MAX_MS
