from __future__ import annotations

import pathlib
import sys
import wave
from pathlib import Path
from typing import Callable, Iterable

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

# MPEG-1 Layer III, 128 kbps, 48 kHz, no CRC: 144 * 128000 / 48000 = 384 bytes per frame.
MP3_FRAME_HEADER = b"\xff\xfb\x94\x00"
MP3_FRAME_SIZE = 384

MARKER_HEADER = "Name\tStart\tDuration\tTime Format\tType\tDescription"


def write_mp3(path: Path, frames: int = 200) -> Path:
    """Write a silent CBR MP3 (200 frames last 4.8 s)."""
    frame = MP3_FRAME_HEADER + bytes(MP3_FRAME_SIZE - len(MP3_FRAME_HEADER))
    path.write_bytes(frame * frames)
    return path


def write_wav(path: Path, seconds: float = 1.0) -> Path:
    with wave.open(str(path), "wb") as wav:
        wav.setnchannels(1)
        wav.setsampwidth(2)
        wav.setframerate(8000)
        wav.writeframes(b"\x00\x00" * int(8000 * seconds))
    return path


def write_markers(path: Path, rows: Iterable[tuple[str, str, str]], header: str = MARKER_HEADER) -> Path:
    lines = [header]
    for name, start, duration in rows:
        lines.append(f"{name}\t{start}\t{duration}\tdecimal\tCue\t")
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def mp3_file(tmp_path: Path) -> Path:
    return write_mp3(tmp_path / "audio.mp3")


@pytest.fixture
def wav_file(tmp_path: Path) -> Path:
    return write_wav(tmp_path / "audio.wav")


@pytest.fixture
def text_file(tmp_path: Path) -> Path:
    path = tmp_path / "file.txt"
    path.write_text("This is not audio, nor a marker export.\n", encoding="utf-8")
    return path


@pytest.fixture
def marker_file(tmp_path: Path) -> Path:
    return write_markers(
        tmp_path / "valid_chaps.csv",
        [
            ("Intro", "0:00.000", "0:01.000"),
            ("Verse", "0:01.000", "0:02.500"),
            ("Outro", "0:03.500", "0:01.300"),
        ],
    )


@pytest.fixture
def markers_writer(tmp_path: Path) -> Callable[..., Path]:
    def _write(rows: Iterable[tuple[str, str, str]], name: str = "markers.csv", **kwargs) -> Path:
        return write_markers(tmp_path / name, rows, **kwargs)

    return _write
