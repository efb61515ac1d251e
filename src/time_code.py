#!/usr/bin/env python3
"""Convert Audition time codes like ``1:02:03.456`` to milliseconds."""
from __future__ import annotations

from enum import Enum

from errors import TimeFormatInvalid

# Applied right to left: seconds, minutes, hours.
MULTIPLIERS = (1000, 60 * 1000, 60 * 60 * 1000)
# CHAP start/end times are 32-bit; 0xFFFFFFFF means "unset".
MAX_MS = 0xFFFFFFFE


class TimeCodeStyle(Enum):
    LENIENT = "lenient"  # MM:SS.mmm or HH:MM:SS.mmm
    STRICT = "strict"  # HH:MM:SS.mmm only

    @property
    def segment_counts(self) -> tuple[int, ...]:
        return (2, 3) if self is TimeCodeStyle.LENIENT else (3,)


def _segment_value(segment: str, time_code: str) -> int:
    if not segment.isdigit() or not segment.isascii():
        raise TimeFormatInvalid(time_code)
    return int(segment)


def parse_time_code(time_code: str, style: TimeCodeStyle = TimeCodeStyle.LENIENT) -> int:
    """
    Return the offset in milliseconds for ``[HH:]MM:SS.mmm``.

    The part after the decimal point is taken as a millisecond count, as
    Audition writes it (always three digits).
    """
    if ":" not in time_code or "." not in time_code:
        raise TimeFormatInvalid(time_code)
    clock, _, millis = time_code.partition(".")
    segments = clock.split(":")
    if len(segments) not in style.segment_counts:
        raise TimeFormatInvalid(time_code)

    total = _segment_value(millis, time_code)
    for multiplier, segment in zip(MULTIPLIERS, reversed(segments)):
        total += _segment_value(segment, time_code) * multiplier
    if total > MAX_MS:
        raise TimeFormatInvalid(time_code)
    return total


def format_time_code(ms: int) -> str:
    hours, rest = divmod(ms, MULTIPLIERS[2])
    minutes, rest = divmod(rest, MULTIPLIERS[1])
    seconds, millis = divmod(rest, MULTIPLIERS[0])
    return f"{hours}:{minutes:02d}:{seconds:02d}.{millis:03d}"
