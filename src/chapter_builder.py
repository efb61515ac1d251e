#!/usr/bin/env python3
"""Build chapter boundaries from ordered markers and the track duration."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List

from chapter import ChapterFrame
from errors import EmptyMarkerList
from marker import MarkerRecord
from time_code import TimeCodeStyle, parse_time_code


class ChapterEnd(Enum):
    NEXT_START = "next-start"
    DURATION = "duration"


@dataclass
class ChapterBuilder:
    """Create one ChapterFrame per marker, in marker order."""

    markers: List[MarkerRecord]
    total_duration_ms: int
    time_code_style: TimeCodeStyle = TimeCodeStyle.LENIENT
    chapter_end: ChapterEnd = ChapterEnd.NEXT_START

    def build(self) -> List[ChapterFrame]:
        if not self.markers:
            raise EmptyMarkerList()
        starts = [parse_time_code(m.start, self.time_code_style) for m in self.markers]

        chapters: List[ChapterFrame] = []
        for index, marker in enumerate(self.markers):
            chapters.append(
                ChapterFrame(
                    id=str(index),
                    start_ms=starts[index],
                    end_ms=self._end_ms(index, starts),
                    title=marker.name,
                )
            )
        logging.debug("Built %d chapters ending at %d ms", len(chapters), self.total_duration_ms)
        return chapters

    def _end_ms(self, index: int, starts: List[int]) -> int:
        duration = self.markers[index].duration
        if self.chapter_end is ChapterEnd.DURATION and duration:
            length = parse_time_code(duration, self.time_code_style)
            # Audition writes 0:00.000 for point (cue) markers.
            if length > 0:
                return min(starts[index] + length, self.total_duration_ms)
        if index + 1 < len(starts):
            return starts[index + 1]
        return self.total_duration_ms
