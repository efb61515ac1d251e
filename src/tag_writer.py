#!/usr/bin/env python3
"""Write and read ID3v2.4 chapter (CHAP) and table-of-contents (CTOC) frames."""
from __future__ import annotations

import logging
import struct
from dataclasses import dataclass
from pathlib import Path

from mutagen import MutagenError
from mutagen.id3 import CHAP, CTOC, ID3, TIT2, CTOCFlags, Encoding, ID3NoHeaderError

from chapter import ChapterFrame
from errors import TagWriteFailed
from tag_assembler import TOC_ID, TableOfContentsFrame, Tag

# "No byte offset" marker for CHAP start/end offsets.
NO_OFFSET = 0xFFFFFFFF
ID3_VERSION = 4


def _title_frame(title: str) -> TIT2:
    return TIT2(encoding=Encoding.UTF8, text=[title])


def _title_of(frame) -> str:
    titles = frame.sub_frames.getall("TIT2")
    return str(titles[0].text[0]) if titles and titles[0].text else ""


@dataclass
class Id3TagWriter:
    """Replace the ID3v2 tag of ``path`` with the assembled chapter tag."""

    version: int = ID3_VERSION

    def write(self, tag: Tag, path: Path) -> None:
        id3 = ID3()
        for chapter in tag.chapters:
            id3.add(
                CHAP(
                    element_id=chapter.id,
                    start_time=chapter.start_ms,
                    end_time=chapter.end_ms,
                    start_offset=NO_OFFSET,
                    end_offset=NO_OFFSET,
                    sub_frames=[_title_frame(chapter.title)],
                )
            )
        flags = 0
        if tag.toc.top_level:
            flags |= CTOCFlags.TOP_LEVEL
        if tag.toc.ordered:
            flags |= CTOCFlags.ORDERED
        id3.add(
            CTOC(
                element_id=tag.toc.id,
                flags=flags,
                child_element_ids=list(tag.toc.elements),
                sub_frames=[_title_frame(tag.toc.title)],
            )
        )
        try:
            id3.save(path, v2_version=self.version)
        except (MutagenError, OSError, ValueError, OverflowError, struct.error) as exc:
            raise TagWriteFailed(path, str(exc)) from exc
        logging.info("Wrote %d chapters to %s", len(tag.chapters), path)


def read_tag(path: Path) -> Tag | None:
    """Read chapters back from ``path``; None when it carries no chapter tag."""
    try:
        id3 = ID3(path)
    except ID3NoHeaderError:
        return None
    chapters = [
        ChapterFrame(id=frame.element_id, start_ms=frame.start_time, end_ms=frame.end_time, title=_title_of(frame))
        for frame in id3.getall("CHAP")
    ]
    tocs = id3.getall("CTOC")
    if not tocs:
        return None
    toc_frame = next((t for t in tocs if t.element_id == TOC_ID), tocs[0])
    toc = TableOfContentsFrame(
        elements=list(toc_frame.child_element_ids),
        id=toc_frame.element_id,
        title=_title_of(toc_frame),
        ordered=bool(toc_frame.flags & CTOCFlags.ORDERED),
        top_level=bool(toc_frame.flags & CTOCFlags.TOP_LEVEL),
    )
    return Tag(toc=toc, chapters=chapters)
