#!/usr/bin/env python3
"""Wrap chapter frames into a tag with a table of contents."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from chapter import ChapterFrame

TOC_ID = "toc"
TOC_TITLE = "chapters-chapz"


@dataclass(frozen=True)
class TableOfContentsFrame:
    elements: List[str]
    id: str = TOC_ID
    title: str = TOC_TITLE
    ordered: bool = True
    top_level: bool = True


@dataclass(frozen=True)
class Tag:
    toc: TableOfContentsFrame
    chapters: List[ChapterFrame] = field(default_factory=list)


class TagAssembler:
    def assemble(self, chapters: List[ChapterFrame]) -> Tag:
        toc = TableOfContentsFrame(elements=[chapter.id for chapter in chapters])
        return Tag(toc=toc, chapters=list(chapters))
