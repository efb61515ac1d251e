from dataclasses import dataclass


@dataclass(frozen=True)
class ChapterFrame:
    id: str
    start_ms: int
    end_ms: int
    title: str
