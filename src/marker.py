from dataclasses import dataclass


@dataclass(frozen=True)
class MarkerRecord:
    """One row of an Audition marker export."""

    name: str
    start: str
    duration: str = ""
