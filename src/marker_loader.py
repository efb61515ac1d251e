#!/usr/bin/env python3
"""Load Audition marker exports (tab-separated, header row)."""
from __future__ import annotations

import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List

from errors import MarkerFileInvalid
from marker import MarkerRecord

NAME_COLUMN = "Name"
START_COLUMN = "Start"
DURATION_COLUMN = "Duration"


@dataclass
class MarkerLoader:
    delimiter: str = "\t"

    def load(self, path: Path) -> List[MarkerRecord]:
        try:
            rows = self._read_rows(path)
        except (OSError, UnicodeDecodeError, csv.Error) as exc:
            raise MarkerFileInvalid(path, str(exc)) from exc

        markers = [self._to_marker(path, line_no, row) for line_no, row in rows]
        if not markers:
            raise MarkerFileInvalid(path, "no markers found")
        logging.info("Loaded %d markers from %s", len(markers), path)
        return markers

    def _read_rows(self, path: Path) -> List[tuple[int, Dict]]:
        rows: List[tuple[int, Dict]] = []
        # utf-8-sig drops the BOM some exports start with.
        with path.open(newline="", encoding="utf-8-sig") as f:
            reader = csv.DictReader(f, delimiter=self.delimiter)
            fieldnames = [name.strip() for name in reader.fieldnames or []]
            for column in (NAME_COLUMN, START_COLUMN):
                if column not in fieldnames:
                    raise MarkerFileInvalid(path, f"missing {column} column")
            reader.fieldnames = fieldnames
            for row in reader:
                rows.append((reader.line_num, row))
        return rows

    def _to_marker(self, path: Path, line_no: int, row: Dict) -> MarkerRecord:
        # DictReader files surplus cells under None and pads short rows with None.
        if None in row or any(value is None for value in row.values()):
            raise MarkerFileInvalid(path, f"line {line_no}: wrong number of fields")
        name = row[NAME_COLUMN].strip()
        start = row[START_COLUMN].strip()
        if ":" not in start or "." not in start:
            raise MarkerFileInvalid(path, f"line {line_no}: bad start {start!r}")
        duration = (row.get(DURATION_COLUMN) or "").strip()
        return MarkerRecord(name=name, start=start, duration=duration)
