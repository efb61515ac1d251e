#!/usr/bin/env python3
"""Duplicate the source audio to ``<stem>_enriched<suffix>``."""
from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path

from errors import CopyFailed, DestinationUnresolvable

logger = logging.getLogger(__name__)

ENRICHED_SUFFIX = "_enriched"


@dataclass
class OutputFileCopier:
    suffix: str = ENRICHED_SUFFIX

    def destination_for(self, source: Path) -> Path:
        if not source.name or not source.stem:
            raise DestinationUnresolvable(source)
        return source.with_name(f"{source.stem}{self.suffix}{source.suffix}")

    def copy(self, source: Path) -> Path:
        """Copy ``source`` beside itself and return the new path."""
        destination = self.destination_for(source)
        try:
            shutil.copyfile(source, destination)
        except OSError as exc:
            raise CopyFailed(source, destination) from exc
        logger.info("Copied %s to %s", source, destination)
        return destination
