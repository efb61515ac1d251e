#!/usr/bin/env python3
"""Load presquile defaults from presquile.yaml."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Type, TypeVar

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from audio_probe import ProbeBackend
from chapter_builder import ChapterEnd
from time_code import TimeCodeStyle

CONFIG_NAME = "presquile.yaml"
DEFAULT_LOG_LEVEL = "INFO"


class Mode(Enum):
    SEQUENTIAL = "sequential"
    PARALLEL = "parallel"


E = TypeVar("E", bound=Enum)


def _enum_value(enum_type: Type[E], data: dict, key: str, default: E, config_path: Path) -> E:
    raw = data.get(key, default.value)
    try:
        return enum_type(raw)
    except (ValueError, TypeError) as exc:
        choices = ", ".join(member.value for member in enum_type)
        raise RuntimeError(f"Invalid {key} in {config_path}: {raw!r} (expected one of {choices})") from exc


@dataclass
class PresquileConfig:
    mode: Mode = Mode.SEQUENTIAL
    time_format: TimeCodeStyle = TimeCodeStyle.LENIENT
    chapter_end: ChapterEnd = ChapterEnd.NEXT_START
    probe: ProbeBackend = ProbeBackend.MUTAGEN
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: Path | None = None

    @classmethod
    def default(cls) -> "PresquileConfig":
        return cls()

    @classmethod
    def load(cls, config_path: Path | None = None) -> "PresquileConfig":
        config_path = config_path or Path.cwd() / CONFIG_NAME
        if not config_path.exists():
            return cls.default()
        yml = YAML(typ="safe", pure=True)
        try:
            data = yml.load(config_path.read_text(encoding="utf-8")) or {}
        except YAMLError as exc:
            raise RuntimeError(f"Invalid YAML in {config_path}: {exc}") from exc
        if not isinstance(data, dict):
            raise RuntimeError(f"Invalid {CONFIG_NAME} format: {config_path}")

        log_level = data.get("log_level", DEFAULT_LOG_LEVEL)
        if not isinstance(log_level, str) or not isinstance(logging.getLevelName(log_level.upper()), int):
            raise RuntimeError(f"Invalid log_level in {config_path}: {log_level!r}")
        log_file = data.get("log_file")
        if log_file is not None and not isinstance(log_file, str):
            raise RuntimeError(f"Invalid log_file in {config_path}: {log_file!r}")

        return cls(
            mode=_enum_value(Mode, data, "mode", Mode.SEQUENTIAL, config_path),
            time_format=_enum_value(TimeCodeStyle, data, "time_format", TimeCodeStyle.LENIENT, config_path),
            chapter_end=_enum_value(ChapterEnd, data, "chapter_end", ChapterEnd.NEXT_START, config_path),
            probe=_enum_value(ProbeBackend, data, "probe", ProbeBackend.MUTAGEN, config_path),
            log_level=log_level.upper(),
            log_file=Path(log_file) if log_file else None,
        )
