"""Domain models for the export integrity pipeline.

These dataclasses capture the raw lines read from an export and the
per-run configuration that drives the checks.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Line:
    """A single line of an export file.

    ``address`` is the 1-based line number in the original file and never
    changes once the line is read.
    """

    address: int
    content: str


class Schema(Enum):
    """Record family of an export, chosen from the file name suffix."""

    DAILY_CONFIG = "config"
    SECTOR_CONFIG = "sect_config"
    FLIGHT_RECORD = "flights"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value


class FileStatus(Enum):
    READY = "Ready"
    VALIDATED = "Validated"
    ERROR = "Error"
    UNKNOWN_TYPE = "Unknown type"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ValidationOptions:
    """Per-run switches shared by every check."""

    detail: bool = False
    remove_inconsistencies: bool = False
