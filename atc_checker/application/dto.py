"""Application-level DTOs for export validation."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from atc_checker.domain.models import FileStatus, Schema, ValidationOptions
from atc_checker.domain.results import ValidationOutcome
from atc_checker.domain.schemas import detect_schema


@dataclass
class ExportFile:
    """An input file queued for validation; the schema comes from its name."""

    path: Path
    schema: Schema = field(init=False)
    status: FileStatus = field(init=False)

    def __post_init__(self) -> None:
        self.path = Path(self.path)
        self.schema = detect_schema(self.path.name)
        self.status = FileStatus.UNKNOWN_TYPE if self.schema is Schema.UNKNOWN else FileStatus.READY

    @property
    def name(self) -> str:
        return self.path.name


@dataclass(slots=True, frozen=True)
class BatchRequest:
    paths: Sequence[Path]
    options: ValidationOptions = field(default_factory=ValidationOptions)
    max_workers: int = 1


@dataclass(slots=True, frozen=True)
class BatchResult:
    outcomes: Sequence[ValidationOutcome]

    @property
    def failed(self) -> tuple[ValidationOutcome, ...]:
        return tuple(o for o in self.outcomes if o.status is FileStatus.ERROR)

    @property
    def skipped(self) -> tuple[ValidationOutcome, ...]:
        return tuple(o for o in self.outcomes if o.status is FileStatus.UNKNOWN_TYPE)

    def all_succeeded(self) -> bool:
        return not self.failed
