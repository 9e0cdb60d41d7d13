"""Repository interfaces anchoring the domain layer."""
from __future__ import annotations

from pathlib import Path
from typing import Protocol, Sequence

from .models import Line
from .results import ErrorReport, IntegrityReport


class LineSource(Protocol):
    """Turns an export file into its ordered, addressed lines."""

    def read_lines(self, path: Path) -> Sequence[Line]:
        ...


class ReportRepository(Protocol):
    """Persists the report produced for an export."""

    def save_report(self, source: Path, report: IntegrityReport) -> Path:
        ...

    def save_error_report(self, source: Path, report: ErrorReport) -> Path:
        ...
