"""Domain-level results for export validation."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Sequence

from .models import FileStatus, Line, Schema

REPORT_TITLE = "INTEGRITY REPORT"
ERROR_REPORT_TITLE = "ERROR REPORT"
CLEAN_SENTINEL = "OK"


@dataclass(frozen=True)
class ReportSection:
    """A titled block of the integrity report.

    ``issue_count`` is zero for the status-only sections emitted in detail
    mode when a check found nothing.
    """

    title: str
    entries: Sequence[str] = field(default_factory=tuple)
    issue_count: int = 0

    def render(self) -> list[str]:
        lines = ["", self.title]
        lines.extend(f"\t{entry}" if entry else "" for entry in self.entries)
        return lines


@dataclass(frozen=True)
class CheckOutcome:
    """What a single check hands back to the assembler.

    ``kept`` is the working line sequence for the next check; ``removed``
    holds the lines this check excluded, in their original order.
    """

    kept: Sequence[Line]
    removed: Sequence[Line] = field(default_factory=tuple)
    sections: Sequence[ReportSection] = field(default_factory=tuple)


@dataclass(frozen=True)
class IntegrityReport:
    file_name: str
    schema: Schema
    sections: Sequence[ReportSection] = field(default_factory=tuple)

    def has_issues(self) -> bool:
        return any(section.issue_count for section in self.sections)

    def sections_with_issues(self) -> tuple[ReportSection, ...]:
        return tuple(section for section in self.sections if section.issue_count)

    def iter_body(self) -> Iterable[str]:
        for section in self.sections:
            yield from section.render()

    def render(self) -> list[str]:
        body = list(self.iter_body())
        if not body:
            body = [CLEAN_SENTINEL]
        return [REPORT_TITLE, self.file_name, *body]

    def to_text(self) -> str:
        return "\n".join(self.render()) + "\n"


@dataclass(frozen=True)
class ErrorReport:
    file_name: str
    message: str
    detail: str

    def render(self) -> list[str]:
        return [ERROR_REPORT_TITLE, self.file_name, self.message, self.detail]

    def to_text(self) -> str:
        return "\n".join(self.render()) + "\n"


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of validating one export, as seen by the caller."""

    path: Path
    schema: Schema
    status: FileStatus
    report_path: Path | None = None
    report: IntegrityReport | None = None
    error: ErrorReport | None = None

    @property
    def success(self) -> bool:
        return self.status is FileStatus.VALIDATED

    def report_text(self) -> str:
        if self.report is not None:
            return self.report.to_text()
        if self.error is not None:
            return self.error.to_text()
        return ""
