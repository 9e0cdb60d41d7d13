"""Filesystem repository for integrity and error reports."""
from __future__ import annotations

import logging
from pathlib import Path

from atc_checker.config import SETTINGS
from atc_checker.domain.results import ErrorReport, IntegrityReport

logger = logging.getLogger(__name__)


class FileSystemReportRepository:
    """Writes ``<stem>.txt`` reports next to the input or under a sibling folder.

    With ``report_dir_name=""`` reports land in the input's own directory.
    """

    def __init__(
        self,
        report_dir_name: str | None = None,
        error_suffix: str | None = None,
        extension: str | None = None,
    ) -> None:
        self._report_dir_name = SETTINGS.report_dir_name if report_dir_name is None else report_dir_name
        self._error_suffix = SETTINGS.error_suffix if error_suffix is None else error_suffix
        self._extension = extension or SETTINGS.report_extension

    def report_path(self, source: Path) -> Path:
        return self._target_dir(source) / f"{Path(source).stem}{self._extension}"

    def error_report_path(self, source: Path) -> Path:
        return self._target_dir(source) / f"{Path(source).stem}{self._error_suffix}{self._extension}"

    def save_report(self, source: Path, report: IntegrityReport) -> Path:
        target = self.report_path(source)
        self._write(target, report.to_text())
        return target

    def save_error_report(self, source: Path, report: ErrorReport) -> Path:
        target = self.error_report_path(source)
        self._write(target, report.to_text())
        return target

    def _target_dir(self, source: Path) -> Path:
        parent = Path(source).parent
        return parent / self._report_dir_name if self._report_dir_name else parent

    @staticmethod
    def _write(target: Path, text: str) -> None:
        logger.info("Writing report %s", target)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
