"""Application services orchestrating export validation."""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, Sequence

from atc_checker.application.dto import BatchRequest, BatchResult, ExportFile
from atc_checker.domain.errors import ExportReadError, UnsupportedExportError
from atc_checker.domain.models import FileStatus, Schema, ValidationOptions
from atc_checker.domain.repositories import LineSource, ReportRepository
from atc_checker.domain.results import ErrorReport, ValidationOutcome
from atc_checker.domain.services import IntegrityChecker
from atc_checker.infrastructure.reading.line_reader import TextLineSource
from atc_checker.infrastructure.storage.report_store import FileSystemReportRepository

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, ValidationOutcome], None]


@dataclass(slots=True)
class ExportValidationContext:
    line_source: LineSource = field(default_factory=TextLineSource)
    report_repository: ReportRepository = field(default_factory=FileSystemReportRepository)


class ValidateExportUseCase:
    """Validates one export file and persists its report.

    Read and parse failures never escape: they are turned into an error
    report and a failed outcome, so a batch can carry on with the next file.
    """

    def __init__(self, context: ExportValidationContext | None = None) -> None:
        self._context = context or ExportValidationContext()

    def execute(self, path: Path, options: ValidationOptions | None = None) -> ValidationOutcome:
        export = ExportFile(path)
        if export.schema is Schema.UNKNOWN:
            logger.warning("Unknown export type, skipping %s", export.path)
            return ValidationOutcome(path=export.path, schema=export.schema, status=FileStatus.UNKNOWN_TYPE)

        options = options or ValidationOptions()
        checker = IntegrityChecker(options)
        logger.info("Validating %s as %s", export.path, export.schema)

        try:
            lines = self._context.line_source.read_lines(export.path)
        except ExportReadError as exc:
            checker.fail()
            return self._fail(export, f"Exception while reading file {export.name}", exc)

        try:
            report = checker.check(export.name, export.schema, lines)
        except Exception as exc:
            return self._fail(export, f"Exception while processing file {export.name}", exc)

        try:
            report_path = self._context.report_repository.save_report(export.path, report)
        except OSError as exc:
            return self._fail(export, f"Error while writing the integrity report for {export.name}", exc)

        return ValidationOutcome(
            path=export.path,
            schema=export.schema,
            status=FileStatus.VALIDATED,
            report_path=report_path,
            report=report,
        )

    def _fail(self, export: ExportFile, message: str, exc: Exception) -> ValidationOutcome:
        logger.exception(message)
        error = ErrorReport(file_name=export.name, message=message, detail=str(exc))
        try:
            error_path = self._context.report_repository.save_error_report(export.path, error)
        except OSError:
            logger.exception("Could not write the error report for %s", export.name)
            error_path = None
        return ValidationOutcome(
            path=export.path,
            schema=export.schema,
            status=FileStatus.ERROR,
            report_path=error_path,
            error=error,
        )


def validate(path: Path | str, detail: bool = False, context: ExportValidationContext | None = None) -> bool:
    """Validate one export and write its report; ``True`` unless reading or parsing failed."""
    export = ExportFile(Path(path))
    if export.schema is Schema.UNKNOWN:
        raise UnsupportedExportError(f"Unrecognized export file name: {export.name}")
    outcome = ValidateExportUseCase(context).execute(export.path, ValidationOptions(detail=detail))
    return outcome.success


class ValidateBatchUseCase:
    """Validates many exports; one file's failure never stops the others.

    With ``max_workers`` above one the files run on a thread pool. Results
    are returned in input order either way.
    """

    def __init__(self, context: ExportValidationContext | None = None) -> None:
        self._single = ValidateExportUseCase(context)

    def execute(self, request: BatchRequest, progress: ProgressCallback | None = None) -> BatchResult:
        paths = [Path(p) for p in request.paths]
        total = len(paths)
        logger.info("Validating %d files with %d worker(s)", total, request.max_workers)

        if request.max_workers <= 1 or total <= 1:
            pending = (self._single.execute(path, request.options) for path in paths)
            return self._collect(pending, total, progress)

        with ThreadPoolExecutor(max_workers=request.max_workers) as executor:
            futures = [executor.submit(self._single.execute, path, request.options) for path in paths]
            return self._collect((future.result() for future in futures), total, progress)

    @staticmethod
    def _collect(pending: Iterable[ValidationOutcome], total: int, progress: ProgressCallback | None) -> BatchResult:
        outcomes: list[ValidationOutcome] = []
        for index, outcome in enumerate(pending, start=1):
            outcomes.append(outcome)
            if progress is not None:
                progress(index, total, outcome)
        return BatchResult(outcomes=tuple(outcomes))


def validate_batch(
    paths: Sequence[Path | str],
    options: ValidationOptions | None = None,
    max_workers: int = 1,
    progress: ProgressCallback | None = None,
    context: ExportValidationContext | None = None,
) -> BatchResult:
    request = BatchRequest(paths=[Path(p) for p in paths], options=options or ValidationOptions(), max_workers=max_workers)
    return ValidateBatchUseCase(context).execute(request, progress)
