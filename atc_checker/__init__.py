"""Integrity validation toolkit for ATC export files."""
from atc_checker.application.dto import BatchRequest, BatchResult, ExportFile
from atc_checker.application.use_cases import (
    ExportValidationContext,
    ValidateBatchUseCase,
    ValidateExportUseCase,
    validate,
    validate_batch,
)
from atc_checker.domain.models import FileStatus, Line, Schema, ValidationOptions
from atc_checker.domain.services import IntegrityChecker

__all__ = [
    "BatchRequest",
    "BatchResult",
    "ExportFile",
    "ExportValidationContext",
    "FileStatus",
    "IntegrityChecker",
    "Line",
    "Schema",
    "ValidateBatchUseCase",
    "ValidateExportUseCase",
    "ValidationOptions",
    "validate",
    "validate_batch",
]
