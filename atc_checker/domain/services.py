"""Domain services assembling the integrity report of one export."""
from __future__ import annotations

import logging
from enum import Enum
from typing import Sequence

from .models import Line, Schema, ValidationOptions
from .results import IntegrityReport, ReportSection
from .schemas import Check, SchemaDescriptor, get_descriptor

logger = logging.getLogger(__name__)


class PipelineState(Enum):
    READING = "reading"
    FILTERING = "filtering"
    SCHEMA_CHECKS = "schema_checks"
    ASSEMBLING = "assembling"
    DONE = "done"
    FAILED = "failed"


class IntegrityChecker:
    """Runs the ordered checks of a schema over one file's lines.

    Each check receives the lines kept by the previous one; the order is part
    of the contract since every filter narrows the input of the next.
    """

    def __init__(self, options: ValidationOptions | None = None) -> None:
        self._options = options or ValidationOptions()
        self.state = PipelineState.READING

    @property
    def options(self) -> ValidationOptions:
        return self._options

    def check(self, file_name: str, schema: Schema, lines: Sequence[Line]) -> IntegrityReport:
        descriptor = get_descriptor(schema)
        try:
            sections = self._run_checks(descriptor, lines)
        except Exception:
            self._enter(PipelineState.FAILED)
            raise
        self._enter(PipelineState.ASSEMBLING)
        report = IntegrityReport(file_name=file_name, schema=schema, sections=tuple(sections))
        self._enter(PipelineState.DONE)
        return report

    def fail(self) -> None:
        self._enter(PipelineState.FAILED)

    def _run_checks(self, descriptor: SchemaDescriptor, lines: Sequence[Line]) -> list[ReportSection]:
        working: tuple[Line, ...] = tuple(lines)
        sections: list[ReportSection] = []

        self._enter(PipelineState.FILTERING)
        for check in descriptor.filters:
            working = self._apply(check, working, sections)

        self._enter(PipelineState.SCHEMA_CHECKS)
        for check in descriptor.schema_checks:
            working = self._apply(check, working, sections)
        logger.info("%d lines survived the checks of %s", len(working), descriptor.schema)
        return sections

    def _apply(self, check: Check, working: tuple[Line, ...], sections: list[ReportSection]) -> tuple[Line, ...]:
        outcome = check(working, self._options)
        sections.extend(outcome.sections)
        return tuple(outcome.kept)

    def _enter(self, state: PipelineState) -> None:
        logger.debug("Pipeline state %s -> %s", self.state.value, state.value)
        self.state = state
