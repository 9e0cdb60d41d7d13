"""Structural filters applied before the schema-specific checks.

Each filter partitions the working sequence into kept and removed lines
instead of mutating it; the kept lines become the next check's input.
"""
from __future__ import annotations

import logging
from typing import Callable, Sequence

from .fields import describe_lines, field_count, has_blank_field
from .models import Line, ValidationOptions
from .results import CheckOutcome, ReportSection

logger = logging.getLogger(__name__)

HEADER_TITLE = "HEADER"
FIELD_COUNT_TITLE = "FIELD COUNT MISMATCH"
BLANK_FIELD_TITLE = "BLANK FIELD"
LINE_COUNT_TITLE = "LINE COUNT"
NO_LINES_FILTERED = "No lines filtered"


def partition(lines: Sequence[Line], reject: Callable[[Line], bool]) -> tuple[tuple[Line, ...], tuple[Line, ...]]:
    kept: list[Line] = []
    removed: list[Line] = []
    for line in lines:
        (removed if reject(line) else kept).append(line)
    return tuple(kept), tuple(removed)


def locate_header(lines: Sequence[Line], options: ValidationOptions, *, header: str) -> CheckOutcome:
    """Remove every line equal to ``header``.

    The section is only reported in detail mode; a missing header is not an
    error on its own.
    """
    logger.info("Locating header")
    kept, removed = partition(lines, lambda line: line.content == header)
    for line in removed:
        logger.debug("Header found at line %d", line.address)

    if not options.detail:
        return CheckOutcome(kept=kept, removed=removed)

    entries = describe_lines(removed) or ["Header not found"]
    section = ReportSection(HEADER_TITLE, tuple(entries), issue_count=0 if removed else 1)
    return CheckOutcome(kept=kept, removed=removed, sections=(section,))


def filter_field_count(lines: Sequence[Line], options: ValidationOptions, *, expected: int) -> CheckOutcome:
    logger.info("Checking field count (expected %d)", expected)
    kept, removed = partition(lines, lambda line: field_count(line.content) != expected)
    section = _filtered_section(FIELD_COUNT_TITLE, removed, options, total_label="Filtered lines")
    return CheckOutcome(kept=kept, removed=removed, sections=section)


def filter_blank_fields(lines: Sequence[Line], options: ValidationOptions) -> CheckOutcome:
    logger.info("Checking blank fields")
    kept, removed = partition(lines, lambda line: has_blank_field(line.content))
    section = _filtered_section(BLANK_FIELD_TITLE, removed, options, total_label="Filtered")
    return CheckOutcome(kept=kept, removed=removed, sections=section)


def check_line_count(lines: Sequence[Line], options: ValidationOptions, *, expected: int) -> CheckOutcome:
    """Compare the number of surviving lines with ``expected``; never removes."""
    found = len(lines)
    logger.info("Checking line count (expected %d, found %d)", expected, found)
    kept = tuple(lines)
    if found == expected:
        if not options.detail:
            return CheckOutcome(kept=kept)
        return CheckOutcome(kept=kept, sections=(ReportSection(LINE_COUNT_TITLE, ("Result: OK",)),))

    difference = found - expected
    if difference > 0:
        summary = f"Difference: {difference} more lines"
    else:
        summary = f"Difference: {-difference} fewer lines"
    entries = (f"Expected: {expected} lines", f"Found: {found} lines", summary)
    return CheckOutcome(kept=kept, sections=(ReportSection(LINE_COUNT_TITLE, entries, issue_count=1),))


def _filtered_section(
    title: str,
    removed: Sequence[Line],
    options: ValidationOptions,
    total_label: str,
) -> tuple[ReportSection, ...]:
    if not removed and not options.detail:
        return ()
    if not removed:
        return (ReportSection(title, (NO_LINES_FILTERED,)),)
    entries = describe_lines(removed)
    entries.append(f"{total_label}: {len(removed)}")
    return (ReportSection(title, tuple(entries), issue_count=len(removed)),)
