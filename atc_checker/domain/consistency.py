"""Cross-field checks for sector configuration rows.

``config_id`` is a quoted triple ``"<sectorSpan>.<movement>.<assistantCount>"``.
Its first part must match the controller count column and its third part
the assistant count column of the same row.
"""
from __future__ import annotations

import logging
from typing import Sequence

from .fields import describe_line, split_fields
from .models import Line, ValidationOptions
from .results import CheckOutcome, ReportSection

logger = logging.getLogger(__name__)

CONTROLLER_TITLE = "CONTROLLER COUNT MISMATCH"
ASSISTANT_TITLE = "ASSISTANT COUNT MISMATCH"

CONFIG_ID_INDEX = 3
CONTROLLER_COUNT_INDEX = 7
ASSISTANT_COUNT_INDEX = 8
CONTROLLER_PART = 0
ASSISTANT_PART = 2


def config_id_parts(config_id: str) -> list[str]:
    return [part.replace('"', "") for part in config_id.split(".")]


def _part_matches(fields: Sequence[str], part_index: int, column_index: int) -> bool:
    if len(fields) <= max(CONFIG_ID_INDEX, column_index):
        return False
    parts = config_id_parts(fields[CONFIG_ID_INDEX])
    if len(parts) <= part_index:
        return False
    return parts[part_index] == fields[column_index]


def _check_config_id_part(
    lines: Sequence[Line],
    options: ValidationOptions,
    title: str,
    part_index: int,
    column_index: int,
) -> CheckOutcome:
    mismatched = [line for line in lines if not _part_matches(split_fields(line.content), part_index, column_index)]
    logger.info("%s: %d lines", title, len(mismatched))

    if options.remove_inconsistencies and mismatched:
        rejected = set(mismatched)
        kept = tuple(line for line in lines if line not in rejected)
        removed = tuple(mismatched)
    else:
        kept, removed = tuple(lines), ()

    if not mismatched:
        sections = (ReportSection(title, ("No lines with errors",)),) if options.detail else ()
        return CheckOutcome(kept=kept, removed=removed, sections=sections)

    entries = tuple(describe_line(line) for line in mismatched)
    return CheckOutcome(kept=kept, removed=removed, sections=(ReportSection(title, entries, issue_count=len(mismatched)),))


def check_controller_count(lines: Sequence[Line], options: ValidationOptions) -> CheckOutcome:
    return _check_config_id_part(lines, options, CONTROLLER_TITLE, CONTROLLER_PART, CONTROLLER_COUNT_INDEX)


def check_assistant_count(lines: Sequence[Line], options: ValidationOptions) -> CheckOutcome:
    return _check_config_id_part(lines, options, ASSISTANT_TITLE, ASSISTANT_PART, ASSISTANT_COUNT_INDEX)
