"""Per-minute reconciliation of the rows of a daily export.

Every row carries a ``HH:MM:SS`` time in its third field. Rows are bucketed
into the 1440 minutes of the day; the buckets then reveal missing minutes,
duplicated minutes, and minutes holding more rows than there are sectors.
The reconciler never removes lines from the working sequence.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, time
from enum import Enum
from typing import Iterator, Mapping, Sequence

from .errors import ExportParseError
from .fields import describe_line, split_fields
from .models import Line, ValidationOptions
from .results import CheckOutcome, ReportSection

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60
TIME_FIELD_INDEX = 2
TIME_FORMAT = "%H:%M:%S"
TIME_SHAPE = re.compile(r"[0-9]{2}:[0-9]{2}:[0-9]{2}")

MISSING_TITLE = "MISSING TIME SLOT"
DUPLICATE_TITLE = "DUPLICATE TIME SLOT"
OVERFLOW_TITLE = "TIME SLOT OVERFLOW"


class SlotPolicy(Enum):
    """How occupied minutes are judged after the missing-slot check."""

    DUPLICATE = "duplicate"
    OVERFLOW = "overflow"


def iter_minutes() -> Iterator[time]:
    for hour in range(24):
        for minute in range(60):
            yield time(hour, minute)


def format_minute(minute: time) -> str:
    return minute.strftime(TIME_FORMAT)


def parse_minute(line: Line) -> time:
    """Return the minute of ``line``'s time field, seconds dropped."""
    fields = split_fields(line.content)
    value = fields[TIME_FIELD_INDEX] if len(fields) > TIME_FIELD_INDEX else ""
    if not TIME_SHAPE.fullmatch(value):
        raise ExportParseError(line.address, value, "HH:MM:SS")
    try:
        parsed = datetime.strptime(value, TIME_FORMAT).time()
    except ValueError as exc:
        raise ExportParseError(line.address, value, "HH:MM:SS") from exc
    return parsed.replace(second=0)


@dataclass(frozen=True)
class TimeSlotMap:
    """Ordered mapping of all 1440 minutes to the lines that fall in them."""

    slots: Mapping[time, Sequence[Line]]

    @classmethod
    def build(cls, lines: Sequence[Line]) -> "TimeSlotMap":
        buckets: dict[time, list[Line]] = {minute: [] for minute in iter_minutes()}
        for line in lines:
            buckets[parse_minute(line)].append(line)
        return cls(slots={minute: tuple(bucket) for minute, bucket in buckets.items()})

    def __len__(self) -> int:
        return len(self.slots)

    def missing(self) -> list[time]:
        return [minute for minute, bucket in self.slots.items() if not bucket]

    def nonempty_count(self) -> int:
        return sum(1 for bucket in self.slots.values() if bucket)

    def duplicated(self) -> list[tuple[time, Sequence[Line]]]:
        return [(minute, bucket) for minute, bucket in self.slots.items() if len(bucket) > 1]

    def overflowing(self, capacity: int) -> list[tuple[time, Sequence[Line]]]:
        return [(minute, bucket) for minute, bucket in self.slots.items() if len(bucket) > capacity]


def reconcile_time_slots(
    lines: Sequence[Line],
    options: ValidationOptions,
    *,
    policy: SlotPolicy,
    capacity: int = 1,
) -> CheckOutcome:
    logger.info("Reconciling time slots (%s)", policy.value)
    slot_map = TimeSlotMap.build(lines)
    sections = [missing_section(slot_map, options)]
    if policy is SlotPolicy.DUPLICATE:
        sections.append(duplicate_section(slot_map, options))
    else:
        sections.append(overflow_section(slot_map, capacity, options))
    return CheckOutcome(kept=tuple(lines), sections=tuple(s for s in sections if s is not None))


def missing_section(slot_map: TimeSlotMap, options: ValidationOptions) -> ReportSection | None:
    missing = slot_map.missing()
    logger.debug("%d missing minutes", len(missing))
    if not missing:
        return ReportSection(MISSING_TITLE, ("No missing time slots",)) if options.detail else None
    entries = [format_minute(minute) for minute in missing]
    entries.append(f"Quantity: {len(missing)}")
    return ReportSection(MISSING_TITLE, tuple(entries), issue_count=len(missing))


def duplicate_section(slot_map: TimeSlotMap, options: ValidationOptions) -> ReportSection | None:
    duplicated = slot_map.duplicated()
    if not duplicated:
        return ReportSection(DUPLICATE_TITLE, ("No duplicate time slots",)) if options.detail else None
    entries: list[str] = []
    for minute, bucket in duplicated:
        entries.extend(f"{format_minute(minute)} - {describe_line(line)}" for line in bucket)
        entries.append("")
    return ReportSection(DUPLICATE_TITLE, tuple(entries), issue_count=len(duplicated))


def overflow_section(slot_map: TimeSlotMap, capacity: int, options: ValidationOptions) -> ReportSection | None:
    overflowing = slot_map.overflowing(capacity)
    if not overflowing:
        return ReportSection(OVERFLOW_TITLE, ("No time slot overflow",)) if options.detail else None
    entries: list[str] = []
    for minute, bucket in overflowing:
        entries.append(format_minute(minute))
        entries.extend(describe_line(line) for line in bucket)
    return ReportSection(OVERFLOW_TITLE, tuple(entries), issue_count=len(overflowing))
