from datetime import time

import pytest

from atc_checker.domain.errors import ExportParseError
from atc_checker.domain.models import Line, ValidationOptions
from atc_checker.domain.timeslots import (
    MINUTES_PER_DAY,
    SlotPolicy,
    TimeSlotMap,
    reconcile_time_slots,
)


def make_row(address: int, minute: str) -> Line:
    return Line(address, f'1;2;{minute};"5.120.3";5;3;120;CFG1')


def full_day() -> list[Line]:
    return [make_row(i + 1, f"{i // 60:02d}:{i % 60:02d}:00") for i in range(MINUTES_PER_DAY)]


def test_empty_input_yields_1440_missing_slots():
    slot_map = TimeSlotMap.build([])

    assert len(slot_map) == 1440
    assert len(slot_map.missing()) == 1440
    assert slot_map.nonempty_count() == 0


@pytest.mark.parametrize("count", [0, 1, 59, 720, 1440])
def test_missing_and_nonempty_always_sum_to_1440(count):
    slot_map = TimeSlotMap.build(full_day()[:count])

    assert len(slot_map.missing()) + slot_map.nonempty_count() == 1440
    assert slot_map.nonempty_count() == count


def test_seconds_are_truncated_to_the_minute():
    slot_map = TimeSlotMap.build([make_row(1, "00:05:30"), make_row(2, "00:05:59")])

    assert [line.address for line in slot_map.slots[time(0, 5)]] == [1, 2]
    assert slot_map.duplicated() == [(time(0, 5), slot_map.slots[time(0, 5)])]


@pytest.mark.parametrize("value", ["7h30", "0:5:0", "00:5:00", "1:02:03", "24:00:00", ""])
def test_unparsable_time_raises_parse_error(value):
    with pytest.raises(ExportParseError) as excinfo:
        TimeSlotMap.build([make_row(7, value)])

    assert excinfo.value.address == 7
    assert f"'{value}'" in str(excinfo.value)


def test_missing_minute_is_listed_with_quantity():
    lines = [line for line in full_day() if not line.content.startswith("1;2;00:05:00")]

    outcome = reconcile_time_slots(lines, ValidationOptions(), policy=SlotPolicy.DUPLICATE)

    missing = outcome.sections[0]
    assert missing.title == "MISSING TIME SLOT"
    assert missing.entries == ("00:05:00", "Quantity: 1")


def test_duplicates_list_every_line_followed_by_blank_separator():
    lines = full_day() + [make_row(2000, "10:00:00")]

    outcome = reconcile_time_slots(lines, ValidationOptions(), policy=SlotPolicy.DUPLICATE)

    assert len(outcome.sections) == 1
    duplicates = outcome.sections[0]
    assert duplicates.title == "DUPLICATE TIME SLOT"
    assert duplicates.entries[0].startswith("10:00:00 - Line  601 - ")
    assert duplicates.entries[1].startswith("10:00:00 - Line 2000 - ")
    assert duplicates.entries[2] == ""
    assert duplicates.issue_count == 1


def test_overflow_keeps_every_line_in_the_working_sequence():
    lines = [make_row(i, "00:00:00") for i in range(1, 22)]

    outcome = reconcile_time_slots(lines, ValidationOptions(), policy=SlotPolicy.OVERFLOW, capacity=20)

    assert outcome.kept == tuple(lines)
    overflow = outcome.sections[-1]
    assert overflow.title == "TIME SLOT OVERFLOW"
    assert overflow.entries[0] == "00:00:00"
    assert len(overflow.entries) == 22
    assert overflow.entries[1] == f"Line    1 - {lines[0].content}"


def test_overflow_at_capacity_is_not_reported():
    lines = [make_row(i, "00:00:00") for i in range(1, 21)]

    outcome = reconcile_time_slots(lines, ValidationOptions(), policy=SlotPolicy.OVERFLOW, capacity=20)

    assert [s.title for s in outcome.sections] == ["MISSING TIME SLOT"]


def test_detail_mode_reports_clean_checks():
    outcome = reconcile_time_slots(full_day(), ValidationOptions(detail=True), policy=SlotPolicy.DUPLICATE)

    assert [(s.title, s.entries) for s in outcome.sections] == [
        ("MISSING TIME SLOT", ("No missing time slots",)),
        ("DUPLICATE TIME SLOT", ("No duplicate time slots",)),
    ]
