"""Schema descriptors: header, field count, and ordered checks per export."""
from __future__ import annotations

from dataclasses import dataclass, field
from functools import partial
from typing import Callable, Mapping, Sequence

from .consistency import check_assistant_count, check_controller_count
from .errors import UnsupportedExportError
from .fields import field_count
from .filters import check_line_count, filter_blank_fields, filter_field_count, locate_header
from .flight_fields import validate_rows
from .models import Line, Schema, ValidationOptions
from .results import CheckOutcome
from .timeslots import MINUTES_PER_DAY, SlotPolicy, reconcile_time_slots

Check = Callable[[Sequence[Line], ValidationOptions], CheckOutcome]

DAILY_CONFIG_HEADER = "week;day;time;config_id;QTD_CTR;QTD_ASS;MOV;SECT_CONFIG"
SECTOR_CONFIG_HEADER = "week;day;time;config_id;CTR;ASS;SETOR;QTD_CTR;QTD_ASS;MOV_ATCO;MOV_SET;SECT_CONFIG"
FLIGHT_RECORD_HEADER = "timestamp;config_id;sect_config;CTR;ASS;sector;#sectors;#ASS;CALLSIGN;ADEP;ADES;DOF;EOBT;SSR;flrul;"

SECTOR_CODES = (
    "S01", "S02", "S03", "S04", "S05", "S06", "S6F", "S07", "S08", "S09",
    "S10", "S11", "S12", "S13", "S14", "S15", "S16", "S17", "S18", "18F",
)


@dataclass(frozen=True)
class SchemaDescriptor:
    schema: Schema
    suffix: str
    header: str
    expected_field_count: int
    filters: Sequence[Check] = field(default_factory=tuple)
    schema_checks: Sequence[Check] = field(default_factory=tuple)

    @property
    def checks(self) -> tuple[Check, ...]:
        return (*self.filters, *self.schema_checks)


def _structural_filters(header: str, expected: int, blank_filter: bool = True) -> tuple[Check, ...]:
    filters: list[Check] = [
        partial(locate_header, header=header),
        partial(filter_field_count, expected=expected),
    ]
    if blank_filter:
        filters.append(filter_blank_fields)
    return tuple(filters)


def _daily_config() -> SchemaDescriptor:
    expected = field_count(DAILY_CONFIG_HEADER)
    return SchemaDescriptor(
        schema=Schema.DAILY_CONFIG,
        suffix="_config.csv",
        header=DAILY_CONFIG_HEADER,
        expected_field_count=expected,
        filters=_structural_filters(DAILY_CONFIG_HEADER, expected),
        schema_checks=(
            partial(check_line_count, expected=MINUTES_PER_DAY),
            partial(reconcile_time_slots, policy=SlotPolicy.DUPLICATE),
        ),
    )


def _sector_config() -> SchemaDescriptor:
    expected = field_count(SECTOR_CONFIG_HEADER)
    return SchemaDescriptor(
        schema=Schema.SECTOR_CONFIG,
        suffix="_sect_config.csv",
        header=SECTOR_CONFIG_HEADER,
        expected_field_count=expected,
        filters=_structural_filters(SECTOR_CONFIG_HEADER, expected),
        schema_checks=(
            partial(reconcile_time_slots, policy=SlotPolicy.OVERFLOW, capacity=len(SECTOR_CODES)),
            check_controller_count,
            check_assistant_count,
        ),
    )


def _flight_record() -> SchemaDescriptor:
    expected = field_count(FLIGHT_RECORD_HEADER)
    # Flight rows may leave EOBT empty, so blank fields are not filtered.
    return SchemaDescriptor(
        schema=Schema.FLIGHT_RECORD,
        suffix="_flights.csv",
        header=FLIGHT_RECORD_HEADER,
        expected_field_count=expected,
        filters=_structural_filters(FLIGHT_RECORD_HEADER, expected, blank_filter=False),
        schema_checks=(partial(validate_rows, expected_fields=expected),),
    )


SCHEMAS: Mapping[Schema, SchemaDescriptor] = {
    descriptor.schema: descriptor for descriptor in (_daily_config(), _sector_config(), _flight_record())
}

# Longest suffix first: "_sect_config.csv" also ends with "_config.csv".
_SUFFIX_ORDER = sorted(SCHEMAS.values(), key=lambda d: len(d.suffix), reverse=True)


def detect_schema(file_name: str) -> Schema:
    lowered = file_name.lower()
    for descriptor in _SUFFIX_ORDER:
        if lowered.endswith(descriptor.suffix):
            return descriptor.schema
    return Schema.UNKNOWN


def get_descriptor(schema: Schema) -> SchemaDescriptor:
    try:
        return SCHEMAS[schema]
    except KeyError:
        raise UnsupportedExportError(f"No checks are defined for schema {schema}") from None
