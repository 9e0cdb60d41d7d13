"""Per-field validation of flight records.

Every field of a flight row is checked against a fixed rule table. A failing
field yields a ``|<label>: <value>|`` token; the tokens of a row are joined
together and a row without tokens is valid. This check never removes rows.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Sequence

from .fields import is_blank, split_fields
from .models import Line, ValidationOptions
from .results import CheckOutcome, ReportSection

logger = logging.getLogger(__name__)

INVALID_FIELD_TITLE = "INVALID FIELD"
DATE_LENGTH = 10
TIMESTAMP_SEPARATORS = (" ", "T")
BLANK_VALUE = "empty field"


@dataclass(frozen=True)
class FieldRule:
    label: str
    pattern: re.Pattern[str] | None
    allow_blank: bool = False

    def check(self, value: str) -> str:
        """Return the error token for ``value``, or an empty string."""
        if self.pattern is None:
            return ""
        if is_blank(value):
            return "" if self.allow_blank else f"|{self.label}: {BLANK_VALUE}|"
        if self.pattern.fullmatch(value) is None:
            return f"|{self.label}: {value}|"
        return ""


def _rule(label: str, regex: str | None, allow_blank: bool = False) -> FieldRule:
    return FieldRule(label, re.compile(regex) if regex is not None else None, allow_blank)


DATE_RULE = _rule("date", r"[0-9]{4}-(0[1-9]|1[0-2])-(0[1-9]|[12][0-9]|3[01])")
TIME_RULE = _rule("time", r"([01][0-9]|2[0-3]):[0-5][0-9]:[0-5][0-9]")

# Rules for fields 1..14; field 0 (timestamp) is split into DATE_RULE and TIME_RULE.
FIELD_RULES: tuple[FieldRule, ...] = (
    _rule("config_id", r'"([2-9]|1[0-8])\.[0-9]{1,5}\.([0-9]|1[0-8])"'),
    _rule("sect_config", None),
    _rule("CTR", r'"CTR([01][0-9]|2[01])"'),
    _rule("ASS", r'"(ASS([01][0-9]|2[01]))?"'),
    _rule("sector", r'"(S0[1-9]|S1[0-8]|S6F|18F)"'),
    _rule("sector_count", r"[1-9]|1[0-8]"),
    _rule("assistant_count", r"[0-9]|1[0-8]"),
    _rule("callsign", r"[A-Za-z0-9]{4,7}"),
    _rule("ADEP", r"[A-Z]{2}[A-Z0-9]{2}"),
    _rule("ADES", r"[A-Z]{2}[A-Z0-9]{2}"),
    _rule("DOF", r"[0-9]{6}"),
    _rule("EOBT", r"([01][0-9]|2[0-3])[0-5][0-9]", allow_blank=True),
    _rule("SSR", r"A[0-7]{4}"),
    _rule("flrul", r"[IVYZ]"),
)

FLIGHT_FIELD_COUNT = len(FIELD_RULES) + 1


def split_timestamp(value: str) -> tuple[str, str]:
    date_part, time_part = value[:DATE_LENGTH], value[DATE_LENGTH:]
    if time_part[:1] in TIMESTAMP_SEPARATORS:
        time_part = time_part[1:]
    return date_part, time_part


def validate_row(content: str, expected_fields: int = FLIGHT_FIELD_COUNT) -> str:
    """Return the concatenated error tokens for one flight row."""
    fields = split_fields(content)
    if len(fields) != expected_fields:
        return f"Wrong field count. Expected {expected_fields}, found {len(fields)}"

    date_part, time_part = split_timestamp(fields[0])
    tokens = [DATE_RULE.check(date_part), TIME_RULE.check(time_part)]
    tokens.extend(rule.check(value) for rule, value in zip(FIELD_RULES, fields[1:]))
    return "".join(tokens)


def validate_rows(
    lines: Sequence[Line],
    options: ValidationOptions,
    *,
    expected_fields: int = FLIGHT_FIELD_COUNT,
) -> CheckOutcome:
    logger.info("Validating flight fields of %d rows", len(lines))
    invalid: list[tuple[Line, str]] = []
    for line in lines:
        errors = validate_row(line.content, expected_fields)
        if errors:
            logger.debug("Line %d invalid: %s", line.address, errors)
            invalid.append((line, errors))

    kept = tuple(lines)
    if not invalid:
        if not options.detail:
            return CheckOutcome(kept=kept)
        return CheckOutcome(kept=kept, sections=(ReportSection(INVALID_FIELD_TITLE, ("No rows with errors",)),))

    entries = [f"Line {line.address:4d} - {errors} - {line.content}" for line, errors in invalid]
    entries.append(f"Invalid: {len(invalid)}")
    return CheckOutcome(kept=kept, sections=(ReportSection(INVALID_FIELD_TITLE, tuple(entries), issue_count=len(invalid)),))
