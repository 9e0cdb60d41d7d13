"""Helpers shared by the checks for splitting and describing lines."""
from __future__ import annotations

from typing import Sequence

from .models import Line

SEPARATOR = ";"


def split_fields(content: str) -> list[str]:
    """Split a line on ``;`` and drop trailing empty fields.

    Export rows end with a separator, so ``"a;b;"`` yields two fields. An
    empty line yields a single empty field.
    """
    if not content:
        return [""]
    fields = content.split(SEPARATOR)
    while fields and fields[-1] == "":
        fields.pop()
    return fields


def field_count(content: str) -> int:
    return len(split_fields(content))


def is_blank(value: str) -> bool:
    return not value.strip()


def has_blank_field(content: str) -> bool:
    return any(is_blank(value) for value in split_fields(content))


def describe_line(line: Line) -> str:
    return f"Line {line.address:4d} - {line.content}"


def describe_lines(lines: Sequence[Line]) -> list[str]:
    return [describe_line(line) for line in lines]
