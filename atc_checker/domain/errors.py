"""Failures that abort the validation of a single export."""
from __future__ import annotations


class ExportReadError(OSError):
    """The export could not be read (missing, unreadable, undecodable)."""

    def __init__(self, file_name: str, reason: str) -> None:
        super().__init__(f"Failed to read export {file_name}: {reason}")
        self.file_name = file_name
        self.reason = reason


class ExportParseError(ValueError):
    """A line could not be parsed well enough for the checks to continue."""

    def __init__(self, address: int, value: str, expected: str) -> None:
        super().__init__(f"Line {address}: cannot parse '{value}' as {expected}")
        self.address = address
        self.value = value
        self.expected = expected


class UnsupportedExportError(ValueError):
    """The file name does not map to any known export schema."""
