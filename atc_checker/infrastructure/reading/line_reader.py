"""Filesystem line reader for export files."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from atc_checker.config import SETTINGS
from atc_checker.domain.errors import ExportReadError
from atc_checker.domain.models import Line

logger = logging.getLogger(__name__)


def read_lines(path: Path, encoding: str | None = None) -> list[Line]:
    """Read ``path`` into addressed lines.

    Line breaks are ``\\n``, ``\\r`` or ``\\r\\n``; they are stripped and
    nothing else about the content is touched.
    """
    path = Path(path)
    encoding = encoding or SETTINGS.encoding
    logger.info("Reading export %s", path)
    lines: list[Line] = []
    try:
        with path.open("r", encoding=encoding, newline=None) as handle:
            for address, raw in enumerate(handle, start=1):
                lines.append(Line(address, raw[:-1] if raw.endswith("\n") else raw))
    except (OSError, UnicodeDecodeError) as exc:
        if lines:
            logger.warning("Read of %s stopped after line %d", path, lines[-1].address)
        raise ExportReadError(path.name, str(exc)) from exc
    logger.debug("Read %d lines from %s", len(lines), path)
    return lines


class TextLineSource:
    def __init__(self, encoding: str | None = None) -> None:
        self._encoding = encoding

    def read_lines(self, path: Path) -> Sequence[Line]:
        return read_lines(path, encoding=self._encoding)
