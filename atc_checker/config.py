"""Central configuration for the export checker package."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from atc_checker.domain.models import ValidationOptions

ENV_PREFIX = "ATC_CHECKER_"

_BOOL_TRUE = {"1", "true", "yes", "on"}

MAX_WORKERS = 16


def _env(name: str, default: str) -> str:
    return os.getenv(ENV_PREFIX + name, default)


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None:
        return default
    return raw.strip().lower() in _BOOL_TRUE


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from None


@dataclass(slots=True, frozen=True)
class Settings:
    report_dir_name: str
    error_suffix: str
    report_extension: str
    encoding: str
    detail: bool
    remove_inconsistencies: bool
    max_workers: int
    log_file: Path | None

    def validation_options(self) -> ValidationOptions:
        return ValidationOptions(detail=self.detail, remove_inconsistencies=self.remove_inconsistencies)


def load_settings() -> Settings:
    log_file = _env("LOG_FILE", "")
    return Settings(
        report_dir_name=_env("REPORT_DIR", "reports"),
        error_suffix=_env("ERROR_SUFFIX", "-ERROR"),
        report_extension=".txt",
        encoding=_env("ENCODING", "utf-8-sig"),
        detail=_env_bool("DETAIL", False),
        remove_inconsistencies=_env_bool("REMOVE_INCONSISTENCIES", False),
        max_workers=min(max(1, _env_int("WORKERS", 1)), MAX_WORKERS),
        log_file=Path(log_file) if log_file else None,
    )


SETTINGS = load_settings()
