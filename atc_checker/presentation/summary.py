"""Batch summary renderers: one row per validated export."""
from __future__ import annotations

import csv
import io
from typing import Sequence

import pandas as pd

from atc_checker.domain.results import ValidationOutcome

SUMMARY_COLUMNS = ["file", "type", "status", "findings", "report"]
XLSX_SHEET_NAME = "Validation"


def outcomes_to_rows(outcomes: Sequence[ValidationOutcome]) -> list[dict[str, str]]:
    rows: list[dict[str, str]] = []
    for outcome in outcomes:
        findings = len(outcome.report.sections_with_issues()) if outcome.report else 0
        rows.append(
            {
                "file": str(outcome.path),
                "type": str(outcome.schema),
                "status": str(outcome.status),
                "findings": str(findings),
                "report": str(outcome.report_path) if outcome.report_path else "",
            }
        )
    return rows


def outcomes_to_dataframe(outcomes: Sequence[ValidationOutcome]) -> pd.DataFrame:
    frame = pd.DataFrame(outcomes_to_rows(outcomes), columns=SUMMARY_COLUMNS)
    frame["findings"] = pd.to_numeric(frame["findings"]).astype("int64")
    return frame


def render_csv(outcomes: Sequence[ValidationOutcome]) -> bytes:
    rows = outcomes_to_rows(outcomes)
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=SUMMARY_COLUMNS)
    writer.writeheader()
    writer.writerows(rows)
    return buffer.getvalue().encode("utf-8")


def render_xlsx(outcomes: Sequence[ValidationOutcome]) -> bytes:
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        outcomes_to_dataframe(outcomes).to_excel(writer, sheet_name=XLSX_SHEET_NAME, index=False)
    return buffer.getvalue()
