from pathlib import Path

import pytest

from atc_checker.application.use_cases import ValidateExportUseCase, validate
from atc_checker.domain.errors import UnsupportedExportError
from atc_checker.domain.models import FileStatus, Schema, ValidationOptions
from atc_checker.domain.schemas import DAILY_CONFIG_HEADER, FLIGHT_RECORD_HEADER, SECTOR_CONFIG_HEADER


def daily_rows(skip: tuple[str, ...] = ()) -> list[str]:
    rows = []
    for i in range(1440):
        minute = f"{i // 60:02d}:{i % 60:02d}:00"
        if minute not in skip:
            rows.append(f'1;2;{minute};"5.120.3";5;3;120;CFG1')
    return rows


def write_export(folder: Path, name: str, header: str, rows: list[str]) -> Path:
    path = folder / name
    path.write_text("\n".join([header, *rows]) + "\n", encoding="utf-8")
    return path


def read_report(path: Path) -> list[str]:
    return path.read_text(encoding="utf-8").splitlines()


def test_clean_daily_config_reports_ok(tmp_path: Path):
    source = write_export(tmp_path, "20240301_config.csv", DAILY_CONFIG_HEADER, daily_rows())

    assert validate(source, detail=False) is True

    report_path = tmp_path / "reports" / "20240301_config.txt"
    assert read_report(report_path) == ["INTEGRITY REPORT", "20240301_config.csv", "OK"]


def test_missing_minute_is_reported(tmp_path: Path):
    source = write_export(tmp_path, "20240301_config.csv", DAILY_CONFIG_HEADER, daily_rows(skip=("00:05:00",)))

    outcome = ValidateExportUseCase().execute(source)

    assert outcome.status is FileStatus.VALIDATED
    lines = read_report(outcome.report_path)
    start = lines.index("MISSING TIME SLOT")
    assert lines[start + 1 : start + 3] == ["\t00:05:00", "\tQuantity: 1"]


def test_sector_overflow_lists_all_rows_and_keeps_them(tmp_path: Path):
    # QTD_CTR disagrees with config_id so the later check shows the rows survived.
    rows = [f'1;2;00:00:00;"5.120.3";"CTR01";"ASS01";"S01";6;3;40;{n};CFG1' for n in range(21)]
    source = write_export(tmp_path, "20240301_sect_config.csv", SECTOR_CONFIG_HEADER, rows)

    outcome = ValidateExportUseCase().execute(source)

    sections = {section.title: section for section in outcome.report.sections}
    overflow = sections["TIME SLOT OVERFLOW"]
    assert overflow.entries[0] == "00:00:00"
    assert [entry.split(" - ", 1)[1] for entry in overflow.entries[1:]] == rows
    assert len(sections["CONTROLLER COUNT MISMATCH"].entries) == 21


def test_short_callsign_is_invalid(tmp_path: Path):
    row = '2024-03-01 10:15:00;"5.120.3";CFG1;"CTR01";"ASS02";"S05";5;3;12;SBGR;SBRJ;240301;1000;A1234;I;'
    source = write_export(tmp_path, "20240301_flights.csv", FLIGHT_RECORD_HEADER, [row])

    outcome = ValidateExportUseCase().execute(source)

    assert outcome.success
    lines = read_report(outcome.report_path)
    assert lines[2:] == ["", "INVALID FIELD", f"\tLine    2 - |callsign: 12| - {row}", "\tInvalid: 1"]


def test_unreadable_file_writes_error_report(tmp_path: Path):
    source = tmp_path / "20240301_config.csv"

    assert validate(source) is False

    assert not (tmp_path / "reports" / "20240301_config.txt").exists()
    error_lines = read_report(tmp_path / "reports" / "20240301_config-ERROR.txt")
    assert error_lines[0] == "ERROR REPORT"
    assert error_lines[1] == "20240301_config.csv"
    assert "20240301_config.csv" in error_lines[2]
    assert len(error_lines) == 4 and error_lines[3]


def test_parse_failure_discards_partial_findings(tmp_path: Path):
    rows = daily_rows()
    rows[10] = '1;2;ten past;"5.120.3";5;3;120;CFG1'
    rows.append("short;row")
    source = write_export(tmp_path, "20240301_config.csv", DAILY_CONFIG_HEADER, rows)

    outcome = ValidateExportUseCase().execute(source, ValidationOptions(detail=True))

    assert outcome.status is FileStatus.ERROR
    assert outcome.report is None
    text = outcome.report_path.read_text(encoding="utf-8")
    assert "ten past" in text
    assert "FIELD COUNT MISMATCH" not in text


def test_unknown_schema_is_not_validated(tmp_path: Path):
    source = tmp_path / "notes.csv"
    source.write_text("anything\n", encoding="utf-8")

    outcome = ValidateExportUseCase().execute(source)

    assert outcome.status is FileStatus.UNKNOWN_TYPE
    assert outcome.schema is Schema.UNKNOWN
    assert not (tmp_path / "reports").exists()
    with pytest.raises(UnsupportedExportError):
        validate(source)


def test_findings_do_not_fail_validation(tmp_path: Path):
    source = write_export(tmp_path, "20240301_config.csv", "not the header", ["1;2", "x"])

    assert validate(source, detail=True) is True
    lines = read_report(tmp_path / "reports" / "20240301_config.txt")
    assert "\tHeader not found" in lines
    assert "\tQuantity: 1440" in lines
