from atc_checker.domain.consistency import (
    check_assistant_count,
    check_controller_count,
    config_id_parts,
)
from atc_checker.domain.models import Line, ValidationOptions


def make_sector_row(address: int, config_id: str = '"5.120.3"', ctr: str = "5", ass: str = "3") -> Line:
    return Line(address, f'1;2;00:00:00;{config_id};"CTR01";"ASS01";"S01";{ctr};{ass};40;10;CFG1')


def test_config_id_parts_strip_quotes():
    assert config_id_parts('"5.120.3"') == ["5", "120", "3"]


def test_consistent_rows_produce_no_section():
    lines = [make_sector_row(1), make_sector_row(2)]

    assert check_controller_count(lines, ValidationOptions()).sections == ()
    assert check_assistant_count(lines, ValidationOptions()).sections == ()


def test_controller_mismatch_is_reported_and_kept_by_default():
    lines = [make_sector_row(1), make_sector_row(2, ctr="6")]

    outcome = check_controller_count(lines, ValidationOptions())

    assert outcome.kept == tuple(lines)
    section = outcome.sections[0]
    assert section.title == "CONTROLLER COUNT MISMATCH"
    assert section.entries == (f"Line    2 - {lines[1].content}",)


def test_assistant_mismatch_has_its_own_section():
    lines = [make_sector_row(1, ass="4")]

    outcome = check_assistant_count(lines, ValidationOptions())

    assert outcome.sections[0].title == "ASSISTANT COUNT MISMATCH"
    assert outcome.sections[0].issue_count == 1
    assert check_controller_count(lines, ValidationOptions()).sections == ()


def test_remove_flag_excludes_inconsistent_rows():
    lines = [make_sector_row(1), make_sector_row(2, ctr="9"), make_sector_row(3)]

    outcome = check_controller_count(lines, ValidationOptions(remove_inconsistencies=True))

    assert [line.address for line in outcome.kept] == [1, 3]
    assert [line.address for line in outcome.removed] == [2]


def test_short_config_id_counts_as_mismatch():
    lines = [make_sector_row(1, config_id='"5.120"')]

    assert check_controller_count(lines, ValidationOptions()).sections == ()
    assert check_assistant_count(lines, ValidationOptions()).sections[0].issue_count == 1


def test_detail_mode_reports_clean_checks():
    outcome = check_controller_count([make_sector_row(1)], ValidationOptions(detail=True))

    assert outcome.sections[0].entries == ("No lines with errors",)
