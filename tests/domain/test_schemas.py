import pytest

from atc_checker.domain.errors import UnsupportedExportError
from atc_checker.domain.models import Schema
from atc_checker.domain.schemas import detect_schema, get_descriptor


@pytest.mark.parametrize(
    "name,expected",
    [
        ("20240301_config.csv", Schema.DAILY_CONFIG),
        ("20240301_sect_config.csv", Schema.SECTOR_CONFIG),
        ("20240301_flights.csv", Schema.FLIGHT_RECORD),
        ("20240301_SECT_CONFIG.CSV", Schema.SECTOR_CONFIG),
        ("20240301_Flights.csv", Schema.FLIGHT_RECORD),
        ("20240301_config.txt", Schema.UNKNOWN),
        ("notes.csv", Schema.UNKNOWN),
    ],
)
def test_detect_schema_by_suffix(name, expected):
    assert detect_schema(name) is expected


def test_expected_field_counts_follow_headers():
    assert get_descriptor(Schema.DAILY_CONFIG).expected_field_count == 8
    assert get_descriptor(Schema.SECTOR_CONFIG).expected_field_count == 12
    assert get_descriptor(Schema.FLIGHT_RECORD).expected_field_count == 15


def test_flight_records_skip_the_blank_field_filter():
    assert len(get_descriptor(Schema.FLIGHT_RECORD).filters) == 2
    assert len(get_descriptor(Schema.DAILY_CONFIG).filters) == 3


def test_unknown_schema_has_no_descriptor():
    with pytest.raises(UnsupportedExportError):
        get_descriptor(Schema.UNKNOWN)
