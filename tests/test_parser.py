from datetime import date, datetime, timezone

import pytest

from igcflight.parser import (
    ParsedFlight,
    parse_b_record,
    parse_coordinate,
    parse_fix_time,
    parse_igc,
    read_igc,
)


def b_record(hhmmss="120000", lat="4012345N", lon="02912345E", pressure="01000", gps="01050"):
    return f"B{hhmmss}{lat}{lon}A{pressure}{gps}"


HEADER = [
    "AXXX001",
    "HFDTE170524",
    "HFPLTPILOTINCHARGE:Jane Doe",
    "HFGTYGLIDERTYPE:Test Wing",
    "HFGIDGLIDERID:XX-0000",
]


def test_parse_coordinate_latitude():
    assert parse_coordinate("4012345", True) == pytest.approx(40 + 12.345 / 60)


def test_parse_coordinate_longitude():
    assert parse_coordinate("02912345", False) == pytest.approx(29 + 12.345 / 60)


@pytest.mark.parametrize("text, is_lat", [("401234", True), ("0291234", False), ("", True)])
def test_parse_coordinate_too_short(text, is_lat):
    assert parse_coordinate(text, is_lat) == 0.0


def test_parse_b_record_fields():
    point = parse_b_record(b_record())
    assert point.latitude == pytest.approx(40 + 12.345 / 60)
    assert point.longitude == pytest.approx(29 + 12.345 / 60)
    assert point.pressure_altitude == 1000
    assert point.gps_altitude == 1050
    assert point.timestamp is None


def test_parse_b_record_rejects_short_line():
    with pytest.raises(ValueError):
        parse_b_record(b_record()[:34])


def test_parse_b_record_rejects_other_record():
    with pytest.raises(ValueError):
        parse_b_record("H" + b_record()[1:])


def test_parse_fix_time_same_instant_in_local_zone():
    fix = parse_fix_time("120000", date(2024, 5, 17))
    assert fix == datetime(2024, 5, 17, 12, 0, 0, tzinfo=timezone.utc)
    assert fix.hour == 15


def test_parse_fix_time_crosses_midnight():
    fix = parse_fix_time("223000", date(2024, 5, 17))
    assert fix.date() == date(2024, 5, 18)
    assert fix == datetime(2024, 5, 17, 22, 30, tzinfo=timezone.utc)


def test_parse_fix_time_invalid():
    with pytest.raises(ValueError):
        parse_fix_time("250000", date(2024, 5, 17))


def test_parse_igc_header_and_points():
    lines = HEADER + [b_record("120000"), b_record("120001", gps="01052")]
    flight = parse_igc(lines)
    assert isinstance(flight, ParsedFlight)
    assert flight.header.pilot == "Jane Doe"
    assert flight.header.glider_type == "Test Wing"
    assert flight.header.glider_id == "XX-0000"
    assert flight.header.date == date(2024, 5, 17)
    assert [p.gps_altitude for p in flight.points] == [1050, 1052]
    delta = flight.points[1].timestamp - flight.points[0].timestamp
    assert delta.total_seconds() == 1


def test_parse_igc_ignores_fixes_before_date():
    lines = [b_record("115959"), *HEADER, b_record("120000")]
    flight = parse_igc(lines)
    assert len(flight.points) == 1
    assert flight.points[0].timestamp == datetime(2024, 5, 17, 12, tzinfo=timezone.utc)


def test_parse_igc_skips_invalid_records_and_trims():
    lines = HEADER + ["  " + b_record() + "\r\n", "B12", b_record("990000")]
    flight = parse_igc(lines)
    assert len(flight.points) == 1


def test_parse_igc_long_date_form():
    flight = parse_igc(["HFDTEDATE:170524,01", b_record()])
    assert flight.header.date == date(2024, 5, 17)
    assert len(flight.points) == 1


def test_parse_igc_short_header_forms():
    flight = parse_igc(["HFPLTJane", "HFGTYWing", "HFGIDID-1"])
    assert flight.header.pilot == "Jane"
    assert flight.header.glider_type == "Wing"
    assert flight.header.glider_id == "ID-1"
    assert flight.points == []


def test_parse_igc_empty_values_keep_previous():
    flight = parse_igc(["HFPLTPILOTINCHARGE:Jane", "HFPLTPILOTINCHARGE:"])
    assert flight.header.pilot == "Jane"


def test_parse_igc_invalid_date_means_no_fixes():
    flight = parse_igc(["HFDTE999999", b_record()])
    assert flight.header.date is None
    assert flight.points == []


def test_read_igc_from_file(tmp_path):
    path = tmp_path / "flight.igc"
    path.write_text("\n".join(HEADER + [b_record(), b_record("120002")]) + "\n")
    flight = read_igc(path)
    assert flight.header.pilot == "Jane Doe"
    assert len(flight.points) == 2


def test_read_igc_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_igc(tmp_path / "missing.igc")