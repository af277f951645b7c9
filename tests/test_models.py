from datetime import date, datetime, timedelta, timezone

from igcflight.models import FlightHeader, FlightPoint, Thermal


def test_flight_point_derived_values_start_at_zero():
    point = FlightPoint(latitude=40.2, longitude=29.1, gps_altitude=1200)
    assert (point.vertical_speed, point.ground_speed, point.course) == (0.0, 0.0, 0.0)
    assert point.timestamp is None
    assert point.gps_altitude == 1200


def test_flight_point_is_mutable():
    point = FlightPoint(latitude=1.0, longitude=2.0)
    point.vertical_speed = 3.5
    assert point.vertical_speed == 3.5


def test_thermal_duration_from_times():
    start = datetime(2024, 5, 17, 12, 0, 0, tzinfo=timezone.utc)
    thermal = Thermal(start_time=start, end_time=start + timedelta(minutes=4, seconds=7))
    assert thermal.duration_seconds() == 4 * 60 + 7


def test_thermal_duration_without_times_is_zero():
    assert Thermal().duration_seconds() == 0
    assert Thermal(start_time=datetime(2024, 1, 1)).duration_seconds() == 0


def test_thermal_defaults():
    thermal = Thermal()
    assert thermal.name == ""
    assert thermal.strength == 0
    assert thermal.radius == 0.0


def test_flight_header_holds_values():
    header = FlightHeader(pilot="Jane Doe", glider_type="Wing", date=date(2024, 5, 17))
    assert header.pilot == "Jane Doe"
    assert header.glider_type == "Wing"
    assert header.glider_id == ""
    assert header.date == date(2024, 5, 17)


def test_flight_header_equality():
    assert FlightHeader(pilot="A") == FlightHeader(pilot="A")
    assert FlightHeader(pilot="A") != FlightHeader(pilot="B")