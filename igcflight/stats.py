"""Derived speeds and whole-flight statistics for a sequence of fixes."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import timedelta

from .geo import bearing_deg, distance_km
from .models import FlightPoint

log = logging.getLogger(__name__)

MAX_GAP_MS = 30_000
MIN_GROUND_SPEED_GAP_MS = 500
RAW_CLIMB_LIMIT = 25.0
RAW_SINK_LIMIT = -35.0
CLIMB_LIMIT = 7.5
SINK_LIMIT = -8.0
GROUND_SPEED_LIMIT = 28.0
PLAUSIBLE_GROUND_SPEED = 25.0
MAX_SEGMENT_KM = 1.0
SMOOTHING_WINDOW = 3
OLC_MIN_POINTS = 100
OLC_MIN_SPACING = 100
OLC_SAMPLES = 500

_ONE_MS = timedelta(milliseconds=1)


def _interval_ms(earlier: FlightPoint, later: FlightPoint) -> float:
    if earlier.timestamp is None or later.timestamp is None:
        return 0.0
    return (later.timestamp - earlier.timestamp) / _ONE_MS


def _between(a: FlightPoint, b: FlightPoint) -> float:
    return distance_km(a.latitude, a.longitude, b.latitude, b.longitude)


@dataclass
class FlightStatistics:
    """Summary values of a whole flight."""

    max_vario: float = 0.0  # m/s
    min_vario: float = 0.0  # m/s
    max_ground_speed: float = 0.0  # m/s
    average_ground_speed: float = 0.0  # m/s
    total_flight_distance: float = 0.0  # km
    straight_line_distance: float = 0.0  # km
    takeoff_altitude: int = 0  # m
    flight_duration_seconds: int = 0
    olc_distance: float = 0.0  # km
    maximum_distance: float = 0.0  # km


def compute_vertical_speeds(points: Sequence[FlightPoint]) -> list[float]:
    """Set each point's smoothed, clamped vertical speed and return the values.

    Fewer than two points are left untouched.
    """
    n = len(points)
    if n < 2:
        return [p.vertical_speed for p in points]

    raw = [0.0] * n
    for i, (prev, cur) in enumerate(zip(points, points[1:]), start=1):
        dt = _interval_ms(prev, cur)
        if 0 < dt < MAX_GAP_MS:
            speed = (cur.gps_altitude - prev.gps_altitude) * 1000.0 / dt
            raw[i] = min(RAW_CLIMB_LIMIT, max(RAW_SINK_LIMIT, speed))

    half = SMOOTHING_WINDOW // 2
    smoothed = []
    for i, point in enumerate(points):
        window = raw[max(0, i - half) : min(n - 1, i + half) + 1]
        value = sum(window) / len(window)
        value = min(CLIMB_LIMIT, max(SINK_LIMIT, value))
        point.vertical_speed = value
        smoothed.append(value)
    return smoothed


def compute_ground_speeds(points: Sequence[FlightPoint]) -> None:
    """Set ground speed (m/s) and course (degrees) of each point from its predecessor."""
    if len(points) < 2:
        return

    points[0].ground_speed = 0.0
    for prev, cur in zip(points, points[1:]):
        dt = _interval_ms(prev, cur)
        if MIN_GROUND_SPEED_GAP_MS < dt < MAX_GAP_MS:
            speed = _between(prev, cur) * 1_000_000.0 / dt
            cur.ground_speed = min(GROUND_SPEED_LIMIT, max(0.0, speed))
            cur.course = bearing_deg(
                prev.latitude, prev.longitude, cur.latitude, cur.longitude
            )
        else:
            cur.ground_speed = 0.0


def _takeoff_altitude(points: Sequence[FlightPoint]) -> int:
    n = len(points)
    for i in range(min(200, n)):
        climbing = sum(1 for p in points[i : min(i + 20, n)] if p.vertical_speed > 0.3)
        if climbing >= 10:
            return points[i].gps_altitude
    return points[0].gps_altitude


def compute_statistics(points: Sequence[FlightPoint]) -> FlightStatistics:
    """Summarise a flight whose vertical and ground speeds are already set."""
    stats = FlightStatistics()
    if not points:
        return stats

    stats.max_vario = max(p.vertical_speed for p in points)
    stats.min_vario = min(p.vertical_speed for p in points)

    plausible = [
        p.ground_speed for p in points if 0 < p.ground_speed < PLAUSIBLE_GROUND_SPEED
    ]
    if plausible:
        stats.max_ground_speed = max(plausible)
        stats.average_ground_speed = sum(plausible) / len(plausible)

    first, last = points[0], points[-1]
    if len(points) >= 2:
        stats.straight_line_distance = _between(first, last)
        if first.timestamp is not None and last.timestamp is not None:
            stats.flight_duration_seconds = int(
                (last.timestamp - first.timestamp).total_seconds()
            )

    total = 0.0
    for prev, cur in zip(points, points[1:]):
        dt = _interval_ms(prev, cur)
        if 0 < dt < MAX_GAP_MS:
            segment = _between(prev, cur)
            if segment < MAX_SEGMENT_KM:
                total += segment
    stats.total_flight_distance = total

    stats.takeoff_altitude = _takeoff_altitude(points)
    stats.olc_distance = olc_distance(points, stats.straight_line_distance)
    stats.maximum_distance = maximum_distance(points)

    log.debug(
        "Flight stats - max speed %.1f km/h, avg speed %.1f km/h, total dist %.1f km",
        stats.max_ground_speed * 3.6,
        stats.average_ground_speed * 3.6,
        stats.total_flight_distance,
    )
    return stats


def olc_distance(points: Sequence[FlightPoint], straight_line: float) -> float:
    """Best start-three-turnpoints-finish distance in km, at least ``straight_line``.

    Turnpoints are sampled on a grid and kept at least 100 fixes apart; flights
    with fewer than 100 fixes score the straight-line distance.
    """
    n = len(points)
    if n < OLC_MIN_POINTS:
        return straight_line

    step = max(1, n // OLC_SAMPLES)
    start, finish = points[0], points[-1]
    firsts = [points[i] for i in range(0, n, step)]
    seconds = [points[j] for j in range(OLC_MIN_SPACING, n, step)]
    thirds = [points[k] for k in range(2 * OLC_MIN_SPACING, n, step)]

    from_start = [_between(start, p) for p in firsts]
    to_finish = [_between(p, finish) for p in thirds]

    best = straight_line
    # The sampled grids line up: the t-th second turnpoint may follow the s-th
    # first turnpoint when s <= t, and precede the u-th third one when u >= t.
    for t, second in enumerate(seconds):
        if t >= len(thirds):
            break
        head = max(
            from_start[s] + _between(firsts[s], second) for s in range(t + 1)
        )
        tail = max(
            _between(second, thirds[u]) + to_finish[u] for u in range(t, len(thirds))
        )
        best = max(best, head + tail)
    return best


def maximum_distance(points: Sequence[FlightPoint]) -> float:
    """Greatest distance in km reached from the first fix."""
    if not points:
        return 0.0
    takeoff = points[0]
    return max(_between(takeoff, p) for p in points)