"""Detection and description of thermal climbs in a flight."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from .geo import distance_km
from .models import FlightPoint, Thermal

log = logging.getLogger(__name__)

Progress = Callable[[int], None]

MIN_POINTS = 50
CLIMB_START = 0.5
SINK_THRESHOLD = -0.5
SINK_LOOKAHEAD = 20
SINK_POINTS_TO_END = 5
MAX_SEGMENT_SPAN = 300
MIN_SEGMENT_GAIN = 30
MIN_THERMAL_GAIN = 25
CLIMB_RATE_TOLERANCE = 0.7


def _sink_run(points: Sequence[FlightPoint], start: int) -> int:
    count = 0
    for point in points[start : start + SINK_LOOKAHEAD]:
        if point.vertical_speed >= SINK_THRESHOLD:
            break
        count += 1
    return count


def find_climb_segments(
    points: Sequence[FlightPoint],
    min_climb_rate: float = 1.0,
    progress: Progress | None = None,
) -> list[tuple[int, int]]:
    """Return ``(start, end)`` index pairs of climbs that qualify as thermals.

    A climb that has not ended by the last fix is not reported.
    """
    n = len(points)
    segments: list[tuple[int, int]] = []
    in_climb = False
    climb_start = 0
    climb_sum = 0.0
    climb_points = 0

    for i, point in enumerate(points):
        vs = point.vertical_speed
        if not in_climb and vs > CLIMB_START:
            in_climb = True
            climb_start = i
            climb_sum = vs
            climb_points = 1
        elif in_climb:
            if vs > 0:
                climb_sum += vs
                climb_points += 1
            elif (
                _sink_run(points, i) >= SINK_POINTS_TO_END
                or i - climb_start > MAX_SEGMENT_SPAN
            ):
                average = climb_sum / climb_points if climb_points else 0.0
                gain = points[i - 1].gps_altitude - points[climb_start].gps_altitude
                if (
                    average >= min_climb_rate * CLIMB_RATE_TOLERANCE
                    and gain > MIN_SEGMENT_GAIN
                ):
                    segments.append((climb_start, i - 1))
                in_climb = False
                climb_sum = 0.0
                climb_points = 0

        if progress is not None and i % 1000 == 0:
            progress(i * 80 // n)

    return segments


def thermal_center(points: Sequence[FlightPoint], start: int, end: int) -> Thermal:
    """Summarise fixes ``start..end`` (inclusive) as a thermal, centred by climb rate."""
    if start >= end:
        return Thermal()

    segment = points[start : end + 1]
    weights = [max(0.1, p.vertical_speed + 1.0) for p in segment]
    weight_sum = sum(weights)
    center_lat = sum(p.latitude * w for p, w in zip(segment, weights)) / weight_sum
    center_lon = sum(p.longitude * w for p, w in zip(segment, weights)) / weight_sum

    radius = max(
        distance_km(center_lat, center_lon, p.latitude, p.longitude) * 1000
        for p in segment
    )

    return Thermal(
        start_time=points[start].timestamp,
        end_time=points[end].timestamp,
        center_latitude=center_lat,
        center_longitude=center_lon,
        average_climb_rate=sum(p.vertical_speed for p in segment) / len(segment),
        max_climb_rate=max(-999.0, *(p.vertical_speed for p in segment)),
        total_altitude_gain=float(points[end].gps_altitude - points[start].gps_altitude),
        radius=max(0.0, radius),
    )


def thermal_name(thermal: Thermal, index: int) -> str:
    """Name such as ``Thermal_3.5ms_2`` from the best climb rate and position."""
    return f"Thermal_{thermal.max_climb_rate:.1f}ms_{index}"


def classify_strength(max_climb: float) -> int:
    """Rate a thermal 1 (weak) to 5 (excellent) by its best climb rate."""
    if max_climb >= 5.0:
        return 5
    if max_climb >= 3.5:
        return 4
    if max_climb >= 2.5:
        return 3
    if max_climb >= 1.5:
        return 2
    return 1


def detect_thermals(
    points: Sequence[FlightPoint],
    min_climb_rate: float = 1.0,
    thermal_radius: float = 200.0,
    progress: Progress | None = None,
) -> list[Thermal]:
    """Find, name and rate the thermals of a flight with vertical speeds set.

    Flights with fewer than 50 fixes have none. ``thermal_radius`` is accepted
    for interface compatibility and does not affect detection.
    """
    if len(points) < MIN_POINTS:
        return []

    if progress is not None:
        progress(0)

    thermals: list[Thermal] = []
    for start, end in find_climb_segments(points, min_climb_rate, progress):
        thermal = thermal_center(points, start, end)
        if thermal.total_altitude_gain > MIN_THERMAL_GAIN:
            thermal.name = thermal_name(thermal, len(thermals) + 1)
            thermal.strength = classify_strength(thermal.max_climb_rate)
            thermals.append(thermal)

    log.debug("Total thermals found: %d", len(thermals))
    if progress is not None:
        progress(100)
    return thermals