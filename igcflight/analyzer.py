"""Loading and analysis of a single flight, with HTML summaries and waypoints."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from os import PathLike

from .geo import format_coordinate
from .models import FlightHeader, FlightPoint, Thermal
from .parser import ParsedFlight, parse_igc, read_igc
from .stats import (
    FlightStatistics,
    compute_ground_speeds,
    compute_statistics,
    compute_vertical_speeds,
)
from .thermals import Progress, detect_thermals

OLC_POINTS_PER_KM = 1.5
DEFAULT_THERMAL_BASE_ALTITUDE = 1000
_SECONDS_PER_DAY = 86_400


class FlightLoadError(Exception):
    """Raised when a flight log cannot be read or holds no usable fixes."""


def _clock(seconds: float) -> str:
    """``hh:mm:ss`` of a span, wrapping around at 24 hours."""
    total = int(seconds) % _SECONDS_PER_DAY
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def _time_of_day(moment: datetime | None) -> str:
    return moment.strftime("%H:%M:%S") if moment is not None else ""


class FlightAnalyzer:
    """Holds one loaded flight, its statistics and the thermals found in it."""

    def __init__(self) -> None:
        self.header = FlightHeader()
        self.points: list[FlightPoint] = []
        self.thermals: list[Thermal] = []
        self.stats = FlightStatistics()

    def load(self, path: str | PathLike[str]) -> None:
        """Load and analyse an IGC file; raise FlightLoadError on failure."""
        try:
            flight = read_igc(path)
        except OSError as exc:
            raise FlightLoadError(f"cannot read {path}: {exc}") from exc
        self._adopt(flight)

    def load_lines(self, lines: Iterable[str]) -> None:
        """Load and analyse IGC log lines; raise FlightLoadError if no fix is usable."""
        self._adopt(parse_igc(lines))

    def _adopt(self, flight: ParsedFlight) -> None:
        self.points = []
        self.thermals = []
        self.header = flight.header
        if not flight.points:
            raise FlightLoadError("no valid fixes found in flight log")

        self.points = flight.points
        compute_vertical_speeds(self.points)
        compute_ground_speeds(self.points)
        self.stats = compute_statistics(self.points)

    def analyze_thermals(
        self,
        min_climb_rate: float = 1.0,
        thermal_radius: float = 200.0,
        progress: Progress | None = None,
    ) -> list[Thermal]:
        """Detect thermals in the loaded flight, store and return them."""
        self.thermals = detect_thermals(
            self.points, min_climb_rate, thermal_radius, progress
        )
        return self.thermals

    def xc_speed(self) -> float:
        """Straight-line cross-country speed in km/h, 0 for a flight without duration."""
        duration = self.stats.flight_duration_seconds
        if duration > 0:
            return self.stats.straight_line_distance / (duration / 3600.0)
        return 0.0

    def olc_points(self) -> float:
        """Basic OLC score from the optimised distance."""
        return self.stats.olc_distance * OLC_POINTS_PER_KM

    def waypoint_lines(self) -> list[str]:
        """Lines of a GEO waypoint file: takeoff, each thermal, landing."""
        lines = ["$FormatGEO"]

        if self.points:
            takeoff = self.points[0]
            lines.append(
                f"Takeoff   {format_coordinate(takeoff.latitude, True)}    "
                f"{format_coordinate(takeoff.longitude, False)}   "
                f"{takeoff.gps_altitude}  Takeoff"
            )

        base = (
            self.points[0].gps_altitude
            if self.points
            else DEFAULT_THERMAL_BASE_ALTITUDE
        )
        for thermal in self.thermals:
            altitude = base + int(thermal.total_altitude_gain)
            lines.append(
                f"{thermal.name:<15}   "
                f"{format_coordinate(thermal.center_latitude, True)}    "
                f"{format_coordinate(thermal.center_longitude, False)}   "
                f"{altitude}  Thermal {thermal.max_climb_rate:.1f} m/s"
            )

        if self.points:
            landing = self.points[-1]
            lines.append(
                f"Landing   {format_coordinate(landing.latitude, True)}    "
                f"{format_coordinate(landing.longitude, False)}   "
                f"{landing.gps_altitude}  Landing"
            )
        return lines

    def write_waypoints(self, path: str | PathLike[str]) -> None:
        """Write the waypoint file to ``path``."""
        with open(path, "w", encoding="utf-8") as handle:
            for line in self.waypoint_lines():
                handle.write(line + "\n")

    def flight_info_html(self) -> str:
        """HTML fragment describing the flight and its statistics."""
        header = self.header
        stats = self.stats
        parts = [
            "<h3>Flight Information</h3>",
            f"<b>Pilot:</b> {header.pilot or 'Unknown'}<br>",
            f"<b>Glider Type:</b> {header.glider_type or 'Unknown'}<br>",
            f"<b>Glider ID:</b> {header.glider_id or 'Unknown'}<br>",
            "<b>Flight Date:</b> "
            f"{header.date.isoformat() if header.date is not None else ''}<br>",
            f"<b>Data Points:</b> {len(self.points)}<br>",
        ]

        if self.points:
            first, last = self.points[0], self.points[-1]
            duration = 0.0
            if first.timestamp is not None and last.timestamp is not None:
                duration = (last.timestamp - first.timestamp).total_seconds()
            altitudes = [p.gps_altitude for p in self.points]
            min_alt, max_alt = min(altitudes), max(altitudes)

            parts += [
                f"<b>Start Time:</b> {_time_of_day(first.timestamp)}<br>",
                f"<b>End Time:</b> {_time_of_day(last.timestamp)}<br>",
                f"<b>Duration:</b> {_clock(duration)}<br>",
                f"<b>Min Altitude:</b> {min_alt} m<br>",
                f"<b>Max Altitude:</b> {max_alt} m<br>",
                f"<b>Altitude Gain:</b> {max_alt - min_alt} m<br>",
                f"<b>Takeoff Altitude:</b> {stats.takeoff_altitude} m<br>",
                f"<b>Max Vario:</b> {stats.max_vario:.1f} m/s<br>",
                f"<b>Min Vario:</b> {stats.min_vario:.1f} m/s<br>",
                f"<b>Max Ground Speed:</b> {stats.max_ground_speed * 3.6:.1f} km/h<br>",
                "<b>Average Ground Speed:</b> "
                f"{stats.average_ground_speed * 3.6:.1f} km/h<br>",
                f"<b>Total Distance:</b> {stats.total_flight_distance:.1f} km<br>",
                "<b>Straight Line Distance:</b> "
                f"{stats.straight_line_distance:.1f} km<br>",
                f"<b>Maximum Distance:</b> {stats.maximum_distance:.1f} km<br>",
                f"<b>OLC Distance:</b> {stats.olc_distance:.1f} km<br>",
                f"<b>OLC Points:</b> {self.olc_points():.1f}<br>",
            ]

            if stats.flight_duration_seconds > 0:
                hours = stats.flight_duration_seconds / 3600.0
                parts += [
                    "<b>XC Speed (Straight):</b> "
                    f"{stats.straight_line_distance / hours:.1f} km/h<br>",
                    "<b>XC Speed (Maximum):</b> "
                    f"{stats.maximum_distance / hours:.1f} km/h<br>",
                    f"<b>XC Speed (OLC):</b> {stats.olc_distance / hours:.1f} km/h<br>",
                ]

        return "".join(parts)

    def thermal_summary_html(self) -> str:
        """HTML fragment summarising the detected thermals."""
        parts = [
            "<h3>Thermal Analysis Summary</h3>",
            f"<b>Total Thermals Found:</b> {len(self.thermals)}<br><br>",
        ]

        if self.thermals:
            total_gain = sum(t.total_altitude_gain for t in self.thermals)
            average = sum(t.average_climb_rate for t in self.thermals) / len(
                self.thermals
            )
            best = max(-999.0, *(t.max_climb_rate for t in self.thermals))

            parts += [
                f"<b>Total Altitude Gained in Thermals:</b> {int(total_gain)} m<br>",
                f"<b>Average Climb Rate:</b> {average:.2f} m/s<br>",
                f"<b>Best Climb Rate:</b> {best:.2f} m/s<br>",
            ]

            counts = {5: 0, 4: 0, 3: 0, 2: 0, 1: 0}
            for thermal in self.thermals:
                counts[max(1, min(5, thermal.strength))] += 1

            parts += [
                "<br><b>Thermal Quality Distribution:</b><br>",
                f"Excellent (&ge;5.0 m/s): {counts[5]}<br>",
                f"Very Good (&ge;3.5 m/s): {counts[4]}<br>",
                f"Good (&ge;2.5 m/s): {counts[3]}<br>",
                f"Fair (&ge;1.5 m/s): {counts[2]}<br>",
                f"Weak (&lt;1.5 m/s): {counts[1]}<br>",
            ]

        return "".join(parts)