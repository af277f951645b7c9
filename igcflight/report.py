"""Ratings, tables and HTML or plain-text reports built from an analysed flight."""

from __future__ import annotations

import re
from datetime import datetime
from os import PathLike
from typing import NamedTuple

from .analyzer import FlightAnalyzer
from .models import Thermal

STRONG_THERMAL_CLIMB = 4.0
STRONG_THERMALS_FOR_PRAISE = 5
SLOW_XC_SPEED = 25.0
ROUTE_GAIN_KM = 20.0

_TAG_RE = re.compile(r"<[^>]*>")
_SECONDS_PER_DAY = 86_400
_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

_QUALITY = {
    5: ("⭐⭐⭐⭐⭐", "Excellent"),
    4: ("⭐⭐⭐⭐", "Very Good"),
    3: ("⭐⭐⭐", "Good"),
    2: ("⭐⭐", "Fair"),
    1: ("⭐", "Weak"),
}


def _tiered(value: float, tiers: tuple[tuple[float, str], ...], fallback: str) -> str:
    for threshold, label in tiers:
        if value >= threshold:
            return label
    return fallback


def distance_rating(distance: float) -> str:
    """Rating of a cross-country distance in km."""
    return _tiered(
        distance,
        (
            (200, "🚀 Epic XC"),
            (150, "✈️ Excellent"),
            (100, "🎯 Very Good"),
            (50, "📍 Good"),
            (25, "🏃 Decent"),
        ),
        "🏠 Local",
    )


def olc_rating(points: float) -> str:
    """Rating of an OLC score."""
    return _tiered(
        points,
        (
            (500, "🏆 Elite"),
            (300, "🥇 Expert"),
            (200, "🥈 Advanced"),
            (100, "🥉 Intermediate"),
            (50, "📈 Developing"),
        ),
        "🌱 Beginner",
    )


def flight_category(distance: float) -> str:
    """Category of a flight by its straight-line distance in km."""
    return _tiered(
        distance,
        (
            (500, "Epic Adventure (500+ km)"),
            (300, "Long Distance XC (300+ km)"),
            (200, "Major XC Flight (200+ km)"),
            (100, "Significant XC (100+ km)"),
            (50, "Standard XC (50+ km)"),
            (25, "Short XC (25+ km)"),
        ),
        "Local Flight (< 25 km)",
    )


def xc_speed_rating(speed: float) -> str:
    """Rating of a cross-country speed in km/h."""
    return _tiered(
        speed,
        (
            (40, "🏆 Excellent"),
            (30, "🥇 Very Good"),
            (20, "🥈 Good"),
            (15, "🥉 Fair"),
        ),
        "📈 Learning",
    )


def vario_rating(max_vario: float) -> str:
    """Rating of the best vertical speed in m/s."""
    return _tiered(
        max_vario,
        (
            (6.0, "🌪️ Exceptional"),
            (4.0, "💨 Strong"),
            (2.5, "🌤️ Good"),
            (1.5, "⛅ Moderate"),
        ),
        "🌫️ Weak",
    )


def overview_distance_rating(distance: float) -> str:
    """Distance rating used in the flight overview table."""
    return _tiered(
        distance,
        (
            (200, "🚀 Epic"),
            (100, "✈️ Excellent"),
            (50, "🎯 Good"),
            (25, "📍 Decent"),
        ),
        "🏠 Local",
    )


def _quality(strength: int) -> tuple[str, str]:
    return _QUALITY[max(1, min(5, strength))]


def quality_label(strength: int) -> str:
    """Stars and word describing a thermal strength of 1 to 5."""
    stars, word = _quality(strength)
    return f"{stars} {word}"


class ThermalStats(NamedTuple):
    """Count, best climb (m/s) and summed altitude gain (m) of thermals."""

    count: int
    best_climb: float
    total_gain: float

    def labels(self) -> tuple[str, str, str]:
        """Texts of the three statistic labels."""
        return (
            f"Thermals: {self.count}",
            f"Best: {self.best_climb:.1f} m/s",
            f"Total Gain: {self.total_gain:.0f} m",
        )


def thermal_stats(thermals: list[Thermal]) -> ThermalStats:
    """Summarise a list of thermals; the best climb is never below zero."""
    best = max([0.0, *(t.max_climb_rate for t in thermals)])
    total = sum(t.total_altitude_gain for t in thermals)
    return ThermalStats(len(thermals), best, float(total))


def _time_of_day(moment: datetime | None) -> str:
    return moment.strftime("%H:%M:%S") if moment is not None else ""


def _minutes_seconds(seconds: int) -> str:
    wrapped = seconds % _SECONDS_PER_DAY
    return f"{wrapped % 3600 // 60:02d}:{wrapped % 60:02d}"


def _clock(seconds: int) -> str:
    wrapped = seconds % _SECONDS_PER_DAY
    hours, rest = divmod(wrapped, 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def thermal_table_rows(thermals: list[Thermal]) -> list[tuple[str, ...]]:
    """Rows of the thermal table: name, time, duration, climbs, gain, radius, quality."""
    return [
        (
            t.name,
            _time_of_day(t.start_time),
            _minutes_seconds(t.duration_seconds()),
            f"{t.average_climb_rate:.2f}",
            f"{t.max_climb_rate:.2f}",
            f"{t.total_altitude_gain:.0f}",
            f"{t.radius:.0f}",
            quality_label(t.strength),
        )
        for t in thermals
    ]


def thermal_details_html(thermal: Thermal) -> str:
    """HTML panel describing one thermal."""
    stars, word = _quality(thermal.strength)
    cell = "<td style='padding: 4px;'>"

    def row(label: str, value: str, first: bool = False) -> str:
        width = " width: 40%;" if first else ""
        return (
            f"<tr><td style='padding: 4px; font-weight: bold;{width}'>{label}</td>"
            f"{cell}{value}</td></tr>"
        )

    parts = [
        "<div style='background-color: #f7fafc; padding: 15px; border-radius: 8px;'>",
        f"<h4 style='color: #2d5016; margin-top: 0;'>🌪️ {thermal.name}</h4>",
        "<table style='width: 100%; border-collapse: collapse;'>",
        row("⏰ Start Time:", _time_of_day(thermal.start_time), first=True),
        row("⏱️ End Time:", _time_of_day(thermal.end_time)),
        row("⏲️ Duration:", _minutes_seconds(thermal.duration_seconds())),
        row("📍 Latitude:", f"{thermal.center_latitude:.6f}°"),
        row("📍 Longitude:", f"{thermal.center_longitude:.6f}°"),
        row("📈 Average Climb:", f"{thermal.average_climb_rate:.2f} m/s"),
        row("🚀 Maximum Climb:", f"{thermal.max_climb_rate:.2f} m/s"),
        row("⬆️ Altitude Gain:", f"{thermal.total_altitude_gain:.0f} m"),
        row("📏 Thermal Radius:", f"{thermal.radius:.0f} m"),
        row("🏆 Quality:", f"{stars} {word}"),
        "</table>",
        "</div>",
    ]
    return "".join(parts)


def overview_html(analyzer: FlightAnalyzer) -> str:
    """HTML overview of the flight with a performance table."""
    parts = ["<h3>🪂 Flight Overview</h3>", analyzer.flight_info_html()]

    if analyzer.points:
        xc_speed = analyzer.xc_speed()
        max_vario = analyzer.stats.max_vario
        distance = analyzer.stats.straight_line_distance
        parts += [
            "<br><h4>📈 Performance Summary</h4>",
            "<table border='1' cellpadding='5' cellspacing='0' "
            "style='border-collapse: collapse; width: 100%;'>",
            "<tr style='background-color: #f0f0f0;'>",
            "<th>Metric</th><th>Value</th><th>Performance</th>",
            "</tr>",
            f"<tr><td>XC Speed</td><td>{xc_speed:.1f} km/h</td>"
            f"<td>{xc_speed_rating(xc_speed)}</td></tr>",
            f"<tr><td>Max Vario</td><td>{max_vario:.1f} m/s</td>"
            f"<td>{vario_rating(max_vario)}</td></tr>",
            f"<tr><td>Distance</td><td>{distance:.1f} km</td>"
            f"<td>{overview_distance_rating(distance)}</td></tr>",
            "</table>",
        ]
    return "".join(parts)


def xc_analysis_html(analyzer: FlightAnalyzer) -> str:
    """HTML analysis of cross-country distances, scoring and advice."""
    parts = ["<h3>🏁 Cross-Country Performance Analysis</h3>"]
    if not analyzer.points:
        parts.append("<p>No flight data available for XC analysis.</p>")
        return "".join(parts)

    stats = analyzer.stats
    hours = stats.flight_duration_seconds / 3600.0

    def speed(distance: float) -> float:
        return distance / hours if hours > 0 else 0.0

    straight = stats.straight_line_distance
    maximum = stats.maximum_distance
    olc = stats.olc_distance
    points = analyzer.olc_points()
    straight_speed = speed(straight)

    def row(label: str, distance: float, rating: str) -> str:
        return (
            f"<tr><td>{label}</td><td>{distance:.1f} km</td>"
            f"<td>{speed(distance):.1f} km/h</td><td>{rating}</td></tr>"
        )

    parts += [
        "<h4>📊 Distance Analysis</h4>",
        "<table border='1' cellpadding='8' cellspacing='0' "
        "style='border-collapse: collapse; width: 100%;'>",
        "<tr style='background-color: #e2e8f0;'>",
        "<th>Distance Type</th><th>Value</th><th>Speed</th><th>Rating</th>",
        "</tr>",
        row("Straight Line", straight, distance_rating(straight)),
        row("Maximum Distance", maximum, distance_rating(maximum)),
        row("OLC Optimized", olc, olc_rating(points)),
        "</table>",
        "<h4>🏆 Competition Scoring</h4>",
        f"<p><b>OLC Points:</b> {points:.1f} points</p>",
        f"<p><b>Flight Category:</b> {flight_category(straight)}</p>",
        "<h4>💡 Performance Insights</h4>",
        "<ul>",
    ]

    if straight_speed < SLOW_XC_SPEED:
        parts.append(
            "<li>🎯 <b>Speed Improvement:</b> Focus on finding stronger thermals "
            "and optimizing glide paths</li>"
        )
    if olc - straight > ROUTE_GAIN_KM:
        parts.append(
            "<li>📈 <b>Route Optimization:</b> Good XC strategy with effective use "
            "of multiple waypoints</li>"
        )
    else:
        parts.append(
            "<li>📍 <b>Route Planning:</b> Consider exploring wider areas to "
            "maximize XC distance</li>"
        )

    if analyzer.thermals:
        strong = sum(
            1 for t in analyzer.thermals if t.max_climb_rate >= STRONG_THERMAL_CLIMB
        )
        if strong >= STRONG_THERMALS_FOR_PRAISE:
            parts.append(
                "<li>⭐ <b>Thermal Skills:</b> Excellent thermal finding and "
                "centering ability</li>"
            )
        else:
            parts.append(
                "<li>🌪️ <b>Thermal Skills:</b> Practice thermal centering to "
                "maximize climb rates</li>"
            )

    parts.append("</ul>")
    return "".join(parts)


def status_text(analyzer: FlightAnalyzer) -> tuple[str, str]:
    """Flight and thermal status line texts."""
    if not analyzer.points:
        return "No flight loaded", ""
    duration = _clock(analyzer.stats.flight_duration_seconds)
    flight = f"Flight loaded: {len(analyzer.points)} points, {duration} duration"
    if analyzer.thermals:
        return flight, f"{len(analyzer.thermals)} thermals analyzed"
    return flight, "Ready for analysis"


def strip_tags(text: str) -> str:
    """Remove everything that looks like an HTML tag."""
    return _TAG_RE.sub("", text)


def _timestamp(moment: datetime) -> str:
    return (
        f"{_WEEKDAYS[moment.weekday()]} {_MONTHS[moment.month - 1]} {moment.day} "
        f"{moment:%H:%M:%S} {moment.year}"
    )


def detailed_report(
    analyzer: FlightAnalyzer,
    as_html: bool = True,
    generated: datetime | None = None,
) -> str:
    """Full flight report as an HTML document or as plain text."""
    stamp = _timestamp(generated if generated is not None else datetime.now())

    if as_html:
        parts = [
            "<!DOCTYPE html>\n<html>\n<head>\n",
            "<title>Paragliding - Flight Analysis Report</title>\n",
            "<style>\n",
            "body { font-family: Arial, sans-serif; margin: 20px; }\n",
            ".header { background: #3182ce; color: white; padding: 20px; "
            "border-radius: 8px; }\n",
            ".section { margin: 20px 0; padding: 15px; border: 1px solid #e2e8f0; "
            "border-radius: 6px; }\n",
            ".thermal { background: #f7fafc; margin: 10px 0; padding: 10px; "
            "border-radius: 4px; }\n",
            "table { width: 100%; border-collapse: collapse; }\n",
            "th, td { border: 1px solid #e2e8f0; padding: 8px; text-align: left; }\n",
            "th { background: #edf2f7; }\n",
            "</style>\n</head>\n<body>\n",
            "<div class='header'>\n",
            "<h1>🪂 Paragliding - Flight Analysis Report</h1>\n",
            f"<p>Generated: {stamp}</p>\n",
            "</div>\n",
            "<div class='section'>\n",
            analyzer.flight_info_html(),
            "</div>\n",
        ]
        if analyzer.thermals:
            parts += [
                "<div class='section'>\n",
                analyzer.thermal_summary_html(),
                "</div>\n",
            ]
        parts.append("</body>\n</html>\n")
        return "".join(parts)

    parts = [
        "PARAGLIDING - FLIGHT ANALYSIS REPORT\n",
        "========================================\n\n",
        f"Generated: {stamp}\n\n",
        strip_tags(analyzer.flight_info_html()),
        "\n\n",
    ]
    if analyzer.thermals:
        parts += [strip_tags(analyzer.thermal_summary_html()), "\n"]
    return "".join(parts)


def write_report(
    analyzer: FlightAnalyzer,
    path: str | PathLike[str],
    generated: datetime | None = None,
) -> None:
    """Write the report to ``path``: HTML for ``.html`` files, plain text otherwise."""
    as_html = str(path).endswith(".html")
    text = detailed_report(analyzer, as_html, generated)
    with open(path, "w", encoding="utf-8") as handle:
        handle.write(text)