"""Reading of IGC flight logs: header records and B (fix) records."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, timezone
from os import PathLike

from .models import FlightHeader, FlightPoint

LOCAL_TIMEZONE = timezone(timedelta(hours=3))
MIN_B_RECORD_LENGTH = 35

_INT_RE = re.compile(r"\s*[+-]?\d+\s*")
_FLOAT_RE = re.compile(r"\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?\s*")


def _to_int(text: str) -> int:
    return int(text) if _INT_RE.fullmatch(text) else 0


def _to_float(text: str) -> float:
    return float(text) if _FLOAT_RE.fullmatch(text) else 0.0


@dataclass
class ParsedFlight:
    """Header information and the fixes read from one IGC log."""

    header: FlightHeader = field(default_factory=FlightHeader)
    points: list[FlightPoint] = field(default_factory=list)


def parse_coordinate(text: str, is_latitude: bool) -> float:
    """Convert ``DDMMmmm`` / ``DDDMMmmm`` text to decimal degrees.

    Too short a text yields 0.0. The hemisphere is read from the character
    right after the minutes field's start (index 6 or 7).
    """
    deg_len = 2 if is_latitude else 3
    if len(text) < deg_len + 5:
        return 0.0

    degrees = _to_int(text[:deg_len])
    minutes = _to_float(text[deg_len : deg_len + 5]) / 1000.0
    hemisphere = text[deg_len + 4]

    result = degrees + minutes / 60.0
    if hemisphere == ("S" if is_latitude else "W"):
        result = -result
    return result


def parse_b_record(line: str) -> FlightPoint:
    """Parse position and altitudes of a B record; raise ValueError if it is not one."""
    if not line.startswith("B"):
        raise ValueError("not a B record")
    if len(line) < MIN_B_RECORD_LENGTH:
        raise ValueError(f"B record shorter than {MIN_B_RECORD_LENGTH} characters")

    return FlightPoint(
        latitude=parse_coordinate(line[7:14], True),
        longitude=parse_coordinate(line[15:23], False),
        pressure_altitude=_to_int(line[25:30]),
        gps_altitude=_to_int(line[30:35]),
    )


def parse_fix_time(text: str, day: date) -> datetime:
    """Turn an ``HHMMSS`` UTC fix time on ``day`` into a local (UTC+3) datetime."""
    fix = time(_to_int(text[0:2]), _to_int(text[2:4]), _to_int(text[4:6]))
    return datetime.combine(day, fix, tzinfo=timezone.utc).astimezone(LOCAL_TIMEZONE)


def _field_after(line: str, key: str) -> str:
    if key in line:
        return line[line.index(key) + len(key) :]
    return line[5:]


def _parse_date(line: str) -> date | None:
    text = _field_after(line, "DATE:").split(",")[0]
    if len(text) < 6:
        return None
    try:
        return date(2000 + _to_int(text[4:6]), _to_int(text[2:4]), _to_int(text[0:2]))
    except ValueError:
        return None


def parse_igc(lines: Iterable[str]) -> ParsedFlight:
    """Parse IGC log lines; fixes before the date header are ignored."""
    flight = ParsedFlight()
    header = flight.header
    current_date: date | None = None

    for raw in lines:
        line = raw.strip()
        if line.startswith("HFDTE"):
            parsed = _parse_date(line)
            if parsed is not None:
                current_date = parsed
                header.date = parsed
        elif line.startswith("HFPLT"):
            pilot = _field_after(line, "PILOTINCHARGE:")
            if pilot:
                header.pilot = pilot
        elif line.startswith("HFGTY"):
            glider = _field_after(line, "GLIDERTYPE:")
            if glider:
                header.glider_type = glider
        elif line.startswith("HFGID"):
            glider_id = _field_after(line, "GLIDERID:")
            if glider_id:
                header.glider_id = glider_id
        elif line.startswith("B") and current_date is not None:
            try:
                point = parse_b_record(line)
                point.timestamp = parse_fix_time(line[1:7], current_date)
            except ValueError:
                continue
            flight.points.append(point)

    return flight


def read_igc(path: str | PathLike[str]) -> ParsedFlight:
    """Read and parse an IGC file from disk."""
    with open(path, encoding="utf-8", errors="replace") as handle:
        return parse_igc(handle)