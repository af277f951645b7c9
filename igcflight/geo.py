"""Great-circle geometry and coordinate formatting for flight tracks."""

from __future__ import annotations

import math

EARTH_RADIUS_KM = 6371.0


def distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Haversine distance in kilometres between two points given in degrees."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = phi2 - phi1
    d_lambda = math.radians(lon2) - math.radians(lon1)

    a = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    )
    a = min(a, 1.0)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def bearing_deg(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Initial course from the first point to the second, in degrees [0, 360)."""
    d_lambda = math.radians(lon2 - lon1)
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)

    y = math.sin(d_lambda) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(
        d_lambda
    )
    bearing = math.degrees(math.atan2(y, x))
    return math.fmod(bearing + 360.0, 360.0)


def format_coordinate(coord: float, is_latitude: bool) -> str:
    """Format decimal degrees as ``N 37 19 35.22`` or ``E 037 10 42.06``."""
    if is_latitude:
        hemisphere = "N" if coord >= 0 else "S"
    else:
        hemisphere = "E" if coord >= 0 else "W"
    coord = abs(coord)

    degrees = int(coord)
    minutes = (coord - degrees) * 60.0
    whole_minutes = int(minutes)
    seconds = (minutes - whole_minutes) * 60.0

    width = 2 if is_latitude else 3
    return f"{hemisphere} {degrees:0{width}d} {whole_minutes:02d} {seconds:05.2f}"