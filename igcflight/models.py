"""Data records for flight fixes, thermals and flight header information."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(slots=True)
class FlightPoint:
    """One GPS fix with the quantities derived from its neighbours."""

    latitude: float
    longitude: float
    pressure_altitude: int = 0
    gps_altitude: int = 0
    timestamp: datetime | None = None
    vertical_speed: float = 0.0  # m/s
    ground_speed: float = 0.0  # m/s
    course: float = 0.0  # degrees


@dataclass(slots=True)
class Thermal:
    """A climbing segment of the flight and its summary values."""

    name: str = ""
    start_time: datetime | None = None
    end_time: datetime | None = None
    center_latitude: float = 0.0
    center_longitude: float = 0.0
    average_climb_rate: float = 0.0  # m/s
    max_climb_rate: float = 0.0  # m/s
    total_altitude_gain: float = 0.0  # metres
    radius: float = 0.0  # metres
    strength: int = 0  # 1-5 scale

    def duration_seconds(self) -> int:
        """Whole seconds from start to end, or 0 when either time is missing."""
        if self.start_time is None or self.end_time is None:
            return 0
        return int((self.end_time - self.start_time).total_seconds())


@dataclass(slots=True)
class FlightHeader:
    """Pilot, glider and date information from the header records."""

    pilot: str = ""
    glider_type: str = ""
    glider_id: str = ""
    date: date | None = None