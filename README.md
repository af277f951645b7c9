# igcflight

Analyse paragliding flight logs in the IGC format: climb and ground speeds,
thermal detection, cross-country distances, waypoint files and flight reports.
There are no third-party runtime dependencies.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Command line

The package installs an `igcflight` command:

```
igcflight FLIGHT.igc [--min-climb M/S] [--radius M] [--no-analysis]
                     [--thermals] [--waypoints PATH] [--report PATH]
```

It loads the flight and prints its information. Unless `--no-analysis` is
given, it then searches for thermals and prints a summary. It ends with a
status line.

- `--min-climb` sets the minimum climb rate for thermal detection. It must lie
  between 0.5 and 10 m/s and defaults to 2.0.
- `--radius` sets the thermal radius. It must lie between 50 and 1000 m and
  defaults to 200. It is passed on to the analysis but does not change which
  thermals are found.
- `--thermals` prints a table of every thermal with these columns: name, time,
  duration, average and maximum climb, altitude gain, radius and quality.
- `--waypoints PATH` saves the thermal waypoints. The command reports an error
  if no thermals were found.
- `--report PATH` exports a report. A path ending in `.html` gives HTML; any
  other path gives plain text.

The exit status is 0 on success. It is 1 if the flight cannot be loaded or
an output file cannot be written, and 1 if `--waypoints` was asked for but no
thermals were found. Argument errors exit with status 2.

## Library use

```python
from igcflight.analyzer import FlightAnalyzer, FlightLoadError
from igcflight.report import write_report

analyzer = FlightAnalyzer()
try:
    analyzer.load("flight.igc")
except FlightLoadError as exc:
    raise SystemExit(f"cannot load flight: {exc}")

analyzer.analyze_thermals(min_climb_rate=1.0, thermal_radius=200.0)

print(analyzer.xc_speed(), "km/h straight-line XC speed")
print(analyzer.olc_points(), "OLC points")

analyzer.write_waypoints("flight_thermals.wpt")
write_report(analyzer, "flight_report.html")
```

`FlightAnalyzer.load_lines` accepts log lines that are already in memory.
Both loading methods raise `FlightLoadError` when no usable fix is found, and
`load` also raises it when the file cannot be read. After loading, the results
are available as follows:

- `analyzer.header` is a `FlightHeader` with the pilot, glider type, glider ID
  and date.
- `analyzer.points` is a list of `FlightPoint`.
- `analyzer.stats` is a `FlightStatistics`.
- `analyzer.thermals` is a list of `Thermal`, filled in by `analyze_thermals`.

### Modules

| Module | Contents |
| --- | --- |
| `igcflight.geo` | `distance_km` (haversine), `bearing_deg`, `format_coordinate` |
| `igcflight.models` | the `FlightPoint`, `Thermal` and `FlightHeader` records |
| `igcflight.parser` | `parse_igc`, `read_igc`, `parse_b_record`, `parse_coordinate`, `parse_fix_time` |
| `igcflight.stats` | `compute_vertical_speeds`, `compute_ground_speeds`, `compute_statistics`, `olc_distance`, `maximum_distance` |
| `igcflight.thermals` | `detect_thermals`, `find_climb_segments`, `thermal_center`, `thermal_name`, `classify_strength` |
| `igcflight.analyzer` | `FlightAnalyzer`, `FlightLoadError` |
| `igcflight.report` | ratings, thermal tables, HTML views, `detailed_report`, `write_report` |
| `igcflight.cli` | `main`, the entry point of the `igcflight` command |

### What is computed

- **Vertical speed**: computed from consecutive GPS altitudes, smoothed over
  three fixes and clamped to between -8.0 and 7.5 m/s.
- **Ground speed and course**: computed between fixes that are 0.5 to 30
  seconds apart. Ground speed is capped at 28 m/s.
- **Flight statistics**:
  - maximum and minimum vario;
  - maximum and average ground speed, counting only speeds between 0 and 25 m/s;
  - total track distance, skipping gaps and jumps of 1 km or more;
  - straight-line distance;
  - duration;
  - takeoff altitude.
- **XC distances**:
  - straight line;
  - maximum distance from takeoff;
  - an OLC-style distance: start, three sampled turnpoints and finish.

  OLC points are 1.5 per km.
- **Thermals**: found in sustained climbs. For each one the package computes a
  lift-weighted centre, the radius, the average and maximum climb and the
  altitude gain. Each thermal is rated from 1 (weak) to 5 (excellent) by its
  best climb, and names look like `Thermal_3.5ms_2`. Flights with fewer than
  50 fixes yield no thermals.

### Outputs

- **Waypoint files** (`FlightAnalyzer.write_waypoints`, `waypoint_lines`): the
  `$FormatGEO` layout, with the takeoff, one line per thermal and the landing.
- **HTML fragments**:
  - `FlightAnalyzer.flight_info_html` and `thermal_summary_html`;
  - `report.overview_html`, `report.xc_analysis_html` and
    `report.thermal_details_html`.
- **Full reports**: `report.detailed_report` and `report.write_report`, as
  HTML or plain text.

### Notes

- Fix times in the file are UTC. They are returned as timezone-aware datetimes
  at UTC+3.
- B records are read only after a date header (`HFDTE`) has been seen.

## What it does not do

The package has no graphical interface, map view or charts. It works only as
a library and as the `igcflight` command-line tool. It does not check
G-record signatures. It keeps no database of flights.