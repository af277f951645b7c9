"""Command line front end: load a flight, find thermals, save waypoints and reports."""

from __future__ import annotations

import argparse
import html
import re
import sys
from collections.abc import Callable, Sequence
from pathlib import Path

from .analyzer import FlightAnalyzer, FlightLoadError
from .report import (
    status_text,
    strip_tags,
    thermal_stats,
    thermal_table_rows,
    write_report,
)

DEFAULT_MIN_CLIMB = 2.0
DEFAULT_RADIUS = 200.0

_BREAK_RE = re.compile(r"<br\s*/?>|</h[1-6]>", re.IGNORECASE)
_TABLE_HEADERS = (
    "Name",
    "Time",
    "Duration",
    "Avg Climb",
    "Max Climb",
    "Alt Gain",
    "Radius",
    "Quality",
)


def _ranged(low: float, high: float, unit: str) -> Callable[[str], float]:
    def convert(text: str) -> float:
        try:
            value = float(text)
        except ValueError as exc:
            raise argparse.ArgumentTypeError(f"not a number: {text!r}") from exc
        if not low <= value <= high:
            raise argparse.ArgumentTypeError(
                f"must be between {low:g} and {high:g} {unit}"
            )
        return value

    return convert


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="igcflight",
        description="Analyse an IGC flight log for thermals and cross-country performance.",
    )
    parser.add_argument("igc_file", help="IGC flight file to analyse")
    parser.add_argument(
        "--min-climb",
        type=_ranged(0.5, 10.0, "m/s"),
        default=DEFAULT_MIN_CLIMB,
        help="minimum climb rate in m/s for thermal detection (default: 2.0)",
    )
    parser.add_argument(
        "--radius",
        type=_ranged(50, 1000, "m"),
        default=DEFAULT_RADIUS,
        help="thermal radius in metres (default: 200)",
    )
    parser.add_argument(
        "--no-analysis",
        action="store_true",
        help="only load the flight, do not search for thermals",
    )
    parser.add_argument(
        "--thermals",
        action="store_true",
        help="list every thermal found",
    )
    parser.add_argument("--waypoints", metavar="PATH", help="save thermal waypoints")
    parser.add_argument(
        "--report",
        metavar="PATH",
        help="export a report: HTML for .html files, plain text otherwise",
    )
    return parser


def _html_to_text(fragment: str) -> str:
    text = _BREAK_RE.sub("\n", fragment)
    return html.unescape(strip_tags(text)).strip()


def _print_thermal_table(analyzer: FlightAnalyzer) -> None:
    rows = [_TABLE_HEADERS, *thermal_table_rows(analyzer.thermals)]
    widths = [max(len(row[col]) for row in rows) for col in range(len(_TABLE_HEADERS))]
    for row in rows:
        print("  ".join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip())


def _report_analysis(analyzer: FlightAnalyzer, list_thermals: bool) -> None:
    if analyzer.thermals:
        stats = thermal_stats(analyzer.thermals)
        print("Thermal analysis completed successfully!")
        print("Results:")
        print(f"  {stats.count} thermals detected")
        print(f"  Best climb rate: {stats.best_climb:.1f} m/s")
        print(f"  Total altitude gained: {stats.total_gain:.0f} m")
        print()
        print(_html_to_text(analyzer.thermal_summary_html()))
        if list_thermals:
            print()
            _print_thermal_table(analyzer)
    else:
        print("No thermals found with the current criteria.")
        print("Suggestions:")
        print("  Try lowering the minimum climb rate")
        print("  Check if the flight includes thermal activity")
        print("  Verify the IGC file contains valid GPS data")


def main(argv: Sequence[str] | None = None) -> int:
    """Run the analyser from the command line and return the exit status."""
    args = _build_parser().parse_args(argv)

    analyzer = FlightAnalyzer()
    try:
        analyzer.load(args.igc_file)
    except FlightLoadError as exc:
        print(
            "Failed to load IGC file! Please ensure the file is a valid IGC format.",
            file=sys.stderr,
        )
        print(str(exc), file=sys.stderr)
        return 1

    print("IGC flight file loaded successfully!")
    print(f"File: {Path(args.igc_file).name}")
    print(f"Data Points: {len(analyzer.points)}")
    print()
    print(_html_to_text(analyzer.flight_info_html()))
    print()

    if not args.no_analysis:
        analyzer.analyze_thermals(args.min_climb, args.radius)
        _report_analysis(analyzer, args.thermals)
        print()

    flight_status, thermal_status = status_text(analyzer)
    print(f"{flight_status} | {thermal_status}" if thermal_status else flight_status)

    status = 0
    if args.waypoints:
        if not analyzer.thermals:
            print(
                "No thermals found to save! Please analyze the flight first.",
                file=sys.stderr,
            )
            status = 1
        else:
            try:
                analyzer.write_waypoints(args.waypoints)
            except OSError as exc:
                print(f"Could not write waypoint file: {exc}", file=sys.stderr)
                status = 1
            else:
                print(
                    f"Thermal waypoints saved: {Path(args.waypoints).name} "
                    f"({len(analyzer.thermals)} thermals + takeoff + landing)"
                )

    if args.report:
        try:
            write_report(analyzer, args.report)
        except OSError as exc:
            print(f"Could not create report file! {exc}", file=sys.stderr)
            status = 1
        else:
            print(f"Flight analysis report exported: {Path(args.report).name}")

    return status


if __name__ == "__main__":
    sys.exit(main())