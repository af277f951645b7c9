from pathlib import Path

import pytest

from igcflight.analyzer import FlightAnalyzer
from igcflight.cli import main


def _b_record(second: int, altitude: int) -> str:
    hours, rest = divmod(36_000 + second, 3600)
    minutes, seconds = divmod(rest, 60)
    lon_minutes = 10_000 + second * 5
    return (
        f"B{hours:02d}{minutes:02d}{seconds:02d}"
        f"4012000N029{lon_minutes:05d}EA{altitude:05d}{altitude:05d}"
    )


def _climbing_altitudes() -> list[int]:
    altitudes = []
    alt = 1000
    for i in range(180):
        if 20 <= i < 80:
            alt += 3
        elif i >= 80:
            alt -= 2
        altitudes.append(alt)
    return altitudes


def _write_flight(path: Path, altitudes: list[int]) -> Path:
    lines = [
        "AXXX000 Test logger",
        "HFDTE150723",
        "HFPLTPILOTINCHARGE:Test Pilot",
        "HFGTYGLIDERTYPE:Test Wing",
        "HFGIDGLIDERID:TEST-000",
    ]
    lines += [_b_record(i, alt) for i, alt in enumerate(altitudes)]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def climbing_flight(tmp_path: Path) -> Path:
    return _write_flight(tmp_path / "climb.igc", _climbing_altitudes())


@pytest.fixture
def flat_flight(tmp_path: Path) -> Path:
    return _write_flight(tmp_path / "flat.igc", [1000] * 120)


def test_missing_file_fails(tmp_path, capsys):
    status = main([str(tmp_path / "absent.igc")])
    assert status == 1
    assert "Failed to load IGC file!" in capsys.readouterr().err


def test_file_without_fixes_fails(tmp_path, capsys):
    path = tmp_path / "empty.igc"
    path.write_text("HFDTE150723\nHFPLTPILOTINCHARGE:Test Pilot\n", encoding="utf-8")
    assert main([str(path)]) == 1
    assert "Failed to load" in capsys.readouterr().err


def test_load_prints_points_and_header(climbing_flight, capsys):
    assert main([str(climbing_flight), "--no-analysis"]) == 0
    out = capsys.readouterr().out
    assert "Data Points: 180" in out
    assert "Pilot: Test Pilot" in out
    assert "File: climb.igc" in out
    assert "<b>" not in out


def test_analysis_reports_thermals(climbing_flight, capsys):
    analyzer = FlightAnalyzer()
    analyzer.load(climbing_flight)
    expected = len(analyzer.analyze_thermals(2.0, 200.0))

    assert main([str(climbing_flight), "--thermals"]) == 0
    out = capsys.readouterr().out
    assert f"{expected} thermals detected" in out
    assert f"{expected} thermals analyzed" in out
    assert "Thermal Analysis Summary" in out
    assert "&ge;" not in out
    for thermal in analyzer.thermals:
        assert thermal.name in out


def test_waypoints_written(climbing_flight, tmp_path, capsys):
    analyzer = FlightAnalyzer()
    analyzer.load(climbing_flight)
    analyzer.analyze_thermals(2.0, 200.0)

    target = tmp_path / "out.wpt"
    assert main([str(climbing_flight), "--waypoints", str(target)]) == 0
    lines = target.read_text(encoding="utf-8").splitlines()
    assert lines == analyzer.waypoint_lines()
    assert lines[0] == "$FormatGEO"
    assert lines[1].startswith("Takeoff")
    assert lines[-1].startswith("Landing")
    assert len(lines) == len(analyzer.thermals) + 3
    assert "out.wpt" in capsys.readouterr().out


def test_waypoints_refused_without_thermals(flat_flight, tmp_path, capsys):
    target = tmp_path / "none.wpt"
    assert main([str(flat_flight), "--waypoints", str(target)]) == 1
    captured = capsys.readouterr()
    assert "No thermals found to save!" in captured.err
    assert "No thermals found with the current criteria." in captured.out
    assert not target.exists()


def test_html_report(climbing_flight, tmp_path):
    target = tmp_path / "report.html"
    assert main([str(climbing_flight), "--report", str(target)]) == 0
    content = target.read_text(encoding="utf-8")
    assert content.startswith("<!DOCTYPE html>")
    assert "Flight Information" in content
    assert "Thermal Analysis Summary" in content


def test_text_report(climbing_flight, tmp_path):
    target = tmp_path / "report.txt"
    assert main([str(climbing_flight), "--report", str(target)]) == 0
    content = target.read_text(encoding="utf-8")
    assert "FLIGHT ANALYSIS REPORT" in content
    assert "<" not in content
    assert "Pilot: Test Pilot" in content


def test_report_without_analysis_omits_thermals(climbing_flight, tmp_path):
    target = tmp_path / "plain.html"
    assert main([str(climbing_flight), "--no-analysis", "--report", str(target)]) == 0
    content = target.read_text(encoding="utf-8")
    assert "Flight Information" in content
    assert "Thermal Analysis Summary" not in content


@pytest.mark.parametrize(
    "option",
    [
        ["--min-climb", "0.1"],
        ["--min-climb", "11"],
        ["--radius", "10"],
        ["--radius", "2000"],
        ["--min-climb", "fast"],
    ],
)
def test_out_of_range_parameters_rejected(climbing_flight, option):
    with pytest.raises(SystemExit) as info:
        main([str(climbing_flight), *option])
    assert info.value.code == 2


def test_stricter_climb_rate_finds_no_more_thermals(climbing_flight, capsys):
    main([str(climbing_flight)])
    default_out = capsys.readouterr().out
    main([str(climbing_flight), "--min-climb", "10"])
    strict_out = capsys.readouterr().out
    assert "thermals detected" in default_out
    assert "No thermals found with the current criteria." in strict_out
    assert "Ready for analysis" in strict_out