"""Unit tests for worksheet and summary rendering."""

from __future__ import annotations

from moody_surface_plate.analysis import AnalysisResult, analyze_readings
from moody_surface_plate.checks import CenterLineError, MeasurementErrorCheck
from moody_surface_plate.config import PlateConfig, Units
from moody_surface_plate.plate.lines import LINES
from moody_surface_plate.report import (
    format_error_summary,
    format_report,
    format_worksheet,
    table_columns,
)
from moody_surface_plate.worksheet import WorksheetStore


def make_result(units: Units = Units.METRIC) -> AnalysisResult:
    """Analyze an all-zero plate with four readings per line."""
    readings: dict[str, list[float]] = {line.name: [0.0] * 4 for line in LINES}
    spacing: float = 66.0 if units is Units.METRIC else 4.0
    return analyze_readings(readings, PlateConfig(units, spacing))


def test_table_columns_add_centered_column_for_center_lines() -> None:
    """Only center worksheets print column 6a."""
    store = WorksheetStore()
    perimeter = store.create("NE_NW", [0.0] * 3)
    center = store.create("E_W", [0.0] * 3)
    assert "centered_height" not in table_columns(perimeter)
    assert table_columns(center)[5] == "centered_height"
    assert len(table_columns(center)) == len(table_columns(perimeter)) + 1


def test_format_worksheet_rows_and_widths() -> None:
    """One row per station: a 6-wide station then 8-wide values."""
    result: AnalysisResult = make_result()
    text: str = format_worksheet(result.store.worksheet("NE_NW"), Units.METRIC)
    lines: list[str] = text.splitlines()

    assert lines[0] == "TABLE NE_NW.txt"
    assert "micron" in lines[5]
    rows: list[str] = lines[7:]
    assert len(rows) == 5
    assert rows[0] == "     1" + "     0.0" * 7
    assert rows[-1].startswith("     5")


def test_format_worksheet_center_header_and_imperial_units() -> None:
    """Center tables carry the 6a heading; imperial tables label 10^-5in."""
    result: AnalysisResult = make_result(Units.IMPERIAL)
    text: str = format_worksheet(result.store.worksheet("N_S"), Units.IMPERIAL)
    assert "6a" in text
    assert "10^-5in" in text
    assert text.splitlines()[7] == "     1" + "     0.0" * 8


def test_format_error_summary_reports_each_center_line() -> None:
    """Computed center heights and the verdict are printed."""
    check = MeasurementErrorCheck(
        errors=[
            CenterLineError("E_W", 1.0, 1.0, True),
            CenterLineError("N_S", 3.0, 3.0, False),
        ],
        threshold=2.54,
        unit_label="microns",
    )
    text: str = format_error_summary(check)
    assert "center of the E_W.txt line: 1.00 microns." in text
    assert "center of the N_S.txt line: 3.00 microns." in text
    assert "must be done over" in text


def test_format_report_contains_every_table() -> None:
    """The full report has the spacing, verdict, eight tables and the peak."""
    result: AnalysisResult = make_result()
    text: str = format_report(result)
    assert "Using a 66.00 mm foot spacing." in text
    assert "errors are acceptable" in text
    for line in LINES:
        assert f"TABLE {line.filename}" in text
    assert "Plate peak-to-valley height: 0.00 micron" in text
    # Four stations on every line cannot satisfy x^2 + y^2 = z^2.
    assert "Warning: The number of stations along the perimeter lines" in text
