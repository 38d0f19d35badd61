"""Fixed-width text rendering of completed worksheets and check results."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from moody_surface_plate.checks import Advisory, MeasurementErrorCheck
from moody_surface_plate.config import Units
from moody_surface_plate.worksheet import CenterWorksheet, Worksheet

if TYPE_CHECKING:
    from moody_surface_plate.analysis import AnalysisResult

BANNER: str = "=" * 64

# Columns are 8 characters wide after a 6 character station number.
_HEADER: str = (
    "   1       2       3       4       5       6       7       8   \n"
    "---------------------------------------------------------------\n"
    "Station  Auto-   Angle  Sum of   Cumul   Delta   Delta   Delta \n"
    " Num-    Corr    Displ   Displ   Corr    Datum    Base    Base \n"
    " ber    ArcSec  ArcSec  ArcSec   Factor  ArcSec  ArcSec {unit}\n"
    "---------------------------------------------------------------\n"
)
_CENTER_HEADER: str = (
    "   1       2       3       4       5       6       6a      7       8   \n"
    "-----------------------------------------------------------------------\n"
    "Station  Auto-   Angle  Sum of   Cumul   Delta    Error  Delta   Delta \n"
    " Num-    Corr    Displ   Displ   Corr    Datum    Shift   Base    Base \n"
    " ber    ArcSec  ArcSec  ArcSec   Factor  ArcSec    Out   ArcSec {unit}\n"
    "-----------------------------------------------------------------------\n"
)


def _unit_heading(units: Units) -> str:
    return " micron" if units is Units.METRIC else "10^-5in"


def table_columns(sheet: Worksheet) -> tuple[str, ...]:
    """Value columns printed after the station number, left to right."""
    columns: tuple[str, ...] = (
        "raw_angle",
        "angle_delta",
        "cum_delta",
        "correction",
        "corrected_height",
    )
    if isinstance(sheet, CenterWorksheet):
        columns += ("centered_height",)
    return columns + ("normalized_height", "physical_height")


def format_worksheet(sheet: Worksheet, units: Units) -> str:
    """Render one worksheet as Moody laid it out."""
    template: str = _CENTER_HEADER if isinstance(sheet, CenterWorksheet) else _HEADER
    lines: list[str] = [
        f"TABLE {sheet.line.filename}",
        template.format(unit=_unit_heading(units)).rstrip("\n"),
    ]
    columns: tuple[str, ...] = table_columns(sheet)
    for row in range(sheet.count + 1):
        text: str = f"{int(sheet.station[row]):6d}"
        text += "".join(f"{float(getattr(sheet, c)[row]):8.1f}" for c in columns)
        lines.append(text)
    return "\n".join(lines) + "\n"


def format_error_summary(check: MeasurementErrorCheck) -> str:
    """Render Moody's center-line self-check."""
    lines: list[str] = [
        BANNER,
        "Measurement errors are estimated from the computed",
        "heights at the middle of the two center lines. Absent any",
        "measurement errors, these computed heights would be zero.",
    ]
    for item in check.errors:
        lines.append(
            f"Computed height at the center of the {item.line_name}.txt line: "
            f"{item.display_value:4.2f} {check.unit_label}."
        )
    lines.append(check.message)
    lines.append(BANNER)
    return "\n".join(lines) + "\n"


def format_advisories(advisories: Iterable[Advisory]) -> str:
    """One warning line per advisory, or an empty string."""
    return "".join(f"Warning: {a.message}\n" for a in advisories)


def format_report(result: AnalysisResult) -> str:
    """Full text output for one analysis run."""
    units: Units = result.plate_config.units
    parts: list[str] = [
        f"Using a {result.plate_config.foot_spacing:.2f} {units.length_label} "
        "foot spacing.\n",
    ]
    warnings: str = format_advisories(result.advisories)
    if warnings:
        parts.append(warnings)
    parts.append(format_error_summary(result.error_check))
    parts.extend(format_worksheet(sheet, units) for sheet in result.store)
    parts.append(
        f"Plate peak-to-valley height: {result.pipeline.plate_peak:.2f} "
        f"{units.height_label}\n"
    )
    return "\n".join(parts)
