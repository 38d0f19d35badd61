"""
Consistency checks on station counts and on Moody's center-line self-check.
None of these alter computed values or stop a run; they only report.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import math
from typing import Mapping

from moody_surface_plate.config import PlateConfig
from moody_surface_plate.plate.lines import (
    ARCSEC_RAD,
    E_W,
    N_S,
    NE_NW,
    NE_SE,
    NE_SW,
    NW_SE,
    NW_SW,
    SE_SW,
    Line,
    mid_value,
)
from moody_surface_plate.worksheet import WorksheetStore

logger = logging.getLogger(__name__)

PYTHAGORAS_TOLERANCE: float = 1.5  # Allowed |sqrt(x^2 + y^2) - z| in stations.

# Lines that should carry the same number of stations.
COUNT_TRIPLES: tuple[tuple[Line, Line, Line], ...] = (
    (NE_NW, SE_SW, E_W),
    (NE_SE, NW_SW, N_S),
)
# (leg x, leg y, diagonal z) for the station-density check.
PYTHAGORAS_SETS: tuple[tuple[Line, Line, Line], ...] = (
    (NE_NW, NE_SE, NW_SE),
    (SE_SW, NW_SW, NE_SW),
)


@dataclass(frozen=True)
class Advisory:
    """Non-fatal finding reported next to the normal output."""

    code: str
    message: str


@dataclass(frozen=True)
class CenterLineError:
    """Computed height at the middle of one center line."""

    line_name: str
    error: float  # In the output height unit (microns or 1e-5 inch).
    display_value: float  # In microns or micro-inches.
    acceptable: bool


@dataclass(frozen=True)
class MeasurementErrorCheck:
    """Outcome of Moody's self-check on the two center lines."""

    errors: list[CenterLineError]
    threshold: float
    unit_label: str

    @property
    def acceptable(self) -> bool:
        return all(e.acceptable for e in self.errors)

    @property
    def message(self) -> str:
        if self.acceptable:
            return (
                "According to Moody these errors are acceptable, because their "
                "magnitude is less than 100 micro-inch = 2.54 microns."
            )
        return (
            "Measurement errors are larger than Moody considers acceptable "
            "(100 micro-inch = 2.54 microns). The job must be done over!"
        )


def _report(advisory: Advisory) -> Advisory:
    logger.warning(advisory.message)
    return advisory


def check_station_counts(counts: Mapping[str, int]) -> list[Advisory]:
    """Warn when lines that should agree on station count do not."""
    advisories: list[Advisory] = []

    if counts[NW_SE.name] != counts[NE_SW.name]:
        advisories.append(
            _report(
                Advisory(
                    code="diagonal_count_mismatch",
                    message=(
                        f"The number of stations along the {NW_SE.filename} and "
                        f"{NE_SW.filename} diagonals are expected to be the same, "
                        f"but are not ({counts[NW_SE.name]} vs {counts[NE_SW.name]})."
                    ),
                )
            )
        )

    for triple in COUNT_TRIPLES:
        triple_counts: set[int] = {counts[line.name] for line in triple}
        if len(triple_counts) > 1:
            names: str = ", ".join(line.filename for line in triple)
            advisories.append(
                _report(
                    Advisory(
                        code="triple_count_mismatch",
                        message=(
                            f"The number of stations along the three lines {names} "
                            "are expected to be the same, but are not."
                        ),
                    )
                )
            )
    return advisories


def check_diagonal_geometry(counts: Mapping[str, int]) -> list[Advisory]:
    """Compare each diagonal's station count to the hypotenuse of its legs."""
    advisories: list[Advisory] = []
    for leg_x, leg_y, diagonal in PYTHAGORAS_SETS:
        x: int = counts[leg_x.name]
        y: int = counts[leg_y.name]
        z: int = counts[diagonal.name]
        diag_len: float = math.sqrt(float(x) * x + float(y) * y)
        if abs(diag_len - z) > PYTHAGORAS_TOLERANCE:
            advisories.append(
                _report(
                    Advisory(
                        code="pythagoras_mismatch",
                        message=(
                            "The number of stations along the perimeter lines and "
                            "diagonal lines appears to deviate significantly from "
                            "Pythagoras' Theorem x^2 + y^2 = z^2 for "
                            f"x = {x}, y = {y} and z = {z}."
                        ),
                    )
                )
            )
    return advisories


def run_input_checks(counts: Mapping[str, int]) -> list[Advisory]:
    """All checks that only need the station counts."""
    return check_station_counts(counts) + check_diagonal_geometry(counts)


def check_measurement_error(
    store: WorksheetStore, plate_config: PlateConfig
) -> MeasurementErrorCheck:
    """Convert the height at the middle of each center line to a length and judge it.

    Absent measurement errors the corrected center lines pass through zero at
    their middle; anything left over is the estimated error.
    """
    units = plate_config.units
    scale: float = ARCSEC_RAD * plate_config.effective_spacing
    errors: list[CenterLineError] = []
    for line in (E_W, N_S):
        error: float = mid_value(store.get_column(line, "corrected_height")) * scale
        errors.append(
            CenterLineError(
                line_name=line.name,
                error=error,
                display_value=error * units.error_display_factor,
                acceptable=abs(error) <= units.error_threshold,
            )
        )

    check = MeasurementErrorCheck(
        errors=errors,
        threshold=units.error_threshold,
        unit_label=units.error_label,
    )
    if not check.acceptable:
        logger.warning(check.message)
    return check
