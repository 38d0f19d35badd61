"""Column pipeline turning raw readings into closed, normalized plate heights.

Stages run in a fixed order because each one consumes the previous results:
base columns for every line, diagonal closure, corner propagation, perimeter
shift, center-line boundaries, center-line shift, global normalization and
finally unit conversion. Every stage takes the shared ``PipelineContext``.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging

import numpy as np

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
    LineRole,
    lines_with_role,
    mid_value,
)
from moody_surface_plate.worksheet import CenterWorksheet, Worksheet, WorksheetStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Corners:
    """Corner heights taken from the closed diagonals (arc-seconds)."""

    ne: float
    nw: float
    se: float
    sw: float


@dataclass(frozen=True)
class HeightRange:
    """Lowest and highest height over all worksheets (arc-seconds)."""

    low: float
    high: float


@dataclass(frozen=True)
class PipelineResult:
    """Summary values produced alongside the completed worksheets."""

    corners: Corners
    height_range: HeightRange
    plate_peak: float  # Peak-to-valley height in the output unit.


@dataclass
class PipelineContext:
    """State passed through every pipeline stage."""

    store: WorksheetStore
    plate_config: PlateConfig

    # Populated as the stages run.
    corners: Corners | None = None
    height_range: HeightRange | None = None
    plate_peak: float | None = None

    def sheet(self, line: Line | str) -> Worksheet:
        return self.store.worksheet(line)


# ---------------------------------------------------------------------------
# Per-worksheet transforms
# ---------------------------------------------------------------------------


def fill_base_columns(sheet: Worksheet) -> None:
    """Fill angle differences and their running sum (Moody columns 3 and 4)."""
    n: int = sheet.count
    sheet.station = np.arange(1, n + 2, dtype=np.int64)

    angle_delta: np.ndarray = np.zeros(n + 1, dtype=np.float64)
    angle_delta[1:] = sheet.raw_angle[1:] - sheet.raw_angle[1]
    sheet.angle_delta = angle_delta

    # cum_delta[0] = cum_delta[1] = 0, accumulation starts at row 2.
    cum_delta: np.ndarray = np.zeros(n + 1, dtype=np.float64)
    cum_delta[2:] = np.cumsum(angle_delta[2:])
    sheet.cum_delta = cum_delta


def close_diagonal(sheet: Worksheet) -> None:
    """Apply the linear ramp that closes a diagonal on its own mid-value."""
    n: int = sheet.count
    total: float = float(sheet.cum_delta[n])
    slope: float = -total / n
    intercept: float = 0.5 * total - mid_value(sheet.cum_delta)

    rows: np.ndarray = np.arange(n + 1, dtype=np.float64)
    sheet.correction = slope * rows + intercept
    sheet.corrected_height = sheet.cum_delta + sheet.correction


def set_boundaries(sheet: Worksheet, start: float, end: float) -> None:
    """Place boundary heights at rows 0 and N ahead of the shift correction.

    Row 0 seeds both the correction and the height; row N only the height.
    """
    n: int = sheet.count
    sheet.correction[0] = start
    sheet.corrected_height[0] = start
    sheet.corrected_height[n] = end


def apply_shift_correction(sheet: Worksheet) -> None:
    """Spread the boundary mismatch linearly over the interior stations.

    Boundary heights must already sit in rows 0 and N. Center worksheets also
    get their centered column (Moody column 6a).
    """
    n: int = sheet.count
    correction: np.ndarray = sheet.correction
    height: np.ndarray = sheet.corrected_height

    correction[n] = height[n] - sheet.cum_delta[n]
    factor: float = (correction[0] - correction[n]) / n
    for j in range(n - 1, 0, -1):
        correction[j] = correction[j + 1] + factor
        height[j] = correction[j] + sheet.cum_delta[j]

    if isinstance(sheet, CenterWorksheet):
        sheet.centered_height = height - mid_value(height)


# ---------------------------------------------------------------------------
# Stages
# ---------------------------------------------------------------------------


def compute_base_columns(ctx: PipelineContext) -> None:
    """Moody columns 1-4 for all eight worksheets."""
    for sheet in ctx.store:
        fill_base_columns(sheet)


def apply_diagonal_closure(ctx: PipelineContext) -> None:
    """Moody columns 5 and 6 for the two diagonals."""
    for line in lines_with_role(LineRole.DIAGONAL):
        close_diagonal(ctx.sheet(line))


def propagate_corners(ctx: PipelineContext) -> Corners:
    """Copy the diagonal end heights into the perimeter worksheets."""
    ne_sw: Worksheet = ctx.sheet(NE_SW)
    nw_se: Worksheet = ctx.sheet(NW_SE)
    corners = Corners(
        ne=float(ne_sw.corrected_height[0]),
        nw=float(nw_se.corrected_height[0]),
        se=float(nw_se.corrected_height[nw_se.count]),
        sw=float(ne_sw.corrected_height[ne_sw.count]),
    )

    set_boundaries(ctx.sheet(NE_NW), corners.ne, corners.nw)
    set_boundaries(ctx.sheet(NE_SE), corners.ne, corners.se)
    set_boundaries(ctx.sheet(SE_SW), corners.se, corners.sw)
    set_boundaries(ctx.sheet(NW_SW), corners.nw, corners.sw)

    ctx.corners = corners
    logger.debug("Corner heights (arcsec): %s", corners)
    return corners


def shift_perimeter_lines(ctx: PipelineContext) -> None:
    """Moody columns 5 and 6 for the four perimeter lines."""
    for line in lines_with_role(LineRole.PERIMETER):
        apply_shift_correction(ctx.sheet(line))


def propagate_center_boundaries(ctx: PipelineContext) -> None:
    """Anchor the center lines to the midpoints of the corrected perimeters."""
    set_boundaries(
        ctx.sheet(E_W),
        mid_value(ctx.sheet(NE_SE).corrected_height),  # East end
        mid_value(ctx.sheet(NW_SW).corrected_height),  # West end
    )
    set_boundaries(
        ctx.sheet(N_S),
        mid_value(ctx.sheet(NE_NW).corrected_height),  # North end
        mid_value(ctx.sheet(SE_SW).corrected_height),  # South end
    )


def shift_center_lines(ctx: PipelineContext) -> None:
    """Moody columns 5, 6 and 6a for the two center lines."""
    for line in lines_with_role(LineRole.CENTER):
        apply_shift_correction(ctx.sheet(line))


def normalize_heights(ctx: PipelineContext) -> HeightRange:
    """Moody column 7: subtract the lowest height found on any worksheet."""
    sources: list[np.ndarray] = [sheet.height_source for sheet in ctx.store]
    low: float = float(min(np.min(values) for values in sources))
    high: float = float(max(np.max(values) for values in sources))

    for sheet in ctx.store:
        sheet.normalized_height = sheet.height_source - low

    ctx.height_range = HeightRange(low=low, high=high)
    logger.info("Height range over plate: %.3f to %.3f arcsec", low, high)
    return ctx.height_range


def convert_units(ctx: PipelineContext) -> float:
    """Moody column 8: convert normalized heights to the output length unit."""
    if ctx.height_range is None:
        raise RuntimeError("Heights must be normalized before unit conversion.")

    scale: float = ARCSEC_RAD * ctx.plate_config.effective_spacing
    for sheet in ctx.store:
        sheet.physical_height = sheet.normalized_height * scale

    ctx.plate_peak = (ctx.height_range.high - ctx.height_range.low) * scale
    logger.info(
        "Plate peak-to-valley: %.2f %s",
        ctx.plate_peak,
        ctx.plate_config.units.height_label,
    )
    return ctx.plate_peak


PIPELINE_STAGES = (
    compute_base_columns,
    apply_diagonal_closure,
    propagate_corners,
    shift_perimeter_lines,
    propagate_center_boundaries,
    shift_center_lines,
    normalize_heights,
    convert_units,
)


def run_pipeline(ctx: PipelineContext) -> PipelineResult:
    """Run every stage in order and return the summary values."""
    if not ctx.store.is_complete():
        raise RuntimeError("All eight worksheets must exist before the pipeline runs.")

    for stage in PIPELINE_STAGES:
        logger.debug("Running pipeline stage %s", stage.__name__)
        stage(ctx)

    assert ctx.corners is not None
    assert ctx.height_range is not None
    assert ctx.plate_peak is not None
    return PipelineResult(
        corners=ctx.corners,
        height_range=ctx.height_range,
        plate_peak=ctx.plate_peak,
    )
