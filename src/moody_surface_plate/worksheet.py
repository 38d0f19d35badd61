"""
Worksheet storage: one table of named columns per line, indexed by station.
Rows run 0..N where N is the number of readings; row 0 is synthetic.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import math
from typing import ClassVar, Iterator, Sequence

import numpy as np

from moody_surface_plate.config import DEFAULT_MAX_STATIONS
from moody_surface_plate.errors import (
    CapacityExceeded,
    InsufficientData,
    MalformedInput,
)
from moody_surface_plate.plate.lines import LINES, Line, LineRole, get_line

MIN_READINGS: int = 3

# Columns every worksheet carries, in Moody's left-to-right order.
COMMON_COLUMNS: tuple[str, ...] = (
    "station",
    "raw_angle",
    "angle_delta",
    "cum_delta",
    "correction",
    "corrected_height",
    "normalized_height",
    "physical_height",
)
CENTER_COLUMNS: tuple[str, ...] = COMMON_COLUMNS[:6] + (
    "centered_height",
) + COMMON_COLUMNS[6:]


def _zeros(rows: int) -> np.ndarray:
    return np.zeros(rows, dtype=np.float64)


@dataclass(eq=False)
class Worksheet:
    """Raw and derived columns for one line."""

    line: Line
    raw_angle: np.ndarray  # Row 0 is unused; readings sit in rows 1..N.
    station: np.ndarray = field(init=False)
    angle_delta: np.ndarray = field(init=False)
    cum_delta: np.ndarray = field(init=False)
    correction: np.ndarray = field(init=False)
    corrected_height: np.ndarray = field(init=False)
    normalized_height: np.ndarray = field(init=False)
    physical_height: np.ndarray = field(init=False)

    columns: ClassVar[tuple[str, ...]] = COMMON_COLUMNS

    def __post_init__(self) -> None:
        rows: int = self.raw_angle.size
        self.station = np.arange(1, rows + 1, dtype=np.int64)
        self.angle_delta = _zeros(rows)
        self.cum_delta = _zeros(rows)
        self.correction = _zeros(rows)
        self.corrected_height = _zeros(rows)
        self.normalized_height = _zeros(rows)
        self.physical_height = _zeros(rows)

    @property
    def count(self) -> int:
        """Number of readings N (the last row index)."""
        return self.raw_angle.size - 1

    @property
    def height_source(self) -> np.ndarray:
        """Column that feeds global normalization."""
        return self.corrected_height

    def readings(self) -> np.ndarray:
        """The measured angles, rows 1..N."""
        return self.raw_angle[1:]


@dataclass(eq=False)
class DiagonalWorksheet(Worksheet):
    """Worksheet closed on itself by the diagonal ramp correction."""


@dataclass(eq=False)
class PerimeterWorksheet(Worksheet):
    """Worksheet anchored at both ends to plate corners."""


@dataclass(eq=False)
class CenterWorksheet(Worksheet):
    """Worksheet anchored to perimeter midpoints, with the self-check column."""

    centered_height: np.ndarray = field(init=False)

    columns: ClassVar[tuple[str, ...]] = CENTER_COLUMNS

    def __post_init__(self) -> None:
        super().__post_init__()
        self.centered_height = _zeros(self.raw_angle.size)

    @property
    def height_source(self) -> np.ndarray:
        return self.centered_height


WORKSHEET_TYPES: dict[LineRole, type[Worksheet]] = {
    LineRole.DIAGONAL: DiagonalWorksheet,
    LineRole.PERIMETER: PerimeterWorksheet,
    LineRole.CENTER: CenterWorksheet,
}


class WorksheetStore:
    """Holds the worksheets of one run, keyed by line name."""

    def __init__(self, max_stations: int = DEFAULT_MAX_STATIONS) -> None:
        self.max_stations: int = max_stations
        self._sheets: dict[str, Worksheet] = {}

    def create(
        self,
        line: Line | str,
        raw_angles: Sequence[float],
        count: int | None = None,
    ) -> Worksheet:
        """Create (or replace) the worksheet for a line from its readings."""
        resolved: Line = get_line(line)
        values: list[float] = [float(v) for v in raw_angles]
        n: int = len(values) if count is None else count

        if n < MIN_READINGS:
            raise InsufficientData(
                f"Read {n} data lines for {resolved.filename}. "
                f"Need at least {MIN_READINGS} valid data lines."
            )
        if n > self.max_stations:
            raise CapacityExceeded(
                f"{resolved.filename} contains {n} stations but at most "
                f"{self.max_stations} are accepted."
            )
        if n != len(values):
            raise MalformedInput(
                f"{resolved.filename}: count {n} does not match the "
                f"{len(values)} readings supplied."
            )
        for row, value in enumerate(values, start=1):
            if not math.isfinite(value):
                raise MalformedInput(
                    f"{resolved.filename}: reading at station {row} is not finite."
                )

        raw: np.ndarray = np.array([0.0] + values, dtype=np.float64)
        sheet: Worksheet = WORKSHEET_TYPES[resolved.role](line=resolved, raw_angle=raw)
        self._sheets[resolved.name] = sheet
        return sheet

    def worksheet(self, line: Line | str) -> Worksheet:
        """Return the worksheet for a line."""
        name: str = get_line(line).name
        try:
            return self._sheets[name]
        except KeyError:
            raise KeyError(f"No worksheet has been created for {name}.") from None

    def get_column(self, line: Line | str, name: str) -> np.ndarray:
        """Return one named column of a line's worksheet."""
        sheet: Worksheet = self.worksheet(line)
        if name not in sheet.columns:
            raise KeyError(f"{sheet.line.name} worksheet has no column '{name}'.")
        return getattr(sheet, name)

    def set_column(
        self, line: Line | str, name: str, values: Sequence[float] | np.ndarray
    ) -> None:
        """Replace one named column of a line's worksheet."""
        sheet: Worksheet = self.worksheet(line)
        if name not in sheet.columns:
            raise KeyError(f"{sheet.line.name} worksheet has no column '{name}'.")
        current: np.ndarray = getattr(sheet, name)
        new: np.ndarray = np.array(values, dtype=current.dtype)
        if new.shape != current.shape:
            raise ValueError(
                f"Column '{name}' of {sheet.line.name} needs {current.size} rows, "
                f"got {new.size}."
            )
        setattr(sheet, name, new)

    def station_counts(self) -> dict[str, int]:
        """Number of readings per line, in processing order."""
        return {sheet.line.name: sheet.count for sheet in self}

    def is_complete(self) -> bool:
        """True once every registered line has a worksheet."""
        return all(line.name in self._sheets for line in LINES)

    def __contains__(self, line: object) -> bool:
        if isinstance(line, Line):
            return line.name in self._sheets
        return line in self._sheets

    def __iter__(self) -> Iterator[Worksheet]:
        for line in LINES:
            if line.name in self._sheets:
                yield self._sheets[line.name]

    def __len__(self) -> int:
        return len(self._sheets)
