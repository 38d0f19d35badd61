"""Plate-plane coordinates for every station, paired with physical heights.

The plate is laid out with West at x = 0, East at x = max_x, South at y = 0
and North at y = max_y. Extents come from the station counts of the
perimeter and center lines, so one station step is one unit on either axis.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from moody_surface_plate.plate.lines import E_W, N_S, NE_NW, NE_SE, NW_SW, SE_SW
from moody_surface_plate.worksheet import Worksheet, WorksheetStore


@dataclass(frozen=True)
class PlotPoint:
    """One station in plot space."""

    x: float
    y: float
    z: float


@dataclass(frozen=True)
class LinePolyline:
    """All stations of one line, in station order."""

    name: str
    points: list[PlotPoint]


@dataclass(frozen=True)
class PlotBounds:
    """Extent of the plot box."""

    max_x: int
    max_y: int
    max_z: int


@dataclass(frozen=True)
class EdgeLabel:
    """Compass annotation placed just outside a plate edge."""

    text: str
    x: float
    y: float
    z: float = 0.0


@dataclass(frozen=True)
class PlateLayout:
    """Polylines, bounds and edge labels for a surface plot."""

    lines: list[LinePolyline]
    bounds: PlotBounds
    labels: list[EdgeLabel]

    def triples(self) -> list[tuple[float, float, float]]:
        """All points flattened to (x, y, z), line by line."""
        return [(p.x, p.y, p.z) for line in self.lines for p in line.points]


def plate_extent(counts: dict[str, int]) -> tuple[int, int]:
    """Width (East-West) and depth (North-South) of the plate in stations."""
    max_x: int = max(counts[NE_NW.name], counts[SE_SW.name], counts[E_W.name])
    max_y: int = max(counts[NE_SE.name], counts[NW_SW.name], counts[N_S.name])
    return max_x, max_y


def compass_anchors(max_x: float, max_y: float) -> dict[str, tuple[float, float]]:
    """Plate coordinates of the corners and edge midpoints."""
    return {
        "NW": (0.0, max_y),
        "NE": (max_x, max_y),
        "SE": (max_x, 0.0),
        "SW": (0.0, 0.0),
        "N": (0.5 * max_x, max_y),
        "S": (0.5 * max_x, 0.0),
        "E": (max_x, 0.5 * max_y),
        "W": (0.0, 0.5 * max_y),
    }


def edge_labels(max_x: float, max_y: float) -> list[EdgeLabel]:
    """N/S/E/W labels at the edge midpoints, pushed 10% outside the plate."""
    return [
        EdgeLabel("N", 0.5 * max_x, 1.1 * max_y),
        EdgeLabel("S", 0.5 * max_x, -0.1 * max_y),
        EdgeLabel("E", 1.1 * max_x, 0.5 * max_y),
        EdgeLabel("W", -0.1 * max_x, 0.5 * max_y),
    ]


def project_line(
    sheet: Worksheet, anchors: dict[str, tuple[float, float]]
) -> LinePolyline:
    """Interpolate a line's stations between its two compass anchors."""
    n: int = sheet.count
    x0, y0 = anchors[sheet.line.start]
    x1, y1 = anchors[sheet.line.end]

    t: np.ndarray = np.arange(n + 1, dtype=np.float64) / n
    xs: np.ndarray = x0 + (x1 - x0) * t
    ys: np.ndarray = y0 + (y1 - y0) * t
    points: list[PlotPoint] = [
        PlotPoint(x=float(x), y=float(y), z=float(z))
        for x, y, z in zip(xs, ys, sheet.physical_height)
    ]
    return LinePolyline(name=sheet.line.name, points=points)


def project_layout(store: WorksheetStore, plate_peak: float) -> PlateLayout:
    """Build the full plot layout from completed worksheets."""
    max_x, max_y = plate_extent(store.station_counts())
    anchors = compass_anchors(float(max_x), float(max_y))
    polylines: list[LinePolyline] = [project_line(sheet, anchors) for sheet in store]
    return PlateLayout(
        lines=polylines,
        bounds=PlotBounds(max_x=max_x, max_y=max_y, max_z=int(1.0 + plate_peak)),
        labels=edge_labels(float(max_x), float(max_y)),
    )
