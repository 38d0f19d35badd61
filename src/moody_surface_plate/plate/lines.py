"""
Line registry for the Union Jack layout
i.e. the eight fixed measurement lines, their roles, and the shared math helpers.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import math  # used for the arc-second constant
from typing import Sequence

import numpy as np

from moody_surface_plate.errors import MalformedInput

ARCSEC_RAD: float = 2.0 * math.pi / (360.0 * 60 * 60)  # One arc-second in radians.


class LineRole(str, Enum):
    """Which part of the Union Jack a line belongs to."""

    DIAGONAL = "diagonal"
    PERIMETER = "perimeter"
    CENTER = "center"


@dataclass(frozen=True)
class Line:
    """One measurement line: identity, role, processing order and compass endpoints."""

    name: str  # Identify the line, e.g. "NE_SW".
    role: LineRole  # Decide which worksheet variant and pipeline stages apply.
    order: int  # Fixed position in the processing sequence (0-7).
    start: str  # Compass point where station 0 sits.
    end: str  # Compass point where station N sits.

    @property
    def filename(self) -> str:
        """Name of the reading file for this line."""
        return f"{self.name}.txt"


# Processing order matters: diagonals, then perimeters, then center lines.
NW_SE: Line = Line("NW_SE", LineRole.DIAGONAL, 0, "NW", "SE")
NE_SW: Line = Line("NE_SW", LineRole.DIAGONAL, 1, "NE", "SW")
NE_NW: Line = Line("NE_NW", LineRole.PERIMETER, 2, "NE", "NW")
NE_SE: Line = Line("NE_SE", LineRole.PERIMETER, 3, "NE", "SE")
SE_SW: Line = Line("SE_SW", LineRole.PERIMETER, 4, "SE", "SW")
NW_SW: Line = Line("NW_SW", LineRole.PERIMETER, 5, "NW", "SW")
E_W: Line = Line("E_W", LineRole.CENTER, 6, "E", "W")
N_S: Line = Line("N_S", LineRole.CENTER, 7, "N", "S")

LINES: tuple[Line, ...] = (NW_SE, NE_SW, NE_NW, NE_SE, SE_SW, NW_SW, E_W, N_S)
LINES_BY_NAME: dict[str, Line] = {line.name: line for line in LINES}


def get_line(line: Line | str) -> Line:
    """Resolve a Line or a line name to the registered Line."""
    if isinstance(line, Line):
        return line
    try:
        return LINES_BY_NAME[line]
    except KeyError:
        raise MalformedInput(
            f"Unknown line '{line}'. Expected one of {list(LINES_BY_NAME)}"
        ) from None


def lines_with_role(role: LineRole) -> tuple[Line, ...]:
    """Return the registered lines of one role, in processing order."""
    return tuple(line for line in LINES if line.role is role)


def mid_value(column: Sequence[float] | np.ndarray) -> float:
    """Return the middle value of a worksheet column with rows 0..N.

    Parity is taken on N (the last row index), not on the row count: for even
    N the element at N/2 is returned, for odd N the average of the elements at
    (N-1)/2 and (N+1)/2.
    """
    values: np.ndarray = np.asarray(column, dtype=np.float64)
    if values.size == 0:
        raise ValueError("mid_value needs at least one row.")
    n: int = values.size - 1
    if n % 2 == 0:
        return float(values[n // 2])
    return float(0.5 * (values[(n - 1) // 2] + values[(n + 1) // 2]))
