"""
Reading-file utilities for the eight measurement lines.
Each file holds one angle in arc-seconds per data line; blank lines and
lines starting with '#' are skipped.
"""

from __future__ import annotations

# Standard library imports
import logging
from pathlib import Path

from moody_surface_plate.config import DEFAULT_MAX_STATIONS, PlateConfig
from moody_surface_plate.errors import (
    CapacityExceeded,
    InsufficientData,
    MalformedInput,
)
from moody_surface_plate.plate.lines import LINES, Line
from moody_surface_plate.worksheet import MIN_READINGS

logger = logging.getLogger(__name__)

# Default locations, relative to the current working directory.
DATA_DIR: Path = Path(".")
CONFIG_FILENAME: str = "Config.txt"


def _parse_reading(line_text: str, source: str, line_number: int) -> float:
    """Convert one data line into an angle, rejecting trailing junk."""
    tokens: list[str] = line_text.split()
    try:
        if len(tokens) != 1:
            raise ValueError
        return float(tokens[0])
    except ValueError:
        raise MalformedInput(
            f"Unable to parse line {line_number} of data file {source}. "
            f"Expected is an angle in arcseconds. Line reads: {line_text!r}"
        ) from None


def parse_readings_text(text: str, source: str = "<string>") -> list[float]:
    """Parse the contents of one reading file into a list of angles."""
    readings: list[float] = []
    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        stripped: str = raw_line.strip()
        # Skip comments and blank lines.
        if not stripped or stripped.startswith("#"):
            continue
        readings.append(_parse_reading(stripped, source, line_number))
    return readings


def load_line_readings(
    data_dir: Path, line: Line, max_stations: int
) -> list[float]:
    """Read and validate the reading file for one line."""
    path: Path = data_dir / line.filename
    if not path.is_file():
        raise MalformedInput(f"Unable to find/open input data file {path}")

    readings: list[float] = parse_readings_text(
        path.read_text(encoding="utf-8"), source=line.filename
    )
    if len(readings) > max_stations:
        raise CapacityExceeded(
            f"A maximum of {max_stations} stations is accepted, but file "
            f"{line.filename} contains {len(readings)}."
        )
    if len(readings) < MIN_READINGS:
        raise InsufficientData(
            f"Read {len(readings)} data lines from data file {line.filename}. "
            f"Need at least {MIN_READINGS} valid data lines."
        )

    logger.info("Read %d data entries from %s", len(readings), line.filename)
    return readings


def load_readings(
    data_dir: Path = DATA_DIR, plate_config: PlateConfig | None = None
) -> dict[str, list[float]]:
    """Load all eight reading files, keyed by line name in processing order."""
    max_stations: int = (
        plate_config.max_stations if plate_config is not None else DEFAULT_MAX_STATIONS
    )
    return {
        line.name: load_line_readings(data_dir, line, max_stations) for line in LINES
    }
