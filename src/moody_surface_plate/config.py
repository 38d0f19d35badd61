"""
Plate configuration: units, reflector foot spacing and the station cap.
Reads either a TOML settings file or the classic one-line ``Config.txt``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import math
from pathlib import Path
import tomllib  # used for the TOML settings file

from moody_surface_plate.errors import MalformedInput

DEFAULT_MAX_STATIONS: int = 125  # Largest station count accepted on any line.


class Units(str, Enum):
    """Measurement system for foot spacing and reported heights."""

    METRIC = "metric"
    IMPERIAL = "imperial"

    @property
    def output_scale(self) -> float:
        """Factor taking foot spacing to the reported height unit."""
        # mm -> microns, inches -> 1/100000 inch
        return 1000.0 if self is Units.METRIC else 100000.0

    @property
    def length_label(self) -> str:
        return "mm" if self is Units.METRIC else "inch"

    @property
    def height_label(self) -> str:
        return "micron" if self is Units.METRIC else "10^-5in"

    @property
    def error_label(self) -> str:
        return "microns" if self is Units.METRIC else "micro-inches"

    @property
    def error_display_factor(self) -> float:
        """Factor from the height unit to the unit used in the error summary."""
        return 1.0 if self is Units.METRIC else 10.0

    @property
    def error_threshold(self) -> float:
        """Largest acceptable center-line error, in the height unit.

        Both values stand for 100 micro-inch = 2.54 microns.
        """
        return 2.54 if self is Units.METRIC else 10.0

    @property
    def plot_axis_label(self) -> str:
        if self is Units.METRIC:
            return "height\\nin\\nmicrons"
        return "height\\nin\\ntens of\\nmicroinch"


@dataclass(frozen=True)
class PlateConfig:
    """Run settings shared by every worksheet."""

    units: Units
    foot_spacing: float  # Reflector foot spacing in mm (metric) or inches (imperial).
    max_stations: int = DEFAULT_MAX_STATIONS

    def __post_init__(self) -> None:
        if not (math.isfinite(self.foot_spacing) and self.foot_spacing > 0.0):
            raise MalformedInput(
                f"Foot spacing must be a positive number, got {self.foot_spacing!r}."
            )
        if self.max_stations < 3:
            raise MalformedInput(
                f"max_stations must be at least 3, got {self.max_stations!r}."
            )

    @property
    def effective_spacing(self) -> float:
        """Foot spacing expressed in the reported height unit."""
        return self.foot_spacing * self.units.output_scale


def parse_units(value: str) -> Units:
    """Map a units string ("metric"/"imperial" or "M"/"I") to Units."""
    key: str = value.strip().lower()
    if key in ("metric", "m"):
        return Units.METRIC
    if key in ("imperial", "i"):
        return Units.IMPERIAL
    raise MalformedInput(f"Unknown units '{value}'. Expected 'metric' or 'imperial'.")


def parse_config_text(text: str, source: str = "Config.txt") -> PlateConfig:
    """Parse the classic config: first data line is ``M <mm>`` or ``I <inches>``."""
    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        stripped: str = raw_line.strip()
        if not stripped or stripped.startswith("#"):
            continue

        tokens: list[str] = stripped.split()
        if len(tokens) != 2 or tokens[0] not in ("M", "I"):
            raise MalformedInput(
                f"Unable to parse line {line_number} of {source}. "
                'Expected either "M x" or "I x", where "x" is the foot spacing '
                f"in mm or inches respectively. Line reads: {raw_line!r}"
            )
        try:
            spacing: float = float(tokens[1])
        except ValueError:
            raise MalformedInput(
                f"Unable to parse foot spacing on line {line_number} of {source}: "
                f"{tokens[1]!r}"
            ) from None
        return PlateConfig(units=parse_units(tokens[0]), foot_spacing=spacing)

    raise MalformedInput(
        f"Configuration file {source} must specify a foot spacing and units, "
        'e.g. "M 66.0" for 66 mm or "I 4.0" for 4 inches.'
    )


def load_plate_config(path: Path) -> PlateConfig:
    """Load a PlateConfig from a ``.toml`` file or a classic ``Config.txt``."""
    if not path.is_file():
        raise MalformedInput(f"Unable to find/open configuration file {path}")

    text: str = path.read_text(encoding="utf-8")
    if path.suffix.lower() != ".toml":
        return parse_config_text(text, source=path.name)

    try:
        raw: dict[str, object] = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise MalformedInput(f"Invalid TOML in {path.name}: {exc}") from exc

    if "units" not in raw or "foot_spacing" not in raw:
        raise MalformedInput(f"{path.name} must define 'units' and 'foot_spacing'.")

    units_value = raw["units"]
    spacing_value = raw["foot_spacing"]
    stations_value = raw.get("max_stations", DEFAULT_MAX_STATIONS)
    if not isinstance(units_value, str):
        raise MalformedInput(f"'units' in {path.name} must be a string.")
    if isinstance(spacing_value, bool) or not isinstance(spacing_value, (int, float)):
        raise MalformedInput(f"'foot_spacing' in {path.name} must be a number.")
    if isinstance(stations_value, bool) or not isinstance(stations_value, int):
        raise MalformedInput(f"'max_stations' in {path.name} must be an integer.")

    return PlateConfig(
        units=parse_units(units_value),
        foot_spacing=float(spacing_value),
        max_stations=stations_value,
    )
