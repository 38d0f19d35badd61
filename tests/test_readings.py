"""Unit tests for reading-file parsing."""

from __future__ import annotations

from pathlib import Path

import pytest

from moody_surface_plate.config import PlateConfig, Units
from moody_surface_plate.errors import (
    CapacityExceeded,
    InsufficientData,
    MalformedInput,
)
from moody_surface_plate.plate.lines import LINES, NE_NW
from moody_surface_plate.readings import (
    load_line_readings,
    load_readings,
    parse_readings_text,
)


def _write_lines(data_dir: Path, values: list[float]) -> None:
    """Write the same readings into every line file."""
    body: str = "\n".join(str(v) for v in values) + "\n"
    for line in LINES:
        (data_dir / line.filename).write_text(body, encoding="utf-8")


def test_parse_readings_text_skips_comments_and_blanks() -> None:
    """Only data lines become readings."""
    text: str = "# NE_NW readings\n\n  1.5\n\t-2\n  # late comment\n3e1\n"
    assert parse_readings_text(text) == pytest.approx([1.5, -2.0, 30.0])


def test_parse_readings_text_rejects_non_numbers_with_line_number() -> None:
    """Bad values are reported with their file line."""
    with pytest.raises(MalformedInput, match="line 3 of data file NE_NW.txt"):
        parse_readings_text("1.0\n2.0\nabc\n", source="NE_NW.txt")


def test_parse_readings_text_rejects_trailing_tokens() -> None:
    """A data line holds exactly one number."""
    with pytest.raises(MalformedInput, match="line 1"):
        parse_readings_text("1.0 2.0\n")


def test_load_line_readings_missing_file(tmp_path: Path) -> None:
    """A missing reading file is malformed input naming the file."""
    with pytest.raises(MalformedInput, match="NE_NW.txt"):
        load_line_readings(tmp_path, NE_NW, max_stations=125)


def test_load_line_readings_too_few(tmp_path: Path) -> None:
    """Fewer than 3 readings is insufficient data."""
    (tmp_path / "NE_NW.txt").write_text("# header\n1.0\n2.0\n", encoding="utf-8")
    with pytest.raises(InsufficientData, match="Need at least 3"):
        load_line_readings(tmp_path, NE_NW, max_stations=125)


def test_load_line_readings_too_many(tmp_path: Path) -> None:
    """More readings than the cap is a capacity error."""
    (tmp_path / "NE_NW.txt").write_text("0\n" * 6, encoding="utf-8")
    with pytest.raises(CapacityExceeded, match="NE_NW.txt"):
        load_line_readings(tmp_path, NE_NW, max_stations=5)


def test_load_readings_returns_all_lines_in_order(tmp_path: Path) -> None:
    """All eight files load, keyed by line name in processing order."""
    _write_lines(tmp_path, [0.5, 1.0, 1.5, 2.0])
    readings = load_readings(tmp_path, PlateConfig(Units.METRIC, 66.0))
    assert list(readings) == [line.name for line in LINES]
    assert readings["E_W"] == pytest.approx([0.5, 1.0, 1.5, 2.0])


def test_load_readings_uses_configured_cap(tmp_path: Path) -> None:
    """The station cap comes from the plate configuration."""
    _write_lines(tmp_path, [0.0] * 4)
    with pytest.raises(CapacityExceeded):
        load_readings(tmp_path, PlateConfig(Units.METRIC, 66.0, max_stations=3))
