"""Unit tests for plate configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from moody_surface_plate.config import (
    DEFAULT_MAX_STATIONS,
    PlateConfig,
    Units,
    load_plate_config,
    parse_config_text,
)
from moody_surface_plate.errors import MalformedInput


def test_parse_config_text_metric_skips_comments() -> None:
    """Comments and blank lines are skipped before the M/I declaration."""
    text: str = "# foot spacing\n\n   # indented comment\nM 66.0\n"
    config: PlateConfig = parse_config_text(text)
    assert config.units is Units.METRIC
    assert config.foot_spacing == pytest.approx(66.0)
    assert config.max_stations == DEFAULT_MAX_STATIONS
    assert config.effective_spacing == pytest.approx(66000.0)


def test_parse_config_text_imperial() -> None:
    """I declares inches; output is in 1e-5 inch."""
    config: PlateConfig = parse_config_text("I 4.0\n")
    assert config.units is Units.IMPERIAL
    assert config.effective_spacing == pytest.approx(400000.0)


@pytest.mark.parametrize(
    "text",
    ["X 66.0\n", "M\n", "M 66.0 extra\n", "M sixty\n", "M -1.0\n"],
)
def test_parse_config_text_rejects_bad_declarations(text: str) -> None:
    """Unknown flags, missing or invalid spacing are malformed input."""
    with pytest.raises(MalformedInput):
        parse_config_text(text)


def test_parse_config_text_requires_a_declaration() -> None:
    """A file with only comments does not declare units."""
    with pytest.raises(MalformedInput, match="must specify a foot spacing"):
        parse_config_text("# nothing here\n\n")


def test_load_plate_config_from_toml(tmp_path: Path) -> None:
    """TOML settings populate units, spacing and the station cap."""
    toml_path: Path = tmp_path / "plate.toml"
    toml_path.write_text(
        'units = "imperial"\nfoot_spacing = 4.0\nmax_stations = 60\n',
        encoding="utf-8",
    )
    config: PlateConfig = load_plate_config(toml_path)
    assert config == PlateConfig(Units.IMPERIAL, 4.0, 60)


def test_load_plate_config_from_classic_file(tmp_path: Path) -> None:
    """Non-TOML files are read in the classic one-line format."""
    config_path: Path = tmp_path / "Config.txt"
    config_path.write_text("M 50\n", encoding="utf-8")
    assert load_plate_config(config_path) == PlateConfig(Units.METRIC, 50.0)


@pytest.mark.parametrize(
    "toml_text",
    [
        'units = "furlongs"\nfoot_spacing = 4.0\n',
        'units = "metric"\n',
        'units = "metric"\nfoot_spacing = "wide"\n',
        'units = "metric"\nfoot_spacing = 4.0\nmax_stations = 2\n',
        "units = [\n",
    ],
)
def test_load_plate_config_rejects_invalid_toml(tmp_path: Path, toml_text: str) -> None:
    """Invalid TOML settings are malformed input."""
    toml_path: Path = tmp_path / "plate.toml"
    toml_path.write_text(toml_text, encoding="utf-8")
    with pytest.raises(MalformedInput):
        load_plate_config(toml_path)


def test_load_plate_config_missing_file(tmp_path: Path) -> None:
    """A missing configuration file is reported by name."""
    with pytest.raises(MalformedInput, match="Config.txt"):
        load_plate_config(tmp_path / "Config.txt")


def test_units_labels_and_thresholds() -> None:
    """Both thresholds stand for 100 micro-inch = 2.54 microns."""
    assert Units.METRIC.error_threshold == 2.54
    assert Units.IMPERIAL.error_threshold == 10.0
    assert Units.METRIC.height_label == "micron"
    assert Units.IMPERIAL.height_label == "10^-5in"
    assert Units.IMPERIAL.error_display_factor == 10.0
