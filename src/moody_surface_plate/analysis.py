"""End-to-end Moody analysis: readings in, completed worksheets and layout out."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
from typing import Mapping, Sequence

from moody_surface_plate.checks import (
    Advisory,
    MeasurementErrorCheck,
    check_measurement_error,
    run_input_checks,
)
from moody_surface_plate.config import PlateConfig, load_plate_config
from moody_surface_plate.errors import MalformedInput
from moody_surface_plate.layout import PlateLayout, project_layout
from moody_surface_plate.pipeline import PipelineContext, PipelineResult, run_pipeline
from moody_surface_plate.plate.lines import LINES
from moody_surface_plate.readings import CONFIG_FILENAME, load_readings
from moody_surface_plate.worksheet import WorksheetStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisConfig:
    """Where to find the inputs and where to put the plot files."""

    data_dir: Path = Path(".")
    config_path: Path | None = None  # Defaults to data_dir / "Config.txt".
    out_dir: Path | None = None  # Defaults to data_dir.

    def resolved_config_path(self) -> Path:
        return self.config_path or self.data_dir / CONFIG_FILENAME

    def resolved_out_dir(self) -> Path:
        return self.out_dir or self.data_dir


@dataclass(frozen=True)
class AnalysisResult:
    """Everything one run produces."""

    plate_config: PlateConfig
    store: WorksheetStore
    pipeline: PipelineResult
    advisories: list[Advisory]
    error_check: MeasurementErrorCheck
    layout: PlateLayout


def build_store(
    readings: Mapping[str, Sequence[float]], plate_config: PlateConfig
) -> WorksheetStore:
    """Create all eight worksheets, failing fast on bad or missing lines."""
    missing: list[str] = [line.name for line in LINES if line.name not in readings]
    if missing:
        raise MalformedInput(f"No readings supplied for lines: {missing}")

    store = WorksheetStore(max_stations=plate_config.max_stations)
    for line in LINES:
        store.create(line, readings[line.name])
    return store


def analyze_readings(
    readings: Mapping[str, Sequence[float]], plate_config: PlateConfig
) -> AnalysisResult:
    """Run checks, pipeline and layout on in-memory readings."""
    store: WorksheetStore = build_store(readings, plate_config)

    advisories: list[Advisory] = run_input_checks(store.station_counts())

    ctx = PipelineContext(store=store, plate_config=plate_config)
    pipeline_result: PipelineResult = run_pipeline(ctx)

    error_check: MeasurementErrorCheck = check_measurement_error(store, plate_config)
    layout: PlateLayout = project_layout(store, pipeline_result.plate_peak)

    return AnalysisResult(
        plate_config=plate_config,
        store=store,
        pipeline=pipeline_result,
        advisories=advisories,
        error_check=error_check,
        layout=layout,
    )


def analyze(config: AnalysisConfig) -> AnalysisResult:
    """Load configuration and readings from disk, then analyze them."""
    plate_config: PlateConfig = load_plate_config(config.resolved_config_path())
    logger.info(
        "Using a %.2f %s foot spacing",
        plate_config.foot_spacing,
        plate_config.units.length_label,
    )
    readings: dict[str, list[float]] = load_readings(config.data_dir, plate_config)
    return analyze_readings(readings, plate_config)
