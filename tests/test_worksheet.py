"""Unit tests for worksheet storage."""

from __future__ import annotations

import numpy as np
import pytest

from moody_surface_plate.errors import (
    CapacityExceeded,
    InsufficientData,
    MalformedInput,
)
from moody_surface_plate.plate.lines import LINES
from moody_surface_plate.worksheet import (
    CenterWorksheet,
    DiagonalWorksheet,
    PerimeterWorksheet,
    Worksheet,
    WorksheetStore,
)


def test_create_builds_rows_zero_to_n() -> None:
    """Readings go into rows 1..N and row 0 stays synthetic."""
    store = WorksheetStore()
    sheet: Worksheet = store.create("NW_SE", [5.0, 7.0, 4.0])

    assert sheet.count == 3
    assert sheet.raw_angle.tolist() == [0.0, 5.0, 7.0, 4.0]
    assert sheet.station.tolist() == [1, 2, 3, 4]
    assert sheet.readings().tolist() == [5.0, 7.0, 4.0]


def test_create_picks_variant_from_line_role() -> None:
    """Each role gets its own worksheet variant."""
    store = WorksheetStore()
    assert isinstance(store.create("NE_SW", [0.0] * 3), DiagonalWorksheet)
    assert isinstance(store.create("SE_SW", [0.0] * 3), PerimeterWorksheet)
    center = store.create("N_S", [0.0] * 3)
    assert isinstance(center, CenterWorksheet)
    assert "centered_height" in center.columns


def test_create_rejects_fewer_than_three_readings() -> None:
    """Two readings cannot define a closed worksheet."""
    store = WorksheetStore()
    with pytest.raises(InsufficientData, match="NE_NW.txt"):
        store.create("NE_NW", [1.0, 2.0])


def test_create_rejects_more_than_the_station_cap() -> None:
    """The configured cap is enforced at creation."""
    store = WorksheetStore(max_stations=5)
    store.create("E_W", [0.0] * 5)
    with pytest.raises(CapacityExceeded):
        store.create("E_W", [0.0] * 6)


def test_create_rejects_count_mismatch_and_non_finite_values() -> None:
    """An explicit count must match, and readings must be finite."""
    store = WorksheetStore()
    with pytest.raises(MalformedInput, match="does not match"):
        store.create("NE_SE", [0.0, 1.0, 2.0, 3.0], count=3)
    with pytest.raises(MalformedInput, match="station 2"):
        store.create("NE_SE", [0.0, float("nan"), 2.0])


def test_get_and_set_column_round_trip() -> None:
    """set_column replaces a column and get_column reads it back."""
    store = WorksheetStore()
    store.create("NW_SW", [1.0, 2.0, 3.0])
    store.set_column("NW_SW", "correction", [0.5, 1.5, 2.5, 3.5])
    assert store.get_column("NW_SW", "correction").tolist() == [0.5, 1.5, 2.5, 3.5]


def test_set_column_validates_name_and_length() -> None:
    """Unknown columns and wrong lengths are rejected."""
    store = WorksheetStore()
    store.create("NW_SW", [1.0, 2.0, 3.0])
    store.create("E_W", [1.0, 2.0, 3.0])

    with pytest.raises(KeyError):
        store.set_column("NW_SW", "centered_height", np.zeros(4))
    with pytest.raises(KeyError):
        store.get_column("NW_SW", "no_such_column")
    with pytest.raises(ValueError, match="needs 4 rows"):
        store.set_column("E_W", "centered_height", np.zeros(3))

    # The center variant does carry the extra column.
    store.set_column("E_W", "centered_height", np.ones(4))
    assert store.get_column("E_W", "centered_height").tolist() == [1.0] * 4


def test_store_iterates_in_processing_order() -> None:
    """Iteration and station_counts follow the registry order, not insertion order."""
    store = WorksheetStore()
    for line in reversed(LINES):
        store.create(line, [0.0] * (3 + line.order))

    assert [sheet.line.name for sheet in store] == [line.name for line in LINES]
    assert list(store.station_counts().values()) == [3, 4, 5, 6, 7, 8, 9, 10]
    assert store.is_complete()
    assert len(store) == 8
    assert "E_W" in store


def test_missing_worksheet_raises_key_error() -> None:
    """Asking for a line that was never created is a KeyError."""
    store = WorksheetStore()
    with pytest.raises(KeyError):
        store.worksheet("NE_SW")
    assert not store.is_complete()
