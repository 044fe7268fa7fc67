"""Tests for JSON map export/import."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from plotmapper.app.models import PlotGrid
from plotmapper.core.map_manager import (
    INVALID_FORMAT_MESSAGE,
    MapFileManager,
    MapFormatError,
    load_map_json,
    parse_map_document,
    serialize_map,
)
from plotmapper.core.settings import GridOrder


def _sample_grid() -> PlotGrid:
    grid = PlotGrid.create(3, 2)
    grid.assign([(0, 0), (1, 0)], "G1", 1000)
    grid.assign([(1, 2)], "G2", 1001)
    return grid


def test_serialize_map_shape() -> None:
    data = serialize_map(_sample_grid())

    assert data["columns"] == 3
    assert data["plantsPerColumn"] == 2
    assert len(data["grid"]) == 3
    assert data["grid"][0][0] == {"row": 0, "col": 0, "genotype": "G1", "plotNumber": 1000}
    assert data["grid"][1][0] == {"row": 0, "col": 1}


def test_map_file_round_trip(tmp_path: Path) -> None:
    changes: list[bool] = []
    manager = MapFileManager(changes.append)
    manager.mark_dirty(True)

    saved = manager.save(_sample_grid(), tmp_path / "nested" / "field_a.txt")

    assert saved.suffix == ".json"
    assert saved.exists()
    assert manager.is_dirty is False
    assert changes == [True, False]

    loaded = MapFileManager().load(saved)
    assert loaded == _sample_grid()


def test_legacy_keys_are_accepted() -> None:
    document = {
        "rows": 2,
        "plantsPerRow": 1,
        "grid": [
            [{"row": 0, "col": 0, "genotype": "G1", "plotNumber": 5}],
            [{"row": 0, "col": 1}],
        ],
    }

    grid = parse_map_document(document)

    assert grid.column_count == 2
    assert grid.rows_per_column == 1
    assert grid.cell(0, 0).plot_number == 5


def test_legacy_row_major_grid_is_transposed() -> None:
    document = {
        "rows": 2,
        "plantsPerRow": 3,
        "grid": [
            [{"row": r, "col": 0} for r in range(3)],
            [{"row": r, "col": 1} for r in range(3)],
        ],
    }
    row_major = {
        "rows": 2,
        "plantsPerRow": 3,
        "grid": [
            [{"row": r, "col": c} for c in range(3)] for r in range(2)
        ],
    }
    row_major["grid"][1][2].update({"genotype": "G1", "plotNumber": 1000})

    assert parse_map_document(document).column_count == 2
    grid = parse_map_document(row_major, GridOrder.ROW_MAJOR)
    assert grid.column_count == 3
    assert grid.rows_per_column == 2
    assert grid.cell(1, 2).genotype == "G1"
    assert grid.cell(1, 2).plot_number == 1000
    grid.validate()


@pytest.mark.parametrize(
    "text",
    [
        "not json",
        "[]",
        json.dumps({"columns": 1, "plantsPerColumn": 1}),
        json.dumps({"columns": 1, "plantsPerColumn": 1, "grid": []}),
        json.dumps({"plantsPerColumn": 1, "grid": [[{"row": 0, "col": 0}]]}),
        json.dumps({"columns": "one", "plantsPerColumn": 1, "grid": [[{"row": 0, "col": 0}]]}),
        json.dumps({"columns": 2, "plantsPerColumn": 1, "grid": [[{"row": 0, "col": 0}]]}),
        json.dumps({"columns": 1, "plantsPerColumn": 1, "grid": [[{"row": 0}]]}),
        json.dumps({"columns": 1, "plantsPerColumn": 1, "grid": [[{"row": 3, "col": 0}]]}),
    ],
)
def test_invalid_documents_raise_format_error(text: str) -> None:
    with pytest.raises(MapFormatError) as excinfo:
        load_map_json(text)
    assert str(excinfo.value).startswith(INVALID_FORMAT_MESSAGE)


def test_failed_load_leaves_manager_untouched(tmp_path: Path) -> None:
    manager = MapFileManager()
    good = manager.save(_sample_grid(), tmp_path / "good.json")
    manager.mark_dirty(True)
    bad = tmp_path / "bad.json"
    bad.write_text("{broken", encoding="utf-8")

    with pytest.raises(MapFormatError):
        manager.load(bad)

    assert manager.current_path == good
    assert manager.is_dirty is True


def test_missing_file_raises_format_error(tmp_path: Path) -> None:
    with pytest.raises(MapFormatError):
        MapFileManager().load(tmp_path / "absent.json")
