"""Tests for PlotMapper data models."""

from __future__ import annotations

import pytest

from plotmapper.app.models import GenotypeRecord, PlotCell, PlotGrid, lookup_genotype


def make_catalog() -> list[GenotypeRecord]:
    return [
        GenotypeRecord(identifier="G1", male_parent="M1", female_parent="F1"),
        GenotypeRecord(identifier="42", male_parent="M2", female_parent="F2"),
    ]


def test_create_builds_column_major_grid() -> None:
    grid = PlotGrid.create(3, 4)

    assert grid.column_count == 3
    assert grid.rows_per_column == 4
    for c_idx, column in enumerate(grid.columns):
        assert len(column) == 4
        for r_idx, cell in enumerate(column):
            assert (cell.row, cell.col) == (r_idx, c_idx)
            assert cell.genotype is None
            assert cell.plot_number is None
    grid.validate()


@pytest.mark.parametrize("columns, rows", [(0, 5), (5, 0), (-1, 3)])
def test_create_rejects_non_positive_dimensions(columns: int, rows: int) -> None:
    with pytest.raises(ValueError):
        PlotGrid.create(columns, rows)


def test_assign_sets_genotype_and_plot_number() -> None:
    grid = PlotGrid.create(2, 2)

    updated = grid.assign([(0, 0), (1, 0), (5, 5)], "G1", 1000)

    assert updated == 2
    assert grid.cell(0, 0).genotype == "G1"
    assert grid.cell(1, 0).plot_number == 1000
    assert grid.cell(0, 1).genotype is None
    assert [cell.plot_number for cell in grid.populated_cells()] == [1000, 1000]
    assert grid.plot_numbers() == [1000]


def test_cell_out_of_bounds_returns_none() -> None:
    grid = PlotGrid.create(2, 3)

    assert grid.cell(3, 0) is None
    assert grid.cell(0, 2) is None
    assert grid.cell(-1, 0) is None


def test_lookup_genotype_resolves_catalog_entry() -> None:
    grid = PlotGrid.create(2, 2)
    grid.assign([(1, 1)], "G1", 1000)

    record = lookup_genotype(grid, make_catalog(), 1, 1)

    assert record is not None
    assert record.male_parent == "M1"
    assert record.female_parent == "F1"


def test_lookup_genotype_returns_none_for_missing_cases() -> None:
    grid = PlotGrid.create(2, 2)
    grid.assign([(0, 0)], "UNKNOWN", 1000)
    catalog = make_catalog()

    assert lookup_genotype(None, catalog, 0, 0) is None
    assert lookup_genotype(grid, catalog, 9, 9) is None
    assert lookup_genotype(grid, catalog, 1, 1) is None
    assert lookup_genotype(grid, catalog, 0, 0) is None


def test_cell_dict_omits_unset_fields() -> None:
    assert PlotCell(row=1, col=2).to_dict() == {"row": 1, "col": 2}
    assert PlotCell(row=0, col=0, genotype="G1", plot_number=7).to_dict() == {
        "row": 0,
        "col": 0,
        "genotype": "G1",
        "plotNumber": 7,
    }


def test_cell_from_dict_rejects_bad_coordinates() -> None:
    with pytest.raises(ValueError):
        PlotCell.from_dict({"row": "x", "col": 0})
    with pytest.raises(ValueError):
        PlotCell.from_dict({"col": 0})
    with pytest.raises(ValueError):
        PlotCell.from_dict(["row", 0])


def test_validate_flags_mismatched_coordinates() -> None:
    grid = PlotGrid.create(2, 2)
    grid.columns[1][0] = PlotCell(row=0, col=0)

    with pytest.raises(ValueError):
        grid.validate()
