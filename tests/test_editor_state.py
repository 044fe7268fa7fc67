"""Tests for the editor/viewer state shared with the widgets."""

from __future__ import annotations

from plotmapper.app.models import GenotypeRecord, PlotGrid
from plotmapper.core.settings import DragPolicy, MapSettings
from plotmapper.services.catalog import DISTINCT_COLORS, VIEWER_COLORS
from plotmapper.services.editor_state import MapEditorState, MapViewState


def make_catalog() -> list[GenotypeRecord]:
    return [
        GenotypeRecord(identifier="G1", male_parent="M1", female_parent="F1"),
        GenotypeRecord(identifier="G2", male_parent="M2", female_parent="F2"),
    ]


def make_editor(**overrides) -> MapEditorState:
    state = MapEditorState(MapSettings(**overrides))
    state.set_catalog(make_catalog())
    return state


def test_defaults_follow_settings() -> None:
    state = MapEditorState()

    assert state.column_count == 5
    assert state.rows_per_column == 5
    assert state.current_plot_number == 1000
    assert state.grid is None
    assert state.selection.policy is DragPolicy.FREE


def test_assignment_uses_counter_then_increments() -> None:
    state = make_editor()
    state.create_grid(2, 2)

    state.selection.tap(0, 0)
    state.choose_genotype("G1")
    assert state.confirm_assignment() is True

    cell = state.grid.cell(0, 0)
    assert cell.genotype == "G1"
    assert cell.plot_number == 1000
    assert state.current_plot_number == 1001
    assert len(state.selection) == 0
    assert state.genotype_to_assign is None

    state.selection.pointer_down(0, 1)
    state.selection.pointer_enter(1, 1)
    state.selection.pointer_up()
    state.choose_genotype("G2")
    assert state.confirm_assignment() is True

    assert state.grid.cell(0, 1).plot_number == 1001
    assert state.grid.cell(1, 1).plot_number == 1001
    assert state.current_plot_number == 1002


def test_assignment_rejected_without_genotype_or_selection() -> None:
    state = make_editor()
    state.create_grid(2, 2)

    state.selection.tap(0, 0)
    assert state.confirm_assignment() is False
    assert state.grid.populated_cells() == []
    assert state.current_plot_number == 1000

    state.selection.clear()
    state.choose_genotype("G1")
    assert state.confirm_assignment() is False
    assert state.current_plot_number == 1000


def test_assignment_rejected_without_grid() -> None:
    state = make_editor()
    state.choose_genotype("G1")

    assert state.confirm_assignment() is False


def test_starting_number_change_resets_counter() -> None:
    state = make_editor()
    state.create_grid(1, 3)
    state.selection.tap(0, 0)
    state.choose_genotype("G1")
    state.confirm_assignment()

    state.set_starting_plot_number(2000)

    assert state.current_plot_number == 2000


def test_create_grid_clears_selection_and_counter() -> None:
    state = make_editor(starting_plot_number=10)
    state.create_grid(2, 2)
    state.selection.tap(1, 1)
    state.choose_genotype("G1")
    state.confirm_assignment()
    state.selection.tap(0, 0)

    grid = state.create_grid(3, 1)

    assert grid.column_count == 3
    assert grid.rows_per_column == 1
    assert len(state.selection) == 0
    assert state.current_plot_number == 10
    assert grid.populated_cells() == []


def test_replace_grid_keeps_counter() -> None:
    state = make_editor()
    state.create_grid(2, 2)
    state.selection.tap(0, 0)
    state.choose_genotype("G1")
    state.confirm_assignment()
    imported = PlotGrid.create(4, 3)

    token = state.begin_import()
    assert state.finish_import(token, imported) is True

    assert state.grid is imported
    assert (state.column_count, state.rows_per_column) == (4, 3)
    assert state.current_plot_number == 1001


def test_stale_import_is_discarded() -> None:
    state = MapViewState()
    first = state.begin_import()
    second = state.begin_import()
    newer = PlotGrid.create(2, 2)

    assert state.finish_import(second, newer) is True
    assert state.finish_import(first, PlotGrid.create(5, 5)) is False
    assert state.grid is newer


def test_stale_catalog_load_is_discarded() -> None:
    state = MapViewState()
    first = state.begin_catalog_load()
    second = state.begin_catalog_load()

    assert state.finish_catalog_load(second, make_catalog()) is True
    assert state.finish_catalog_load(first, []) is False
    assert [record.identifier for record in state.catalog] == ["G1", "G2"]


def test_catalog_colors_follow_palette() -> None:
    editor = make_editor()
    viewer = MapViewState(VIEWER_COLORS)
    viewer.set_catalog(make_catalog())

    assert editor.catalog[0].display_color == DISTINCT_COLORS[0]
    assert editor.catalog[1].display_color == DISTINCT_COLORS[1]
    assert viewer.catalog[0].display_color == VIEWER_COLORS[0]


def test_new_catalog_drops_unknown_chosen_genotype() -> None:
    state = make_editor()
    state.choose_genotype("G2")

    state.set_catalog([GenotypeRecord(identifier="G1")])

    assert state.genotype_to_assign is None


def test_tooltip_lines_describe_assigned_cell() -> None:
    state = make_editor()
    state.create_grid(2, 2)
    state.selection.tap(1, 0)
    state.choose_genotype("G2")
    state.confirm_assignment()

    assert state.tooltip_lines(1, 0) == [
        "Genotype: G2",
        "Male donor: M2",
        "Female receptor: F2",
        "Plot number: 1000",
    ]
    assert state.tooltip_lines(0, 0) == []
    assert state.tooltip_lines(7, 7) == []
