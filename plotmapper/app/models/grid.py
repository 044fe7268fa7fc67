"""Column-major plot grid."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional, Sequence

from .cell import PlotCell
from .genotype import GenotypeRecord


@dataclass
class PlotGrid:
    """Fixed-size grid of plot cells indexed as ``columns[col][row]``."""

    columns: list[list[PlotCell]] = field(default_factory=list)

    @classmethod
    def create(cls, column_count: int, rows_per_column: int) -> "PlotGrid":
        """Build an empty grid with ``column_count`` columns of ``rows_per_column`` cells."""
        if column_count < 1 or rows_per_column < 1:
            raise ValueError(
                f"Grid dimensions must be positive, got {column_count}x{rows_per_column}."
            )
        columns = [
            [PlotCell(row=r, col=c) for r in range(rows_per_column)]
            for c in range(column_count)
        ]
        return cls(columns=columns)

    @property
    def column_count(self) -> int:
        return len(self.columns)

    @property
    def rows_per_column(self) -> int:
        return len(self.columns[0]) if self.columns else 0

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= col < self.column_count and 0 <= row < len(self.columns[col])

    def cell(self, row: int, col: int) -> Optional[PlotCell]:
        """Return the cell at ``(row, col)`` or ``None`` when out of bounds."""
        if not self.in_bounds(row, col):
            return None
        return self.columns[col][row]

    def iter_cells(self) -> Iterator[PlotCell]:
        """Yield every cell in column-major order."""
        for column in self.columns:
            yield from column

    def populated_cells(self) -> list[PlotCell]:
        return [cell for cell in self.iter_cells() if cell.is_assigned]

    def plot_numbers(self) -> list[int]:
        """Distinct plot numbers currently assigned, ascending."""
        return sorted(
            {cell.plot_number for cell in self.iter_cells() if cell.plot_number is not None}
        )

    def assign(
        self,
        coords: Iterable[tuple[int, int]],
        genotype: str,
        plot_number: int,
    ) -> int:
        """Set ``genotype`` and ``plot_number`` on each ``(row, col)``; return cells updated."""
        updated = 0
        for row, col in coords:
            target = self.cell(row, col)
            if target is None:
                continue
            target.genotype = genotype
            target.plot_number = plot_number
            updated += 1
        return updated

    def validate(self) -> None:
        """Raise ``ValueError`` unless every column has the same height and coordinates match."""
        expected = self.rows_per_column
        for c_idx, column in enumerate(self.columns):
            if len(column) != expected:
                raise ValueError(
                    f"Column {c_idx} has {len(column)} cells, expected {expected}."
                )
            for r_idx, cell in enumerate(column):
                if cell.row != r_idx or cell.col != c_idx:
                    raise ValueError(
                        f"Cell at column {c_idx}, row {r_idx} reports "
                        f"({cell.row}, {cell.col})."
                    )

    def to_list(self) -> list[list[dict]]:
        return [[cell.to_dict() for cell in column] for column in self.columns]


def lookup_genotype(
    grid: Optional[PlotGrid],
    catalog: Sequence[GenotypeRecord],
    row: int,
    col: int,
) -> Optional[GenotypeRecord]:
    """Resolve the genotype assigned at ``(row, col)`` against ``catalog``.

    Returns ``None`` for out-of-bounds coordinates, unassigned cells and
    identifiers missing from the catalog (e.g. maps imported from another list).
    """
    if grid is None:
        return None
    cell = grid.cell(row, col)
    if cell is None or not cell.genotype:
        return None
    wanted = str(cell.genotype)
    return next((record for record in catalog if str(record.identifier) == wanted), None)
