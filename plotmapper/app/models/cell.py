"""Grid cell model carrying a plot assignment."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class PlotCell:
    """Single grid position and its genotype/plot assignment."""

    row: int
    col: int
    genotype: Optional[str] = None
    plot_number: Optional[int] = None

    @property
    def is_assigned(self) -> bool:
        return bool(self.genotype)

    def to_dict(self) -> dict:
        """Return the JSON shape used by exported maps (unset keys omitted)."""
        data: dict = {"row": self.row, "col": self.col}
        if self.genotype is not None:
            data["genotype"] = self.genotype
        if self.plot_number is not None:
            data["plotNumber"] = self.plot_number
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "PlotCell":
        """Build a cell from its exported JSON shape."""
        if not isinstance(data, dict):
            raise ValueError(f"Cell entry must be an object, got {type(data).__name__}.")
        row = _require_int(data.get("row"), "row")
        col = _require_int(data.get("col"), "col")

        genotype = data.get("genotype")
        if genotype is not None:
            genotype = str(genotype)

        plot_number = data.get("plotNumber")
        if plot_number is not None:
            plot_number = _require_int(plot_number, "plotNumber")
        return cls(row=row, col=col, genotype=genotype, plot_number=plot_number)


def _require_int(value: object, name: str) -> int:
    if isinstance(value, bool) or value is None:
        raise ValueError(f"Cell field '{name}' must be an integer, got {value!r}.")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"Cell field '{name}' must be an integer, got {value!r}.")
        return int(value)
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Cell field '{name}' must be an integer, got {value!r}.") from exc
