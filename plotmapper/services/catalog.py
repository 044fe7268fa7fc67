"""Reference genotype list loading."""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from pathlib import Path
from typing import Iterable, Optional, Sequence

import pandas as pd

from plotmapper.app.models import GenotypeRecord

logger = logging.getLogger(__name__)

GENOTYPES_SHEET = "Genotypes"
GENOTYPE_COLUMN = "Genotype"
MALE_DONOR_COLUMN = "Male donor"
FEMALE_RECEPTOR_COLUMN = "Female receptor"

DISTINCT_COLORS: tuple[str, ...] = (
    "#e6194b", "#3cb44b", "#ffe119", "#4363d8", "#f58231",
    "#911eb4", "#46f0f0", "#f032e6", "#bcf60c", "#fabebe",
    "#008080", "#e6beff", "#9a6324", "#fffac8", "#800000",
    "#aaffc3", "#808000", "#ffd8b1", "#000075", "#808080",
    "#ffffff", "#000000", "#ff7f00", "#1f78b4", "#b15928",
    "#6a3d9a", "#b2df8a", "#fb9a99", "#cab2d6", "#ffff99",
)

# Softer palette used by the read-only viewer.
VIEWER_COLORS: tuple[str, ...] = (
    "#c8e6c9", "#b3e5fc", "#ffe082", "#ffab91", "#d1c4e9",
    "#f8bbd0", "#b2dfdb", "#f0f4c3", "#ffccbc", "#d7ccc8",
    "#f5e1a4", "#aed581", "#81d4fa", "#ffd54f", "#ff8a65",
    "#9575cd", "#f06292", "#4dd0e1", "#dce775", "#ffb74d",
)


def assign_display_colors(
    records: Iterable[GenotypeRecord],
    palette: Sequence[str] = DISTINCT_COLORS,
) -> list[GenotypeRecord]:
    """Return ``records`` recoloured by their position in the list."""
    if not palette:
        raise ValueError("Palette must contain at least one color.")
    return [
        replace(record, display_color=palette[idx % len(palette)])
        for idx, record in enumerate(records)
    ]


def load_genotype_catalog(
    path: str | Path,
    palette: Sequence[str] = DISTINCT_COLORS,
) -> list[GenotypeRecord]:
    """Load the genotype list from ``path``.

    Reads the ``Genotypes`` sheet, or the first sheet when that one is
    missing. Rows without a genotype are skipped and source order is kept.
    Any problem opening or reading the workbook yields an empty list.
    """
    file_path = Path(path)
    if not file_path.exists():
        logger.warning("Genotype catalog '%s' not found; continuing without genotypes.", file_path)
        return []

    try:
        df = _read_genotype_sheet(file_path)
    except Exception as exc:  # noqa: BLE001 - any reader failure means "no catalog"
        logger.warning("Failed to read genotype catalog '%s': %s", file_path, exc)
        return []
    if df is None:
        return []

    records = _records_from_frame(df)
    logger.info("Loaded %d genotypes from %s.", len(records), file_path.name)
    return assign_display_colors(records, palette)


def _read_genotype_sheet(file_path: Path) -> Optional[pd.DataFrame]:
    engine = "xlrd" if file_path.suffix.lower() == ".xls" else "openpyxl"
    with pd.ExcelFile(file_path, engine=engine) as workbook:
        if not workbook.sheet_names:
            logger.warning("Genotype catalog '%s' has no sheets.", file_path)
            return None
        sheet_name = (
            GENOTYPES_SHEET
            if GENOTYPES_SHEET in workbook.sheet_names
            else workbook.sheet_names[0]
        )
        if sheet_name != GENOTYPES_SHEET:
            logger.info(
                "Sheet '%s' missing in %s; reading '%s' instead.",
                GENOTYPES_SHEET,
                file_path.name,
                sheet_name,
            )
        return workbook.parse(sheet_name, dtype=object)


def _find_first_column(df: pd.DataFrame, candidate: str) -> Optional[str]:
    if candidate in df.columns:
        return candidate
    lowered = {str(col).strip().lower(): col for col in df.columns}
    return lowered.get(candidate.lower())


def _records_from_frame(df: pd.DataFrame) -> list[GenotypeRecord]:
    genotype_column = _find_first_column(df, GENOTYPE_COLUMN)
    if genotype_column is None:
        logger.warning("Genotype catalog has no '%s' column.", GENOTYPE_COLUMN)
        return []
    male_column = _find_first_column(df, MALE_DONOR_COLUMN)
    female_column = _find_first_column(df, FEMALE_RECEPTOR_COLUMN)

    records: list[GenotypeRecord] = []
    for _, row in df.iterrows():
        identifier = _cell_text(row.get(genotype_column))
        if not identifier:
            continue
        records.append(
            GenotypeRecord(
                identifier=identifier,
                male_parent=_cell_text(row.get(male_column)) if male_column else "",
                female_parent=_cell_text(row.get(female_column)) if female_column else "",
            )
        )
    return records


def _cell_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
    return str(value).strip()
