"""Genotype catalog entry."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GenotypeRecord:
    """One row of the reference genotype list."""

    identifier: str
    male_parent: str = ""
    female_parent: str = ""
    display_color: str = ""
