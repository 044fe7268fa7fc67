"""Public exports for PlotMapper data models."""

from .cell import PlotCell
from .genotype import GenotypeRecord
from .grid import PlotGrid, lookup_genotype

__all__ = ["PlotCell", "GenotypeRecord", "PlotGrid", "lookup_genotype"]
