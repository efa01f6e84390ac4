"""Data containers for protein complexes and localization annotations."""

from complexeval.core.complexes import Complex, ComplexSet
from complexeval.core.localization import LocalizationData

__all__ = [
    "Complex",
    "ComplexSet",
    "LocalizationData",
]
