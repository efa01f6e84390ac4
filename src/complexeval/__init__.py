"""
ComplexEval - Biological plausibility scoring for predicted protein complexes.

Scores complex sets by colocalization agreement among members and compares
scoring methods through Pearson or Spearman correlation. Includes a
log-space hypergeometric engine for overlap significance.
"""

__version__ = "0.1.0"

from complexeval.core.complexes import Complex, ComplexSet
from complexeval.core.localization import LocalizationData
from complexeval.quality.colocalization import Colocalization
from complexeval.stats.hypergeometric import HypergeometricDistribution
from complexeval.stats.correlation import PearsonCoefficient, SpearmanCoefficient

__all__ = [
    "Complex",
    "ComplexSet",
    "LocalizationData",
    "Colocalization",
    "HypergeometricDistribution",
    "PearsonCoefficient",
    "SpearmanCoefficient",
]
