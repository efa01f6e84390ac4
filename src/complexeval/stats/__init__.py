"""
Statistical engines for complex evaluation.

Exports:
- Log-space hypergeometric distribution with a growable log-factorial cache
- Pearson and Spearman correlation coefficients
- Overlap enrichment tests with FDR correction
"""

from .hypergeometric import (
    DBL_EPSILON,
    LogFactorialCache,
    HypergeometricDistribution,
    log_factorial,
    log_choose,
    log_density,
    log_cumulative,
)
from .correlation import (
    Point,
    CorrelationCoefficient,
    PearsonCoefficient,
    SpearmanCoefficient,
    CORRELATION_METHODS,
    rank,
    get_correlation,
    correlate,
)
from .enrichment import (
    OverlapResult,
    overlap_log_pvalue,
    overlap_enrichment,
    apply_fdr_correction,
)

__all__ = [
    # Hypergeometric distribution
    "DBL_EPSILON",
    "LogFactorialCache",
    "HypergeometricDistribution",
    "log_factorial",
    "log_choose",
    "log_density",
    "log_cumulative",
    # Correlation
    "Point",
    "CorrelationCoefficient",
    "PearsonCoefficient",
    "SpearmanCoefficient",
    "CORRELATION_METHODS",
    "rank",
    "get_correlation",
    "correlate",
    # Enrichment
    "OverlapResult",
    "overlap_log_pvalue",
    "overlap_enrichment",
    "apply_fdr_correction",
]
