"""
Overlap enrichment testing with multiple testing correction.

Answers: "Given N proteins in the background, M of them annotated, a complex
of n proteins containing k annotated ones, is the overlap larger than chance?"

Statistical Model:
    - Population of N proteins (background)
    - M proteins carry the annotation
    - Drew n proteins (complex or study set)
    - Found k annotated proteins (overlap)
    - Test: P(X >= k) where X ~ Hypergeometric(M, N - M, n)

The p-value is computed in log space with
:class:`~complexeval.stats.hypergeometric.HypergeometricDistribution`, so
very small p-values do not underflow to zero.

Examples:
    >>> result = overlap_enrichment(
    ...     study={'P1', 'P2', 'P3'},
    ...     annotated={'P1', 'P2', 'P9'},
    ...     background={f'P{i}' for i in range(20)},
    ... )
    >>> print(f"p-value: {result.pvalue:.4f}")
    >>> reject, qvalues = apply_fdr_correction([0.001, 0.2, 0.04])
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Hashable, Iterable, Optional, Set, Tuple

import numpy as np
from statsmodels.stats.multitest import multipletests

from complexeval.stats.hypergeometric import HypergeometricDistribution

__all__ = [
    'OverlapResult',
    'overlap_log_pvalue',
    'overlap_enrichment',
    'apply_fdr_correction',
]

_engine = HypergeometricDistribution()


@dataclass
class OverlapResult:
    """
    Result of an overlap enrichment test.

    Attributes:
        log_pvalue: Natural log of P(X >= overlap)
        overlap: Annotated proteins among the study set (k)
        annotated_size: Annotated proteins in the background (M)
        background_size: Background size (N)
        study_size: Study set size (n)
        enrichment_ratio: Observed / expected overlap
    """
    log_pvalue: float
    overlap: int
    annotated_size: int
    background_size: int
    study_size: int
    enrichment_ratio: float

    @property
    def pvalue(self) -> float:
        return math.exp(self.log_pvalue)


def overlap_log_pvalue(
    overlap: int,
    annotated: int,
    background: int,
    drawn: int,
    engine: Optional[HypergeometricDistribution] = None,
) -> float:
    """
    Log p-value of observing at least ``overlap`` annotated items.

    Args:
        overlap: Observed annotated items among the drawn ones (k)
        annotated: Annotated items in the background (M)
        background: Background size (N)
        drawn: Number of drawn items (n)
        engine: Hypergeometric engine (module default if None)

    Returns:
        ``ln P(X >= overlap)``, at most 0. ``nan`` for invalid counts.
    """
    engine = engine or _engine
    if overlap <= 0:
        return 0.0

    log_p = engine.log_cumulative(
        overlap - 1, annotated, background - annotated, drawn, lower_tail=False
    )
    # Rounding in the tail sum can push certainty slightly above log(1)
    if log_p > 0:
        log_p = 0.0
    return log_p


def overlap_enrichment(
    study: Set[Hashable],
    annotated: Set[Hashable],
    background: Set[Hashable],
    engine: Optional[HypergeometricDistribution] = None,
) -> OverlapResult:
    """
    Test whether a study set is enriched for annotated items.

    Study and annotated sets are restricted to the background first.

    Args:
        study: Items of interest (e.g. members of a predicted complex)
        annotated: Items carrying the annotation
        background: All items that could have been drawn

    Returns:
        OverlapResult with log p-value and enrichment ratio
    """
    study = set(study) & set(background)
    annotated = set(annotated) & set(background)

    N = len(background)
    M = len(annotated)
    n = len(study)
    k = len(study & annotated)

    expected = n * M / N if N > 0 else 0.0
    enrichment_ratio = k / expected if expected > 0 else 0.0

    return OverlapResult(
        log_pvalue=overlap_log_pvalue(k, M, N, n, engine=engine),
        overlap=k,
        annotated_size=M,
        background_size=N,
        study_size=n,
        enrichment_ratio=float(enrichment_ratio),
    )


def apply_fdr_correction(
    pvalues: Iterable[float],
    method: str = 'fdr_bh',
    alpha: float = 0.05,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Correct the p-values of many overlap tests, e.g. one per predicted complex.

    Args:
        pvalues: Raw p-values, typically ``result.pvalue`` of several
            :class:`OverlapResult`
        method: ``statsmodels`` ``multipletests`` method name
        alpha: Threshold the ``reject`` mask is computed at

    Returns:
        ``(reject, qvalues)`` aligned with the input order

    Raises:
        ValueError: If a p-value is not a finite number in [0, 1]

    Examples:
        >>> results = [overlap_enrichment(c, annotated, background) for c in complexes]
        >>> reject, qvalues = apply_fdr_correction([r.pvalue for r in results])
    """
    pvalues = np.asarray(list(pvalues), dtype=np.float64)
    if pvalues.size == 0:
        return np.zeros(0, dtype=bool), np.zeros(0, dtype=np.float64)

    bad = ~np.isfinite(pvalues)
    if bad.any():
        raise ValueError(
            f"p-values contain NaN or Inf at positions {np.flatnonzero(bad).tolist()}"
        )
    if pvalues.min() < 0 or pvalues.max() > 1:
        raise ValueError(
            f"p-values must be in [0, 1], got range [{pvalues.min()}, {pvalues.max()}]"
        )

    reject, qvalues, _, _ = multipletests(pvalues, alpha=alpha, method=method)
    return reject, qvalues
