"""
Log-space hypergeometric distribution.

Models drawing ``draws`` balls without replacement from an urn holding
``white`` white balls and ``black`` black balls. All functions return natural
logarithms; apply ``math.exp`` to get probabilities.

Factorials are never materialized. ``ln(n!)`` values come from a growable
cache owned by each engine, so large urns (tens of thousands of proteins)
stay within double range.

The cumulative distribution uses the tail-sum ratio from R's ``pdhyper``
(src/nmath/phyper.c):

    phyper(x, NR, NB, n) / dhyper(x, NR, NB, n) = 1 + sum of successive
    density ratios, truncated once a term drops below DBL_EPSILON * sum.

Invalid parameters are reported as ``nan`` rather than raised, so callers that
aggregate many queries can absorb them.

Examples:
    >>> engine = HypergeometricDistribution()
    >>> math.exp(engine.log_density(2, 5, 5, 4))  # C(5,2) * C(5,2) / C(10,4)
    0.476190...
    >>> # Upper tail: P(X > 1)
    >>> math.exp(engine.log_cumulative(1, 5, 5, 4, lower_tail=False))
"""

from __future__ import annotations

import logging
import math
import threading
from typing import List

import numpy as np

__all__ = [
    'DBL_EPSILON',
    'LogFactorialCache',
    'HypergeometricDistribution',
    'log_factorial',
    'log_choose',
    'log_density',
    'log_cumulative',
]

logger = logging.getLogger(__name__)

# IEEE-754 double machine epsilon; controls truncation of the tail sum.
DBL_EPSILON = 2.2204460492503131e-16


class LogFactorialCache:
    """
    Append-only table of natural-log factorials.

    ``value[n] = ln(n!)``, seeded with ``value[0] = value[1] = 0``. A lookup
    beyond the table extends it sequentially from the last cached index, so
    each entry is computed exactly once.

    Growth happens under a lock (single writer). Entries are never modified
    after being appended, so reading an already-populated slot needs no lock.
    """

    def __init__(self):
        self._values: List[float] = [0.0, 0.0]
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._values)

    def log_factorial(self, n: int) -> float:
        """
        Return ``ln(n!)``.

        Args:
            n: Non-negative integer

        Raises:
            ValueError: If n is negative
        """
        if n < 0:
            raise ValueError(f"log_factorial requires a non-negative integer, got {n}")

        values = self._values
        if n < len(values):
            return values[n]

        with self._lock:
            # Another thread may have grown the table while we waited
            start = len(values)
            for j in range(start, n + 1):
                values.append(values[j - 1] + math.log(j))
            if n >= start:
                logger.debug(f"Extended log-factorial cache to {len(values)} entries")
            return values[n]

    __call__ = log_factorial


def _pdhyper(hits, white, black, draws) -> float:
    """
    Ratio P(X <= hits) / P(X = hits) via the R tail-sum approximation.

    Assumes ``hits * (white + black) <= draws * white`` for best accuracy;
    outside that region the sum still converges but needs more terms.
    Degenerate urns divide by zero and yield inf/nan as in C.
    """
    hits = np.float64(hits)
    white = np.float64(white)
    black = np.float64(black)
    draws = np.float64(draws)

    total = np.float64(0.0)
    term = np.float64(1.0)
    with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
        while hits > 0 and term >= DBL_EPSILON * total:
            term *= hits * (black - draws + hits) / (draws + 1 - hits) / (white + 1 - hits)
            total += term
            hits -= 1
    return float(1 + total)


class HypergeometricDistribution:
    """
    Log-space density and cumulative probabilities of the hypergeometric
    distribution.

    Each engine owns its :class:`LogFactorialCache`. Pass a shared cache to
    reuse already computed factorials across engines.

    Args:
        cache: Log-factorial cache to use (a new private cache if None)
    """

    def __init__(self, cache: LogFactorialCache | None = None):
        self.cache = cache if cache is not None else LogFactorialCache()

    def log_choose(self, n: int, k: int) -> float:
        """Logarithm of the binomial coefficient C(n, k)."""
        lf = self.cache.log_factorial
        return lf(n) - lf(k) - lf(n - k)

    def log_density(self, hits: int, white: int, black: int, draws: int) -> float:
        """
        Log probability of drawing exactly ``hits`` white balls.

        Args:
            hits: Number of white balls drawn
            white: White balls in the urn
            black: Black balls in the urn
            draws: Number of drawings

        Returns:
            ``ln P(X = hits)``; ``-inf`` for structurally impossible draws
        """
        # More white balls than the urn holds
        if hits > white:
            return -math.inf
        # More white balls than drawings
        if hits > draws:
            return -math.inf
        # More black balls than the urn holds
        if draws - hits > black:
            return -math.inf

        return (
            self.log_choose(white, hits)
            + self.log_choose(black, draws - hits)
            - self.log_choose(white + black, draws)
        )

    def log_cumulative(
        self,
        hits: int,
        white: int,
        black: int,
        draws: int,
        lower_tail: bool = True,
    ) -> float:
        """
        Log cumulative probability of the number of white balls drawn.

        Args:
            hits: Number of white balls drawn
            white: White balls in the urn
            black: Black balls in the urn
            draws: Number of drawings
            lower_tail: True for ``P(X <= hits)``, False for ``P(X > hits)``

        Returns:
            Log probability. ``0.0`` when the (transformed) hit count is
            negative, ``nan`` for invalid urn parameters.

        Note:
            The upper tail is computed as a lower tail of the complementary
            urn: colors swapped and ``hits -> draws - hits - 1``.
        """
        if not lower_tail:
            white, black = black, white
            hits = draws - hits - 1

        if hits < 0:
            return 0.0

        if (
            white < 0
            or black < 0
            or math.isinf(white + black)
            or draws < 0
            or draws > white + black
        ):
            return math.nan

        d = self.log_density(hits, white, black, draws)
        pd = _pdhyper(hits, white, black, draws)
        with np.errstate(divide='ignore', invalid='ignore'):
            return float(d + np.log(pd))


_default_engine = HypergeometricDistribution()


def log_factorial(n: int) -> float:
    """``ln(n!)`` from the module-level default cache."""
    return _default_engine.cache.log_factorial(n)


def log_choose(n: int, k: int) -> float:
    """``ln C(n, k)`` using the module-level default engine."""
    return _default_engine.log_choose(n, k)


def log_density(hits: int, white: int, black: int, draws: int) -> float:
    """See :meth:`HypergeometricDistribution.log_density`."""
    return _default_engine.log_density(hits, white, black, draws)


def log_cumulative(
    hits: int,
    white: int,
    black: int,
    draws: int,
    lower_tail: bool = True,
) -> float:
    """See :meth:`HypergeometricDistribution.log_cumulative`."""
    return _default_engine.log_cumulative(hits, white, black, draws, lower_tail)
