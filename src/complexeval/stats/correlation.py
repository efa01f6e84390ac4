"""
Correlation coefficients over streams of paired observations.

Used to compare two scoring methods applied to the same items, e.g. the
scores two networks assign to a shared set of protein pairs.

Provides:
- CorrelationCoefficient: common feed/compute interface
- PearsonCoefficient: product-moment correlation from running sums
- SpearmanCoefficient: Pearson correlation of the rank-transformed series
- rank: average ranks with ties
- get_correlation / correlate: selection by method name

Degenerate inputs (no points, zero variance) give ``nan`` rather than an
exception, matching numpy semantics.

Examples:
    >>> pearson = PearsonCoefficient()
    >>> pearson.feed([(1, 3), (2, 5), (3, 7), (4, 9)])
    >>> pearson.compute()
    1.0
    >>> correlate([1, 2, 3, 4], [1, 3, 2, 4], method='spearman')
    0.8
"""

from __future__ import annotations

import numbers
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, NamedTuple, Sequence, Type

import numpy as np

__all__ = [
    'Point',
    'CorrelationCoefficient',
    'PearsonCoefficient',
    'SpearmanCoefficient',
    'CORRELATION_METHODS',
    'rank',
    'get_correlation',
    'correlate',
]


class Point(NamedTuple):
    """A paired observation."""
    x: float
    y: float


def _is_point(value) -> bool:
    return (
        isinstance(value, tuple)
        and len(value) == 2
        and isinstance(value[0], numbers.Real)
        and isinstance(value[1], numbers.Real)
    )


class CorrelationCoefficient(ABC):
    """
    Base class for correlation coefficients over paired data.

    Subclasses implement ``_add`` (ingest one point) and ``compute``.

    ``feed`` accepts:
        - two numbers: ``feed(x, y)``
        - one point: ``feed(Point(x, y))`` or ``feed((x, y))``
        - an iterable of points: ``feed([(x1, y1), (x2, y2)])``
    """

    def feed(self, x, y=None) -> None:
        """Add one data point or a batch of data points."""
        if y is not None:
            self._add(float(x), float(y))
        elif _is_point(x):
            self._add(float(x[0]), float(x[1]))
        else:
            for point in x:
                px, py = point
                self._add(float(px), float(py))

    @abstractmethod
    def _add(self, x: float, y: float) -> None:
        pass

    @abstractmethod
    def compute(self) -> float:
        """Correlation coefficient of all points fed so far."""
        pass

    @property
    @abstractmethod
    def n(self) -> int:
        """Number of points fed so far."""
        pass


class PearsonCoefficient(CorrelationCoefficient):
    """
    Pearson product-moment correlation from six running sums.

    Points are not retained, so ``compute`` can be called at any time for an
    interim value.
    """

    def __init__(self):
        self._sum_xy = 0.0
        self._sum_x = 0.0
        self._sum_x2 = 0.0
        self._sum_y = 0.0
        self._sum_y2 = 0.0
        self._n = 0

    def _add(self, x: float, y: float) -> None:
        self._sum_xy += x * y
        self._sum_x += x
        self._sum_x2 += x * x
        self._sum_y += y
        self._sum_y2 += y * y
        self._n += 1

    @property
    def n(self) -> int:
        return self._n

    def compute(self) -> float:
        n = np.float64(self._n)
        sum_x = np.float64(self._sum_x)
        sum_y = np.float64(self._sum_y)
        with np.errstate(divide='ignore', invalid='ignore'):
            numerator = self._sum_xy - (sum_x * sum_y) / n
            ss_x = self._sum_x2 - (sum_x * sum_x) / n
            ss_y = self._sum_y2 - (sum_y * sum_y) / n
            return float(numerator / np.sqrt(ss_x * ss_y))


class SpearmanCoefficient(CorrelationCoefficient):
    """
    Spearman's rank correlation: Pearson correlation of the ranks.

    All points are buffered; ranks need the complete series.
    """

    def __init__(self):
        self._x: List[float] = []
        self._y: List[float] = []

    def _add(self, x: float, y: float) -> None:
        self._x.append(x)
        self._y.append(y)

    @property
    def n(self) -> int:
        return len(self._x)

    def compute(self) -> float:
        rank_x = rank(self._x)
        rank_y = rank(self._y)

        pearson = PearsonCoefficient()
        for rx, ry in zip(rank_x, rank_y):
            pearson.feed(rx, ry)
        return pearson.compute()


def rank(values: Sequence[float]) -> np.ndarray:
    """
    Rank values ascending, averaging the ranks of tied values.

    A run of k equal values starting at sorted position i (0-based) receives
    the mean of the 1-based ranks i+1 .. i+k.

    NaN sorts after every number and all NaN values tie with each other.

    Args:
        values: Values to rank

    Returns:
        Float array of ranks aligned with ``values``

    Examples:
        >>> rank([5, 1, 1, 3]).tolist()
        [4.0, 1.5, 1.5, 3.0]
    """
    arr = np.asarray(values, dtype=np.float64)
    n = len(arr)

    # Stable sort keeps original indices alongside sorted values
    order = np.argsort(arr, kind='stable')
    sorted_values = arr[order]
    sorted_nan = np.isnan(sorted_values)

    sorted_ranks = np.empty(n, dtype=np.float64)
    i = 0
    while i < n:
        j = i + 1
        while j < n and (
            sorted_values[j] == sorted_values[i] or (sorted_nan[j] and sorted_nan[i])
        ):
            j += 1
        # mean of i+1 .. j
        sorted_ranks[i:j] = (i + 1 + j) / 2.0
        i = j

    ranks = np.empty(n, dtype=np.float64)
    ranks[order] = sorted_ranks
    return ranks


CORRELATION_METHODS: Dict[str, Type[CorrelationCoefficient]] = {
    'pearson': PearsonCoefficient,
    'spearman': SpearmanCoefficient,
}


def get_correlation(method: str = 'pearson') -> CorrelationCoefficient:
    """
    Create an empty correlation coefficient by name.

    Args:
        method: 'pearson' or 'spearman'

    Raises:
        ValueError: If the method is unknown
    """
    try:
        cls = CORRELATION_METHODS[method.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown correlation method '{method}'. "
            f"Use one of: {', '.join(CORRELATION_METHODS)}"
        )
    return cls()


def correlate(xs: Iterable[float], ys: Iterable[float], method: str = 'pearson') -> float:
    """
    Correlation between two parallel series.

    Args:
        xs: First series
        ys: Second series, same length as ``xs``
        method: 'pearson' or 'spearman'

    Returns:
        Correlation coefficient (nan for degenerate input)

    Raises:
        ValueError: If the series differ in length or the method is unknown
    """
    xs = list(xs)
    ys = list(ys)
    if len(xs) != len(ys):
        raise ValueError(
            f"Series must have the same length, got {len(xs)} and {len(ys)}"
        )

    coefficient = get_correlation(method)
    coefficient.feed(zip(xs, ys))
    return coefficient.compute()
