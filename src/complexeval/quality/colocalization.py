"""
Colocalization quality of predicted protein complexes.

Members of a real complex should mostly sit in the same subcellular
compartment. Two per-complex scores measure this:

PPV (Pu et al., 2007):
    Occurrences of the dominant localization divided by all localization
    occurrences among members with data. A protein annotated to several
    compartments contributes once to each.

Colocalization score:
    Occurrences of the dominant localization divided by the number of
    members that have localization data. NaN when no member has data.

Set-level averages coerce NaN to 0, optionally drop complexes scoring 0
(``ignore_missing``) and optionally weight each complex by its size.

References:
    Pu, S., Vlasblom, J., Emili, A., Greenblatt, J. & Wodak, S. J. (2007).
    Identifying functional modules in the physical interactome of
    Saccharomyces cerevisiae. Proteomics, 7(6), 944-960.

Examples:
    >>> data = LocalizationData.from_mapping({
    ...     'P1': ['nucleus'], 'P2': ['nucleus'], 'P3': ['cytoplasm'],
    ... })
    >>> coloc = Colocalization(data)
    >>> coloc.ppv(Complex(('P1', 'P2', 'P3')))
    0.6666666666666666
"""

from __future__ import annotations

import logging
from typing import Callable, Hashable, Iterable, Iterator, List, Tuple

import numpy as np

from complexeval.core.complexes import Complex
from complexeval.core.localization import LocalizationData

__all__ = [
    'SCORE_TYPES',
    'Colocalization',
]

logger = logging.getLogger(__name__)

SCORE_TYPES = ('colocalization', 'ppv')


class Colocalization:
    """
    Colocalization scorer backed by a localization assignment.

    Args:
        localization: Provides ``get_localizations(protein)`` (set of category
            indices or None) and ``n_localizations``
    """

    def __init__(self, localization: LocalizationData):
        self.localization = localization

    def _count(self, complex_: Iterable[Hashable]) -> Tuple[np.ndarray, int]:
        """Per-category occurrence counts and number of members with data."""
        counts = np.zeros(self.localization.n_localizations, dtype=np.int64)
        prots_with_data = 0
        for protein in complex_:
            locs = self.localization.get_localizations(protein)
            if locs is None:
                continue
            for loc in locs:
                counts[loc] += 1
            prots_with_data += 1
        return counts, prots_with_data

    def ppv(self, complex_: Iterable[Hashable]) -> float:
        """
        PPV of a complex.

        Returns:
            max occurrence / total occurrences, or 0.0 if no member
            contributes an occurrence
        """
        counts, _ = self._count(complex_)
        # No categories at all counts as max 0, so PPV is 0
        max_count = int(counts.max()) if counts.size else 0
        if max_count == 0:
            return 0.0
        return max_count / int(counts.sum())

    def colocalization_score(self, complex_: Iterable[Hashable]) -> float:
        """
        Colocalization score of a complex.

        Returns:
            max occurrence / members with data; NaN if no member has data
        """
        counts, prots_with_data = self._count(complex_)
        # No categories at all counts as max 0; no member has data then, so 0 / 0
        max_count = int(counts.max()) if counts.size else 0
        with np.errstate(divide='ignore', invalid='ignore'):
            return float(np.float64(max_count) / np.float64(prots_with_data))

    def _scorer(self, score: str) -> Callable[[Iterable[Hashable]], float]:
        if score == 'colocalization':
            return self.colocalization_score
        if score == 'ppv':
            return self.ppv
        raise ValueError(
            f"Unknown score type '{score}'. Use one of: {', '.join(SCORE_TYPES)}"
        )

    def scores(self, complexes: Iterable[Complex], score: str = 'colocalization') -> List[float]:
        """Per-complex scores in iteration order (NaN kept)."""
        scorer = self._scorer(score)
        return [scorer(c) for c in complexes]

    def average(
        self,
        complexes: Iterable[Complex],
        score: str = 'colocalization',
        weighted: bool = True,
        ignore_missing: bool = False,
    ) -> float:
        """
        Average score over a complex set.

        Args:
            complexes: Complexes to score; each must support ``len``
            score: 'colocalization' or 'ppv'
            weighted: Weight each complex by its size
            ignore_missing: Exclude complexes whose (NaN-coerced) score is 0

        Returns:
            Weighted or plain mean; NaN if no complex was included
        """
        scorer = self._scorer(score)
        total = 0.0
        weight = 0.0
        n_excluded = 0

        for c in complexes:
            value = scorer(c)
            if value != value:  # NaN
                value = 0.0
            if ignore_missing and value == 0:
                n_excluded += 1
                continue
            if weighted:
                total += value * len(c)
                weight += len(c)
            else:
                total += value
                weight += 1

        if n_excluded:
            logger.debug(f"Excluded {n_excluded} complexes without localization signal")

        with np.errstate(divide='ignore', invalid='ignore'):
            return float(np.float64(total) / np.float64(weight))

    def average_ppv(
        self,
        complexes: Iterable[Complex],
        weighted: bool = True,
        ignore_missing: bool = False,
    ) -> float:
        """Average PPV over a complex set. See :meth:`average`."""
        return self.average(complexes, 'ppv', weighted, ignore_missing)

    def average_colocalization_score(
        self,
        complexes: Iterable[Complex],
        weighted: bool = True,
        ignore_missing: bool = False,
    ) -> float:
        """Average colocalization score over a complex set. See :meth:`average`."""
        return self.average(complexes, 'colocalization', weighted, ignore_missing)

    def colocalized_pairs(self, complexes: Iterable[Complex]) -> Iterator[Tuple[Hashable, Hashable]]:
        """
        Member pairs sharing at least one localization.

        Pairs are yielded per complex in member order; a pair found in
        several complexes is yielded once per complex.
        """
        for c in complexes:
            members = list(c)
            for i in range(len(members)):
                for j in range(i + 1, len(members)):
                    if self.localization.are_colocalized(members[i], members[j]) == 1:
                        yield members[i], members[j]
