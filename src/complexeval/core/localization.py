"""
Subcellular localization annotations.

Maps each protein to a set of localization categories (nucleus, ER,
cytoplasm, ...). Category names are mapped to dense integer indices in
first-seen order, so scorers can count occurrences in a fixed-size array.

Two proteins are colocalized when they share at least one category.
A protein without an entry is uninformative; it is neither colocalized
nor non-colocalized with anything.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, Hashable, Iterable, List, Mapping, Optional, Set

__all__ = [
    'LocalizationData',
]


class LocalizationData:
    """
    Localization categories per protein.

    Args:
        localization_names: Category names known up front. Additional
            names are registered as they are first used.

    Examples:
        >>> data = LocalizationData.from_mapping({
        ...     'P1': ['nucleus'],
        ...     'P2': ['nucleus', 'cytoplasm'],
        ... })
        >>> data.n_localizations
        2
        >>> data.are_colocalized('P1', 'P2')
        1
    """

    def __init__(self, localization_names: Optional[Iterable[str]] = None):
        self._names: List[str] = []
        self._name_to_index: Dict[str, int] = {}
        self._localizations: Dict[Hashable, Set[int]] = {}
        for name in localization_names or ():
            self._register(name)

    @classmethod
    def from_mapping(cls, assignments: Mapping[Hashable, Iterable[str]]) -> "LocalizationData":
        """Build from protein -> iterable of category names."""
        data = cls()
        for protein, names in assignments.items():
            for name in names:
                data.add_localization(protein, name)
        return data

    def _register(self, name: str) -> int:
        index = self._name_to_index.get(name)
        if index is None:
            index = len(self._names)
            self._names.append(name)
            self._name_to_index[name] = index
        return index

    def add_localization(self, protein: Hashable, localization: str) -> int:
        """
        Annotate a protein with a localization name.

        Returns:
            Integer index of the localization
        """
        index = self._register(localization)
        self._localizations.setdefault(protein, set()).add(index)
        return index

    def add_localization_index(self, protein: Hashable, index: int) -> None:
        """
        Annotate a protein with an already registered category index.

        Raises:
            ValueError: If index is outside [0, n_localizations)
        """
        if not 0 <= index < len(self._names):
            raise ValueError(
                f"Localization index {index} out of range "
                f"[0, {len(self._names)})"
            )
        self._localizations.setdefault(protein, set()).add(index)

    def get_localizations(self, protein: Hashable) -> Optional[FrozenSet[int]]:
        """Category indices of a protein, or None if it has no entry."""
        locs = self._localizations.get(protein)
        if locs is None:
            return None
        return frozenset(locs)

    def are_colocalized(self, protein1: Hashable, protein2: Hashable) -> int:
        """
        Whether two proteins share a localization.

        Returns:
            1 if colocalized, 0 if not, -1 if at least one protein has no
            localization data
        """
        locs1 = self._localizations.get(protein1)
        locs2 = self._localizations.get(protein2)
        if locs1 is None or locs2 is None:
            return -1
        return 1 if not locs1.isdisjoint(locs2) else 0

    def localization_name(self, index: int) -> Optional[str]:
        """Name of a category index, or None if unassigned."""
        if 0 <= index < len(self._names):
            return self._names[index]
        return None

    def localization_index(self, name: str) -> Optional[int]:
        """Index of a category name, or None if unknown."""
        return self._name_to_index.get(name)

    @property
    def n_localizations(self) -> int:
        """Number of distinct localization categories."""
        return len(self._names)

    @property
    def localization_names(self) -> List[str]:
        return list(self._names)

    @property
    def proteins(self) -> Set[Hashable]:
        """Proteins that have localization data."""
        return set(self._localizations)

    def __contains__(self, protein: Hashable) -> bool:
        return protein in self._localizations

    def __len__(self) -> int:
        return len(self._localizations)

    def __repr__(self) -> str:
        return (
            f"LocalizationData(n_proteins={len(self)}, "
            f"n_localizations={self.n_localizations})"
        )
