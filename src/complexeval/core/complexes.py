"""
Protein complex containers.

A Complex is an ordered, duplicate-free collection of protein identifiers;
a ComplexSet is an ordered collection of complexes with stable iteration.
Scorers only rely on iteration, ``len`` and membership.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Hashable, Iterable, Iterator, List, Optional, Set, Tuple, Union

__all__ = [
    'Complex',
    'ComplexSet',
]


@dataclass
class Complex:
    """
    A predicted or reference protein complex.

    Duplicate proteins are dropped while keeping first-seen order.

    Attributes:
        proteins: Member protein identifiers
        name: Optional complex label
    """
    proteins: Tuple[Hashable, ...]
    name: Optional[str] = None
    _members: frozenset = field(default=frozenset(), init=False, repr=False, compare=False)

    def __post_init__(self):
        self.proteins = tuple(dict.fromkeys(self.proteins))
        self._members = frozenset(self.proteins)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self.proteins)

    def __len__(self) -> int:
        return len(self.proteins)

    def __contains__(self, protein: Hashable) -> bool:
        return protein in self._members

    @property
    def size(self) -> int:
        return len(self.proteins)


class ComplexSet:
    """
    Ordered collection of complexes.

    Accepts Complex objects or plain iterables of protein identifiers.

    Examples:
        >>> complexes = ComplexSet([['P1', 'P2', 'P3'], ['P4', 'P5']])
        >>> len(complexes)
        2
        >>> sorted(complexes.proteins())
        ['P1', 'P2', 'P3', 'P4', 'P5']
    """

    def __init__(self, complexes: Iterable[Union[Complex, Iterable[Hashable]]] = ()):
        self._complexes: List[Complex] = []
        for c in complexes:
            self.add(c)

    def add(self, complex_: Union[Complex, Iterable[Hashable]]) -> Complex:
        """Append a complex and return it."""
        if not isinstance(complex_, Complex):
            complex_ = Complex(tuple(complex_))
        self._complexes.append(complex_)
        return complex_

    def __iter__(self) -> Iterator[Complex]:
        return iter(self._complexes)

    def __len__(self) -> int:
        return len(self._complexes)

    def __getitem__(self, index: int) -> Complex:
        return self._complexes[index]

    def proteins(self) -> Set[Hashable]:
        """All proteins appearing in at least one complex."""
        members: Set[Hashable] = set()
        for c in self._complexes:
            members.update(c.proteins)
        return members

    def __repr__(self) -> str:
        return f"ComplexSet(n_complexes={len(self)}, n_proteins={len(self.proteins())})"
