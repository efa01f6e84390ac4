"""
Pytest configuration and shared fixtures.

Provides small complex sets and localization assignments, plus writers for
the text formats the readers consume.
"""

from pathlib import Path

import pytest

from complexeval.core.complexes import ComplexSet
from complexeval.core.localization import LocalizationData


@pytest.fixture
def localization():
    """
    Three compartments; P5 is annotated to two of them, P6/P7 have no data.
    """
    return LocalizationData.from_mapping({
        'P1': ['nucleus'],
        'P2': ['nucleus'],
        'P3': ['cytoplasm'],
        'P4': ['mitochondrion'],
        'P5': ['nucleus', 'cytoplasm'],
    })


@pytest.fixture
def complex_set():
    """Four complexes, the last one without any localized member."""
    return ComplexSet([
        ['P1', 'P2', 'P3'],
        ['P1', 'P5'],
        ['P3', 'P4', 'P6'],
        ['P6', 'P7'],
    ])


def write_complex_file(path: Path, complexes, separator: str = '\t') -> Path:
    """Write complexes in the one-complex-per-line format."""
    path.write_text(''.join(separator.join(c) + '\n' for c in complexes))
    return path


def write_localization_file(path: Path, assignments) -> Path:
    """Write a PROTEIN loc1,loc2 localization file."""
    lines = [f"{protein} {','.join(locs)}\n" for protein, locs in assignments.items()]
    path.write_text(''.join(lines))
    return path


@pytest.fixture
def coloc_files(tmp_path):
    """Complex and localization files matching the in-memory fixtures."""
    complexes = write_complex_file(tmp_path / "complexes.txt", [
        ['P1', 'P2', 'P3'],
        ['P1', 'P5'],
        ['P3', 'P4', 'P6'],
        ['P6', 'P7'],
    ])
    loc = write_localization_file(tmp_path / "localization.txt", {
        'P1': ['nucleus'],
        'P2': ['nucleus'],
        'P3': ['cytoplasm'],
        'P4': ['mitochondrion'],
        'P5': ['nucleus', 'cytoplasm'],
    })
    return {'complexes': complexes, 'localization': loc}
