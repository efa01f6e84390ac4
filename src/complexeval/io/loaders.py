"""
Readers for complex sets, localization annotations and paired score tables.

File formats:

    Complex set file (one complex per line, members separated by TAB):
        YAL001C	YBR123C	YDR362C
        YGR047C	YOR110W

    Localization file (protein, whitespace, comma-separated localizations):
        YAL001C nucleus
        YBR123C nucleus,cytoplasm

    Score table (any delimited table with a header row); two numeric columns
    are selected as the paired series for correlation.

Blank lines and lines starting with '#' are skipped in the first two
formats. Protein identifiers are lower-cased unless ``case_sensitive`` is set,
so both files resolve to the same identifiers. Files ending in ``.gz`` are
decompressed transparently.

Examples:
    >>> complexes = read_complexes(Path("predicted_complexes.txt"))
    >>> localization = read_localization_data(Path("localization.txt"))
    >>> points = read_point_table(Path("scores.tsv"), x="method_a", y="method_b")
"""

from __future__ import annotations

import gzip
import logging
import warnings
from pathlib import Path
from typing import IO, List, Union

import pandas as pd

from complexeval.core.complexes import ComplexSet
from complexeval.core.localization import LocalizationData
from complexeval.stats.correlation import Point

__all__ = [
    'DEFAULT_SEPARATOR',
    'read_complexes',
    'read_localization_data',
    'read_point_table',
]

logger = logging.getLogger(__name__)

DEFAULT_SEPARATOR = '\t'

PathLike = Union[str, Path]


def _open_text(path: Path) -> IO[str]:
    if path.suffix == '.gz':
        return gzip.open(path, 'rt', encoding='utf-8')
    return open(path, 'r', encoding='utf-8')


def _validate_path(path: PathLike) -> Path:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    if not path.is_file():
        raise ValueError(f"Path is not a file: {path}")
    return path


def read_complexes(
    path: PathLike,
    separator: str = DEFAULT_SEPARATOR,
    case_sensitive: bool = False,
) -> ComplexSet:
    """
    Read a complex set file.

    Args:
        path: Complex set file
        separator: Separator between members of a complex
        case_sensitive: Keep protein identifiers as written

    Returns:
        ComplexSet in file order; duplicate members within a line collapse

    Raises:
        FileNotFoundError: If path does not exist
    """
    path = _validate_path(path)
    complexes = ComplexSet()

    with _open_text(path) as f:
        for line in f:
            line = line.rstrip('\r\n')
            if not line.strip() or line.startswith('#'):
                continue
            proteins = [p.strip() for p in line.split(separator)]
            proteins = [p if case_sensitive else p.lower() for p in proteins if p]
            if proteins:
                complexes.add(proteins)

    logger.info(f"Read {len(complexes)} complexes from {path}")
    return complexes


def read_localization_data(path: PathLike, case_sensitive: bool = False) -> LocalizationData:
    """
    Read a localization annotation file.

    Args:
        path: Localization file
        case_sensitive: Keep protein identifiers as written

    Returns:
        LocalizationData with categories indexed in first-seen order

    Raises:
        FileNotFoundError: If path does not exist
        ValueError: If a line has no localization column
    """
    path = _validate_path(path)
    data = LocalizationData()

    with _open_text(path) as f:
        for lineno, line in enumerate(f, start=1):
            line = line.strip()
            if not line or line.startswith('#'):
                continue
            parts = line.split(None, 1)
            if len(parts) < 2:
                raise ValueError(
                    f"Invalid localization line {lineno} in {path}: '{line}' "
                    f"(expected PROTEIN<whitespace>loc1,loc2,...)"
                )
            protein = parts[0] if case_sensitive else parts[0].lower()
            for loc in parts[1].split(','):
                loc = loc.strip()
                if loc:
                    data.add_localization(protein, loc)

    logger.info(
        f"Read localization data for {len(data)} proteins "
        f"({data.n_localizations} localizations) from {path}"
    )
    return data


def read_point_table(
    path: PathLike,
    x: str,
    y: str,
    sep: str = '\t',
) -> List[Point]:
    """
    Read two numeric columns of a delimited table as paired points.

    Rows where either value is missing or non-numeric are dropped with a
    warning.

    Args:
        path: Delimited table with a header row
        x: Column holding the first series
        y: Column holding the second series
        sep: Column delimiter

    Returns:
        List of Point in row order

    Raises:
        FileNotFoundError: If path does not exist
        ValueError: If the table is empty or a column is missing
    """
    path = _validate_path(path)

    try:
        df = pd.read_csv(path, sep=sep)
    except pd.errors.EmptyDataError as e:
        raise ValueError(f"Table is empty: {path}") from e

    missing = [col for col in (x, y) if col not in df.columns]
    if missing:
        raise ValueError(
            f"Column(s) {missing} not found in {path}. "
            f"Available: {list(df.columns)}"
        )

    values = df[[x, y]].apply(pd.to_numeric, errors='coerce')
    n_invalid = int(values.isna().any(axis=1).sum())
    if n_invalid:
        warnings.warn(
            f"Dropping {n_invalid} rows with missing or non-numeric values",
            UserWarning
        )
        values = values.dropna()

    return [Point(float(a), float(b)) for a, b in values.itertuples(index=False)]
