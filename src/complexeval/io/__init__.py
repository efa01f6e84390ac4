"""Readers for complex sets, localization files and score tables."""

from complexeval.io.loaders import (
    DEFAULT_SEPARATOR,
    read_complexes,
    read_localization_data,
    read_point_table,
)

__all__ = [
    "DEFAULT_SEPARATOR",
    "read_complexes",
    "read_localization_data",
    "read_point_table",
]
