"""Quality measures for predicted protein complexes."""

from complexeval.quality.colocalization import SCORE_TYPES, Colocalization

__all__ = [
    "SCORE_TYPES",
    "Colocalization",
]
