"""
Column name normalization and edit-distance similarity.
"""

import math
import re

from rapidfuzz.distance import Levenshtein

_SEPARATORS = re.compile(r'[_\s-]+')
_NON_ALPHANUMERIC = re.compile(r'[^a-z0-9]')


def normalize_column_name(name: str) -> str:
    """
    Produce the canonical comparison key for a column name.

    Lower-cases the name, drops runs of underscores, whitespace and hyphens,
    then strips anything outside ``[a-z0-9]``. The result may be empty,
    e.g. for ``"___"``.
    """
    return _NON_ALPHANUMERIC.sub('', _SEPARATORS.sub('', name.lower()))


def calculate_string_similarity(first: str, second: str) -> float:
    """
    Levenshtein similarity of two column names after normalization.

    Returns 1 - distance / max(len) on the normalized forms, and 1.0 when
    the normalized forms are equal (including both empty).
    """
    norm_first = normalize_column_name(first)
    norm_second = normalize_column_name(second)

    if norm_first == norm_second:
        return 1.0

    max_length = max(len(norm_first), len(norm_second))
    return 1.0 - Levenshtein.distance(norm_first, norm_second) / max_length


def as_percentage(value: float) -> int:
    """Round a [0, 1] ratio to a whole percentage, halves rounding up."""
    return int(math.floor(value * 100 + 0.5))
