"""
Value profiling and pattern similarity for column alignment.

This module samples the values of a column, classifies them into coarse
data types, extracts character-shape pattern tags and compares two such
profiles to score how alike two columns look from their data alone.
"""

import logging
import math
import re
from collections import Counter
from dataclasses import dataclass
from datetime import date
from itertools import islice
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from core.config import AlignmentConfig
from .models import NO_SIMILARITY, SimilarityScore
from .normalization import as_percentage

SampleData = Union[pd.DataFrame, Sequence[Mapping[str, Any]]]

BOOLEAN_TOKENS = frozenset({'true', 'false', '1', '0'})

_ALL_DIGITS = re.compile(r'[0-9]+')
_ALL_LETTERS = re.compile(r'[a-zA-Z]+')
_ALPHANUMERIC = re.compile(r'[a-zA-Z0-9]+')
_WHITESPACE = re.compile(r'\s')
_ISO_DATE = re.compile(r'[0-9]{4}-[0-9]{2}-[0-9]{2}')


def is_missing(value: Any) -> bool:
    """True for None, NaN/NaT and the empty string."""
    if value is None:
        return True
    if isinstance(value, str):
        return value == ''
    return bool(pd.api.types.is_scalar(value) and pd.isna(value))


def stringify(value: Any) -> str:
    """
    Render a sampled value as text.

    Booleans render as ``true``/``false`` and integral floats without a
    trailing ``.0`` so that ``3.0`` read from one file and ``"3"`` read from
    another compare equal.
    """
    if isinstance(value, (bool, np.bool_)):
        return 'true' if value else 'false'
    if isinstance(value, (float, np.floating)) and math.isfinite(value) and float(value).is_integer():
        return str(int(value))
    return str(value)


def _parses_as_number(value: Any) -> bool:
    if isinstance(value, (bool, int, float, np.number, np.bool_)):
        return not pd.isna(value)
    try:
        return bool(pd.notna(pd.to_numeric(str(value).strip(), errors='coerce')))
    except (TypeError, ValueError):
        return False


def _parses_as_date(value: Any) -> bool:
    if isinstance(value, (date, np.datetime64)):
        return True
    # format="mixed" parses each value on its own without the format-inference warning
    try:
        return bool(pd.notna(pd.to_datetime(str(value), errors='coerce', format='mixed')))
    except (TypeError, ValueError, OverflowError):
        return False


def infer_value_type(value: Any) -> str:
    """
    Classify a value as 'number', 'boolean', 'date' or 'string'.

    Checks run in that priority order, so ``"1"`` is a number and only the
    ``true``/``false`` tokens end up as booleans.
    """
    if _parses_as_number(value):
        return 'number'
    if isinstance(value, (bool, np.bool_)) or stringify(value).lower() in BOOLEAN_TOKENS:
        return 'boolean'
    if _parses_as_date(value):
        return 'date'
    return 'string'


def analyze_data_types(sample: Iterable[Any]) -> Dict[str, int]:
    """Histogram of inferred value types."""
    return dict(Counter(infer_value_type(value) for value in sample))


def extract_value_patterns(sample: Sequence[Any], limit: int = 20) -> FrozenSet[str]:
    """
    Collect the distinct shape tags of the first ``limit`` values.

    Tags: ``length_<N>``, ``all_digits``, ``all_letters``, ``alphanumeric``,
    ``contains_spaces``, ``contains_at`` and ``date_format``.
    """
    patterns = set()

    for value in islice(sample, limit):
        text = stringify(value)

        patterns.add(f"length_{len(text)}")

        if _ALL_DIGITS.fullmatch(text):
            patterns.add('all_digits')
        if _ALL_LETTERS.fullmatch(text):
            patterns.add('all_letters')
        if _ALPHANUMERIC.fullmatch(text):
            patterns.add('alphanumeric')
        if _WHITESPACE.search(text):
            patterns.add('contains_spaces')
        if '@' in text:
            patterns.add('contains_at')
        if _ISO_DATE.search(text):
            patterns.add('date_format')

    return frozenset(patterns)


def to_records(data: SampleData, sample_rows: int) -> List[Mapping[str, Any]]:
    """Return the first ``sample_rows`` rows of sample data as row mappings."""
    if isinstance(data, pd.DataFrame):
        return data.head(sample_rows).to_dict(orient='records')
    return list(islice(data, sample_rows))


def sample_column(rows: Iterable[Mapping[str, Any]], column: str) -> List[Any]:
    """Project one column out of row records, dropping missing values."""
    return [row.get(column) for row in rows if not is_missing(row.get(column))]


@dataclass(frozen=True)
class ColumnProfile:
    """Sampled values of one column and the features derived from them."""
    sample: Tuple[Any, ...]
    types: Dict[str, int]
    patterns: FrozenSet[str]
    values: FrozenSet[str]

    @property
    def is_empty(self) -> bool:
        return not self.sample


def build_column_profile(sample: Sequence[Any], pattern_sample_size: int = 20) -> ColumnProfile:
    """Derive the type histogram, pattern tags and literal value set of a sample."""
    return ColumnProfile(
        sample=tuple(sample),
        types=analyze_data_types(sample),
        patterns=extract_value_patterns(sample, pattern_sample_size),
        values=frozenset(stringify(value).lower() for value in sample),
    )


def compare_profiles(
    source: ColumnProfile,
    target: ColumnProfile,
    config: Optional[AlignmentConfig] = None
) -> SimilarityScore:
    """
    Score two column profiles on type, pattern and literal value overlap.

    Args:
        source: Profile of the source column
        target: Profile of the target column
        config: Weights to apply (defaults to AlignmentConfig())

    Returns:
        SimilarityScore capped at 1.0, with one reason per contributing signal
    """
    config = config or AlignmentConfig()

    if source.is_empty or target.is_empty:
        return NO_SIMILARITY

    score = 0.0
    reasons = []

    shared_types = [t for t in source.types if t in target.types]
    if shared_types:
        all_types = set(source.types) | set(target.types)
        type_score = len(shared_types) / len(all_types)
        score += type_score * config.type_weight
        reasons.append(f"Similar data types ({as_percentage(type_score)}% overlap)")

    pattern_overlap = len(source.patterns & target.patterns)
    if pattern_overlap > 0:
        pattern_score = pattern_overlap / max(len(source.patterns), len(target.patterns))
        score += pattern_score * config.pattern_weight
        reasons.append(f"Similar value patterns ({pattern_overlap} common patterns)")

    shared_values = source.values & target.values
    if shared_values:
        overlap_score = len(shared_values) / max(len(source.values), len(target.values))
        score += overlap_score * config.value_weight
        reasons.append(f"Common values ({len(shared_values)} shared values)")

    return SimilarityScore(min(score, 1.0), tuple(reasons))


def calculate_pattern_similarity(
    source_column: str,
    target_column: str,
    source_data: Optional[SampleData],
    target_data: Optional[SampleData],
    config: Optional[AlignmentConfig] = None
) -> SimilarityScore:
    """
    Score two columns by the values they hold.

    Returns a zero score when either side has no sample data.
    """
    config = config or AlignmentConfig()

    if source_data is None or target_data is None:
        return NO_SIMILARITY

    source_sample = sample_column(to_records(source_data, config.sample_rows), source_column)
    target_sample = sample_column(to_records(target_data, config.sample_rows), target_column)

    logging.debug(
        f"Pattern sampling {source_column!r} ({len(source_sample)} values) vs "
        f"{target_column!r} ({len(target_sample)} values)"
    )

    return compare_profiles(
        build_column_profile(source_sample, config.pattern_sample_size),
        build_column_profile(target_sample, config.pattern_sample_size),
        config,
    )


class ProfileCache:
    """Builds each column's profile once per alignment run."""

    def __init__(self, data: Optional[SampleData], config: AlignmentConfig):
        self._rows = None if data is None else to_records(data, config.sample_rows)
        self._config = config
        self._profiles: Dict[str, ColumnProfile] = {}

    @property
    def has_data(self) -> bool:
        return self._rows is not None

    def get(self, column: str) -> ColumnProfile:
        if column not in self._profiles:
            self._profiles[column] = build_column_profile(
                sample_column(self._rows or [], column),
                self._config.pattern_sample_size,
            )
        return self._profiles[column]
