"""
Four-phase column alignment engine.

Given the column names of a source and a target dataset (and optionally
sample rows of each), the engine proposes which source column corresponds
to which target column. Phases run in a fixed cascade:

1. exact     - normalized names are identical
2. similar   - normalized names are within a small edit distance
3. pattern   - sampled values look alike
4. semantic  - names share a keyword group

Each phase only sees the source columns no earlier phase matched and the
target columns no earlier phase used. Matching inside a phase is greedy:
source columns are visited in input order and each takes its best-scoring
free target, the first one winning ties. Columns are tracked by position,
so duplicate names are independent columns.
"""

import logging
from dataclasses import dataclass
from collections.abc import Iterable, Mapping
from typing import Callable, FrozenSet, List, Optional, Tuple

import pandas as pd

from core.config import AlignmentConfig
from core.exceptions import ValidationError
from .models import AlignmentSuggestion, ColumnMatch, MatchType, NO_SIMILARITY, SimilarityScore
from .normalization import as_percentage, calculate_string_similarity, normalize_column_name
from .profiling import ProfileCache, SampleData, compare_profiles, to_records
from .semantic import calculate_semantic_similarity

Scorer = Callable[[str, str], SimilarityScore]

EXACT_MATCH_REASON = "Exact column name match"


@dataclass(frozen=True)
class MatchingState:
    """Accumulated result passed from one matching phase to the next."""
    source_columns: Tuple[str, ...]
    target_columns: Tuple[str, ...]
    matches: Tuple[ColumnMatch, ...] = ()
    matched_source: FrozenSet[int] = frozenset()
    used_target: FrozenSet[int] = frozenset()

    @classmethod
    def initial(cls, source_columns, target_columns) -> 'MatchingState':
        return cls(tuple(source_columns), tuple(target_columns))

    @property
    def remaining_source(self) -> List[Tuple[int, str]]:
        """(position, name) of source columns not matched yet."""
        return [(i, col) for i, col in enumerate(self.source_columns) if i not in self.matched_source]

    @property
    def available_target(self) -> List[Tuple[int, str]]:
        """(position, name) of target columns not used yet."""
        return [(j, col) for j, col in enumerate(self.target_columns) if j not in self.used_target]

    def to_suggestion(self) -> AlignmentSuggestion:
        if self.matches:
            confidence = sum(m.confidence for m in self.matches) / len(self.matches)
        else:
            confidence = 0.0

        return AlignmentSuggestion(
            matches=self.matches,
            unmatched_source=tuple(col for _, col in self.remaining_source),
            unmatched_target=tuple(col for _, col in self.available_target),
            confidence=confidence,
        )


def _run_greedy_phase(
    state: MatchingState,
    scorer: Scorer,
    threshold: float,
    match_type: MatchType
) -> MatchingState:
    """
    Match every remaining source column to its best free target column.

    Candidates without reasons or below ``threshold`` are ignored. The
    current best is only replaced on a strictly higher score, so earlier
    targets win ties. A target taken by one source column is unavailable
    to the next.
    """
    matches = list(state.matches)
    matched_source = set(state.matched_source)
    used_target = set(state.used_target)

    for i, source_col in state.remaining_source:
        best_index = None
        best = None

        for j, target_col in enumerate(state.target_columns):
            if j in used_target:
                continue

            candidate = scorer(source_col, target_col)
            if candidate.reasons and candidate.score >= threshold and (best is None or candidate.score > best.score):
                best_index, best = j, candidate

        if best is not None:
            matches.append(ColumnMatch(
                source_column=source_col,
                target_column=state.target_columns[best_index],
                confidence=best.score,
                reasons=tuple(best.reasons),
                type=match_type,
            ))
            matched_source.add(i)
            used_target.add(best_index)

    new_matches = len(matches) - len(state.matches)
    logging.debug(f"{match_type.value} phase matched {new_matches} column(s)")

    return MatchingState(
        source_columns=state.source_columns,
        target_columns=state.target_columns,
        matches=tuple(matches),
        matched_source=frozenset(matched_source),
        used_target=frozenset(used_target),
    )


def run_exact_phase(state: MatchingState, config: Optional[AlignmentConfig] = None) -> MatchingState:
    """Pair columns whose normalized names are identical."""
    config = config or AlignmentConfig()
    confidence = config.exact_match_confidence

    def score(source_col: str, target_col: str) -> SimilarityScore:
        if normalize_column_name(source_col) == normalize_column_name(target_col):
            return SimilarityScore(confidence, (EXACT_MATCH_REASON,))
        return NO_SIMILARITY

    return _run_greedy_phase(state, score, confidence, MatchType.EXACT)


def run_similar_phase(state: MatchingState, config: Optional[AlignmentConfig] = None) -> MatchingState:
    """Pair columns whose normalized names are within a small edit distance."""
    config = config or AlignmentConfig()

    def score(source_col: str, target_col: str) -> SimilarityScore:
        similarity = calculate_string_similarity(source_col, target_col)
        return SimilarityScore(similarity, (f"High name similarity ({as_percentage(similarity)}%)",))

    return _run_greedy_phase(state, score, config.similar_match_threshold, MatchType.SIMILAR)


def run_pattern_phase(
    state: MatchingState,
    source_data: Optional[SampleData] = None,
    target_data: Optional[SampleData] = None,
    config: Optional[AlignmentConfig] = None
) -> MatchingState:
    """Pair columns whose sampled values look alike."""
    config = config or AlignmentConfig()
    source_profiles = ProfileCache(source_data, config)
    target_profiles = ProfileCache(target_data, config)

    if not (source_profiles.has_data and target_profiles.has_data):
        logging.debug("pattern phase skipped: sample data missing for one side")

    def score(source_col: str, target_col: str) -> SimilarityScore:
        if not (source_profiles.has_data and target_profiles.has_data):
            return NO_SIMILARITY
        return compare_profiles(source_profiles.get(source_col), target_profiles.get(target_col), config)

    threshold = config.pattern_match_threshold
    return _run_greedy_phase(state, score, threshold, MatchType.PATTERN)


def run_semantic_phase(state: MatchingState, config: Optional[AlignmentConfig] = None) -> MatchingState:
    """Pair columns whose names fall into the same semantic keyword group."""
    config = config or AlignmentConfig()

    def score(source_col: str, target_col: str) -> SimilarityScore:
        return calculate_semantic_similarity(source_col, target_col, config)

    threshold = config.semantic_match_threshold
    return _run_greedy_phase(state, score, threshold, MatchType.SEMANTIC)


def _validate_columns(columns, field_name: str) -> Tuple[str, ...]:
    if columns is None or isinstance(columns, (str, bytes, Mapping)) or not isinstance(columns, Iterable):
        raise ValidationError(f"{field_name} must be a sequence of column names", field=field_name)

    columns = tuple(columns)
    for column in columns:
        if not isinstance(column, str):
            raise ValidationError(
                f"{field_name} must contain only strings, got {type(column).__name__}",
                field=field_name,
                value=column,
            )
    return columns


def _validate_sample_data(data, field_name: str, sample_rows: int):
    if data is None or isinstance(data, pd.DataFrame):
        return data

    if isinstance(data, (str, bytes, Mapping)) or not isinstance(data, Iterable):
        raise ValidationError(f"{field_name} must be a sequence of row mappings or a DataFrame", field=field_name)

    rows = to_records(data, sample_rows)
    for index, row in enumerate(rows):
        if not isinstance(row, Mapping):
            raise ValidationError(
                f"{field_name} row {index} is {type(row).__name__}, expected a mapping",
                field=field_name,
            )
    return rows


class ColumnAlignmentEngine:
    """Proposes a column correspondence between two tabular datasets."""

    def __init__(self, config: Optional[AlignmentConfig] = None):
        self.config = config or AlignmentConfig()

    def analyze(
        self,
        source_columns,
        target_columns,
        source_data: Optional[SampleData] = None,
        target_data: Optional[SampleData] = None
    ) -> AlignmentSuggestion:
        """
        Run all matching phases and return the resulting suggestion.

        Args:
            source_columns: Column names of the source dataset
            target_columns: Column names of the target dataset
            source_data: Optional sample rows (mappings or a DataFrame) of the source
            target_data: Optional sample rows (mappings or a DataFrame) of the target

        Returns:
            AlignmentSuggestion with matches in phase order

        Raises:
            ValidationError: If column lists or sample data have the wrong shape
        """
        source_columns = _validate_columns(source_columns, 'source_columns')
        target_columns = _validate_columns(target_columns, 'target_columns')
        source_data = _validate_sample_data(source_data, 'source_data', self.config.sample_rows)
        target_data = _validate_sample_data(target_data, 'target_data', self.config.sample_rows)

        state = MatchingState.initial(source_columns, target_columns)
        state = run_exact_phase(state, self.config)
        state = run_similar_phase(state, self.config)
        state = run_pattern_phase(state, source_data, target_data, self.config)
        state = run_semantic_phase(state, self.config)

        suggestion = state.to_suggestion()
        logging.info(
            f"Column alignment: {len(suggestion.matches)} match(es), "
            f"{len(suggestion.unmatched_source)} unmatched source, "
            f"{len(suggestion.unmatched_target)} unmatched target, "
            f"confidence {suggestion.confidence:.2f}"
        )
        return suggestion


def create_alignment_engine(config: Optional[AlignmentConfig] = None) -> ColumnAlignmentEngine:
    """Factory function to create an alignment engine with the given settings."""
    return ColumnAlignmentEngine(config=config)


def analyze_column_alignment(
    source_columns,
    target_columns,
    source_data: Optional[SampleData] = None,
    target_data: Optional[SampleData] = None,
    config: Optional[AlignmentConfig] = None
) -> AlignmentSuggestion:
    """Align two column lists with a one-off engine."""
    return ColumnAlignmentEngine(config).analyze(source_columns, target_columns, source_data, target_data)
