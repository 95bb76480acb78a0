"""
Column alignment module for Smart Column Alignment.

This module proposes column correspondences between two tabular datasets
using cascading heuristics (exact name, name similarity, value patterns,
semantic keywords) and tracks the review of those proposals.
"""

from .models import AlignmentSuggestion, ColumnMatch, MatchType, SimilarityScore
from .normalization import normalize_column_name, calculate_string_similarity
from .profiling import (
    ColumnProfile,
    analyze_data_types,
    build_column_profile,
    calculate_pattern_similarity,
    compare_profiles,
    extract_value_patterns,
    infer_value_type,
)
from .semantic import SEMANTIC_GROUPS, calculate_semantic_similarity, find_semantic_group
from .engine import (
    ColumnAlignmentEngine,
    MatchingState,
    analyze_column_alignment,
    create_alignment_engine,
    run_exact_phase,
    run_similar_phase,
    run_pattern_phase,
    run_semantic_phase,
)
from .review import AlignmentReview, ConfirmedPair, confidence_label

__all__ = [
    # Models
    'AlignmentSuggestion',
    'ColumnMatch',
    'MatchType',
    'SimilarityScore',

    # Name similarity
    'normalize_column_name',
    'calculate_string_similarity',

    # Value profiling
    'ColumnProfile',
    'analyze_data_types',
    'build_column_profile',
    'calculate_pattern_similarity',
    'compare_profiles',
    'extract_value_patterns',
    'infer_value_type',

    # Semantic groups
    'SEMANTIC_GROUPS',
    'calculate_semantic_similarity',
    'find_semantic_group',

    # Engine
    'ColumnAlignmentEngine',
    'MatchingState',
    'analyze_column_alignment',
    'create_alignment_engine',
    'run_exact_phase',
    'run_similar_phase',
    'run_pattern_phase',
    'run_semantic_phase',

    # Review
    'AlignmentReview',
    'ConfirmedPair',
    'confidence_label',
]

# Version info
__version__ = "1.0.0"
