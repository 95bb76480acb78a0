"""
Result value objects for column alignment.

A run of the alignment engine produces one AlignmentSuggestion holding
an ordered tuple of ColumnMatch proposals plus the columns left over on
either side. Both are frozen and carry no identity.
"""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Optional, Tuple


class MatchType(str, Enum):
    """Which matching phase produced a ColumnMatch."""
    EXACT = 'exact'
    SIMILAR = 'similar'
    PATTERN = 'pattern'
    SEMANTIC = 'semantic'


class SimilarityScore(NamedTuple):
    """Score of one candidate pair together with its justification."""
    score: float
    reasons: Tuple[str, ...] = ()


NO_SIMILARITY = SimilarityScore(0.0, ())


@dataclass(frozen=True)
class ColumnMatch:
    """One proposed correspondence between a source and a target column."""
    source_column: str
    target_column: str
    confidence: float
    reasons: Tuple[str, ...]
    type: MatchType

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'source_column': self.source_column,
            'target_column': self.target_column,
            'confidence': self.confidence,
            'reasons': list(self.reasons),
            'type': self.type.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'ColumnMatch':
        """Create from dictionary for deserialization."""
        return cls(
            source_column=data['source_column'],
            target_column=data['target_column'],
            confidence=float(data['confidence']),
            reasons=tuple(data.get('reasons', ())),
            type=MatchType(data['type']),
        )


@dataclass(frozen=True)
class AlignmentSuggestion:
    """The complete result of one alignment run."""
    matches: Tuple[ColumnMatch, ...] = ()
    unmatched_source: Tuple[str, ...] = ()
    unmatched_target: Tuple[str, ...] = ()
    confidence: float = 0.0

    @property
    def pairs(self) -> Tuple[Tuple[str, str], ...]:
        """(source, target) name pairs in match order."""
        return tuple((m.source_column, m.target_column) for m in self.matches)

    def matches_by_type(self, match_type: MatchType) -> Tuple[ColumnMatch, ...]:
        """Return the matches produced by a single phase."""
        return tuple(m for m in self.matches if m.type == MatchType(match_type))

    def find_match(self, source_column: str) -> Optional[ColumnMatch]:
        """Return the first match proposed for a source column, if any."""
        for match in self.matches:
            if match.source_column == source_column:
                return match
        return None

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'matches': [m.to_dict() for m in self.matches],
            'unmatched_source': list(self.unmatched_source),
            'unmatched_target': list(self.unmatched_target),
            'confidence': self.confidence,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'AlignmentSuggestion':
        """Create from dictionary for deserialization."""
        return cls(
            matches=tuple(ColumnMatch.from_dict(m) for m in data.get('matches', ())),
            unmatched_source=tuple(data.get('unmatched_source', ())),
            unmatched_target=tuple(data.get('unmatched_target', ())),
            confidence=float(data.get('confidence', 0.0)),
        )
