"""
Review workflow state for alignment suggestions.

The engine only proposes matches. A reviewer then accepts, rejects or
overrides them; the confirmed pairs are what a downstream join uses. This
module holds that review state without any presentation logic.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from core.config import ReviewConfig
from .models import AlignmentSuggestion, ColumnMatch


@dataclass(frozen=True)
class ConfirmedPair:
    """A source/target column pair the reviewer has signed off on."""
    source_column: str
    target_column: str

    @classmethod
    def from_match(cls, match: ColumnMatch) -> 'ConfirmedPair':
        return cls(match.source_column, match.target_column)

    def shares_column_with(self, other: 'ConfirmedPair') -> bool:
        return self.source_column == other.source_column or self.target_column == other.target_column

    def to_dict(self) -> dict:
        return {'source_column': self.source_column, 'target_column': self.target_column}


def confidence_label(confidence: float, config: Optional[ReviewConfig] = None) -> str:
    """Bucket a confidence into 'High', 'Medium' or 'Low'."""
    config = config or ReviewConfig()
    if confidence >= config.high_confidence_threshold:
        return 'High'
    if confidence >= config.medium_confidence_threshold:
        return 'Medium'
    return 'Low'


class AlignmentReview:
    """
    Tracks which suggested matches a reviewer has confirmed.

    Confirmed pairs stay one-to-one: confirming a pair drops any earlier
    pair that shares its source or its target column.
    """

    def __init__(
        self,
        suggestion: AlignmentSuggestion,
        config: Optional[ReviewConfig] = None,
        initial_pairs: Iterable[ConfirmedPair] = ()
    ):
        self.config = config or ReviewConfig()
        self._pairs: List[ConfirmedPair] = list(initial_pairs)
        self._rejected: set = set()
        self.suggestion = suggestion
        self._apply_auto_accept()

    def reanalyze(self, suggestion: AlignmentSuggestion) -> None:
        """Swap in a fresh suggestion, keeping confirmed pairs."""
        self.suggestion = suggestion
        self._rejected.clear()
        self._apply_auto_accept()

    def _apply_auto_accept(self) -> None:
        if not self.config.auto_accept_high_confidence:
            return

        accepted = [
            ConfirmedPair.from_match(m) for m in self.suggestion.matches
            if m.confidence >= self.config.high_confidence_threshold
        ]
        kept = [p for p in self._pairs if not any(p.shares_column_with(a) for a in accepted)]
        self._pairs = kept + accepted

        if accepted:
            logging.info(f"Auto-accepted {len(accepted)} high-confidence match(es)")

    def _confirm(self, pair: ConfirmedPair) -> None:
        self._pairs = [p for p in self._pairs if not p.shares_column_with(pair)] + [pair]

    def accept(self, match: ColumnMatch) -> ConfirmedPair:
        """Confirm a suggested match."""
        pair = ConfirmedPair.from_match(match)
        self._confirm(pair)
        logging.debug(f"Accepted {pair.source_column} -> {pair.target_column}")
        return pair

    def reject(self, match: ColumnMatch) -> None:
        """Hide a suggested match from the pending list."""
        self._rejected.add(ConfirmedPair.from_match(match))
        logging.debug(f"Rejected {match.source_column} -> {match.target_column}")

    def add_manual_pair(self, source_column: str, target_column: str) -> Optional[ConfirmedPair]:
        """Confirm a pair chosen by hand. Ignored when either side is empty."""
        if not source_column or not target_column:
            return None
        pair = ConfirmedPair(source_column, target_column)
        self._confirm(pair)
        logging.debug(f"Manually paired {source_column} -> {target_column}")
        return pair

    def remove_pair(self, pair: ConfirmedPair) -> None:
        """Drop a confirmed pair."""
        self._pairs = [p for p in self._pairs if p != pair]

    @property
    def confirmed_pairs(self) -> Tuple[ConfirmedPair, ...]:
        return tuple(self._pairs)

    @property
    def pending_suggestions(self) -> Tuple[ColumnMatch, ...]:
        """Suggested matches that are neither confirmed nor rejected."""
        settled = set(self._pairs) | self._rejected
        return tuple(m for m in self.suggestion.matches if ConfirmedPair.from_match(m) not in settled)

    @property
    def available_source_columns(self) -> Tuple[str, ...]:
        """Source columns not yet part of a confirmed pair."""
        taken = {p.source_column for p in self._pairs}
        columns = [m.source_column for m in self.suggestion.matches] + list(self.suggestion.unmatched_source)
        return tuple(_unique(c for c in columns if c not in taken))

    @property
    def available_target_columns(self) -> Tuple[str, ...]:
        """Target columns not yet part of a confirmed pair."""
        taken = {p.target_column for p in self._pairs}
        columns = [m.target_column for m in self.suggestion.matches] + list(self.suggestion.unmatched_target)
        return tuple(_unique(c for c in columns if c not in taken))


def _unique(columns: Iterable[str]) -> List[str]:
    seen = set()
    result = []
    for column in columns:
        if column not in seen:
            seen.add(column)
            result.append(column)
    return result
