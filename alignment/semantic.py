"""
Semantic keyword groups for column alignment.

Columns whose names are not lexically close can still describe the same
concept ("cust_email" and "contact_mail"). Each group below is a bucket of
keyword substrings; two columns relate when both normalized names contain
a keyword from the same group.
"""

from typing import Dict, Optional, Tuple

from core.config import AlignmentConfig
from .models import NO_SIMILARITY, SimilarityScore
from .normalization import normalize_column_name

# Order matters: the first group both names hit labels the pair, and
# "address" is a keyword of both the email and the address groups.
SEMANTIC_GROUPS: Dict[str, Tuple[str, ...]] = {
    'id': ('id', 'identifier', 'key', 'pk', 'primary', 'uid', 'uuid'),
    'name': ('name', 'title', 'label', 'description', 'desc'),
    'date': ('date', 'time', 'timestamp', 'created', 'updated', 'modified'),
    'email': ('email', 'mail', 'address'),
    'phone': ('phone', 'tel', 'telephone', 'mobile', 'cell'),
    'address': ('address', 'location', 'street', 'city', 'state', 'zip', 'postal'),
    'amount': ('amount', 'price', 'cost', 'value', 'total', 'sum'),
    'count': ('count', 'number', 'num', 'quantity', 'qty'),
    'status': ('status', 'state', 'condition', 'flag'),
}


def _mentions(normalized_name: str, keywords: Tuple[str, ...]) -> bool:
    return any(keyword in normalized_name for keyword in keywords)


def find_semantic_group(source_column: str, target_column: str) -> Optional[str]:
    """Return the first group both column names belong to, or None."""
    source_norm = normalize_column_name(source_column)
    target_norm = normalize_column_name(target_column)

    for group, keywords in SEMANTIC_GROUPS.items():
        if _mentions(source_norm, keywords) and _mentions(target_norm, keywords):
            return group
    return None


def calculate_semantic_similarity(
    source_column: str,
    target_column: str,
    config: Optional[AlignmentConfig] = None
) -> SimilarityScore:
    """Fixed semantic score when the names share a keyword group, else zero."""
    group = find_semantic_group(source_column, target_column)
    if group is None:
        return NO_SIMILARITY

    score = (config or AlignmentConfig()).semantic_match_score
    return SimilarityScore(score, (f"Both columns relate to {group}",))
