"""
Co-grouping history helpers for the variety penalty.

Past runs are sequences of groups; every pair of members that shared a
group counts as one co-occurrence.
"""

from typing import Dict, Iterable, List, Sequence, Tuple, Optional

from ..base.data_structures import GroupResult, PenaltyMatrix
from ..config import GroupingConfig, DEFAULT_CONFIG


def generate_pairs(member_ids: Sequence[str]) -> List[Tuple[str, str]]:
    """All unique (low, high) id pairs from a member list, in sorted order."""
    ordered = sorted(set(str(m) for m in member_ids))
    pairs = []
    for i in range(len(ordered)):
        for j in range(i + 1, len(ordered)):
            pairs.append((ordered[i], ordered[j]))
    return pairs


def count_cooccurrences(runs: Sequence[Sequence[GroupResult]],
                        lookback: Optional[int] = None,
                        member_ids: Optional[Iterable[str]] = None) -> Dict[str, int]:
    """Count how often each pair was grouped together.

    Args:
        runs: Past runs, oldest first; each run is a list of groups
        lookback: Only the most recent ``lookback`` runs are counted
        member_ids: If given, only pairs where both members are listed

    Returns:
        'low:high' pair key -> count
    """
    if lookback is not None:
        runs = runs[-lookback:] if lookback > 0 else []
    allowed = None if member_ids is None else set(str(m) for m in member_ids)

    counts: Dict[str, int] = {}
    for run in runs:
        for group in run:
            members = group.member_ids if isinstance(group, GroupResult) else group
            for a, b in generate_pairs(members):
                if allowed is not None and (a not in allowed or b not in allowed):
                    continue
                key = PenaltyMatrix.pair_key(a, b)
                counts[key] = counts.get(key, 0) + 1
    return counts


def build_penalty_matrix(runs: Sequence[Sequence[GroupResult]],
                         config: Optional[GroupingConfig] = None,
                         member_ids: Optional[Iterable[str]] = None) -> PenaltyMatrix:
    """Penalty matrix from the most recent runs, saturating at the lookback."""
    config = config if config is not None else DEFAULT_CONFIG
    counts = count_cooccurrences(runs, config.variety_lookback, member_ids)
    return PenaltyMatrix.from_cooccurrences(counts, config.variety_lookback)
