"""
Grouping quality metrics.

Scores an already-formed grouping against the entries and criteria that
produced it: balance metrics for team formation, cohesion metrics for
similarity and diversity clustering.
"""

from typing import Dict, List, Optional, Sequence, Iterable
import math
import torch

from ..base.data_structures import (
    Entry, EntryLike, coerce_entries, FieldMeta, GroupResult,
    BalancedCriteria, ClusterCriteria,
    GroupBalance, BalanceMetrics, GroupCohesion, ClusterMetrics
)
from ..distances.gower import build_distance_matrix
from ..distances.ranges import compute_numeric_ranges, observed_range
from .inference import infer_field_meta


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _members(group: GroupResult, lookup: Dict[str, Entry]) -> List[Entry]:
    return [lookup[uid] for uid in group.member_ids if uid in lookup]


def compute_balance_metrics(groups: Sequence[GroupResult],
                            entries: Iterable[EntryLike],
                            criteria: BalancedCriteria) -> BalanceMetrics:
    """Per-team field averages, per-field gaps and an overall balance score.

    Entries lacking a numeric value for a field do not contribute to that
    field's average; a team with no valid values averages 0. Each gap is
    normalized by the field's observed range across all entries (1 when
    degenerate) and the weighted sum is turned into a 0-100 score.

    Args:
        groups: Teams to score
        entries: All entries the teams were formed from
        criteria: Balanced criteria with the weighted balance fields

    Returns:
        BalanceMetrics
    """
    entries = coerce_entries(entries)
    lookup = {entry.id: entry for entry in entries}
    balance_fields = criteria.balance_fields
    total_weight = sum(bf.weight for bf in balance_fields) or 1.0

    per_group = []
    for group in groups:
        members = _members(group, lookup)
        averages: Dict[str, float] = {}
        for bf in balance_fields:
            values = [v for v in (m.value(bf.field_id).as_number() for m in members) if v is not None]
            averages[bf.field_id] = sum(values) / len(values) if values else 0.0
        per_group.append(GroupBalance(group.group_name, averages))

    per_field_gap: Dict[str, float] = {}
    weighted_cost = 0.0
    for bf in balance_fields:
        averages = [pg.field_averages[bf.field_id] for pg in per_group]
        gap = max(averages) - min(averages) if averages else 0.0
        per_field_gap[bf.field_id] = gap

        observed = observed_range(entries, bf.field_id)
        span = observed.span if observed.span > 0 else 1.0
        weighted_cost += (bf.weight / total_weight) * (gap / span)

    balance_percent = round_half_up(max(0.0, min(100.0, 100.0 * (1.0 - weighted_cost))))
    return BalanceMetrics(tuple(per_group), balance_percent, per_field_gap)


def compute_cluster_metrics(groups: Sequence[GroupResult],
                            entries: Iterable[EntryLike],
                            criteria: ClusterCriteria,
                            fields: Optional[Sequence[FieldMeta]] = None) -> ClusterMetrics:
    """Mean intra-group Gower distance and an overall quality score.

    Field types are inferred from the entries unless typed ``fields`` are
    given. Groups with fewer than two members have distance 0. The overall
    distance is the pair-count weighted mean over groups; similarity
    quality is 100 * (1 - distance) and diversity quality is 100 * distance.

    Args:
        groups: Groups to score
        entries: All entries the groups were formed from
        criteria: SimilarityCriteria or DiversityCriteria
        fields: Optional typed field definitions

    Returns:
        ClusterMetrics
    """
    entries = coerce_entries(entries)
    lookup = {entry.id: entry for entry in entries}
    metas = list(fields) if fields is not None else infer_field_meta(criteria.fields, entries)
    ranges = compute_numeric_ranges(entries, metas)

    per_group = []
    total_distance = 0.0
    total_pairs = 0
    for group in groups:
        members = _members(group, lookup)
        n_members = len(members)
        n_pairs = n_members * (n_members - 1) // 2
        if n_pairs == 0:
            per_group.append(GroupCohesion(group.group_name, 0.0))
            continue

        distances = build_distance_matrix(members, metas, ranges)
        upper = torch.triu_indices(n_members, n_members, offset=1)
        pair_sum = distances[upper[0], upper[1]].sum().item()
        per_group.append(GroupCohesion(group.group_name, pair_sum / n_pairs))
        total_distance += pair_sum
        total_pairs += n_pairs

    overall = total_distance / total_pairs if total_pairs > 0 else 0.0
    if criteria.mode == 'similarity':
        quality = round_half_up(100.0 * (1.0 - overall))
    else:
        quality = round_half_up(100.0 * overall)

    return ClusterMetrics(criteria.mode, tuple(per_group), quality)
