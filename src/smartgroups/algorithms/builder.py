"""
Criteria dispatch: one entry point to form groups and one to score them.
"""

from typing import Optional, List, Sequence, Iterable

from ..base.data_structures import (
    EntryLike, coerce_entries, Criteria, FieldMeta, GroupResult, PenaltyMatrix, Metrics,
    SplitCriteria, ClusterCriteria, BalancedCriteria
)
from ..config import GroupingConfig
from ..utils.metrics import compute_balance_metrics, compute_cluster_metrics
from .split import split_by_attributes
from .clustering import cluster_by_distance
from .balanced import multi_balanced_teams


def generate_groups(entries: Iterable[EntryLike],
                    criteria: Criteria,
                    penalty: Optional[PenaltyMatrix] = None,
                    fields: Optional[Sequence[FieldMeta]] = None,
                    config: Optional[GroupingConfig] = None) -> List[GroupResult]:
    """Form groups for any criteria type.

    Args:
        entries: Entries to group
        criteria: SplitCriteria, SimilarityCriteria, DiversityCriteria or
            BalancedCriteria
        penalty: Optional pair penalties from earlier runs; ignored by split
        fields: Typed field definitions for clustering; inferred from the
            entries when omitted
        config: Size thresholds and variety tuning

    Returns:
        Named groups covering every entry exactly once
    """
    entries = coerce_entries(entries)

    if isinstance(criteria, SplitCriteria):
        return split_by_attributes(entries, criteria.field_ids)

    if isinstance(criteria, ClusterCriteria):
        return cluster_by_distance(
            entries,
            criteria.group_count,
            fields if fields is not None else criteria.fields,
            objective=criteria.objective,
            variety_penalty=penalty,
            variety_weight=criteria.variety_weight,
            config=config,
        )

    if isinstance(criteria, BalancedCriteria):
        return multi_balanced_teams(
            entries,
            criteria.team_count,
            criteria.balance_fields,
            partition_fields=criteria.partition_fields,
            variety_penalty=penalty,
            variety_weight=criteria.variety_weight,
            config=config,
        )

    raise TypeError(f"Unknown criteria type: {type(criteria)}")


def score_groups(groups: Sequence[GroupResult],
                 entries: Iterable[EntryLike],
                 criteria: Criteria,
                 fields: Optional[Sequence[FieldMeta]] = None) -> Optional[Metrics]:
    """Quality metrics for a grouping; split groupings have none."""
    if isinstance(criteria, SplitCriteria):
        return None
    if isinstance(criteria, ClusterCriteria):
        return compute_cluster_metrics(groups, entries, criteria, fields)
    if isinstance(criteria, BalancedCriteria):
        return compute_balance_metrics(groups, entries, criteria)
    raise TypeError(f"Unknown criteria type: {type(criteria)}")
