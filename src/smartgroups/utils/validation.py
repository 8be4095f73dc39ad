"""
Caller-side validation and entry preparation.

The grouping algorithms assume well-formed criteria. These helpers let the
surrounding application reject malformed criteria, enforce per-mode size
ceilings, and drop entries lacking the data a mode depends on before
calling the engine.
"""

from typing import Iterable, List, Optional, Tuple

from ..base.data_structures import (
    Entry, EntryLike, coerce_entries, Criteria,
    SplitCriteria, ClusterCriteria, BalancedCriteria, WeightedField
)
from ..base.values import ValueKind
from ..config import GroupingConfig, DEFAULT_CONFIG

MIN_GROUP_COUNT = 2
MAX_GROUP_COUNT = 100
MAX_CLUSTER_FIELDS = 10
MAX_SPLIT_FIELDS = 2


def _check_weighted_fields(fields: Tuple[WeightedField, ...], label: str,
                           max_fields: Optional[int] = None) -> None:
    if len(fields) == 0:
        raise ValueError(f"{label} must not be empty")
    if max_fields is not None and len(fields) > max_fields:
        raise ValueError(f"{label} accepts at most {max_fields} fields, got {len(fields)}")
    for wf in fields:
        if not wf.field_id:
            raise ValueError(f"{label} contains an empty field id")
        if not 0.0 <= wf.weight <= 1.0:
            raise ValueError(f"Weight of {wf.field_id!r} must be in [0, 1], got {wf.weight}")


def _check_count(count: int, label: str) -> None:
    if not isinstance(count, int) or isinstance(count, bool):
        raise ValueError(f"{label} must be an integer, got {count!r}")
    if not MIN_GROUP_COUNT <= count <= MAX_GROUP_COUNT:
        raise ValueError(f"{label} must be in [{MIN_GROUP_COUNT}, {MAX_GROUP_COUNT}], got {count}")


def _check_variety(weight: float) -> None:
    if weight < 0:
        raise ValueError(f"variety_weight must be non-negative, got {weight}")


def validate_criteria(criteria: Criteria) -> Criteria:
    """Check the structure of a criteria value.

    Args:
        criteria: SplitCriteria, SimilarityCriteria, DiversityCriteria or
            BalancedCriteria

    Returns:
        The same criteria

    Raises:
        ValueError: If the criteria are malformed
        TypeError: If the value is not a criteria type
    """
    if isinstance(criteria, SplitCriteria):
        n_fields = len(criteria.field_ids)
        if not 1 <= n_fields <= MAX_SPLIT_FIELDS:
            raise ValueError(f"Split needs 1 to {MAX_SPLIT_FIELDS} fields, got {n_fields}")
        if any(not fid for fid in criteria.field_ids):
            raise ValueError("Split field ids must be non-empty")

    elif isinstance(criteria, ClusterCriteria):
        _check_weighted_fields(criteria.fields, 'fields', MAX_CLUSTER_FIELDS)
        _check_count(criteria.group_count, 'group_count')
        _check_variety(criteria.variety_weight)

    elif isinstance(criteria, BalancedCriteria):
        _check_weighted_fields(criteria.balance_fields, 'balance_fields')
        _check_count(criteria.team_count, 'team_count')
        _check_variety(criteria.variety_weight)
        if any(not pf for pf in criteria.partition_fields):
            raise ValueError("Partition field ids must be non-empty")

    else:
        raise TypeError(f"Unknown criteria type: {type(criteria)}")

    return criteria


def check_member_limit(mode: str, count: int,
                       config: Optional[GroupingConfig] = None) -> None:
    """Raise ValueError when count exceeds the configured ceiling for mode."""
    config = config if config is not None else DEFAULT_CONFIG
    limit = config.member_limits.get(mode)
    if limit is None:
        raise ValueError(f"Unknown mode: {mode}")
    if count > limit:
        raise ValueError(f"Too many members for {mode} mode ({count}). "
                         f"Maximum supported is {limit}.")


def prepare_entries(entries: Iterable[EntryLike],
                    criteria: Criteria) -> Tuple[List[Entry], List[Entry]]:
    """Split entries into those usable for the criteria and those excluded.

    - split: every entry is kept (missing values group as Unknown)
    - similarity/diversity: entries missing any selected field are excluded
    - balanced: entries whose balance fields are not all numbers, or that
      miss any partition field, are excluded

    Returns:
        (kept, excluded), both in input order
    """
    entries = coerce_entries(entries)

    if isinstance(criteria, SplitCriteria):
        return entries, []

    def usable(entry: Entry) -> bool:
        if isinstance(criteria, ClusterCriteria):
            return all(not entry.value(wf.field_id).is_blank for wf in criteria.fields)
        numeric = all(entry.value(bf.field_id).kind is ValueKind.NUMBER
                      for bf in criteria.balance_fields)
        partitioned = all(not entry.value(pf).is_blank for pf in criteria.partition_fields)
        return numeric and partitioned

    kept, excluded = [], []
    for entry in entries:
        (kept if usable(entry) else excluded).append(entry)
    return kept, excluded
