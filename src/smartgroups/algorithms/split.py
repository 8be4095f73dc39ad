"""
Exact-match partitioning by one or two attributes.
"""

from typing import Dict, Iterable, List, Sequence

from ..base.data_structures import EntryLike, GroupResult, coerce_entries
from ..base.values import category_label

KEY_SEPARATOR = ' + '


def split_by_attributes(entries: Iterable[EntryLike],
                        field_ids: Sequence[str]) -> List[GroupResult]:
    """Group entries sharing the same values of the given fields.

    The group name is the string form of each field value joined with
    ' + '; missing, null and empty values read as 'Unknown'. Groups are
    ordered lexicographically by name, members by input order.

    Args:
        entries: Entries to partition
        field_ids: One or two field ids

    Returns:
        One GroupResult per distinct key; empty when there are no entries
        or no fields
    """
    entries = coerce_entries(entries)
    if isinstance(field_ids, str):
        field_ids = [field_ids]
    if len(entries) == 0 or len(field_ids) == 0:
        return []

    buckets: Dict[str, List[str]] = {}
    for entry in entries:
        key = KEY_SEPARATOR.join(category_label(entry.value(fid)) for fid in field_ids)
        buckets.setdefault(key, []).append(entry.id)

    return [GroupResult(key, buckets[key]) for key in sorted(buckets)]


def split_by_attribute(entries: Iterable[EntryLike], field_id: str) -> List[GroupResult]:
    """Single-field form of split_by_attributes."""
    return split_by_attributes(entries, [field_id])
