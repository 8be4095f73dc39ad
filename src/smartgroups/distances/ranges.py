"""
Numeric and ordinal range derivation.

Ranges are computed once per invocation from the full entry set and passed
next to the field definitions into every distance and scoring function.
"""

from typing import Sequence, Dict

from ..base.data_structures import (
    Entry, FieldMeta, FieldType, FieldRanges, NumericRange, OrdinalScale
)


def observed_range(entries: Sequence[Entry], field_id: str) -> NumericRange:
    """Min/max of the numeric readings of a field; (0, 0) when there are none."""
    low = float('inf')
    high = float('-inf')
    for entry in entries:
        value = entry.value(field_id).as_number()
        if value is None:
            continue
        if value < low:
            low = value
        if value > high:
            high = value
    if low == float('inf'):
        return NumericRange(0.0, 0.0)
    return NumericRange(low, high)


def compute_numeric_ranges(entries: Sequence[Entry],
                           fields: Sequence[FieldMeta]) -> FieldRanges:
    """Derive read-only ranges for the given fields.

    Number and ranked-stat fields get their observed min/max across all
    entries. Ranked-category fields with an ordinal map get its spread.

    Args:
        entries: Full entry set of the invocation
        fields: Field definitions (not modified)

    Returns:
        FieldRanges keyed by field id
    """
    numeric: Dict[str, NumericRange] = {}
    ordinal: Dict[str, OrdinalScale] = {}

    for meta in fields:
        if meta.type.is_numeric:
            numeric[meta.field_id] = observed_range(entries, meta.field_id)
        elif meta.type is FieldType.RANKED_CATEGORY and meta.ordinal_map:
            ordinal[meta.field_id] = OrdinalScale.from_map(meta.ordinal_map)

    return FieldRanges(numeric=numeric, ordinal=ordinal)
