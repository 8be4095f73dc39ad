"""
Score-projection clustering for inputs too large for a distance matrix.

Every entry is projected onto a single deterministic score in [0, 1];
groups are then cut from the sorted score sequence. No variety support.
"""

from typing import List, Sequence
import numpy as np

from ..base.values import FieldValue
from ..base.data_structures import Entry, FieldMeta, FieldType, FieldRanges, OrdinalScale
from ..assignments.snake import bounce_assign

_FNV_OFFSET = 2166136261
_FNV_PRIME = 16777619
_UINT32_MAX = 4294967295


def hash_to_unit(text: str) -> float:
    """32-bit FNV-1a hash of text scaled to [0, 1]."""
    h = _FNV_OFFSET
    for code_unit in _utf16_units(text):
        h ^= code_unit
        h = (h * _FNV_PRIME) & 0xFFFFFFFF
    return h / _UINT32_MAX


def _utf16_units(text: str) -> List[int]:
    data = text.encode('utf-16-le')
    return [data[i] | (data[i + 1] << 8) for i in range(0, len(data), 2)]


def _clamp01(value: float) -> float:
    return min(1.0, max(0.0, value))


def normalize_field_value(value: FieldValue, meta: FieldMeta, ranges: FieldRanges) -> float:
    """Map one value into [0, 1] for projection.

    Numeric fields are range-normalized, ranked categories ordinal-normalized,
    checkboxes are 0/1 and everything else is hashed. Unknown values map
    to 0; degenerate ranges map to 0.5.
    """
    if value.is_unknown:
        return 0.0

    if meta.type.is_numeric:
        number = value.as_number()
        if number is None:
            return 0.0
        observed = ranges.numeric_for(meta.field_id)
        if observed is None or observed.span == 0:
            return 0.5
        return _clamp01((number - observed.min) / observed.span)

    if meta.type is FieldType.RANKED_CATEGORY:
        scale = ranges.ordinal_for(meta.field_id)
        if scale is None and meta.ordinal_map:
            scale = OrdinalScale.from_map(meta.ordinal_map)
        if scale is None:
            return hash_to_unit(value.as_text())
        position = scale.position(value.as_text())
        if position is None:
            return 0.0
        if scale.span == 0:
            return 0.5
        return _clamp01((position - scale.min) / scale.span)

    if meta.type is FieldType.CHECKBOX:
        return 1.0 if value.payload is True else 0.0

    if meta.type is FieldType.MULTISELECT:
        return hash_to_unit('|'.join(sorted(value.as_items())))

    return hash_to_unit(value.as_text().lower())


def projection_score(entry: Entry, fields: Sequence[FieldMeta], ranges: FieldRanges) -> float:
    """Weighted mean of normalized field values; zero total weight gives 0."""
    weighted_sum = 0.0
    weight_sum = 0.0
    for meta in fields:
        if meta.weight == 0:
            continue
        weighted_sum += meta.weight * normalize_field_value(entry.value(meta.field_id), meta, ranges)
        weight_sum += meta.weight
    if weight_sum == 0:
        return 0.0
    return weighted_sum / weight_sum


def cluster_by_score_projection(entries: Sequence[Entry], n_groups: int,
                                fields: Sequence[FieldMeta], objective: str,
                                ranges: FieldRanges) -> List[List[int]]:
    """Group entry indices by projected score.

    Entries are sorted by score, ties broken by id. Similarity cuts the
    sorted sequence into n_groups contiguous quantile slices; diversity
    spreads it across groups with a serpentine walk.

    Returns:
        Member indices per group
    """
    n = len(entries)
    scores = np.array([projection_score(e, fields, ranges) for e in entries], dtype=np.float64)
    ids = np.array([e.id for e in entries])
    order = np.lexsort((ids, scores)).tolist()

    if objective == 'similarity':
        groups: List[List[int]] = [[] for _ in range(n_groups)]
        for rank, idx in enumerate(order):
            groups[min(n_groups - 1, (rank * n_groups) // n)].append(idx)
        return groups

    return bounce_assign(order, n_groups)
