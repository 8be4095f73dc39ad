"""
Gower distance over mixed-type entry fields.

Each field type has its own rule mapping a pair of values to [0, 1]. The
Gower distance between two entries is the weight-normalized mean of the
per-field distances. Rules are looked up by FieldType in FIELD_DISTANCES.
"""

from typing import Optional, Sequence, Dict, Any, List
import torch
from torch import Tensor

from ..base.interfaces import FieldDistance
from ..base.values import FieldValue
from ..base.data_structures import (
    Entry, FieldMeta, FieldType, FieldRanges, OrdinalScale
)
from .ranges import compute_numeric_ranges


def jaccard(a: Sequence[Any], b: Sequence[Any]) -> float:
    """Jaccard distance 1 - |A∩B| / |A∪B| over string-coerced elements.

    Two empty collections are identical (distance 0).
    """
    set_a = FieldValue.from_raw(list(a)).as_set()
    set_b = FieldValue.from_raw(list(b)).as_set()
    union = len(set_a | set_b)
    if union == 0:
        return 0.0
    return 1.0 - len(set_a & set_b) / union


def _codes(keys: Sequence[Optional[Any]]) -> Tensor:
    """Integer code per key; None maps to -1."""
    lookup: Dict[Any, int] = {}
    codes = []
    for key in keys:
        if key is None:
            codes.append(-1)
        else:
            codes.append(lookup.setdefault(key, len(lookup)))
    return torch.tensor(codes, dtype=torch.long)


def _mismatch_matrix(keys: Sequence[Optional[Any]], dtype: torch.dtype,
                     device: Optional[torch.device]) -> Tensor:
    codes = _codes(keys).to(device)
    distances = (codes.unsqueeze(1) != codes.unsqueeze(0)).to(dtype)
    return _mark_missing(distances, codes < 0)


def _mark_missing(distances: Tensor, missing: Tensor) -> Tensor:
    """Rows and columns of missing values are maximally distant."""
    if missing.any():
        distances[missing, :] = 1.0
        distances[:, missing] = 1.0
    return distances


class CategoricalDistance(FieldDistance):
    """0 on case-insensitive text equality, else 1. Used for select and text."""

    @staticmethod
    def _key(value: FieldValue) -> Optional[str]:
        text = value.as_text()
        return None if text is None else text.lower()

    def compute(self, a, b, meta, ranges) -> float:
        if a.is_unknown or b.is_unknown:
            return 1.0
        return 0.0 if self._key(a) == self._key(b) else 1.0

    def pairwise(self, values, meta, ranges, dtype=torch.float64, device=None) -> Tensor:
        return _mismatch_matrix([self._key(v) for v in values], dtype, device)


class ExactMatchDistance(FieldDistance):
    """0 when both values are identical (same kind and payload), else 1."""

    @staticmethod
    def _key(value: FieldValue):
        return None if value.is_unknown else (value.kind, value.payload)

    def compute(self, a, b, meta, ranges) -> float:
        if a.is_unknown or b.is_unknown:
            return 1.0
        return 0.0 if a == b else 1.0

    def pairwise(self, values, meta, ranges, dtype=torch.float64, device=None) -> Tensor:
        return _mismatch_matrix([self._key(v) for v in values], dtype, device)


class JaccardDistance(FieldDistance):
    """Set distance for multiselect fields. Scalars count as one-element sets."""

    def compute(self, a, b, meta, ranges) -> float:
        if a.is_unknown or b.is_unknown:
            return 1.0
        return jaccard(a.as_items(), b.as_items())

    def pairwise(self, values, meta, ranges, dtype=torch.float64, device=None) -> Tensor:
        n = len(values)
        vocabulary: Dict[str, int] = {}
        rows: List[List[int]] = []
        for value in values:
            rows.append([vocabulary.setdefault(item, len(vocabulary))
                         for item in value.as_set()])

        membership = torch.zeros(n, max(len(vocabulary), 1), dtype=dtype, device=device)
        for i, columns in enumerate(rows):
            if columns:
                membership[i, columns] = 1.0

        intersection = membership @ membership.t()
        sizes = membership.sum(dim=1)
        union = sizes.unsqueeze(1) + sizes.unsqueeze(0) - intersection
        distances = torch.where(
            union > 0,
            1.0 - intersection / union.clamp(min=1.0),
            torch.zeros_like(union)
        )
        missing = torch.tensor([v.is_unknown for v in values], dtype=torch.bool, device=device)
        return _mark_missing(distances, missing)


class NumericDistance(FieldDistance):
    """|a - b| / observed range. Degenerate range gives 0."""

    def compute(self, a, b, meta, ranges) -> float:
        x, y = a.as_number(), b.as_number()
        if x is None or y is None:
            return 1.0
        observed = ranges.numeric_for(meta.field_id)
        span = observed.span if observed is not None else 0.0
        if span == 0:
            return 0.0
        return min(1.0, abs(x - y) / span)

    def pairwise(self, values, meta, ranges, dtype=torch.float64, device=None) -> Tensor:
        numbers = [v.as_number() for v in values]
        missing = torch.tensor([x is None for x in numbers], dtype=torch.bool, device=device)
        observed = ranges.numeric_for(meta.field_id)
        span = observed.span if observed is not None else 0.0

        if span == 0:
            distances = torch.zeros(len(values), len(values), dtype=dtype, device=device)
        else:
            x = torch.tensor([0.0 if v is None else v for v in numbers], dtype=dtype, device=device)
            distances = torch.clamp((x.unsqueeze(1) - x.unsqueeze(0)).abs() / span, max=1.0)
        return _mark_missing(distances, missing)


class OrdinalDistance(FieldDistance):
    """Ranked categories compared by ordinal position.

    Categories absent from the ordinal map are maximally distant. Without
    an ordinal map the field degrades to exact text equality.
    """

    @staticmethod
    def _scale(meta: FieldMeta, ranges: FieldRanges) -> Optional[OrdinalScale]:
        scale = ranges.ordinal_for(meta.field_id)
        if scale is None and meta.ordinal_map:
            scale = OrdinalScale.from_map(meta.ordinal_map)
        return scale

    def compute(self, a, b, meta, ranges) -> float:
        if a.is_unknown or b.is_unknown:
            return 1.0
        scale = self._scale(meta, ranges)
        if scale is None:
            return 0.0 if a.as_text() == b.as_text() else 1.0
        pos_a = scale.position(a.as_text())
        pos_b = scale.position(b.as_text())
        if pos_a is None or pos_b is None:
            return 1.0
        if scale.span == 0:
            return 0.0
        return abs(pos_a - pos_b) / scale.span

    def pairwise(self, values, meta, ranges, dtype=torch.float64, device=None) -> Tensor:
        scale = self._scale(meta, ranges)
        if scale is None:
            return _mismatch_matrix([v.as_text() for v in values], dtype, device)

        positions = [scale.position(v.as_text()) for v in values]
        missing = torch.tensor([p is None for p in positions], dtype=torch.bool, device=device)
        if scale.span == 0:
            distances = torch.zeros(len(values), len(values), dtype=dtype, device=device)
        else:
            x = torch.tensor([0.0 if p is None else p for p in positions], dtype=dtype, device=device)
            distances = (x.unsqueeze(1) - x.unsqueeze(0)).abs() / scale.span
        return _mark_missing(distances, missing)


FIELD_DISTANCES: Dict[FieldType, FieldDistance] = {
    FieldType.SELECT: CategoricalDistance(),
    FieldType.TEXT: CategoricalDistance(),
    FieldType.CHECKBOX: ExactMatchDistance(),
    FieldType.MULTISELECT: JaccardDistance(),
    FieldType.NUMBER: NumericDistance(),
    FieldType.RANKED_STAT: NumericDistance(),
    FieldType.RANKED_CATEGORY: OrdinalDistance(),
}


def field_distance(a: Any, b: Any, meta: FieldMeta,
                   ranges: Optional[FieldRanges] = None) -> float:
    """Distance in [0, 1] between two values of one field.

    Args:
        a, b: Raw values or FieldValues
        meta: Field definition selecting the rule
        ranges: Derived ranges; numeric fields without a range compare as 0
    """
    rule = FIELD_DISTANCES[meta.type]
    return rule.compute(FieldValue.from_raw(a), FieldValue.from_raw(b), meta,
                        ranges if ranges is not None else FieldRanges())


def gower_distance(entry_a: Entry, entry_b: Entry, fields: Sequence[FieldMeta],
                   ranges: Optional[FieldRanges] = None) -> float:
    """Weighted mean of per-field distances; zero total weight gives 0."""
    ranges = ranges if ranges is not None else FieldRanges()
    weighted_sum = 0.0
    weight_sum = 0.0

    for meta in fields:
        if meta.weight == 0:
            continue
        rule = FIELD_DISTANCES[meta.type]
        d = rule.compute(entry_a.value(meta.field_id), entry_b.value(meta.field_id), meta, ranges)
        weighted_sum += meta.weight * d
        weight_sum += meta.weight

    if weight_sum == 0:
        return 0.0
    return weighted_sum / weight_sum


def build_distance_matrix(entries: Sequence[Entry], fields: Sequence[FieldMeta],
                          ranges: Optional[FieldRanges] = None,
                          dtype: torch.dtype = torch.float64,
                          device: Optional[torch.device] = None) -> Tensor:
    """Symmetric (n, n) Gower distance matrix with a zero diagonal.

    Args:
        entries: Entries to compare
        fields: Field definitions
        ranges: Derived ranges; computed from entries when omitted
        dtype: Floating dtype of the result
        device: Torch device of the result

    Returns:
        (n, n) tensor of distances in [0, 1]
    """
    n = len(entries)
    if ranges is None:
        ranges = compute_numeric_ranges(entries, fields)

    total = torch.zeros(n, n, dtype=dtype, device=device)
    weight_sum = 0.0

    for meta in fields:
        if meta.weight == 0:
            continue
        rule = FIELD_DISTANCES[meta.type]
        values = [entry.value(meta.field_id) for entry in entries]
        total += meta.weight * rule.pairwise(values, meta, ranges, dtype=dtype, device=device)
        weight_sum += meta.weight

    if weight_sum == 0:
        return torch.zeros(n, n, dtype=dtype, device=device)

    distances = total / weight_sum
    distances.fill_diagonal_(0.0)
    return distances
