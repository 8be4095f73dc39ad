"""
Field metadata construction.

Builds typed FieldMeta either from caller-declared field types or by
inspecting sample entry data.
"""

from typing import Optional, Sequence, Mapping, List, Any

from ..base.values import ValueKind
from ..base.data_structures import (
    Entry, FieldMeta, FieldType, WeightedField, as_weighted_field
)

# Caller-side field kinds that do not name a FieldType directly
_DECLARED_TYPE_ALIASES = {
    'radio': FieldType.SELECT,
    'ranking_level': FieldType.RANKED_CATEGORY,
    'ranking_stat': FieldType.RANKED_STAT,
}

_INFERRED_TYPES = {
    ValueKind.BOOLEAN: FieldType.CHECKBOX,
    ValueKind.NUMBER: FieldType.NUMBER,
    ValueKind.LIST: FieldType.MULTISELECT,
    ValueKind.STRING: FieldType.SELECT,
}


def map_field_type(declared: Optional[str]) -> FieldType:
    """Map a declared field kind to a FieldType; anything unknown is text."""
    if declared is None:
        return FieldType.TEXT
    if declared in _DECLARED_TYPE_ALIASES:
        return _DECLARED_TYPE_ALIASES[declared]
    try:
        return FieldType(declared)
    except ValueError:
        return FieldType.TEXT


def infer_field_type(field_id: str, entries: Sequence[Entry]) -> FieldType:
    """Type of the first non-null value of a field; all-null fields are text."""
    for entry in entries:
        value = entry.value(field_id)
        if value.is_unknown:
            continue
        return _INFERRED_TYPES[value.kind]
    return FieldType.TEXT


def infer_field_meta(weighted_fields: Sequence[Any],
                     entries: Sequence[Entry]) -> List[FieldMeta]:
    """Typed FieldMeta for each weighted field, inferred from sample data.

    Fields already given as FieldMeta are kept as they are.
    """
    metas = []
    for item in weighted_fields:
        if isinstance(item, FieldMeta):
            metas.append(item)
            continue
        wf = as_weighted_field(item)
        metas.append(FieldMeta(wf.field_id, infer_field_type(wf.field_id, entries), wf.weight))
    return metas


def build_field_meta(selected: Sequence[Any],
                     available: Sequence[Mapping[str, Any]],
                     ordinal_map: Optional[Mapping[str, float]] = None) -> List[FieldMeta]:
    """FieldMeta from selected weighted fields and declared field descriptions.

    Args:
        selected: Weighted fields chosen for grouping
        available: Declared fields, mappings with 'field_id' (or 'sourceId'),
            'type' and optional 'options'
        ordinal_map: Level name -> order, attached to ranked-category fields

    Returns:
        One FieldMeta per selected field, in selection order
    """
    declared = {}
    for item in available:
        field_id = item.get('field_id', item.get('sourceId'))
        declared[field_id] = item

    metas = []
    for item in selected:
        wf: WeightedField = as_weighted_field(item)
        info = declared.get(wf.field_id, {})
        field_type = map_field_type(info.get('type'))
        metas.append(FieldMeta(
            field_id=wf.field_id,
            type=field_type,
            weight=wf.weight,
            options=info.get('options'),
            ordinal_map=ordinal_map if field_type is FieldType.RANKED_CATEGORY else None,
        ))
    return metas
