# tests/test_inference.py
"""
Field metadata: type inference from sample data and mapping of declared
field kinds.
"""

from __future__ import annotations

import pytest

from smartgroups.base.data_structures import Entry, FieldMeta, FieldType, WeightedField
from smartgroups.utils.inference import (
    map_field_type, infer_field_type, infer_field_meta, build_field_meta
)


@pytest.mark.parametrize("values, expected", [
    ([None, True], FieldType.CHECKBOX),
    ([3.5], FieldType.NUMBER),
    ([None, ["a", "b"]], FieldType.MULTISELECT),
    (["x", 3], FieldType.SELECT),
    ([None, None], FieldType.TEXT),
    ([], FieldType.TEXT),
])
def test_infer_field_type(values, expected):
    entries = [Entry(str(i), {"f": v}) for i, v in enumerate(values)]
    assert infer_field_type("f", entries) is expected


def test_infer_field_meta_keeps_weights_and_typed_fields():
    entries = [Entry("a", {"n": 1, "s": "x"})]
    typed = FieldMeta("s", FieldType.TEXT, 0.2)
    metas = infer_field_meta([WeightedField("n", 0.5), typed, ("missing", 1.0)], entries)
    assert metas[0] == FieldMeta("n", FieldType.NUMBER, 0.5)
    assert metas[1] is typed
    assert metas[2].type is FieldType.TEXT


@pytest.mark.parametrize("declared, expected", [
    ("radio", FieldType.SELECT),
    ("select", FieldType.SELECT),
    ("multiselect", FieldType.MULTISELECT),
    ("checkbox", FieldType.CHECKBOX),
    ("number", FieldType.NUMBER),
    ("ranking_level", FieldType.RANKED_CATEGORY),
    ("ranking_stat", FieldType.RANKED_STAT),
    ("ranked-stat", FieldType.RANKED_STAT),
    ("textarea", FieldType.TEXT),
    (None, FieldType.TEXT),
])
def test_map_field_type(declared, expected):
    assert map_field_type(declared) is expected


def test_field_type_aliases():
    assert FieldType("ranking_level") is FieldType.RANKED_CATEGORY
    with pytest.raises(ValueError):
        FieldType("date")


def test_build_field_meta():
    available = [
        {"sourceId": "level", "type": "ranking_level"},
        {"field_id": "role", "type": "radio", "options": ["A", "B"]},
    ]
    order = {"Bronze": 0, "Silver": 1}
    metas = build_field_meta([("level", 0.5), "role", ("bio", 1.0)], available, ordinal_map=order)

    assert [m.field_id for m in metas] == ["level", "role", "bio"]
    assert metas[0].type is FieldType.RANKED_CATEGORY
    assert metas[0].weight == 0.5
    assert metas[0].ordinal_map == order
    assert metas[1].type is FieldType.SELECT
    assert metas[1].options == ("A", "B")
    assert metas[1].ordinal_map is None
    assert metas[2].type is FieldType.TEXT
