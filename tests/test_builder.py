# tests/test_builder.py
"""
Criteria dispatch for forming and scoring groups.
"""

from __future__ import annotations

import pytest

from smartgroups import (
    generate_groups, score_groups, split_by_attributes, cluster_by_distance,
    multi_balanced_teams, SplitCriteria, SimilarityCriteria, DiversityCriteria,
    BalancedCriteria, BalanceMetrics, ClusterMetrics, PenaltyMatrix
)
from data_gen import make_mixed_entries, mixed_fields, make_rated_entries


def test_split_dispatch():
    entries = make_mixed_entries(20, seed=0)
    criteria = SplitCriteria(["role"])
    groups = generate_groups(entries, criteria)
    assert groups == split_by_attributes(entries, ["role"])
    assert score_groups(groups, entries, criteria) is None


@pytest.mark.parametrize("criteria_cls", [SimilarityCriteria, DiversityCriteria])
def test_cluster_dispatch(criteria_cls):
    entries = make_mixed_entries(20, seed=0)
    criteria = criteria_cls(fields=[("score", 1.0), ("role", 0.5)], group_count=3)
    groups = generate_groups(entries, criteria)
    assert groups == cluster_by_distance(entries, 3, criteria.fields, objective=criteria.objective)

    metrics = score_groups(groups, entries, criteria)
    assert isinstance(metrics, ClusterMetrics)
    assert metrics.mode == criteria.mode
    assert 0 <= metrics.quality_percent <= 100


def test_cluster_dispatch_with_typed_fields_and_penalty():
    entries = make_mixed_entries(20, seed=0)
    fields = mixed_fields()
    penalty = PenaltyMatrix({"e000:e001": 1.0})
    criteria = SimilarityCriteria(fields=[(f.field_id, f.weight) for f in fields],
                                  group_count=4, variety_weight=0.5)
    groups = generate_groups(entries, criteria, penalty=penalty, fields=fields)
    expected = cluster_by_distance(entries, 4, fields, variety_penalty=penalty, variety_weight=0.5)
    assert groups == expected


def test_balanced_dispatch():
    entries = make_rated_entries(16, seed=1)
    criteria = BalancedCriteria(balance_fields=[("wins", 1.0)], team_count=4,
                                partition_fields=["division"])
    groups = generate_groups(entries, criteria)
    assert groups == multi_balanced_teams(entries, 4, [("wins", 1.0)],
                                          partition_fields=["division"])
    assert [g.group_name for g in groups] == ["Team 1", "Team 2", "Team 3", "Team 4"]

    metrics = score_groups(groups, entries, criteria)
    assert isinstance(metrics, BalanceMetrics)
    assert set(metrics.per_field_gap) == {"wins"}


def test_dispatch_accepts_dict_entries():
    entries = [{"id": "u1", "data": {"g": "a"}}, {"userId": "u2", "data": {"g": "b"}}]
    groups = generate_groups(entries, SplitCriteria("g"))
    assert [g.member_ids for g in groups] == [("u1",), ("u2",)]


def test_unknown_criteria():
    with pytest.raises(TypeError):
        generate_groups([], object())
    with pytest.raises(TypeError):
        score_groups([], [], object())
