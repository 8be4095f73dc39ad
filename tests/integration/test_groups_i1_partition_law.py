"""
I1: Every mode returns a partition of its input with min(requested, n) groups.
"""

import pytest

from smartgroups import (
    generate_groups, SplitCriteria, SimilarityCriteria, DiversityCriteria, BalancedCriteria
)
from utils import assert_partition
from data_gen import make_mixed_entries, make_rated_entries


CLUSTER_FIELDS = [("role", 1.0), ("interests", 0.8), ("active", 0.3), ("score", 1.0),
                  ("level", 0.6), ("grade", 0.5)]


@pytest.mark.parametrize("n", [0, 1, 2, 7, 40])
@pytest.mark.parametrize("requested", [2, 3, 10])
@pytest.mark.parametrize("criteria_cls", [SimilarityCriteria, DiversityCriteria])
def test_cluster_partition(n, requested, criteria_cls):
    entries = make_mixed_entries(n, seed=n, missing_rate=0.2)
    groups = generate_groups(entries, criteria_cls(fields=CLUSTER_FIELDS, group_count=requested))
    assert len(groups) == min(requested, n)
    assert_partition(groups, entries)
    assert all(len(g) > 0 for g in groups)


@pytest.mark.parametrize("n", [0, 1, 2, 9, 50])
@pytest.mark.parametrize("requested", [2, 4, 12])
@pytest.mark.parametrize("partition", [(), ("division",)])
def test_balanced_partition(n, requested, partition):
    entries = make_rated_entries(n, seed=n, n_categories=3)
    criteria = BalancedCriteria(balance_fields=[("wins", 1.0), ("rating", 0.4)],
                                team_count=requested, partition_fields=partition)
    groups = generate_groups(entries, criteria)
    assert len(groups) == min(requested, n)
    assert_partition(groups, entries)
    sizes = [len(g) for g in groups]
    if not partition and sizes:
        assert max(sizes) - min(sizes) <= 1


@pytest.mark.parametrize("n", [0, 1, 30])
def test_split_partition(n):
    entries = make_mixed_entries(n, seed=n, missing_rate=0.3)
    groups = generate_groups(entries, SplitCriteria(["role", "active"]))
    assert_partition(groups, entries)
    names = [g.group_name for g in groups]
    assert names == sorted(names)
    assert len(set(names)) == len(names)
