# tests/test_seeding_assignment.py
"""
Farthest-first seeding and greedy seeded assignment on hand-built matrices.
"""

from __future__ import annotations

import pytest
import torch

from smartgroups.initialization import FarthestFirstInit
from smartgroups.assignments import GreedyAssignment


def _line_distances(points):
    x = torch.tensor(points, dtype=torch.float64)
    D = (x.unsqueeze(1) - x.unsqueeze(0)).abs()
    return D / D.max()


def test_first_seed_is_index_zero():
    D = _line_distances([5.0, 0.0, 10.0, 6.0])
    seeds = FarthestFirstInit().initialize(D, 1)
    assert seeds == [0]


def test_farthest_first_order():
    D = _line_distances([0.0, 1.0, 10.0, 5.0])
    init = FarthestFirstInit()
    seeds = init.initialize(D, 3)
    assert seeds == [0, 2, 3]
    assert init.min_distances_[1].item() == pytest.approx(0.1)


def test_ties_pick_lowest_index():
    D = torch.ones(4, 4, dtype=torch.float64)
    D.fill_diagonal_(0.0)
    seeds = FarthestFirstInit().initialize(D, 3)
    assert seeds == [0, 1, 2]


def test_too_many_groups():
    with pytest.raises(ValueError):
        FarthestFirstInit().initialize(torch.zeros(2, 2), 3)


def test_similarity_assignment_joins_nearest_group():
    D = _line_distances([0.0, 10.0, 1.0, 9.0, 2.0])
    groups = GreedyAssignment("similarity").compute_assignments(D, [0, 1])
    assert groups == [[0, 2, 4], [1, 3]]


def test_diversity_assignment_joins_farthest_group():
    D = _line_distances([0.0, 10.0, 1.0, 9.0])
    groups = GreedyAssignment("diversity").compute_assignments(D, [0, 1])
    # 2 (near seed 0) is visited first and joins group 1; 3 then joins group 0
    assert groups == [[0, 3], [1, 2]]


def test_unknown_objective():
    with pytest.raises(ValueError):
        GreedyAssignment("balanced")
