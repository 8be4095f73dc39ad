# tests/test_balanced.py
"""
Balanced team formation: composite scoring, snake draft (with and without
partition pools) and swap refinement.
"""

from __future__ import annotations

import numpy as np
import pytest

from smartgroups.algorithms.balanced import (
    BalancedTeams, multi_balanced_teams, composite_scores, rating_matrix
)
from smartgroups.refinement import BalanceSpreadObjective, SwapRefinement
from smartgroups.base.data_structures import Entry, WeightedField, PenaltyMatrix
from smartgroups.config import GroupingConfig
from data_gen import make_entries, make_rated_entries
from utils import assert_partition, team_averages, group_of


def test_snake_draft_balances_ratings():
    entries = make_entries("rating", [10, 8, 6, 4])
    teams = multi_balanced_teams(entries, 2, [WeightedField("rating", 1.0)])
    assert [t.group_name for t in teams] == ["Team 1", "Team 2"]
    assert team_averages(teams, entries, "rating") == [7.0, 7.0]
    assert teams[0].member_ids == ("u1", "u4")


def test_composite_uses_raw_values():
    ratings = np.array([[10.0, 1.0], [2.0, 3.0]])
    weights = np.array([1.0, 3.0])
    assert composite_scores(ratings, weights).tolist() == [13.0 / 4.0, 11.0 / 4.0]
    assert composite_scores(ratings, np.zeros(2)).tolist() == [0.0, 0.0]


def test_rating_matrix_reads_missing_as_zero():
    entries = [Entry("a", {"x": 4, "y": "2.5"}), Entry("b", {"x": None})]
    fields = [WeightedField("x"), WeightedField("y")]
    assert rating_matrix(entries, fields).tolist() == [[4.0, 2.5], [0.0, 0.0]]


def test_team_count_capped_and_empty():
    entries = make_entries("rating", [3, 1])
    assert len(multi_balanced_teams(entries, 4, [("rating", 1.0)])) == 2
    assert multi_balanced_teams([], 4, [("rating", 1.0)]) == []


def test_swap_refinement_improves_draft():
    # Snake order gives [6, 3, 2] vs [5, 4, 0]; swapping 6 and 5 evens the averages
    entries = make_entries("rating", [6, 5, 4, 3, 2, 0])
    model = BalancedTeams(2, [("rating", 1.0)])
    teams = model.fit_predict(entries)
    averages = team_averages(teams, entries, "rating")
    assert averages[0] == pytest.approx(averages[1])
    assert model.cost_ == pytest.approx(0.0)
    assert len(model.history_) == 1
    assert set(teams[0].member_ids) == {"u2", "u4", "u5"}
    assert_partition(teams, entries)


def test_swap_skipped_for_large_inputs():
    entries = make_entries("rating", [6, 5, 4, 3, 2, 0])
    config = GroupingConfig(max_swap_entries=5)
    model = BalancedTeams(2, [("rating", 1.0)], config=config)
    teams = model.fit_predict(entries)
    assert model.cost_ is None
    assert model.n_iter_ == 0
    assert teams[0].member_ids == ("u1", "u4", "u5")


def test_partition_pools_reach_every_team():
    entries = make_rated_entries(24, seed=2, n_categories=2)
    model = BalancedTeams(3, [("wins", 1.0), ("rating", 0.5)], partition_fields=["division"],
                          config=GroupingConfig(max_swap_entries=0))
    teams = model.fit_predict(entries)
    assert_partition(teams, entries)
    assert list(model.pools_) == sorted(model.pools_)

    lookup = {e.id: e for e in entries}
    for key, members in model.pools_.items():
        # 2k - 1 consecutive draws cover every team wherever the sweep stands
        if len(members) < 5:
            continue
        for team in teams:
            divisions = {lookup[uid].data["division"] for uid in team.member_ids}
            assert key in divisions


def test_swaps_cross_partition_pools():
    # Draft gives [a, d] vs [b, c] (9.5 vs 4.5); exchanging a (pool x) with c (pool y) narrows it
    entries = [
        Entry("a", {"r": 10, "g": "x"}),
        Entry("b", {"r": 0, "g": "x"}),
        Entry("c", {"r": 9, "g": "y"}),
        Entry("d", {"r": 9, "g": "y"}),
    ]
    model = BalancedTeams(2, [("r", 1.0)], partition_fields=["g"])
    teams = model.fit_predict(entries)
    assert [set(t.member_ids) for t in teams] == [{"c", "d"}, {"a", "b"}]
    assert team_averages(teams, entries, "r") == [9.0, 5.0]
    assert model.cost_ == pytest.approx(4.0)
    assert len(model.history_) == 1


def test_boolean_ratings_count_as_one_and_zero():
    entries = [Entry("a", {"x": True}), Entry("b", {"x": False}), Entry("c", {"x": "yes"})]
    assert rating_matrix(entries, [WeightedField("x")]).tolist() == [[1.0], [0.0], [0.0]]


def test_missing_partition_value_pools_as_unknown():
    entries = [
        Entry("a", {"r": 5, "g": "x"}),
        Entry("b", {"r": 4}),
        Entry("c", {"r": 3, "g": ""}),
        Entry("d", {"r": 2, "g": "x"}),
    ]
    model = BalancedTeams(2, [("r", 1.0)], partition_fields=["g"])
    model.fit(entries)
    assert model.pools_ == {"Unknown": [1, 2], "x": [0, 3]}


def test_balance_spread_objective():
    ratings = np.array([[10.0], [8.0], [6.0], [4.0]])
    objective = BalanceSpreadObjective(ratings, np.array([2.0]))
    assert objective.minimize
    assert objective.compute([[0, 3], [1, 2]]) == 0.0
    assert objective.compute([[0, 1], [2, 3]]) == pytest.approx(4.0)
    assert objective.compute([[0, 1, 2, 3], []]) == 0.0


def test_variety_breaks_balance_ties():
    # Every split is equally balanced; the repeat pair a-b is pulled apart
    entries = [Entry(uid, {"r": 1}) for uid in ("a", "b", "c", "d")]
    penalty = PenaltyMatrix({"a:b": 1.0})
    plain = multi_balanced_teams(entries, 2, [("r", 1.0)])
    assert group_of(plain, "a") != group_of(plain, "b")

    entries = [Entry(uid, {"r": 1}) for uid in ("a", "c", "d", "b")]
    plain = multi_balanced_teams(entries, 2, [("r", 1.0)])
    assert group_of(plain, "a") == group_of(plain, "b")
    varied = multi_balanced_teams(entries, 2, [("r", 1.0)], variety_penalty=penalty,
                                  variety_weight=1.0)
    assert group_of(varied, "a") != group_of(varied, "b")


def test_swap_refinement_history_and_passes():
    ratings = np.array([[6.0], [5.0], [4.0], [3.0], [2.0], [0.0]])
    refinement = SwapRefinement(BalanceSpreadObjective(ratings, np.ones(1)))
    teams = refinement.refine([[0, 3, 4], [1, 2, 5]])
    assert refinement.n_iter_ == len(refinement.history_) + 1
    assert refinement.cost_ == pytest.approx(0.0)
    assert sorted(teams[0] + teams[1]) == list(range(6))
