"""
Swap-based local search for balanced teams.

Repeatedly looks for a pair of members in different teams whose exchange
lowers the weighted spread of team averages, accepting the first improving
swap of each pass.
"""

from typing import List, Optional, Dict, Any
import warnings
import numpy as np

from ..base.interfaces import GroupingObjective
from ..config import GroupingConfig, DEFAULT_CONFIG
from ..utils.convergence import NoImprovement


class BalanceSpreadObjective(GroupingObjective):
    """Weighted sum over fields of (max team average - min team average).

    Empty teams are ignored.
    """

    def __init__(self, ratings: np.ndarray, weights: np.ndarray):
        """
        Args:
            ratings: (n, F) raw value of each balance field per entry
            weights: (F,) field weights; normalized by their sum (or 1)
        """
        self.ratings = np.asarray(ratings, dtype=np.float64)
        weights = np.asarray(weights, dtype=np.float64)
        total = weights.sum()
        self.weights = weights / (total if total != 0 else 1.0)

    @property
    def minimize(self) -> bool:
        return True

    def team_sums(self, teams: List[List[int]]):
        n_fields = self.ratings.shape[1]
        sums = np.zeros((len(teams), n_fields), dtype=np.float64)
        sizes = np.zeros(len(teams), dtype=np.float64)
        for t, members in enumerate(teams):
            if members:
                sums[t] = self.ratings[members].sum(axis=0)
                sizes[t] = len(members)
        return sums, sizes

    def cost_from_sums(self, sums: np.ndarray, sizes: np.ndarray) -> float:
        filled = sizes > 0
        if not filled.any():
            return 0.0
        averages = sums[filled] / sizes[filled, None]
        spread = averages.max(axis=0) - averages.min(axis=0)
        return float(spread @ self.weights)

    def compute(self, groups: List[List[int]]) -> float:
        return self.cost_from_sums(*self.team_sums(groups))


class SwapRefinement:
    """First-improvement pairwise swap search.

    Each pass scans team pairs (ti < tj) and, within them, member pairs in
    order; the first swap reducing the cost by more than the configured
    epsilon is applied and the pass ends. The search stops after a pass
    with no accepted swap or after ``config.max_swap_passes`` passes.

    With a penalty matrix and positive variety weight the candidate cost is
    reduced by ``variety_weight * variety_swap_scale * (old - new)`` where
    old/new are the summed pair penalties of the two moved members with
    their teammates before and after the swap.
    """

    def __init__(self,
                 objective: BalanceSpreadObjective,
                 penalties: Optional[np.ndarray] = None,
                 variety_weight: float = 0.0,
                 config: Optional[GroupingConfig] = None,
                 verbose: int = 0):
        self.objective = objective
        self.config = config if config is not None else DEFAULT_CONFIG
        self.verbose = verbose
        active = penalties is not None and variety_weight > 0 and np.any(penalties)
        self.penalties = np.asarray(penalties, dtype=np.float64) if active else None
        self.variety_weight = variety_weight if active else 0.0
        self.convergence_criterion = NoImprovement()

        self.n_iter_ = 0
        self.history_: List[Dict[str, Any]] = []
        self.cost_ = None

    def _other_extremes(self, averages: np.ndarray, filled: np.ndarray, ti: int, tj: int):
        mask = filled.copy()
        mask[ti] = False
        mask[tj] = False
        if not mask.any():
            n_fields = averages.shape[1]
            return np.full(n_fields, -np.inf), np.full(n_fields, np.inf)
        return averages[mask].max(axis=0), averages[mask].min(axis=0)

    def _find_swap(self, teams: List[List[int]], current: float):
        """First improving swap as (ti, mi, tj, mj, cost), or None."""
        ratings = self.objective.ratings
        weights = self.objective.weights
        epsilon = self.config.swap_epsilon
        scale = self.variety_weight * self.config.variety_swap_scale

        sums, sizes = self.objective.team_sums(teams)
        filled = sizes > 0
        averages = np.zeros_like(sums)
        averages[filled] = sums[filled] / sizes[filled, None]

        k = len(teams)
        for ti in range(k):
            for tj in range(ti + 1, k):
                if not teams[ti] or not teams[tj]:
                    continue
                others_max, others_min = self._other_extremes(averages, filled, ti, tj)
                team_j = np.asarray(teams[tj])
                r_j = ratings[team_j]

                for mi, a in enumerate(teams[ti]):
                    # Candidate averages for every b in team tj at once
                    avg_i = (sums[ti] - ratings[a] + r_j) / sizes[ti]
                    avg_j = (sums[tj] + ratings[a] - r_j) / sizes[tj]
                    high = np.maximum(np.maximum(avg_i, avg_j), others_max)
                    low = np.minimum(np.minimum(avg_i, avg_j), others_min)
                    costs = (high - low) @ weights

                    if self.penalties is not None:
                        team_i = teams[ti]
                        old = self.penalties[a, team_i].sum() + self.penalties[team_j][:, team_j].sum(axis=1)
                        new = (self.penalties[team_j][:, team_i].sum(axis=1) - self.penalties[team_j, a]
                               + self.penalties[a, team_j].sum() - self.penalties[a, team_j])
                        costs = costs - scale * (old - new)

                    hits = np.flatnonzero(costs < current - epsilon)
                    if hits.size:
                        mj = int(hits[0])
                        return ti, mi, tj, mj, float(costs[mj])
        return None

    def refine(self, teams: List[List[int]]) -> List[List[int]]:
        """Improve the teams in place and return them."""
        self.convergence_criterion.reset()
        self.history_ = []
        current = self.objective.compute(teams)
        self.n_iter_ = 0
        converged = False

        for iteration in range(self.config.max_swap_passes):
            swap = self._find_swap(teams, current)
            improved = swap is not None
            if improved:
                ti, mi, tj, mj, current = swap
                teams[ti][mi], teams[tj][mj] = teams[tj][mj], teams[ti][mi]
                self.history_.append({'iteration': iteration, 'cost': current})
                if self.verbose >= 2:
                    print(f"Pass {iteration:3d}: swap team {ti + 1}[{mi}] <-> "
                          f"team {tj + 1}[{mj}], cost = {current:.6f}")

            self.n_iter_ = iteration + 1
            converged = self.convergence_criterion.check({
                'iteration': iteration,
                'cost': current,
                'improved': improved
            })
            if converged:
                break

        if self.verbose:
            if not converged:
                warnings.warn(f"Swap refinement still improving after "
                              f"{self.config.max_swap_passes} passes")
            print(f"Swap refinement: {len(self.history_)} swaps in {self.n_iter_} passes, "
                  f"cost = {current:.6f}")

        self.cost_ = current
        return teams
