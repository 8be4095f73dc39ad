"""
Balanced team formation.

Composite-score snake draft, optionally stratified by categorical partition
fields, followed by swap refinement of the per-field spread of team
averages.
"""

from typing import Optional, List, Sequence, Iterable, Dict, Any
import numpy as np
import torch

from ..base.clustering_base import BaseGroupingAlgorithm
from ..base.data_structures import (
    Entry, EntryLike, PenaltyMatrix, GroupResult, WeightedField, as_weighted_field
)
from ..base.values import ValueKind, category_label
from ..assignments.snake import snake_draft, snake_draft_pools
from ..refinement.swap import BalanceSpreadObjective, SwapRefinement
from ..config import GroupingConfig
from .split import KEY_SEPARATOR


def rating_matrix(entries: Sequence[Entry], balance_fields: Sequence[WeightedField]) -> np.ndarray:
    """(n, F) raw ratings; booleans count as 1/0, other values without a
    numeric reading as 0."""
    ratings = np.zeros((len(entries), len(balance_fields)), dtype=np.float64)
    for i, entry in enumerate(entries):
        for f, bf in enumerate(balance_fields):
            value = entry.value(bf.field_id)
            value = float(value.payload) if value.kind is ValueKind.BOOLEAN else value.as_number()
            ratings[i, f] = value if value is not None else 0.0
    return ratings


def composite_scores(ratings: np.ndarray, weights: np.ndarray) -> np.ndarray:
    """sum(weight * raw value) / sum(weight), per entry.

    Raw values are not range-normalized, so larger-magnitude fields weigh
    in proportionally to their scale.
    """
    total = weights.sum()
    return ratings @ weights / (total if total != 0 else 1.0)


def _descending(indices: Sequence[int], scores: np.ndarray) -> List[int]:
    """Indices sorted by descending score, input order on ties."""
    indices = np.asarray(indices, dtype=np.int64)
    order = np.argsort(-scores[indices], kind='stable')
    return indices[order].tolist()


class BalancedTeams(BaseGroupingAlgorithm):
    """Snake-draft team formation balanced on weighted numeric fields.

    Parameters
    ----------
    n_teams : int
        Requested number of teams (capped at the entry count)
    balance_fields : sequence of WeightedField
        Numeric fields to balance, with weights
    partition_fields : sequence of str, optional
        Categorical fields whose value combinations are spread evenly
        across teams
    variety_penalty : PenaltyMatrix, optional
        Pair penalties from earlier runs, used during swap refinement
    variety_weight : float, default=0
        Strength of the variety term; 0 disables it
    verbose : int, default=0
        Verbosity level
    config : GroupingConfig, optional
        Swap limits and the variety scale

    Attributes
    ----------
    groups_ : list of GroupResult
        Teams named 'Team 1'..'Team k'
    scores_ : ndarray
        Composite score per entry
    pools_ : dict
        Partition key -> entry indices (empty without partition fields)
    cost_ : float or None
        Final refinement cost (None when refinement was skipped)
    """

    group_prefix = 'Team'

    def __init__(self,
                 n_teams: int,
                 balance_fields: Sequence[Any],
                 partition_fields: Optional[Sequence[str]] = None,
                 variety_penalty: Optional[PenaltyMatrix] = None,
                 variety_weight: float = 0.0,
                 verbose: int = 0,
                 config: Optional[GroupingConfig] = None,
                 device: Optional[torch.device] = None):
        super().__init__(n_groups=n_teams, verbose=verbose, config=config, device=device)
        self.balance_fields = [as_weighted_field(bf) for bf in balance_fields]
        self.partition_fields = list(partition_fields or [])
        self.variety_penalty = variety_penalty
        self.variety_weight = variety_weight

        self.scores_: Optional[np.ndarray] = None
        self.pools_: Dict[str, List[int]] = {}
        self.cost_: Optional[float] = None

    def _pool_key(self, entry: Entry) -> str:
        return KEY_SEPARATOR.join(category_label(entry.value(pf)) for pf in self.partition_fields)

    def _draft(self, entries: List[Entry], scores: np.ndarray, n_teams: int) -> List[List[int]]:
        if not self.partition_fields:
            self.pools_ = {}
            return snake_draft(_descending(range(len(entries)), scores), n_teams)

        pools: Dict[str, List[int]] = {}
        for i, entry in enumerate(entries):
            pools.setdefault(self._pool_key(entry), []).append(i)
        self.pools_ = {key: pools[key] for key in sorted(pools)}

        if self.verbose >= 2:
            sizes = {key: len(members) for key, members in self.pools_.items()}
            print(f"Partition pools: {sizes}")

        ordered_pools = [_descending(members, scores) for members in self.pools_.values()]
        return snake_draft_pools(ordered_pools, n_teams)

    def _penalties(self, entries: List[Entry]) -> Optional[np.ndarray]:
        if (self.variety_weight <= 0 or self.variety_penalty is None
                or self.variety_penalty.is_empty):
            return None
        return self.variety_penalty.to_tensor([e.id for e in entries]).numpy()

    def _fit_indices(self, entries: List[Entry], n_groups: int) -> List[List[int]]:
        weights = np.array([bf.weight for bf in self.balance_fields], dtype=np.float64)
        ratings = rating_matrix(entries, self.balance_fields)
        scores = composite_scores(ratings, weights)
        self.scores_ = scores

        teams = self._draft(entries, scores, n_groups)
        self.cost_ = None

        if len(entries) > self.config.max_swap_entries:
            if self.verbose:
                print(f"{len(entries)} entries exceed {self.config.max_swap_entries}; "
                      f"skipping swap refinement")
            return teams

        refinement = SwapRefinement(
            BalanceSpreadObjective(ratings, weights),
            penalties=self._penalties(entries),
            variety_weight=self.variety_weight,
            config=self.config,
            verbose=self.verbose,
        )
        teams = refinement.refine(teams)
        self.n_iter_ = refinement.n_iter_
        self.history_ = refinement.history_
        self.cost_ = refinement.cost_
        return teams


def multi_balanced_teams(entries: Iterable[EntryLike],
                         team_count: int,
                         balance_fields: Sequence[Any],
                         partition_fields: Optional[Sequence[str]] = None,
                         variety_penalty: Optional[PenaltyMatrix] = None,
                         variety_weight: float = 0.0,
                         config: Optional[GroupingConfig] = None) -> List[GroupResult]:
    """Form min(team_count, n) teams balanced on weighted numeric fields.

    Args:
        entries: Entries to place on teams
        team_count: Requested number of teams
        balance_fields: Weighted numeric fields
        partition_fields: Optional categorical fields to stratify by
        variety_penalty: Optional pair penalties from earlier runs
        variety_weight: Strength of the variety term in swap refinement
        config: Swap limits and the variety scale

    Returns:
        Teams named 'Team 1'..'Team k'
    """
    model = BalancedTeams(
        n_teams=team_count,
        balance_fields=balance_fields,
        partition_fields=partition_fields,
        variety_penalty=variety_penalty,
        variety_weight=variety_weight,
        config=config,
    )
    return model.fit_predict(entries)
