"""
Similarity / diversity clustering.

Farthest-first seeding followed by greedy seeded assignment over an exact
Gower distance matrix, with a score-projection fallback for large inputs.
"""

from typing import Optional, List, Sequence, Iterable, Any
import torch
from torch import Tensor

from ..base.clustering_base import BaseGroupingAlgorithm
from ..base.data_structures import (
    Entry, EntryLike, FieldMeta, FieldRanges, PenaltyMatrix, GroupResult
)
from ..assignments.greedy import GreedyAssignment, OBJECTIVES
from ..initialization.farthest_first import FarthestFirstInit
from ..distances.gower import build_distance_matrix
from ..distances.ranges import compute_numeric_ranges
from ..utils.inference import infer_field_meta
from ..config import GroupingConfig
from .projection import cluster_by_score_projection


def apply_variety_penalty(distances: Tensor, penalties: Tensor,
                          variety_weight: float, objective: str) -> Tensor:
    """Blend pair penalties into a distance matrix.

    Similarity adds the weighted penalty, pushing repeat pairs apart.
    Diversity subtracts it (floored at 0), so repeat pairs are not spread
    further than needed.
    """
    if objective == 'similarity':
        return distances + variety_weight * penalties
    return torch.clamp(distances - variety_weight * penalties, min=0.0)


class DistanceClustering(BaseGroupingAlgorithm):
    """Seeded greedy clustering on Gower distance.

    Parameters
    ----------
    n_groups : int
        Requested number of groups (capped at the entry count)
    fields : sequence of FieldMeta
        Typed, weighted fields. Untyped weighted fields are typed from the
        entries at fit time.
    objective : {'similarity', 'diversity'}
        Group alike entries together, or spread them across groups
    variety_penalty : PenaltyMatrix, optional
        Pair penalties from earlier runs
    variety_weight : float, default=0
        Strength of the variety penalty; 0 disables it
    ranges : FieldRanges, optional
        Precomputed ranges; derived from the fitted entries when omitted
    verbose : int, default=0
        Verbosity level
    config : GroupingConfig, optional
        Size thresholds
    device : torch.device, optional
        Device for the distance matrix

    Attributes
    ----------
    groups_ : list of GroupResult
        Named groups 'Group 1'..'Group k' in seed order
    labels_ : list of int
        Group index per entry
    seeds_ : list of int
        Seed entry indices (empty on the projection path)
    distances_ : Tensor or None
        (n, n) distance matrix used for assignment
    used_projection_ : bool
        Whether the large-input fallback was used
    """

    def __init__(self,
                 n_groups: int,
                 fields: Sequence[Any],
                 objective: str = 'similarity',
                 variety_penalty: Optional[PenaltyMatrix] = None,
                 variety_weight: float = 0.0,
                 ranges: Optional[FieldRanges] = None,
                 verbose: int = 0,
                 config: Optional[GroupingConfig] = None,
                 device: Optional[torch.device] = None):
        super().__init__(n_groups=n_groups, verbose=verbose, config=config, device=device)
        if objective not in OBJECTIVES:
            raise ValueError(f"Unknown objective: {objective}")
        self.fields = list(fields)
        self.objective = objective
        self.variety_penalty = variety_penalty
        self.variety_weight = variety_weight
        self.ranges = ranges

        self.seeds_: List[int] = []
        self.distances_: Optional[Tensor] = None
        self.used_projection_ = False

    def _variety_active(self) -> bool:
        return (self.variety_weight > 0
                and self.variety_penalty is not None
                and not self.variety_penalty.is_empty)

    def _fit_indices(self, entries: List[Entry], n_groups: int) -> List[List[int]]:
        n_entries = len(entries)
        fields: List[FieldMeta] = infer_field_meta(self.fields, entries)
        ranges = self.ranges if self.ranges is not None else compute_numeric_ranges(entries, fields)

        self.seeds_ = []
        self.distances_ = None
        self.used_projection_ = n_entries > self.config.max_exact_cluster_entries

        if self.used_projection_:
            if self.verbose:
                print(f"{n_entries} entries exceed {self.config.max_exact_cluster_entries}; "
                      f"using score projection ({self.objective})")
            return cluster_by_score_projection(entries, n_groups, fields, self.objective, ranges)

        distances = build_distance_matrix(entries, fields, ranges, device=self.device)

        if self._variety_active():
            penalties = self.variety_penalty.to_tensor(
                [e.id for e in entries], dtype=distances.dtype, device=distances.device
            )
            distances = apply_variety_penalty(distances, penalties, self.variety_weight, self.objective)
            if self.verbose >= 2:
                print(f"Applied variety penalty (weight={self.variety_weight}, "
                      f"pairs={len(self.variety_penalty)})")

        initializer = FarthestFirstInit()
        seeds = initializer.initialize(distances, n_groups)
        if self.verbose >= 2:
            print(f"Seeds: {seeds}")

        assignment = GreedyAssignment(self.objective)
        groups = assignment.compute_assignments(
            distances, seeds, min_distances=initializer.min_distances_
        )

        self.seeds_ = seeds
        self.distances_ = distances
        return groups


def cluster_by_distance(entries: Iterable[EntryLike],
                        group_count: int,
                        fields: Sequence[Any],
                        objective: str = 'similarity',
                        variety_penalty: Optional[PenaltyMatrix] = None,
                        variety_weight: float = 0.0,
                        config: Optional[GroupingConfig] = None) -> List[GroupResult]:
    """Cluster entries into min(group_count, n) groups.

    Args:
        entries: Entries to group
        group_count: Requested number of groups
        fields: Typed FieldMeta (or weighted fields to be typed from data)
        objective: 'similarity' or 'diversity'
        variety_penalty: Optional pair penalties from earlier runs
        variety_weight: Strength of the variety penalty
        config: Size thresholds

    Returns:
        Groups named 'Group 1'..'Group k'
    """
    model = DistanceClustering(
        n_groups=group_count,
        fields=fields,
        objective=objective,
        variety_penalty=variety_penalty,
        variety_weight=variety_weight,
        config=config,
    )
    return model.fit_predict(entries)
