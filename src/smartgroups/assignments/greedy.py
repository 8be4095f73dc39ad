"""
Greedy seeded assignment for distance clustering.

Each non-seed entry joins the group whose current members are, on average,
closest to it (similarity) or farthest from it (diversity).
"""

from typing import List, Optional, Sequence
import torch
from torch import Tensor

from ..base.interfaces import AssignmentStrategy

OBJECTIVES = ('similarity', 'diversity')


class GreedyAssignment(AssignmentStrategy):
    """Nearest-first greedy assignment to seeded groups.

    Entries are visited in ascending order of their distance to the nearest
    seed (index order on ties). Group composition is updated after every
    assignment, so later entries see the groups as they have grown.
    """

    def __init__(self, objective: str = 'similarity'):
        """
        Args:
            objective: 'similarity' joins the closest group, 'diversity'
                the farthest
        """
        super().__init__()
        if objective not in OBJECTIVES:
            raise ValueError(f"Unknown objective: {objective}")
        self._objective = objective

    @property
    def objective(self) -> str:
        return self._objective

    def compute_assignments(self, distances: Tensor, seeds: Sequence[int],
                            min_distances: Optional[Tensor] = None,
                            **kwargs) -> List[List[int]]:
        """Assign every entry to one seeded group.

        Args:
            distances: (n, n) distance matrix
            seeds: Seed indices, one per group
            min_distances: (n,) distance of each entry to its nearest seed;
                derived from the matrix when omitted

        Returns:
            Member indices per group, seed first, then in assignment order
        """
        n_points = distances.shape[0]
        n_groups = len(seeds)
        groups: List[List[int]] = [[seed] for seed in seeds]
        if n_groups == 0:
            return groups

        seed_index = torch.tensor(list(seeds), dtype=torch.long, device=distances.device)
        if min_distances is None:
            min_distances = distances[:, seed_index].min(dim=1).values

        is_seed = torch.zeros(n_points, dtype=torch.bool, device=distances.device)
        is_seed[seed_index] = True
        pending = torch.nonzero(~is_seed, as_tuple=False).squeeze(1)
        _, order = torch.sort(min_distances[pending], stable=True)
        pending = pending[order]

        # Row g holds the summed distance from group g's members to every entry
        group_sums = distances[seed_index].clone()
        group_sizes = torch.ones(n_groups, dtype=distances.dtype, device=distances.device)

        for idx in pending.tolist():
            averages = group_sums[:, idx] / group_sizes
            if self._objective == 'similarity':
                best = int(torch.argmin(averages).item())
            else:
                best = int(torch.argmax(averages).item())
            groups[best].append(idx)
            group_sums[best] += distances[idx]
            group_sizes[best] += 1

        return groups
