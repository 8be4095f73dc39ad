"""
Farthest-first seeding.

Selects group seeds that are maximally spread apart, deterministically
starting from the first entry.
"""

from typing import List, Tuple
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy


class FarthestFirstInit(InitializationStrategy):
    """Deterministic farthest-first traversal.

    Algorithm:
    1. Seed 0 is entry index 0
    2. Track each entry's minimum distance to any chosen seed
    3. Repeatedly pick the non-seed entry with the largest such distance
       (lowest index on ties) and update all trackers
    """

    def __init__(self, first_seed: int = 0):
        """
        Args:
            first_seed: Index of the entry that opens the first group
        """
        self.first_seed = first_seed
        self.min_distances_: Tensor = None

    def initialize(self, distances: Tensor, n_groups: int,
                   **kwargs) -> List[int]:
        """Choose n_groups seeds.

        Args:
            distances: (n, n) symmetric distance matrix
            n_groups: Number of seeds

        Returns:
            Seed indices in creation order. The per-entry minimum distance to
            the final seed set is kept in ``min_distances_``.
        """
        seeds, min_distances = self.select(distances, n_groups)
        self.min_distances_ = min_distances
        return seeds

    def select(self, distances: Tensor, n_groups: int) -> Tuple[List[int], Tensor]:
        n_points = distances.shape[0]

        if n_groups > n_points:
            raise ValueError(f"Cannot seed {n_groups} groups from {n_points} entries")
        if n_points == 0 or n_groups <= 0:
            return [], torch.empty(0, dtype=distances.dtype, device=distances.device)

        is_seed = torch.zeros(n_points, dtype=torch.bool, device=distances.device)
        seeds = [self.first_seed]
        is_seed[self.first_seed] = True
        min_distances = distances[:, self.first_seed].clone()

        while len(seeds) < n_groups:
            # Seeds are masked below any real distance; argmax keeps the first maximum
            candidates = torch.where(is_seed, torch.full_like(min_distances, -1.0), min_distances)
            best = int(torch.argmax(candidates).item())
            if is_seed[best]:
                break
            seeds.append(best)
            is_seed[best] = True
            min_distances = torch.minimum(min_distances, distances[:, best])

        return seeds, min_distances
