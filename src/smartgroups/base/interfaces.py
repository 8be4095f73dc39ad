"""
Core interfaces for the grouping engine.

This module defines the abstract base classes that the distance rules,
seeding, assignment and refinement components implement, so the
algorithms can be assembled from interchangeable parts.
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict, Any, List, Sequence
import torch
from torch import Tensor

from .values import FieldValue
from .data_structures import FieldMeta, FieldRanges


class FieldDistance(ABC):
    """Distance rule for one field type.

    Every rule maps a pair of values to [0, 1]; a missing value on either
    side is maximally distant.
    """

    @abstractmethod
    def compute(self, a: FieldValue, b: FieldValue, meta: FieldMeta,
                ranges: FieldRanges) -> float:
        """Distance between two tagged values of the same field."""
        pass

    @abstractmethod
    def pairwise(self, values: Sequence[FieldValue], meta: FieldMeta,
                 ranges: FieldRanges, dtype: torch.dtype = torch.float64,
                 device: Optional[torch.device] = None) -> Tensor:
        """(n, n) distances between all values of one field.

        Must agree with compute() off the diagonal.
        """
        pass


class InitializationStrategy(ABC):
    """Chooses the seed entries that open each group."""

    @abstractmethod
    def initialize(self, distances: Tensor, n_groups: int,
                   **kwargs) -> List[int]:
        """Pick seed indices.

        Args:
            distances: (n, n) symmetric distance matrix
            n_groups: Number of seeds to choose (<= n)

        Returns:
            Seed indices in creation order
        """
        pass


class AssignmentStrategy(ABC):
    """Assigns non-seed entries to seeded groups."""

    @abstractmethod
    def compute_assignments(self, distances: Tensor, seeds: Sequence[int],
                            **kwargs) -> List[List[int]]:
        """Return one member-index list per seed, seed first."""
        pass

    @property
    @abstractmethod
    def objective(self) -> str:
        """'similarity' or 'diversity'."""
        pass


class ConvergenceCriterion(ABC):
    """Abstract base class for convergence checking."""

    def __init__(self):
        self.history = []

    @abstractmethod
    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check if the search should stop.

        Args:
            current_state: Dictionary containing current algorithm state

        Returns:
            True if converged, False otherwise
        """
        pass

    def reset(self):
        """Reset convergence history."""
        self.history = []


class GroupingObjective(ABC):
    """Cost of a complete grouping, used by local search."""

    @abstractmethod
    def compute(self, groups: List[List[int]]) -> float:
        """Objective value for groups of entry indices."""
        pass

    @property
    @abstractmethod
    def minimize(self) -> bool:
        """Whether to minimize (True) or maximize (False) this objective."""
        pass
