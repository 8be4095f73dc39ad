"""
Base class for the count-driven grouping algorithms.

Provides the shared skeleton: entry coercion, the min(requested, n) group
count, timing/verbosity, and conversion of index groups into named
GroupResults.
"""

from abc import abstractmethod
from typing import Optional, Dict, Any, List, Iterable
import time
import torch

from .data_structures import Entry, EntryLike, GroupResult, coerce_entries
from ..config import GroupingConfig, DEFAULT_CONFIG


class BaseGroupingAlgorithm:
    """Base class for algorithms that form a requested number of groups.

    Subclasses implement ``_fit_indices`` which receives the coerced
    entries and the effective group count and returns member indices per
    group.
    """

    group_prefix = 'Group'

    def __init__(self,
                 n_groups: int,
                 verbose: int = 0,
                 config: Optional[GroupingConfig] = None,
                 device: Optional[torch.device] = None):
        """
        Args:
            n_groups: Requested number of groups
            verbose: Verbosity level (0=silent, 1=progress, 2=detailed)
            config: Thresholds and constants (DEFAULT_CONFIG when None)
            device: Torch device for matrix work (CPU when None)
        """
        self.n_groups = n_groups
        self.verbose = verbose
        self.config = config if config is not None else DEFAULT_CONFIG
        self.device = device if device is not None else torch.device('cpu')

        # Fitted state
        self.fitted_ = False
        self.groups_: List[GroupResult] = []
        self.labels_: List[int] = []
        self.n_groups_ = 0
        self.n_iter_ = 0
        self.history_: List[Dict[str, Any]] = []

    @abstractmethod
    def _fit_indices(self, entries: List[Entry], n_groups: int) -> List[List[int]]:
        """Return member indices for each of the n_groups groups."""
        pass

    def fit(self, entries: Iterable[EntryLike]) -> 'BaseGroupingAlgorithm':
        """Partition the entries.

        Args:
            entries: Entry objects or entry mappings

        Returns:
            Self
        """
        entries = coerce_entries(entries)
        n_entries = len(entries)
        self.n_iter_ = 0
        self.history_ = []

        if n_entries == 0:
            self.n_groups_ = 0
            self.groups_ = []
            self.labels_ = []
            self.fitted_ = True
            return self

        self.n_groups_ = min(self.n_groups, n_entries)
        if self.verbose:
            print(f"Forming {self.n_groups_} groups from {n_entries} entries...")

        start_time = time.time()
        index_groups = self._fit_indices(entries, self.n_groups_)
        self.groups_ = self._build_results(entries, index_groups)

        labels = [0] * n_entries
        for g, members in enumerate(index_groups):
            for idx in members:
                labels[idx] = g
        self.labels_ = labels

        if self.verbose:
            print(f"Total grouping time: {time.time() - start_time:.3f}s")

        self.fitted_ = True
        return self

    def fit_predict(self, entries: Iterable[EntryLike]) -> List[GroupResult]:
        """Fit and return the named groups."""
        return self.fit(entries).groups_

    def _build_results(self, entries: List[Entry],
                       index_groups: List[List[int]]) -> List[GroupResult]:
        return [
            GroupResult(f"{self.group_prefix} {g + 1}", [entries[idx].id for idx in members])
            for g, members in enumerate(index_groups)
        ]

    def get_params(self, deep: bool = True) -> Dict[str, Any]:
        """Get constructor parameters."""
        return {
            'n_groups': self.n_groups,
            'verbose': self.verbose,
            'config': self.config,
            'device': self.device
        }

    def set_params(self, **params) -> 'BaseGroupingAlgorithm':
        """Set constructor parameters."""
        for key, value in params.items():
            setattr(self, key, value)
        return self
