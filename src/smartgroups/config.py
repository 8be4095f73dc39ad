"""
Tunable limits for the grouping engine.

The size thresholds pick between exact and approximate code paths; they are
calibrated for interactive use on a single core and can be adjusted per
deployment by passing a different GroupingConfig to any algorithm.
"""

from dataclasses import dataclass, field, replace
from typing import Dict


def _default_member_limits() -> Dict[str, int]:
    return {
        'split': 50000,
        'similarity': 15000,
        'diversity': 15000,
        'balanced': 30000,
    }


@dataclass(frozen=True)
class GroupingConfig:
    """Thresholds and constants shared by the grouping algorithms.

    Attributes:
        max_exact_cluster_entries: Above this entry count clustering falls
            back to the score projection path
        max_swap_entries: Above this entry count balanced teams skip swap
            refinement
        max_swap_passes: Cap on swap refinement passes
        swap_epsilon: Minimum cost reduction for a swap to be accepted
        variety_swap_scale: Scale of the variety term against the balance
            cost during swap refinement
        variety_lookback: Number of past runs that saturate a pair penalty
        member_limits: Per-mode ceiling on entries accepted by callers
    """
    max_exact_cluster_entries: int = 1200
    max_swap_entries: int = 2000
    max_swap_passes: int = 100
    swap_epsilon: float = 1e-9
    variety_swap_scale: float = 0.1
    variety_lookback: int = 10
    member_limits: Dict[str, int] = field(default_factory=_default_member_limits)

    def replace(self, **overrides) -> 'GroupingConfig':
        """Return a copy with the given fields overridden."""
        return replace(self, **overrides)


DEFAULT_CONFIG = GroupingConfig()
