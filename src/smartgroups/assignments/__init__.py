"""Assignment strategies for grouping algorithms."""

from .greedy import GreedyAssignment, OBJECTIVES
from .snake import SnakeDraft, snake_draft, snake_draft_pools, bounce_assign

__all__ = [
    # Distance clustering
    'GreedyAssignment',
    'OBJECTIVES',

    # Serpentine drafts
    'SnakeDraft',
    'snake_draft',
    'snake_draft_pools',
    'bounce_assign'
]
