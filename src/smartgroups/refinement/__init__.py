"""Local-search refinement of formed groups."""

from .swap import BalanceSpreadObjective, SwapRefinement

__all__ = [
    'BalanceSpreadObjective',
    'SwapRefinement'
]
